"""POI (Point of Interest) model for persisting map markers."""

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from poi_api.database import Base

if TYPE_CHECKING:
    from poi_api.models.user import User


class POIType(str, Enum):
    """Categories of Points of Interest.

    Values are the display strings shown on the map and in exports.
    """

    RESTROOM = "Restroom"
    WATER_FOUNTAIN = "Water Fountain"
    FOOD_STOP = "Food Stop"
    FUEL_STATION = "Fuel Station"
    MEETING_POINT = "Meeting Point"


class POI(Base):
    """A categorized, geolocated marker."""

    __tablename__ = "pois"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(
        SAEnum(
            *(t.value for t in POIType),
            name="poi_type",
            native_enum=False,
            create_constraint=True,
            length=32,
        ),
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Fixed precision in the database, floats in Python
    latitude: Mapped[float] = mapped_column(Numeric(10, 8, asdecimal=False), nullable=False)
    longitude: Mapped[float] = mapped_column(Numeric(11, 8, asdecimal=False), nullable=False)
    created_by: Mapped[str] = mapped_column(
        String(255), ForeignKey("users.id"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    creator: Mapped["User"] = relationship("User", back_populates="pois")

    __table_args__ = (
        Index("ix_pois_created_by", "created_by"),
        Index("ix_pois_type", "type"),
        Index("ix_pois_created_at", "created_at"),
        CheckConstraint("latitude BETWEEN -90 AND 90", name="ck_pois_latitude_range"),
        CheckConstraint("longitude BETWEEN -180 AND 180", name="ck_pois_longitude_range"),
    )
