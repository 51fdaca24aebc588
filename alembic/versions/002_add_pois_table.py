"""Add POIs table

Revision ID: 002
Revises: 001
Create Date: 2026-10-17

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "002"
down_revision: str = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    poi_type = sa.Enum(
        "Restroom",
        "Water Fountain",
        "Food Stop",
        "Fuel Station",
        "Meeting Point",
        name="poi_type",
        native_enum=False,
        create_constraint=True,
        length=32,
    )

    op.create_table(
        "pois",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("type", poi_type, nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("latitude", sa.Numeric(10, 8), nullable=False),
        sa.Column("longitude", sa.Numeric(11, 8), nullable=False),
        sa.Column(
            "created_by",
            sa.String(255),
            sa.ForeignKey("users.id"),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.CheckConstraint("latitude BETWEEN -90 AND 90", name="ck_pois_latitude_range"),
        sa.CheckConstraint("longitude BETWEEN -180 AND 180", name="ck_pois_longitude_range"),
    )
    op.create_index("ix_pois_created_by", "pois", ["created_by"])
    op.create_index("ix_pois_type", "pois", ["type"])
    op.create_index("ix_pois_created_at", "pois", ["created_at"])


def downgrade() -> None:
    op.drop_table("pois")
