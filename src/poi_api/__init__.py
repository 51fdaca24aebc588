"""POI Map API - role-gated points of interest with JSON export."""

__version__ = "0.1.0"
