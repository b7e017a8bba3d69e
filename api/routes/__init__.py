"""
API Routes Module

This module contains all API endpoint implementations organized by function:
- readings.py: Sensor data ingestion and recent-readings query
- thresholds.py: Alert threshold read/write
- auth.py: Credential check

All routers are combined in main.py to create the complete API.
"""

from .readings import router as readings_router
from .thresholds import router as thresholds_router
from .auth import router as auth_router

__all__ = [
    "readings_router",
    "thresholds_router",
    "auth_router",
]
