"""
API Module - FastAPI Backend

This module provides the REST API for the Sensor Monitor system.
It handles reading ingestion, queries, thresholds and the login check.

Key Components:
- main.py: FastAPI application and root endpoints
- models.py: Pydantic schemas for request/response validation
- database.py: Database connection management and operations
- routes/: API endpoint implementations

Endpoints:
- GET  /api/v1/readings: Last 30 readings, oldest first
- POST /api/v1/readings: Ingest a sensor reading
- GET  /api/v1/thresholds: Current alert thresholds
- POST /api/v1/thresholds: Append a threshold pair
- POST /api/v1/auth/login: Check user credentials (form data)
"""

__version__ = "0.1.0"
