"""
Sensor Reading Endpoints

This module handles sensor data ingestion and the recent-readings
query used by the dashboard.

Flow (ingestion):
1. Receive a reading (temperature, humidity, relay_status)
2. Reject it if any of the three fields is missing
3. Store it with the current server time
4. Report success, or the storage stage that failed
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from api.database import get_db, DatabaseManager, StorageError, RECENT_READINGS_LIMIT
from api.models import SensorReadingInput, SensorReading, IngestResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/readings", tags=["Sensor Readings"])

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_timestamp(value) -> str:
    """Render a stored timestamp the way the device dashboard expects."""
    if hasattr(value, "strftime"):
        return value.strftime(TIMESTAMP_FORMAT)
    return str(value)


@router.get(
    "",
    response_model=List[SensorReading],
    summary="Get recent sensor readings",
    description=f"""
    Get the {RECENT_READINGS_LIMIT} most recent readings, oldest first.

    Values are returned as temperature/humidity floats, relay_status
    integer and timestamp string.
    """
)
async def get_recent_readings(db: Session = Depends(get_db)):
    """Get recent readings in chronological order."""
    with DatabaseManager(db) as db_manager:
        try:
            rows = db_manager.get_recent_readings()
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch readings: {e}")
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"error": "Database query failed"}
            )

        return [
            SensorReading(
                temperature=float(row["temperature"]),
                humidity=float(row["humidity"]),
                relay_status=int(row["relay_status"]),
                timestamp=format_timestamp(row["timestamp"]),
            )
            for row in rows
        ]


@router.post(
    "",
    response_model=IngestResponse,
    response_model_exclude_none=True,
    responses={
        400: {"model": IngestResponse, "description": "Missing required fields"},
        500: {"model": IngestResponse, "description": "Storage failure"},
    },
    summary="Ingest a sensor reading",
    description="""
    Store one reading. The timestamp is assigned by the server.

    **Example:**
    ```json
    {
        "temperature": 23.5,
        "humidity": 60,
        "relay_status": 1
    }
    ```
    """
)
async def ingest_reading(
    data: Optional[SensorReadingInput] = Body(None),
    db: Session = Depends(get_db)
):
    """Ingest a single sensor reading."""
    if data is None:
        data = SensorReadingInput()
    missing = data.missing_fields()
    if missing:
        logger.info(f"Rejected reading, missing fields: {', '.join(missing)}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=IngestResponse(
                status="error",
                message="Missing required fields"
            ).model_dump(exclude_none=True)
        )

    with DatabaseManager(db) as db_manager:
        try:
            db_manager.insert_sensor_reading(
                temperature=data.temperature,
                humidity=data.humidity,
                relay_status=data.relay_status,
            )
        except StorageError as e:
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=IngestResponse(
                    status="error",
                    message=e.message,
                    error=e.detail
                ).model_dump(exclude_none=True)
            )

    return IngestResponse(status="success")
