"""
Alert Threshold Endpoints

Thresholds are append-only: every write inserts a new pair and the
pair with the highest id is the current one.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from api.database import get_db, DatabaseManager, StorageError
from api.models import ThresholdInput, ThresholdSetting, ThresholdWriteResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/thresholds", tags=["Thresholds"])


@router.get(
    "",
    response_model=Optional[ThresholdSetting],
    summary="Get current thresholds",
    description="Get the most recently stored threshold pair, or null if none exists."
)
async def get_thresholds(db: Session = Depends(get_db)):
    """Get the current threshold pair."""
    with DatabaseManager(db) as db_manager:
        try:
            return db_manager.get_latest_thresholds()
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch thresholds: {e}")
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"error": "Database query failed"}
            )


@router.post(
    "",
    response_model=ThresholdWriteResponse,
    response_model_exclude_none=True,
    responses={
        400: {"model": ThresholdWriteResponse, "description": "Missing required fields"},
        500: {"model": ThresholdWriteResponse, "description": "Storage failure"},
    },
    summary="Set thresholds",
    description="""
    Store a new threshold pair. Previous pairs are kept as history.

    **Example:**
    ```json
    {
        "temp_threshold": 30,
        "humidity_threshold": 75
    }
    ```
    """
)
async def set_thresholds(
    data: Optional[ThresholdInput] = Body(None),
    db: Session = Depends(get_db)
):
    """Append a threshold pair."""
    if data is None or data.missing_fields():
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ThresholdWriteResponse(
                status="error",
                message="Missing required fields"
            ).model_dump(exclude_none=True)
        )

    with DatabaseManager(db) as db_manager:
        try:
            threshold_id = db_manager.insert_thresholds(
                temp_threshold=data.temp_threshold,
                humidity_threshold=data.humidity_threshold,
            )
        except StorageError as e:
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=ThresholdWriteResponse(
                    status="error",
                    message=e.message,
                    error=e.detail
                ).model_dump(exclude_none=True)
            )

    logger.info(
        f"Thresholds updated (id={threshold_id}): "
        f"temperature={data.temp_threshold}, humidity={data.humidity_threshold}"
    )
    return ThresholdWriteResponse(status="success")
