"""
Pydantic Models for API Request/Response Validation

This module defines all the data models used by the API for:
- Request body validation
- Response serialization
- Documentation generation (OpenAPI/Swagger)

All models use Pydantic v2 syntax for validation and serialization.
Numeric fields accept finite numbers and numeric strings; anything else is
rejected instead of being coerced to 0.
"""

from datetime import datetime
from typing import Optional, List, Dict
from pydantic import BaseModel, ConfigDict, Field


# =========================================
# Sensor Data Models
# =========================================

class SensorReadingInput(BaseModel):
    """
    Input model for sensor data ingestion.

    Fields are optional at the schema level so that an absent field
    is reported as "Missing required fields" (400) by the endpoint
    rather than as a schema error.
    """
    temperature: Optional[float] = Field(
        default=None,
        description="Temperature reading (°C)"
    )
    humidity: Optional[float] = Field(
        default=None,
        description="Relative humidity (%)"
    )
    relay_status: Optional[int] = Field(
        default=None,
        description="Relay state (0=off, 1=on)",
        ge=0, le=1
    )

    model_config = ConfigDict(
        allow_inf_nan=False,
        json_schema_extra={
            "example": {
                "temperature": 23.5,
                "humidity": 60,
                "relay_status": 1
            }
        }
    )

    def missing_fields(self) -> List[str]:
        """Names of required fields that were absent or null."""
        return [
            name for name in ("temperature", "humidity", "relay_status")
            if getattr(self, name) is None
        ]


class SensorReading(BaseModel):
    """A stored reading as returned by the query endpoint."""
    temperature: float
    humidity: float
    relay_status: int
    timestamp: str = Field(..., description="Server time, YYYY-MM-DD HH:MM:SS")


class IngestResponse(BaseModel):
    """Response from the ingestion endpoint."""
    status: str = Field(..., description="success or error")
    message: Optional[str] = None
    error: Optional[str] = Field(
        None,
        description="Underlying database error (storage failures only)"
    )


# =========================================
# Threshold Models
# =========================================

class ThresholdInput(BaseModel):
    """Input model for the threshold-write endpoint."""
    temp_threshold: Optional[float] = Field(
        default=None,
        description="Temperature alert threshold"
    )
    humidity_threshold: Optional[float] = Field(
        default=None,
        description="Humidity alert threshold"
    )

    model_config = ConfigDict(
        allow_inf_nan=False,
        json_schema_extra={
            "example": {
                "temp_threshold": 30,
                "humidity_threshold": 75
            }
        }
    )

    def missing_fields(self) -> List[str]:
        return [
            name for name in ("temp_threshold", "humidity_threshold")
            if getattr(self, name) is None
        ]


class ThresholdSetting(BaseModel):
    """The current threshold pair."""
    temp_threshold: Optional[float] = None
    humidity_threshold: Optional[float] = None


class ThresholdWriteResponse(BaseModel):
    status: str
    message: Optional[str] = None
    error: Optional[str] = None


# =========================================
# Login Models
# =========================================

class LoginResponse(BaseModel):
    """Credential check result. Failures are reported with success=False."""
    success: bool
    message: str
    user_id: Optional[int] = None


# =========================================
# System Status Models
# =========================================

class SystemHealth(BaseModel):
    """System health check response."""
    status: str = Field(..., description="ok, degraded, or error")
    version: str = Field(..., description="API version")
    timestamp: datetime = Field(..., description="Current server time")
    database: str = Field(..., description="Database connection status")
    components: Dict[str, str] = Field(
        default_factory=dict,
        description="Status of system components"
    )
