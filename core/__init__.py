"""
Core Module - Sensor Monitor

This module contains the framework-agnostic logic:
- Password verification for the login endpoint
- Threshold alert evaluation

These components are used by both the API and the Streamlit dashboard.
"""

from .security import hash_password, verify_password
from .alerts import ThresholdBreach, check_thresholds

__all__ = [
    "hash_password",
    "verify_password",
    "ThresholdBreach",
    "check_thresholds",
]
