"""
Test Suite for Sensor Monitor

This module contains tests for:
- API endpoints (test_api.py)
- Database operations (test_database.py)
- Password verification (test_security.py)
- Threshold alerts (test_alerts.py)
- Dashboard chart helpers (test_charts.py)

Run tests with:
    pytest tests/ -v
    pytest tests/ --cov=core --cov=api
"""

import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
