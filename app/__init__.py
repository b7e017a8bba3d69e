"""
Streamlit Dashboard Application

This module provides the web-based dashboard for the Sensor Monitor.

Components:
- dashboard.py: Main dashboard application
- components/: Reusable UI components
  - charts.py: Plotly chart components
  - gauge.py: Metric cards and alert banner

Features:
- Latest readings with threshold status
- Temperature, humidity and relay trends
- Threshold configuration
- Login check
"""

__version__ = "0.1.0"
