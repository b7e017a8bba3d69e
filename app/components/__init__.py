"""
Dashboard Components Module

Reusable UI components for the Streamlit dashboard.

Components:
- charts: Plotly-based visualization components
- gauge: Metric cards, relay indicator and alert banner
"""

from .charts import (
    readings_to_frame,
    create_metric_trend_chart,
    create_relay_state_chart,
)
from .gauge import (
    get_metric_status,
    render_metric_card,
    render_relay_indicator,
    render_alert_banner,
)

__all__ = [
    # Charts
    "readings_to_frame",
    "create_metric_trend_chart",
    "create_relay_state_chart",

    # Cards
    "get_metric_status",
    "render_metric_card",
    "render_relay_indicator",
    "render_alert_banner",
]
