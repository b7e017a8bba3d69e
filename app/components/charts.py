"""
Chart Components for Dashboard

This module provides Plotly-based chart components for visualizing
sensor readings against their alert thresholds.

All charts are designed to be:
- Responsive and interactive
- Consistent in styling
- Annotated with the active threshold
"""

import plotly.graph_objects as go
import pandas as pd
from typing import List, Dict, Any, Optional
from datetime import datetime


# =========================================
# Color Schemes
# =========================================

COLORS = {
    "normal": "#10B981",     # Green
    "alert": "#EF4444",      # Red
    "threshold": "#FBBF24",  # Yellow
    "primary": "#3B82F6",    # Blue
    "humidity": "#06B6D4",   # Cyan
    "secondary": "#6B7280",  # Gray
    "text": "#F9FAFB",       # Light text
    "grid": "#374151",       # Grid lines
}

METRIC_COLORS = {
    "temperature": COLORS["primary"],
    "humidity": COLORS["humidity"],
}

READING_COLUMNS = ["timestamp", "temperature", "humidity", "relay_status"]


# =========================================
# Data Preparation
# =========================================

def readings_to_frame(readings: Optional[List[Dict[str, Any]]]) -> pd.DataFrame:
    """
    Convert readings from the query endpoint into a DataFrame.

    Timestamps are parsed to datetimes and rows are kept in the
    chronological order the API returns them in.
    """
    if not readings:
        return pd.DataFrame(columns=READING_COLUMNS)

    df = pd.DataFrame(readings, columns=READING_COLUMNS)
    df["timestamp"] = pd.to_datetime(df["timestamp"])
    df["temperature"] = df["temperature"].astype(float)
    df["humidity"] = df["humidity"].astype(float)
    df["relay_status"] = df["relay_status"].astype(int)
    return df


# =========================================
# Chart Layout Defaults
# =========================================

def get_default_layout(title: str = "", height: int = 400) -> dict:
    """Get default chart layout settings."""
    return {
        "title": {
            "text": title,
            "font": {"size": 16, "color": COLORS["text"]},
            "x": 0.5,
            "xanchor": "center"
        },
        "paper_bgcolor": "rgba(0,0,0,0)",
        "plot_bgcolor": "rgba(0,0,0,0)",
        "height": height,
        "margin": {"l": 60, "r": 40, "t": 60, "b": 60},
        "font": {"color": COLORS["text"], "size": 12},
        "xaxis": {
            "gridcolor": COLORS["grid"],
            "showgrid": True,
            "zeroline": False,
        },
        "yaxis": {
            "gridcolor": COLORS["grid"],
            "showgrid": True,
            "zeroline": False,
        },
        "hovermode": "x unified",
    }


# =========================================
# Metric Trend Chart
# =========================================

def create_metric_trend_chart(
    times: List[datetime],
    values: List[float],
    metric_name: str,
    unit: str = "",
    threshold: Optional[float] = None,
    title: Optional[str] = None,
    height: int = 300
) -> go.Figure:
    """
    Create a trend chart for a single metric with its alert threshold.

    Args:
        times: List of timestamps
        values: List of metric values
        metric_name: Name of the metric
        unit: Unit of measurement
        threshold: Alert threshold drawn as a dashed line, if configured
        title: Chart title (defaults to metric name)
        height: Chart height in pixels

    Returns:
        Plotly Figure object
    """
    fig = go.Figure()

    if threshold is not None:
        fig.add_hline(
            y=threshold,
            line_dash="dash",
            line_color=COLORS["threshold"],
            annotation_text="Threshold",
            annotation_position="right"
        )

    fig.add_trace(go.Scatter(
        x=times,
        y=values,
        mode="lines+markers",
        name=metric_name,
        line={"color": METRIC_COLORS.get(metric_name, COLORS["primary"]), "width": 2},
        marker={
            "size": 6,
            "color": [
                COLORS["alert"] if threshold is not None and v > threshold
                else METRIC_COLORS.get(metric_name, COLORS["primary"])
                for v in values
            ],
        },
        hovertemplate=f"<b>%{{y:.1f}}</b> {unit}<br>%{{x}}<extra></extra>"
    ))

    chart_title = title or metric_name.replace("_", " ").title()
    layout = get_default_layout(chart_title, height)
    layout["yaxis"]["title"] = f"{metric_name} ({unit})" if unit else metric_name
    layout["xaxis"]["title"] = "Time"
    layout["showlegend"] = False

    fig.update_layout(**layout)

    return fig


# =========================================
# Relay State Chart
# =========================================

def create_relay_state_chart(
    times: List[datetime],
    states: List[int],
    height: int = 200
) -> go.Figure:
    """Step chart of the relay state (0=off, 1=on)."""
    fig = go.Figure()

    fig.add_trace(go.Scatter(
        x=times,
        y=states,
        mode="lines",
        name="relay_status",
        line={"color": COLORS["normal"], "width": 2, "shape": "hv"},
        fill="tozeroy",
        fillcolor="rgba(16, 185, 129, 0.15)",
        hovertemplate="<b>%{y}</b><br>%{x}<extra></extra>"
    ))

    layout = get_default_layout("Relay State", height)
    layout["yaxis"].update({
        "tickmode": "array",
        "tickvals": [0, 1],
        "ticktext": ["Off", "On"],
        "range": [-0.1, 1.1],
    })
    layout["xaxis"]["title"] = "Time"
    layout["showlegend"] = False

    fig.update_layout(**layout)

    return fig
