"""
Metric Card Components

This module provides visual components for displaying the latest
sensor values with their threshold status, the relay state and an
alert banner.
"""

import streamlit as st
from typing import Optional, Tuple, List

from core.alerts import ThresholdBreach


def get_metric_status(value: Optional[float], threshold: Optional[float]) -> Tuple[str, str, str]:
    """
    Get status, color, and emoji for a metric value.

    Returns:
        Tuple of (status, color, emoji)
    """
    if value is None:
        return ("No data", "#6B7280", "❓")
    if threshold is None:
        return ("No threshold", "#6B7280", "➖")
    if value > threshold:
        return ("Alert", "#EF4444", "🔴")
    return ("Normal", "#10B981", "✅")


def render_metric_card(
    label: str,
    value: Optional[float],
    unit: str = "",
    threshold: Optional[float] = None,
    delta: Optional[float] = None
) -> None:
    """Render the latest value of a metric with its threshold status."""
    status, color, emoji = get_metric_status(value, threshold)

    st.metric(
        label=f"{emoji} {label}",
        value=f"{value:.1f} {unit}" if value is not None else "—",
        delta=f"{delta:+.1f} {unit}" if delta is not None else None,
        delta_color="inverse"
    )

    threshold_text = f"{threshold:.1f} {unit}" if threshold is not None else "not set"
    st.markdown(
        f"<span style='color:{color}'>{status}</span> · threshold {threshold_text}",
        unsafe_allow_html=True
    )


def render_relay_indicator(relay_status: Optional[int]) -> None:
    if relay_status is None:
        st.metric(label="Relay", value="—")
    else:
        st.metric(label="Relay", value="🟢 On" if relay_status else "⚪ Off")


def render_alert_banner(breaches: List[ThresholdBreach]) -> None:
    """Show one error line per breached threshold, or a success note."""
    if not breaches:
        st.success("All readings within thresholds")
        return

    for breach in breaches:
        st.error(f"🚨 {breach.message} (+{breach.excess:.1f})")
