"""
Sensor Monitor - Streamlit Dashboard

Dashboard for watching the latest temperature, humidity and relay
readings against the configured alert thresholds.

Features:
- Latest values with threshold status
- Trend charts for the last 30 readings
- Threshold configuration
- Login check

Run with: streamlit run app/dashboard.py
"""

import os
import sys
import streamlit as st
import requests
from typing import Dict, Any, Optional

# Make the project root importable when run with `streamlit run app/dashboard.py`
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.alerts import check_thresholds
from components.charts import (
    readings_to_frame,
    create_metric_trend_chart,
    create_relay_state_chart,
)
from components.gauge import (
    render_metric_card,
    render_relay_indicator,
    render_alert_banner,
)


# =========================================
# Configuration
# =========================================

API_URL = os.getenv("API_URL", "http://localhost:8000")

st.set_page_config(
    page_title="Sensor Monitor",
    page_icon="🌡️",
    layout="wide",
    initial_sidebar_state="expanded"
)


# =========================================
# API Helper Functions
# =========================================

@st.cache_data(ttl=10)
def fetch_api(endpoint: str) -> Optional[Any]:
    """Fetch data from API with caching."""
    try:
        response = requests.get(f"{API_URL}{endpoint}", timeout=10)
        response.raise_for_status()
        return response.json()
    except requests.exceptions.RequestException as e:
        st.error(f"API Error: {e}")
        return None


def post_api(endpoint: str, data: Dict[str, Any] = None, form: bool = False) -> Optional[Dict[str, Any]]:
    """POST to API as JSON, or as form fields when `form` is set."""
    try:
        if form:
            response = requests.post(f"{API_URL}{endpoint}", data=data, timeout=10)
        else:
            response = requests.post(f"{API_URL}{endpoint}", json=data, timeout=10)
        response.raise_for_status()
        return response.json()
    except requests.exceptions.RequestException as e:
        st.error(f"API Error: {e}")
        return None


def check_api_health() -> bool:
    """Check if API is available."""
    try:
        response = requests.get(f"{API_URL}/health", timeout=5)
        return response.status_code == 200
    except requests.exceptions.RequestException:
        return False


# =========================================
# Sidebar
# =========================================

def render_sidebar():
    """Render the sidebar with API status and login."""
    with st.sidebar:
        st.title("🌡️ Sensor Monitor")

        if check_api_health():
            st.success("🟢 API Connected")
        else:
            st.error("🔴 API Disconnected")
            st.info(f"API URL: {API_URL}")

        st.markdown("---")

        if st.session_state.get("user_id"):
            st.write(f"Signed in as user #{st.session_state['user_id']}")
            if st.button("Sign out", use_container_width=True):
                del st.session_state["user_id"]
                st.rerun()
        else:
            st.subheader("🔐 Login")
            with st.form("login_form"):
                email = st.text_input("Email")
                password = st.text_input("Password", type="password")
                submitted = st.form_submit_button("Login", use_container_width=True)

            if submitted:
                result = post_api(
                    "/api/v1/auth/login",
                    {"email": email, "password": password},
                    form=True
                )
                if result and result.get("success"):
                    st.session_state["user_id"] = result["user_id"]
                    st.rerun()
                elif result:
                    st.error(result.get("message", "Login failed"))

        st.markdown("---")

        if st.button("🔄 Refresh Data", use_container_width=True):
            st.cache_data.clear()
            st.rerun()


# =========================================
# Monitoring Page
# =========================================

def render_monitoring_page():
    """Latest values, alerts and trends."""
    st.header("📊 Live Readings")

    readings = fetch_api("/api/v1/readings") or []
    thresholds = fetch_api("/api/v1/thresholds") or {}
    df = readings_to_frame(readings)

    if df.empty:
        st.info("No readings received yet.")
        return

    latest = readings[-1]
    previous = readings[-2] if len(readings) > 1 else None
    temp_threshold = thresholds.get("temp_threshold")
    humidity_threshold = thresholds.get("humidity_threshold")

    render_alert_banner(check_thresholds(latest, thresholds))

    col1, col2, col3 = st.columns(3)
    with col1:
        render_metric_card(
            "Temperature", latest["temperature"], "°C", temp_threshold,
            delta=latest["temperature"] - previous["temperature"] if previous else None
        )
    with col2:
        render_metric_card(
            "Humidity", latest["humidity"], "%", humidity_threshold,
            delta=latest["humidity"] - previous["humidity"] if previous else None
        )
    with col3:
        render_relay_indicator(latest["relay_status"])
        st.caption(f"Last update: {latest['timestamp']}")

    st.plotly_chart(
        create_metric_trend_chart(
            df["timestamp"].tolist(), df["temperature"].tolist(),
            "temperature", unit="°C", threshold=temp_threshold
        ),
        use_container_width=True
    )
    st.plotly_chart(
        create_metric_trend_chart(
            df["timestamp"].tolist(), df["humidity"].tolist(),
            "humidity", unit="%", threshold=humidity_threshold
        ),
        use_container_width=True
    )
    st.plotly_chart(
        create_relay_state_chart(df["timestamp"].tolist(), df["relay_status"].tolist()),
        use_container_width=True
    )

    with st.expander("Raw readings"):
        st.dataframe(df, use_container_width=True)


# =========================================
# Threshold Page
# =========================================

def render_threshold_page():
    """Show and update the alert thresholds."""
    st.header("⚙️ Alert Thresholds")

    current = fetch_api("/api/v1/thresholds") or {}

    if current:
        st.write(
            f"Current: temperature **{current.get('temp_threshold')}**, "
            f"humidity **{current.get('humidity_threshold')}**"
        )
    else:
        st.info("No thresholds configured yet.")

    with st.form("threshold_form"):
        temp_threshold = st.number_input(
            "Temperature threshold (°C)",
            value=float(current.get("temp_threshold") or 30.0),
            step=0.5
        )
        humidity_threshold = st.number_input(
            "Humidity threshold (%)",
            value=float(current.get("humidity_threshold") or 70.0),
            step=1.0
        )
        submitted = st.form_submit_button("Save thresholds")

    if submitted:
        result = post_api("/api/v1/thresholds", {
            "temp_threshold": temp_threshold,
            "humidity_threshold": humidity_threshold,
        })
        if result and result.get("status") == "success":
            st.success("Thresholds saved")
            st.cache_data.clear()


# =========================================
# Main Application
# =========================================

def main():
    """Main application entry point."""
    render_sidebar()

    st.sidebar.markdown("---")
    page = st.sidebar.radio(
        "Go to",
        ["📊 Monitoring", "⚙️ Thresholds"],
        label_visibility="collapsed"
    )

    if page == "📊 Monitoring":
        render_monitoring_page()
    elif page == "⚙️ Thresholds":
        render_threshold_page()


if __name__ == "__main__":
    main()
