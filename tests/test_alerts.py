"""
Tests for Threshold Alerts

Run with: pytest tests/test_alerts.py -v
"""

import pytest

from core.alerts import ThresholdBreach, check_thresholds


class TestCheckThresholds:
    """Test breach detection."""

    def setup_method(self):
        self.thresholds = {"temp_threshold": 30.0, "humidity_threshold": 70.0}

    def test_within_thresholds(self):
        reading = {"temperature": 25.0, "humidity": 60.0, "relay_status": 0}

        assert check_thresholds(reading, self.thresholds) == []

    def test_equal_to_threshold_is_not_a_breach(self):
        reading = {"temperature": 30.0, "humidity": 70.0}

        assert check_thresholds(reading, self.thresholds) == []

    def test_temperature_breach(self):
        reading = {"temperature": 31.5, "humidity": 60.0}

        breaches = check_thresholds(reading, self.thresholds)

        assert len(breaches) == 1
        assert breaches[0].metric_name == "temperature"
        assert breaches[0].excess == pytest.approx(1.5)

    def test_both_breached(self):
        reading = {"temperature": 35.0, "humidity": 80.0}

        breaches = check_thresholds(reading, self.thresholds)

        assert [b.metric_name for b in breaches] == ["temperature", "humidity"]

    def test_no_thresholds_configured(self):
        assert check_thresholds({"temperature": 99.0, "humidity": 99.0}, None) == []

    def test_partial_threshold_pair(self):
        breaches = check_thresholds(
            {"temperature": 40.0, "humidity": 99.0},
            {"temp_threshold": 35.0, "humidity_threshold": None}
        )

        assert [b.metric_name for b in breaches] == ["temperature"]

    def test_numeric_strings(self):
        breaches = check_thresholds(
            {"temperature": "31", "humidity": "10"},
            {"temp_threshold": "30", "humidity_threshold": "70"}
        )

        assert len(breaches) == 1


class TestThresholdBreach:
    """Test ThresholdBreach formatting."""

    def test_message(self):
        breach = ThresholdBreach(metric_name="humidity", value=75.0, threshold=70.0)

        assert breach.excess == 5.0
        assert breach.message == "Humidity 75.0% is above the threshold of 70.0%"
