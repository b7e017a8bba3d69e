"""
Threshold Alerts

Compares a sensor reading against the current threshold pair.
A metric is in alert when its value rises above its threshold.
"""

from dataclasses import dataclass
from typing import List, Optional, Dict, Any

# Reading field -> threshold field
THRESHOLD_FIELDS = {
    "temperature": "temp_threshold",
    "humidity": "humidity_threshold",
}

UNITS = {
    "temperature": "°C",
    "humidity": "%",
}


@dataclass
class ThresholdBreach:
    """A reading value above its configured threshold."""
    metric_name: str
    value: float
    threshold: float

    @property
    def excess(self) -> float:
        return self.value - self.threshold

    @property
    def message(self) -> str:
        unit = UNITS.get(self.metric_name, "")
        return (
            f"{self.metric_name.title()} {self.value:.1f}{unit} "
            f"is above the threshold of {self.threshold:.1f}{unit}"
        )


def check_thresholds(
    reading: Optional[Dict[str, Any]],
    thresholds: Optional[Dict[str, Any]]
) -> List[ThresholdBreach]:
    """
    Find the metrics of a reading that exceed the thresholds.

    Args:
        reading: Reading with temperature and humidity values
        thresholds: Threshold pair as returned by the threshold-read
            endpoint (may be None when none has been configured)

    Returns:
        List of breaches, empty when nothing is in alert
    """
    if not reading or not thresholds:
        return []

    breaches = []
    for metric_name, threshold_name in THRESHOLD_FIELDS.items():
        value = reading.get(metric_name)
        threshold = thresholds.get(threshold_name)
        if value is None or threshold is None:
            continue
        if float(value) > float(threshold):
            breaches.append(ThresholdBreach(
                metric_name=metric_name,
                value=float(value),
                threshold=float(threshold)
            ))

    return breaches
