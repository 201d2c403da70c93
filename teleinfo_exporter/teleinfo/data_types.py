"""
Data Types for Teleinfo

Defines the decoded measurement record and the metric descriptors used to
expose it.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Callable, Dict, Any, Tuple


@dataclass(frozen=True)
class MeasurementRecord:
    """
    Measurements decoded from one Teleinfo frame.

    A field left at zero means the label was absent from the frame or
    genuinely zero; the protocol does not distinguish the two.
    """
    index: int = 0  # Cumulative energy index in kWh
    intensity_instant: int = 0  # Instantaneous current in A
    intensity_max: int = 0  # Maximum current in A
    intensity_subscribed: int = 0  # Subscribed current in A
    power_apparent: int = 0  # Apparent power in VA

    # Time spent extracting, validating and decoding the frame
    collection_time: timedelta = field(default=timedelta(0))

    def to_dict(self) -> Dict[str, Any]:
        """Convert record to dictionary format."""
        return {
            "index": self.index,
            "intensity_instant": self.intensity_instant,
            "intensity_max": self.intensity_max,
            "intensity_subscribed": self.intensity_subscribed,
            "power_apparent": self.power_apparent,
            "collection_time_seconds": self.collection_time.total_seconds(),
        }


@dataclass(frozen=True)
class MetricDescriptor:
    """Name, help text and value getter of one exposed measurement."""
    name: str
    documentation: str
    value: Callable[[MeasurementRecord], float]


def default_metric_descriptors(namespace: str = "teleinfo") -> Tuple[MetricDescriptor, ...]:
    """
    Build the descriptors of the six exposed measurements.

    Args:
        namespace: Prefix of every metric name

    Returns:
        A new tuple of descriptors, one per exposed measurement
    """
    return (
        MetricDescriptor(
            f"{namespace}_index_kwh",
            "Current value of index in kilowatt.hour",
            lambda record: float(record.index),
        ),
        MetricDescriptor(
            f"{namespace}_intensity_instant_amp",
            "Current intensity demand in ampere",
            lambda record: float(record.intensity_instant),
        ),
        MetricDescriptor(
            f"{namespace}_intensity_max_amp",
            "Max intensity in ampere",
            lambda record: float(record.intensity_max),
        ),
        MetricDescriptor(
            f"{namespace}_intensity_subscribed_amp",
            "Subscribed intensity in ampere",
            lambda record: float(record.intensity_subscribed),
        ),
        MetricDescriptor(
            f"{namespace}_power_apparent_va",
            "Current apparent power in volt.ampere",
            lambda record: float(record.power_apparent),
        ),
        MetricDescriptor(
            f"{namespace}_collection_time_seconds",
            "Teleinfo data collection duration in seconds",
            lambda record: record.collection_time.total_seconds(),
        ),
    )
