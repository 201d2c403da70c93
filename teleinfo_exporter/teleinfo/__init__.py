"""
Teleinfo Protocol Module

Extracts, validates and decodes frames of the historic Teleinfo protocol
emitted on the customer output of household electricity meters.
"""

from .collector import SampleCollector
from .data_types import MeasurementRecord, MetricDescriptor, default_metric_descriptors
from .decoder import FrameDecoder
from .exceptions import (
    TeleinfoError,
    StreamReadError,
    FrameValidationError,
    MalformedLineError,
    ChecksumMismatchError,
    DecodeError,
)
from .frame import FrameExtractor
from .validator import LineValidator, compute_checksum

__all__ = [
    "SampleCollector",
    "MeasurementRecord",
    "MetricDescriptor",
    "default_metric_descriptors",
    "FrameDecoder",
    "FrameExtractor",
    "LineValidator",
    "compute_checksum",
    "TeleinfoError",
    "StreamReadError",
    "FrameValidationError",
    "MalformedLineError",
    "ChecksumMismatchError",
    "DecodeError",
]
