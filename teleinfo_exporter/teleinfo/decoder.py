"""
Teleinfo Frame Decoding

Folds validated label/value pairs into a MeasurementRecord.
"""

from typing import Dict, Mapping, Tuple

from .data_types import MeasurementRecord
from .exceptions import DecodeError

# Protocol label -> MeasurementRecord field
LABEL_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("BASE", "index"),
    ("IINST", "intensity_instant"),
    ("IMAX", "intensity_max"),
    ("ISOUSC", "intensity_subscribed"),
    ("PAPP", "power_apparent"),
)


def parse_unsigned(label: str, value: str) -> int:
    """Parse a zero-padded decimal value."""
    if not value or not value.isascii() or not value.isdigit():
        raise DecodeError(label, value)
    return int(value, 10)


class FrameDecoder:
    """
    Decodes the recognized labels of a frame.

    Labels missing from the frame leave their field at zero; labels not in
    the table are ignored.
    """

    def __init__(self, label_fields: Tuple[Tuple[str, str], ...] = LABEL_FIELDS):
        self.label_fields = label_fields

    def decode(self, mapping: Mapping[str, str]) -> MeasurementRecord:
        """
        Build a record from a validated mapping.

        Raises:
            DecodeError: If a known label's value is not an unsigned integer
        """
        values: Dict[str, int] = {}
        for label, field_name in self.label_fields:
            if label in mapping:
                values[field_name] = parse_unsigned(label, mapping[label])
        return MeasurementRecord(**values)
