"""
Teleinfo Line Validation

Splits a frame into ``LABEL VALUE CHECKSUM`` lines and verifies the 6-bit
additive checksum of each one. A frame is accepted whole or rejected whole.
"""

from typing import Dict, List, Tuple

from .exceptions import MalformedLineError, ChecksumMismatchError

LINE_SEPARATOR = "\r\n"
FIELD_SEPARATOR = " "
FRAME_WRAPPING = "\r\n\x02\x03"


def compute_checksum(line: str) -> str:
    """
    Compute the checksum character of a line.

    The sum covers every character before the trailing separator and
    checksum character, masked to 6 bits and shifted into printable ASCII.
    """
    total = sum(ord(c) for c in line[:-2])
    return chr((total & 0x3F) + 0x20)


def split_line(line: str) -> Tuple[str, str, str]:
    """
    Split a line into its label, value and checksum character.

    Raises:
        MalformedLineError: If the line is not exactly three tokens
    """
    # Split off the checksum first: a space is a valid checksum character
    if len(line) < 2 or line[-2] != FIELD_SEPARATOR:
        raise MalformedLineError(line, "expected a single checksum character")

    fields = line[:-2].split(FIELD_SEPARATOR)
    if len(fields) != 2:
        raise MalformedLineError(line, f"expected 3 elements, got {len(fields) + 1}")

    label, value = fields
    if not label:
        raise MalformedLineError(line, "empty label")
    return label, value, line[-1]


class LineValidator:
    """Turns a raw frame into a label to value mapping."""

    def lines(self, frame: bytes) -> List[str]:
        """Return the non-empty lines of a frame, markers removed."""
        try:
            text = frame.decode("ascii")
        except UnicodeDecodeError as e:
            raise MalformedLineError(repr(frame[e.start:e.end]), "non-ASCII byte in frame") from e

        text = text.strip(FRAME_WRAPPING)
        return [line for line in text.split(LINE_SEPARATOR) if line]

    def validate(self, frame: bytes) -> Dict[str, str]:
        """
        Validate every line of a frame.

        Args:
            frame: Frame bytes as returned by FrameExtractor

        Returns:
            Mapping of label to value; the last occurrence of a label wins

        Raises:
            MalformedLineError: If a line is not ``LABEL VALUE CHECKSUM``
            ChecksumMismatchError: If a line checksum is wrong
        """
        mapping: Dict[str, str] = {}
        for line in self.lines(frame):
            label, value, checksum = split_line(line)
            expected = compute_checksum(line)
            if checksum != expected:
                raise ChecksumMismatchError(line, expected, checksum)
            mapping[label] = value
        return mapping
