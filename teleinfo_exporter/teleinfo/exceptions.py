"""
Teleinfo Exceptions

Custom exceptions raised while reading and decoding Teleinfo frames.
Each class carries the pipeline stage it belongs to so callers can tell a
read failure from a corrupted frame.
"""


class TeleinfoError(Exception):
    """Base exception for Teleinfo sampling operations."""

    stage = "sample"


class StreamReadError(TeleinfoError):
    """Raised when the stream times out or fails before a frame is complete."""

    stage = "read"


class FrameValidationError(TeleinfoError):
    """Raised when a frame fails line validation."""

    stage = "validate"


class MalformedLineError(FrameValidationError):
    """Raised when a line does not split into label, value and checksum."""

    def __init__(self, line: str, reason: str):
        super().__init__(f"malformed line {line!r}: {reason}")
        self.line = line


class ChecksumMismatchError(FrameValidationError):
    """Raised when a line checksum does not match its content."""

    def __init__(self, line: str, expected: str, received: str):
        super().__init__(
            f"invalid checksum for line {line!r}: expected {expected!r}, got {received!r}"
        )
        self.line = line
        self.expected = expected
        self.received = received


class DecodeError(TeleinfoError):
    """Raised when a known label carries a value that is not an unsigned integer."""

    stage = "decode"

    def __init__(self, label: str, value: str):
        super().__init__(f"cannot decode {label}: {value!r} is not an unsigned integer")
        self.label = label
        self.value = value
