"""
Teleinfo Frame Extraction

Locates one complete frame in the live byte stream emitted by the meter.
A frame starts with STX, ends with ETX and carries CR LF separated lines.
"""

import logging
from typing import Any

from .exceptions import StreamReadError

STX = b"\x02"  # Frame start
ETX = b"\x03"  # Frame end
CR = b"\r"
LF = b"\n"


class FrameExtractor:
    """
    Reads one frame at a time from a stream offering pyserial's
    ``read_until(expected)`` contract.

    The stream is append-only and non-seekable: bytes consumed by a failed
    extraction are dropped, and the next call resynchronizes on the next
    start marker.
    """

    def __init__(self, stream: Any):
        self.logger = logging.getLogger(__name__)
        self.stream = stream

    def _read_through(self, marker: bytes) -> bytes:
        try:
            data = self.stream.read_until(marker)
        except OSError as e:
            raise StreamReadError(f"I/O error while waiting for {marker!r}: {e}") from e

        if not data.endswith(marker):
            raise StreamReadError(
                f"timed out waiting for {marker!r} after {len(data)} bytes"
            )
        return data

    def extract(self) -> bytes:
        """
        Read the next complete frame from the stream.

        Returns:
            Frame bytes, from STX to ETX inclusive

        Raises:
            StreamReadError: If the stream times out or fails before ETX
        """
        # Discard the incomplete frame we may have joined mid-way
        skipped = self._read_through(STX)
        if len(skipped) > 1:
            self.logger.debug(f"Discarded {len(skipped) - 1} bytes before frame start")

        payload = self._read_through(ETX)

        # An interrupted frame restarts with a new STX before any ETX
        restart = payload.rfind(STX)
        if restart != -1:
            self.logger.debug("Frame restarted mid-way, resynchronizing on last start marker")
            payload = payload[restart + 1:]

        return STX + payload
