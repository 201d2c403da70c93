"""
Teleinfo Serial Port

Opens the meter's customer output line with pyserial.
"""

import logging

import serial

from ..core.config import Settings
from .exceptions import StreamReadError

logger = logging.getLogger(__name__)


def open_serial_port(settings: Settings) -> serial.SerialBase:
    """
    Open the configured serial device.

    Args:
        settings: Exporter settings; serial_device may be a device path or
            a pyserial URL such as ``socket://host:port`` or ``loop://``

    Returns:
        Open pyserial port

    Raises:
        StreamReadError: If the port cannot be opened
    """
    try:
        port = serial.serial_for_url(
            settings.serial_device,
            baudrate=settings.baud_rate,
            bytesize=settings.byte_size,
            parity=settings.parity,
            stopbits=serial.STOPBITS_ONE,
            timeout=settings.read_timeout,
        )
    except (serial.SerialException, ValueError) as e:
        raise StreamReadError(f"Unable to open serial port {settings.serial_device}: {e}") from e

    logger.info(
        f"Opened {settings.serial_device} at {settings.baud_rate} baud, "
        f"{settings.byte_size}{settings.parity}1, timeout {settings.read_timeout}s"
    )
    return port
