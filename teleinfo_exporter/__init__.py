"""Prometheus exporter for electricity meters speaking the Teleinfo protocol."""

__version__ = "0.1.0"
