"""
Prometheus exposition of Teleinfo samples.

Every scrape triggers one blocking read of the meter stream. Scrapes are
serialized here because interleaved reads on one serial line would corrupt
frame boundaries.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterator

from prometheus_client.core import GaugeMetricFamily
from prometheus_client.registry import Collector

from teleinfo_exporter.teleinfo import MeasurementRecord, MetricDescriptor, SampleCollector, TeleinfoError

logger = logging.getLogger(__name__)


class TeleinfoCollector(Collector):
    """Custom collector that samples the meter on every scrape."""

    def __init__(self, sampler: SampleCollector) -> None:
        self._sampler = sampler
        self._lock = threading.Lock()

    def sample(self) -> MeasurementRecord:
        """Take one sample; concurrent callers wait their turn."""
        with self._lock:
            return self._sampler.get_sample()

    def describe(self) -> Iterator[GaugeMetricFamily]:
        # Without describe() the registry would call collect() at
        # registration time and block on the serial line
        for descriptor in self._sampler.descriptors:
            yield GaugeMetricFamily(descriptor.name, descriptor.documentation)

    def collect(self) -> Iterator[GaugeMetricFamily]:
        try:
            record = self.sample()
        except TeleinfoError as exc:
            logger.error(f"Error collecting metrics ({exc.stage}): {exc}")
            return

        families: list[GaugeMetricFamily] = []

        def sink(descriptor: MetricDescriptor, value: float) -> None:
            families.append(
                GaugeMetricFamily(descriptor.name, descriptor.documentation, value=value)
            )

        self._sampler.export(record, sink)
        yield from families
