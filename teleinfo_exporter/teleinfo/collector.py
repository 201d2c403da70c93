"""
Teleinfo Sample Collector

Runs one extract, validate and decode cycle per call and adapts the
resulting record to a metrics sink.

The collector is not reentrant: it owns the stream cursor, so callers that
may scrape concurrently must serialize calls to get_sample().
"""

import dataclasses
import logging
import time
from datetime import timedelta
from typing import Any, Callable, Optional, Tuple

from .data_types import MeasurementRecord, MetricDescriptor, default_metric_descriptors
from .decoder import FrameDecoder
from .exceptions import TeleinfoError
from .frame import FrameExtractor
from .validator import LineValidator

MetricSink = Callable[[MetricDescriptor, float], None]


class SampleCollector:
    """
    Pulls measurement records from a Teleinfo stream.

    Each call to get_sample() performs exactly one blocking read of the
    stream; the stream read timeout is the only cancellation mechanism.
    """

    def __init__(
        self,
        stream: Any,
        descriptors: Optional[Tuple[MetricDescriptor, ...]] = None,
        extractor: Optional[FrameExtractor] = None,
        validator: Optional[LineValidator] = None,
        decoder: Optional[FrameDecoder] = None,
    ):
        """
        Initialize the collector.

        Args:
            stream: Byte stream with pyserial's read_until() contract
            descriptors: Exposed metrics (None = the default six)
            extractor: Frame extractor (None = one reading from stream)
            validator: Line validator
            decoder: Frame decoder
        """
        self.logger = logging.getLogger(__name__)
        self.extractor = extractor or FrameExtractor(stream)
        self.validator = validator or LineValidator()
        self.decoder = decoder or FrameDecoder()
        self.descriptors = descriptors if descriptors is not None else default_metric_descriptors()

    def get_sample(self) -> MeasurementRecord:
        """
        Read, validate and decode one frame.

        Returns:
            A new record with collection_time set

        Raises:
            TeleinfoError: Subclass matching the failed stage
                (StreamReadError, MalformedLineError, ChecksumMismatchError
                or DecodeError)
        """
        start = time.monotonic()

        try:
            frame = self.extractor.extract()
            mapping = self.validator.validate(frame)
            record = self.decoder.decode(mapping)
        except TeleinfoError as e:
            self.logger.debug(f"Sample failed at {e.stage} stage: {e}")
            raise

        elapsed = timedelta(seconds=time.monotonic() - start)
        return dataclasses.replace(record, collection_time=elapsed)

    def export(self, record: MeasurementRecord, sink: MetricSink) -> None:
        """
        Emit one observation per descriptor for a successful record.

        Args:
            record: Record returned by get_sample()
            sink: Called with each descriptor and its numeric value
        """
        for descriptor in self.descriptors:
            sink(descriptor, descriptor.value(record))
