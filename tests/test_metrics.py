"""Tests for the Prometheus collector."""
import logging

from prometheus_client import CollectorRegistry, generate_latest

from teleinfo_exporter.metrics import TeleinfoCollector
from teleinfo_exporter.teleinfo import SampleCollector
from teleinfo_frames import SAMPLE_FRAME


def _registry(stream):
    collector = TeleinfoCollector(SampleCollector(stream))
    registry = CollectorRegistry()
    registry.register(collector)
    return registry, collector


def test_register_does_not_read_stream(stream_factory):
    stream = stream_factory(SAMPLE_FRAME)
    _registry(stream)
    assert stream.reads == 0


def test_scrape_exposes_gauges(stream_factory):
    registry, _ = _registry(stream_factory(SAMPLE_FRAME))

    output = generate_latest(registry).decode()

    assert "# TYPE teleinfo_index_kwh gauge" in output
    assert "teleinfo_index_kwh 7.64093e+06" in output
    assert "teleinfo_intensity_instant_amp 2.0" in output
    assert "teleinfo_intensity_max_amp 90.0" in output
    assert "teleinfo_intensity_subscribed_amp 30.0" in output
    assert "teleinfo_power_apparent_va 390.0" in output
    assert "teleinfo_collection_time_seconds" in output


def test_get_sample_value(stream_factory):
    registry, _ = _registry(stream_factory(SAMPLE_FRAME))
    assert registry.get_sample_value("teleinfo_power_apparent_va") == 390.0


def test_failed_scrape_emits_nothing_and_logs(stream_factory, caplog):
    registry, _ = _registry(stream_factory(b"\x02\nIINST 002\r\x03"))

    with caplog.at_level(logging.ERROR, logger="teleinfo_exporter.metrics"):
        output = generate_latest(registry).decode()

    assert "teleinfo_" not in output
    assert "validate" in caplog.text


def test_failed_scrape_does_not_break_next_one(stream_factory):
    stream = stream_factory(b"no frame here")
    registry, _ = _registry(stream)

    assert registry.get_sample_value("teleinfo_index_kwh") is None
    stream.feed(SAMPLE_FRAME)
    assert registry.get_sample_value("teleinfo_index_kwh") == 7640930.0


def test_sample_uses_same_stream(stream_factory):
    _, collector = _registry(stream_factory(SAMPLE_FRAME))
    assert collector.sample().intensity_max == 90
