#!/usr/bin/env python3
"""Run the Teleinfo exporter or dump decoded frames to stdout."""
import argparse
import logging
import sys
import time

from teleinfo_exporter.core.config import LOG_LEVEL_ALIASES, LOG_LEVELS, get_settings
from teleinfo_exporter.main import configure_logging, create_app
from teleinfo_exporter.teleinfo import SampleCollector, StreamReadError, TeleinfoError
from teleinfo_exporter.teleinfo.serial_port import open_serial_port

logger = logging.getLogger("teleinfo_exporter")


def dump(stream, count: int | None = None, retry_delay: float = 1.0) -> int:
    """Print decoded frames until interrupted or ``count`` frames were printed.

    A read failure waits ``retry_delay`` seconds before the next attempt.

    Returns:
        Number of frames that failed to decode.
    """
    sampler = SampleCollector(stream)
    printed = failed = 0
    while count is None or printed < count:
        try:
            record = sampler.get_sample()
        except TeleinfoError as exc:
            failed += 1
            logger.warning(f"Skipping frame ({exc.stage}): {exc}")
            if isinstance(exc, StreamReadError):
                time.sleep(retry_delay)
            continue
        print(record.to_dict(), flush=True)
        printed += 1
    return failed


def _log_level(value: str) -> str:
    level = value.strip().upper()
    return LOG_LEVEL_ALIASES.get(level, level)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="teleinfo-exporter",
        description="Expose Teleinfo meter readings as Prometheus metrics",
    )
    settings = get_settings()
    parser.add_argument(
        "--device",
        default=settings.serial_device,
        help=f"Serial device or pyserial URL (default {settings.serial_device})",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        type=_log_level,
        choices=LOG_LEVELS,
        help=f"Logging level (default {settings.log_level})",
    )
    sub = parser.add_subparsers(dest="command")
    serve_parser = sub.add_parser("serve", help="Serve /metrics over HTTP (default)")
    serve_parser.add_argument("--host", default=settings.listen_host)
    serve_parser.add_argument("--port", type=int, default=settings.listen_port)
    dump_parser = sub.add_parser("dump", help="Print decoded frames to stdout")
    dump_parser.add_argument("--count", type=int, default=None, help="Stop after N frames")
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    settings = settings.model_copy(update={"serial_device": args.device})

    try:
        stream = open_serial_port(settings)
    except StreamReadError as exc:
        logger.error(str(exc))
        sys.exit(1)

    if args.command == "dump":
        try:
            dump(stream, args.count, retry_delay=settings.read_timeout)
        except KeyboardInterrupt:
            pass
        finally:
            stream.close()
        return

    import uvicorn

    host = getattr(args, "host", settings.listen_host)
    port = getattr(args, "port", settings.listen_port)
    uvicorn.run(create_app(settings, stream=stream), host=host, port=port, log_level=args.log_level.lower())


if __name__ == "__main__":
    main()
