"""
One-shot reader entrypoint for the LandStar charge controller.

Connects over Modbus RTU, reads the five register blocks in order (rated
data, real-time data, real-time status, settings, statistical parameters),
decodes each one and prints its text report to stdout.

Error handling:
- Invalid settings are a usage error: exit status 2.
- Connection failure is fatal: logged, exit status 1.
- A failed or short read is logged with the underlying message; that
  block's report is skipped and the run continues with the next block.
- Nothing is retried.

Structured JSON logging goes to stderr so stdout carries only the reports.

CHANGELOG:
- 2026-10-17: Initial creation

TODO:
- None
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import UTC, datetime
from typing import TYPE_CHECKING, TextIO

from landstar.src.decoder import decode
from landstar.src.exceptions import ControllerConnectionError, TransportError
from landstar.src.formatter import format_report
from landstar.src.registers import ALL_BLOCKS
from landstar.src.transport import ModbusTransport, read_block
from pydantic import ValidationError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from landstar.src.config import LandstarSettings
    from landstar.src.registers import RegisterBlock

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Structured JSON logging setup
# ---------------------------------------------------------------------------


def configure_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging for the reader.

    Sets up the root logger with a JSON-formatted handler writing to stderr.
    """

    class _JsonFormatter(logging.Formatter):
        """Minimal JSON log formatter."""

        def format(self, record: logging.LogRecord) -> str:
            log_entry = {
                "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
                "level": record.levelname,
                "logger": record.name,
                "msg": record.getMessage(),
            }
            if record.exc_info and record.exc_info[1] is not None:
                log_entry["exception"] = self.formatException(record.exc_info)
            return json.dumps(log_entry)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_JsonFormatter())
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def log_config_summary(settings: LandstarSettings) -> None:
    """Log the effective serial configuration at startup."""
    logger.info(
        "Reader starting with config: "
        "landstar_port=%s, landstar_baudrate=%s, landstar_parity=%s, "
        "landstar_bytesize=%s, landstar_stopbits=%s, landstar_unit_id=%s, "
        "modbus_timeout_s=%s",
        settings.landstar_port,
        settings.landstar_baudrate,
        settings.landstar_parity,
        settings.landstar_bytesize,
        settings.landstar_stopbits,
        settings.landstar_unit_id,
        settings.modbus_timeout_s,
    )


# ---------------------------------------------------------------------------
# Per-block report
# ---------------------------------------------------------------------------


def report_block(
    transport: ModbusTransport,
    block: RegisterBlock,
    *,
    out: TextIO,
) -> bool:
    """Read, decode and print one block.

    Args:
        transport: Connected transport.
        block: Block to read.
        out: Stream the report is written to.

    Returns:
        True if the report was printed, False if the block was skipped.
    """
    try:
        words = read_block(transport, block)
        record = decode(block.block_name, words)
    except TransportError as err:
        logger.error("%s - Read failed: %s", block.title, err)
        return False

    print(format_report(record), file=out)
    return True


def run_reports(
    transport: ModbusTransport,
    *,
    blocks: Sequence[RegisterBlock] = ALL_BLOCKS,
    out: TextIO | None = None,
) -> int:
    """Print a report for every block, skipping the ones that fail.

    Returns:
        Number of blocks successfully reported.
    """
    stream = out if out is not None else sys.stdout
    reported = 0
    for block in blocks:
        if report_block(transport, block, out=stream):
            reported += 1
    logger.info("Done: %d of %d blocks reported", reported, len(blocks))
    return reported


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def _settings_error_message(err: ValidationError) -> str:
    """Flatten a settings ``ValidationError`` into one usage line."""
    return "; ".join(e["msg"] for e in err.errors())


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    p = argparse.ArgumentParser(
        description="Read and decode a LandStar LS-B charge controller over Modbus RTU"
    )
    p.add_argument("--port", help="Serial device path (default from LANDSTAR_PORT)")
    p.add_argument(
        "--baudrate", type=int, help="Serial baud rate (default from LANDSTAR_BAUDRATE)"
    )
    p.add_argument(
        "--unit-id", type=int, dest="unit_id",
        help="Modbus unit ID (default from LANDSTAR_UNIT_ID)"
    )
    return p


def main(argv: Sequence[str] | None = None) -> int:
    """Load config, connect, print every report.

    Invalid settings (from the CLI or the environment) are reported as a
    usage error and exit with status 2.

    Returns:
        Process exit status: 0 on completion, 1 if the connection failed.
    """
    from landstar.src.config import LandstarSettings

    parser = build_parser()
    args = parser.parse_args(argv)
    overrides = {
        key: value
        for key, value in (
            ("landstar_port", args.port),
            ("landstar_baudrate", args.baudrate),
            ("landstar_unit_id", args.unit_id),
        )
        if value is not None
    }
    try:
        settings = LandstarSettings(**overrides)
    except ValidationError as err:
        parser.error(_settings_error_message(err))

    configure_logging(settings.log_level)
    log_config_summary(settings)

    transport = ModbusTransport(
        settings.landstar_port,
        baudrate=settings.landstar_baudrate,
        parity=settings.landstar_parity,
        bytesize=settings.landstar_bytesize,
        stopbits=settings.landstar_stopbits,
        unit_id=settings.landstar_unit_id,
        timeout=settings.modbus_timeout_s,
    )

    try:
        transport.connect()
    except ControllerConnectionError as err:
        logger.error("%s", err)
        return 1

    try:
        run_reports(transport)
    finally:
        transport.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
