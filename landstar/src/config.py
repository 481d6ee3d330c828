"""
Reader configuration loaded from environment variables.

Uses Pydantic BaseSettings for automatic env var loading and validation.
Every value has a default matching the controller's factory protocol
parameters (ID 1, 115200 baud, 8 data bits, no parity, 1 stop bit), so the
reader runs with no configuration at all.

CHANGELOG:
- 2026-10-17: Initial creation

TODO:
- None
"""

import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings

_STANDARD_BAUDRATES = (1200, 2400, 4800, 9600, 19200, 38400, 57600, 115200)


class LandstarSettings(BaseSettings):
    """Serial link and logging configuration.

    Attributes:
        landstar_port: Serial device path of the RS485 adapter.
        landstar_baudrate: Serial baud rate.
        landstar_parity: ``N``, ``E`` or ``O``.
        landstar_bytesize: Data bits per character.
        landstar_stopbits: Stop bits.
        landstar_unit_id: Modbus slave / unit ID (1-247).
        modbus_timeout_s: Per-request timeout in seconds.
        log_level: Root logger level name.
    """

    landstar_port: str = "/dev/ttyUSB0"
    landstar_baudrate: int = 115200
    landstar_parity: str = "N"
    landstar_bytesize: int = 8
    landstar_stopbits: int = 1
    landstar_unit_id: int = 1
    modbus_timeout_s: float = 3.0
    log_level: str = "INFO"

    @field_validator("landstar_port")
    @classmethod
    def port_must_not_be_empty(cls, v: str) -> str:
        """Validate the serial device path is set."""
        if not v.strip():
            raise ValueError("LANDSTAR_PORT must not be empty")
        return v

    @field_validator("landstar_baudrate")
    @classmethod
    def baudrate_must_be_standard(cls, v: int) -> int:
        """Validate the baud rate is one the controller can be set to."""
        if v not in _STANDARD_BAUDRATES:
            raise ValueError(
                f"LANDSTAR_BAUDRATE must be one of {', '.join(map(str, _STANDARD_BAUDRATES))}"
            )
        return v

    @field_validator("landstar_parity")
    @classmethod
    def parity_must_be_valid(cls, v: str) -> str:
        """Validate parity is N, E or O and normalise to upper case."""
        v = v.upper()
        if v not in ("N", "E", "O"):
            raise ValueError("LANDSTAR_PARITY must be one of N, E, O")
        return v

    @field_validator("landstar_bytesize")
    @classmethod
    def bytesize_must_be_valid(cls, v: int) -> int:
        """Validate data bits are between 5 and 8."""
        if v < 5 or v > 8:
            raise ValueError("LANDSTAR_BYTESIZE must be between 5 and 8")
        return v

    @field_validator("landstar_stopbits")
    @classmethod
    def stopbits_must_be_valid(cls, v: int) -> int:
        """Validate stop bits are 1 or 2."""
        if v not in (1, 2):
            raise ValueError("LANDSTAR_STOPBITS must be 1 or 2")
        return v

    @field_validator("landstar_unit_id")
    @classmethod
    def unit_id_must_be_valid(cls, v: int) -> int:
        """Validate Modbus unit ID is in valid range (1-247)."""
        if v < 1 or v > 247:
            raise ValueError("LANDSTAR_UNIT_ID must be between 1 and 247")
        return v

    @field_validator("modbus_timeout_s")
    @classmethod
    def timeout_must_be_positive(cls, v: float) -> float:
        """Validate the request timeout is positive."""
        if v <= 0:
            raise ValueError("MODBUS_TIMEOUT_S must be > 0")
        return v

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        """Validate the log level is a stdlib level name."""
        v = v.upper()
        if v not in logging.getLevelNamesMapping():
            raise ValueError(f"LOG_LEVEL '{v}' is not a known logging level")
        return v

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}
