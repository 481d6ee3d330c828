"""
Shared test fixtures for reader tests.

Provides environment variable fixtures for LandstarSettings configuration
tests.  All reader env vars are cleaned before each test to ensure isolation.

CHANGELOG:
- 2026-10-17: Initial creation

TODO:
- None
"""

from __future__ import annotations

import pytest

# All LandstarSettings environment variable names, used for cleanup.
_ALL_READER_ENV_VARS = (
    "LANDSTAR_PORT",
    "LANDSTAR_BAUDRATE",
    "LANDSTAR_PARITY",
    "LANDSTAR_BYTESIZE",
    "LANDSTAR_STOPBITS",
    "LANDSTAR_UNIT_ID",
    "MODBUS_TIMEOUT_S",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_reader_env(monkeypatch: pytest.MonkeyPatch, tmp_path: str) -> None:
    """Remove all reader env vars and isolate from .env files before each test.

    Changes working directory to tmp_path so no .env file is accidentally
    loaded by Pydantic BaseSettings.
    """
    for var in _ALL_READER_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def env_vars_full(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set every LandstarSettings environment variable.

    Returns the dict of env var names to values for assertion convenience.
    """
    env = {
        "LANDSTAR_PORT": "/dev/ttyAMA0",
        "LANDSTAR_BAUDRATE": "9600",
        "LANDSTAR_PARITY": "e",
        "LANDSTAR_BYTESIZE": "7",
        "LANDSTAR_STOPBITS": "2",
        "LANDSTAR_UNIT_ID": "5",
        "MODBUS_TIMEOUT_S": "1.5",
        "LOG_LEVEL": "debug",
    }
    for key, value in env.items():
        monkeypatch.setenv(key, value)
    return env


@pytest.fixture()
def rated_words() -> list[int]:
    """Rated data block for an LS1024B: 30 V / 10 A PV, 3000 W, PWM."""
    return [
        3000,    # PV rated voltage 30.00 V
        1000,    # PV rated current 10.00 A
        0x93E0,  # PV rated power lo
        0x0004,  # PV rated power hi -> 3000.00 W
        1200,    # battery rated voltage 12.00 V
        1000,    # battery rated current 10.00 A
        0x3A98,  # battery rated power lo -> 150.00 W
        0x0000,  # battery rated power hi
        0x0001,  # charging mode PWM
    ]


@pytest.fixture()
def real_time_words() -> list[int]:
    """Real-time data block with PV, battery and load values populated."""
    words = [0] * 0x13
    words[0x00] = 1875   # PV 18.75 V
    words[0x01] = 312    # PV 3.12 A
    words[0x02] = 5850   # PV 58.50 W (lo)
    words[0x04] = 1342   # battery 13.42 V
    words[0x05] = 425    # battery 4.25 A
    words[0x06] = 5703   # battery 57.03 W (lo)
    words[0x0C] = 1338   # load 13.38 V
    words[0x0D] = 150    # load 1.50 A
    words[0x0E] = 2007   # load 20.07 W (lo)
    words[0x10] = 2150   # battery temp 21.50 C
    words[0x11] = 2475   # case temp 24.75 C
    words[0x12] = 2600   # components temp 26.00 C
    return words


@pytest.fixture()
def settings_words() -> list[int]:
    """Settings block for a 100 Ah gel battery with stock 12 V setpoints."""
    return [2, 100, 300, 1600, 1500, 1500, 1460, 1440, 1380, 1320]


@pytest.fixture()
def statistics_words() -> list[int]:
    """Statistics block (30 words) with every documented field populated."""
    words = [0] * 0x1E
    words[0x00] = 2210     # max PV 22.10 V
    words[0x01] = 0        # min PV 0.00 V
    words[0x02] = 1440     # max battery 14.40 V
    words[0x03] = 1210     # min battery 12.10 V
    words[0x04] = 25       # consumed today 0.25 kWh
    words[0x06] = 740      # consumed month 7.40 kWh
    words[0x08] = 0x86A0   # consumed year lo
    words[0x09] = 0x0001   # consumed year hi -> 1000.00 kWh
    words[0x0A] = 0x0000   # total consumed lo
    words[0x0B] = 0x0002   # total consumed hi -> 1310.72 kWh
    words[0x0C] = 31       # generated today 0.31 kWh
    words[0x0E] = 900      # generated month 9.00 kWh
    words[0x10] = 12000    # generated year 120.00 kWh
    words[0x12] = 45000    # total generated 450.00 kWh
    words[0x14] = 45       # CO2 0.45 t
    words[0x1B] = 350      # battery current 3.50 A
    words[0x1D] = 1990     # battery temp 19.90 C
    return words
