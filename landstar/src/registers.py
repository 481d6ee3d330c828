"""
LandStar LS-B Modbus RTU register map -- single source of truth.

Defines every register block the reader fetches from an EPEver/EPSolar
LandStar LS-B charge controller (reference unit LS1024B, slave ID 1,
115200 8N1), with per-field word offsets, data types, divisors and units.

Each block covers a contiguous address range so one read per block is
enough.  Notes from the LS Series Modbus datasheet:

- 32-bit quantities (power, energy) use two registers, the L register at
  the lower address and the H register at the next one.
- Every scaled quantity is stored multiplied by 100.  For example a rated
  charging power of 3000 W reads 0x93E0 at 0x3002 and 0x0004 at 0x3003.
- The LS1024B answers "illegal data address" when a read runs past the
  counts used below, so they are kept exactly.

CHANGELOG:
- 2026-10-17: Initial creation

TODO:
- None
"""

from __future__ import annotations

from dataclasses import dataclass, field

INPUT_BANK = "input"
HOLDING_BANK = "holding"

SCALE_DIVISOR = 100
"""Raw integer / 100.0 gives volts, amps, watts, kWh, degrees C or tons."""

# ---------------------------------------------------------------------------
# Data definitions
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RegisterDef:
    """Definition of a single field inside a register block.

    Attributes:
        offset: Word offset from the start address of the block.
        name: Unique identifier, also the field name on the decoded record.
        reg_type: Data type -- one of ``"U16"``, ``"U32"`` (low word first)
            or ``"RAW"`` (single word passed through unscaled).
        unit: Engineering unit string (e.g. ``"V"``, ``"kWh"``).
        divisor: Raw integer is divided by this to get the engineering
            value.  Ignored for ``"RAW"`` registers.
        description: Free-text description of the register.
        optional: When True the field is decoded only if the block read
            actually covers it, otherwise it decodes to ``None``.
        word_count: Number of 16-bit words the field occupies, derived
            from *reg_type*.
    """

    offset: int
    name: str
    reg_type: str
    unit: str = ""
    divisor: int = SCALE_DIVISOR
    description: str = ""
    optional: bool = False
    word_count: int = field(default=0, repr=False)

    def __post_init__(self) -> None:  # noqa: D105
        wc = _WORD_COUNTS.get(self.reg_type)
        if wc is None:
            msg = f"Register '{self.name}': unsupported type '{self.reg_type}'"
            raise ValueError(msg)
        # frozen=True requires object.__setattr__
        object.__setattr__(self, "word_count", wc)


_WORD_COUNTS: dict[str, int] = {
    "U16": 1,
    "RAW": 1,
    "U32": 2,
}


@dataclass(frozen=True, slots=True)
class RegisterBlock:
    """A contiguous range of registers fetched with one Modbus read.

    Attributes:
        block_name: Block identifier (e.g. ``"rated_data"``).
        title: Heading used by the text report.
        bank: ``"input"`` (FC04) or ``"holding"`` (FC03).
        start_address: First register address of the read.
        count: Number of 16-bit words requested.
        registers: Ordered field definitions within the block.
    """

    block_name: str
    title: str
    bank: str
    start_address: int
    count: int
    registers: list[RegisterDef]

    @property
    def required_words(self) -> int:
        """Smallest buffer length that covers every non-optional field."""
        return max(
            reg.offset + reg.word_count for reg in self.registers if not reg.optional
        )

    def address_of(self, name: str) -> int:
        """Absolute register address of the field called *name*."""
        for reg in self.registers:
            if reg.name == name:
                return self.start_address + reg.offset
        raise KeyError(name)


# ---------------------------------------------------------------------------
# Rated data (input registers 0x3000-0x3008)
# ---------------------------------------------------------------------------

RATED_DATA_BLOCK = RegisterBlock(
    block_name="rated_data",
    title="Rated Data",
    bank=INPUT_BANK,
    start_address=0x3000,
    count=0x09,
    registers=[
        RegisterDef(0x00, "pv_rated_voltage", "U16", "V", description="PV array rated voltage"),
        RegisterDef(0x01, "pv_rated_current", "U16", "A", description="PV array rated current"),
        RegisterDef(0x02, "pv_rated_power", "U32", "W", description="PV array rated power"),
        RegisterDef(0x04, "battery_rated_voltage", "U16", "V", description="Battery rated voltage"),
        RegisterDef(0x05, "battery_rated_current", "U16", "A", description="Rated charging current"),
        RegisterDef(0x06, "battery_rated_power", "U32", "W", description="Rated charging power"),
        RegisterDef(0x08, "charging_mode", "RAW", description="0 connect/disconnect, 1 PWM, 2 MPPT"),
    ],
)

# ---------------------------------------------------------------------------
# Real-time data (input registers 0x3100-0x3112)
# Offsets 0x08-0x0B are read but carry nothing on the LS1024B.
# ---------------------------------------------------------------------------

REAL_TIME_DATA_BLOCK = RegisterBlock(
    block_name="real_time_data",
    title="Real Time Data",
    bank=INPUT_BANK,
    start_address=0x3100,
    count=0x13,
    registers=[
        RegisterDef(0x00, "pv_voltage", "U16", "V", description="PV array input voltage"),
        RegisterDef(0x01, "pv_current", "U16", "A", description="PV array input current"),
        RegisterDef(0x02, "pv_power", "U32", "W", description="PV array input power"),
        RegisterDef(0x04, "battery_voltage", "U16", "V", description="Battery voltage"),
        RegisterDef(0x05, "battery_current", "U16", "A", description="Battery charging current"),
        RegisterDef(0x06, "battery_power", "U32", "W", description="Battery charging power"),
        RegisterDef(0x0C, "load_voltage", "U16", "V", description="Load voltage"),
        RegisterDef(0x0D, "load_current", "U16", "A", description="Load current"),
        RegisterDef(0x0E, "load_power", "U32", "W", description="Load power"),
        RegisterDef(0x10, "battery_temperature", "U16", "C", description="Battery temperature"),
        RegisterDef(0x11, "case_temperature", "U16", "C", description="Temperature inside the case"),
        RegisterDef(0x12, "components_temperature", "U16", "C", description="Power components temperature"),
    ],
)

# ---------------------------------------------------------------------------
# Real-time status (input registers 0x3200-0x3201)
# ---------------------------------------------------------------------------

REAL_TIME_STATUS_BLOCK = RegisterBlock(
    block_name="real_time_status",
    title="Real Time Status",
    bank=INPUT_BANK,
    start_address=0x3200,
    count=0x02,
    registers=[
        RegisterDef(0x00, "battery_status", "RAW", description="Battery status bitfield"),
        RegisterDef(0x01, "charging_status", "RAW", description="Charging equipment status bitfield"),
    ],
)

# ---------------------------------------------------------------------------
# Settings (holding registers 0x9000-0x9009)
# ---------------------------------------------------------------------------

SETTINGS_BLOCK = RegisterBlock(
    block_name="settings",
    title="Settings",
    bank=HOLDING_BANK,
    start_address=0x9000,
    count=0x0A,
    registers=[
        RegisterDef(0x00, "battery_type", "RAW", description="0 user, 1 sealed, 2 gel, 3 flooded"),
        RegisterDef(0x01, "battery_capacity", "RAW", "Ah", description="Battery rated capacity"),
        RegisterDef(
            0x02,
            "temperature_compensation_coefficient",
            "U16",
            "mV/C/2V",
            description="Temperature compensation coefficient",
        ),
        RegisterDef(0x03, "high_voltage_disconnect", "U16", "V", description="High voltage disconnect"),
        RegisterDef(0x04, "charging_limit_voltage", "U16", "V", description="Charging limit voltage"),
        RegisterDef(0x05, "over_voltage_reconnect", "U16", "V", description="Over voltage reconnect"),
        RegisterDef(0x06, "equalization_voltage", "U16", "V", description="Equalization voltage"),
        RegisterDef(0x07, "boost_voltage", "U16", "V", description="Boost voltage"),
        RegisterDef(0x08, "float_voltage", "U16", "V", description="Float voltage"),
        RegisterDef(0x09, "boost_reconnect_voltage", "U16", "V", description="Boost reconnect voltage"),
    ],
)

# ---------------------------------------------------------------------------
# Statistical parameters (input registers 0x3300-0x331D)
# Offsets 0x16-0x1A are read but undocumented.  Ambient temperature sits at
# 0x331E, one word past the read, so it only decodes when a longer buffer
# is supplied.
# ---------------------------------------------------------------------------

STATISTICAL_PARAMETERS_BLOCK = RegisterBlock(
    block_name="statistical_parameters",
    title="Statistical Parameters",
    bank=INPUT_BANK,
    start_address=0x3300,
    count=0x1E,
    registers=[
        RegisterDef(0x00, "max_pv_voltage_today", "U16", "V", description="Maximum PV input voltage today"),
        RegisterDef(0x01, "min_pv_voltage_today", "U16", "V", description="Minimum PV input voltage today"),
        RegisterDef(0x02, "max_battery_voltage_today", "U16", "V", description="Maximum battery voltage today"),
        RegisterDef(0x03, "min_battery_voltage_today", "U16", "V", description="Minimum battery voltage today"),
        RegisterDef(0x04, "consumed_energy_today", "U32", "kWh", description="Consumed energy today"),
        RegisterDef(0x06, "consumed_energy_month", "U32", "kWh", description="Consumed energy this month"),
        RegisterDef(0x08, "consumed_energy_year", "U32", "kWh", description="Consumed energy this year"),
        RegisterDef(0x0A, "total_consumed_energy", "U32", "kWh", description="Total consumed energy"),
        RegisterDef(0x0C, "generated_energy_today", "U32", "kWh", description="Generated energy today"),
        RegisterDef(0x0E, "generated_energy_month", "U32", "kWh", description="Generated energy this month"),
        RegisterDef(0x10, "generated_energy_year", "U32", "kWh", description="Generated energy this year"),
        RegisterDef(0x12, "total_generated_energy", "U32", "kWh", description="Total generated energy"),
        RegisterDef(0x14, "co2_reduction", "U32", "t", description="Carbon dioxide reduction"),
        RegisterDef(0x1B, "battery_current", "U32", "A", description="Battery net current"),
        RegisterDef(0x1D, "battery_temperature", "U16", "C", description="Battery temperature"),
        RegisterDef(
            0x1E,
            "ambient_temperature",
            "U16",
            "C",
            description="Ambient temperature",
            optional=True,
        ),
    ],
)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

ALL_BLOCKS: list[RegisterBlock] = [
    RATED_DATA_BLOCK,
    REAL_TIME_DATA_BLOCK,
    REAL_TIME_STATUS_BLOCK,
    SETTINGS_BLOCK,
    STATISTICAL_PARAMETERS_BLOCK,
]
"""All register blocks in report order."""

BLOCKS_BY_NAME: dict[str, RegisterBlock] = {
    block.block_name: block for block in ALL_BLOCKS
}
"""Lookup of every block by name."""
