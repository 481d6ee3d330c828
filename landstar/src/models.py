"""
Pydantic models for decoded charge-controller register blocks.

One immutable record per register block, holding values in engineering
units after scaling.  Status words are kept raw and exposed through
read-only bitfield accessors so the raw value stays the ground truth.

CHANGELOG:
- 2026-10-17: Initial creation

TODO:
- None
"""

from __future__ import annotations

from enum import IntEnum, StrEnum

from pydantic import BaseModel, ConfigDict

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class BatteryType(StrEnum):
    """Battery chemistry configured in holding register 0x9000."""

    USER_DEFINED = "User Defined"
    SEALED = "Sealed"
    GEL = "Gel"
    FLOODED = "Flooded"
    UNKNOWN = "Unknown"


_BATTERY_TYPE_CODES: dict[int, BatteryType] = {
    0x00: BatteryType.USER_DEFINED,
    0x01: BatteryType.SEALED,
    0x02: BatteryType.GEL,
    0x03: BatteryType.FLOODED,
}


def battery_type_from_code(code: int) -> BatteryType:
    """Map a battery type register value to :class:`BatteryType`.

    Never raises: unrecognised codes map to ``BatteryType.UNKNOWN``.
    """
    return _BATTERY_TYPE_CODES.get(code, BatteryType.UNKNOWN)


def battery_type_to_string(code: int) -> str:
    """Human-readable battery type name for a raw register value."""
    return battery_type_from_code(code).value


class ChargingMode(IntEnum):
    """Charging mode reported in input register 0x3008."""

    CONNECT_DISCONNECT = 0
    PWM = 1
    MPPT = 2


_CHARGING_MODE_NAMES: dict[int, str] = {
    ChargingMode.CONNECT_DISCONNECT: "Connect/Disconnect",
    ChargingMode.PWM: "PWM",
    ChargingMode.MPPT: "MPPT",
}

_BATTERY_VOLTAGE_STATUS: dict[int, str] = {
    0x00: "Normal",
    0x01: "Over Voltage",
    0x02: "Under Voltage",
    0x03: "Low Voltage Disconnect",
    0x04: "Fault",
}

_BATTERY_TEMPERATURE_STATUS: dict[int, str] = {
    0x00: "Normal",
    0x01: "Over Temperature",
    0x02: "Low Temperature",
}

_INPUT_VOLTAGE_STATUS: dict[int, str] = {
    0x00: "Normal",
    0x01: "No Input Power",
    0x02: "Higher Voltage Input",
    0x03: "Input Voltage Error",
}

_CHARGING_PHASE: dict[int, str] = {
    0x00: "No Charging",
    0x01: "Float",
    0x02: "Boost",
    0x03: "Equalization",
}


def _bit(word: int, bit: int) -> bool:
    return bool((word >> bit) & 0x1)


# ---------------------------------------------------------------------------
# Decoded records
# ---------------------------------------------------------------------------


class RatedData(BaseModel):
    """Rated electrical values of the controller (input 0x3000-0x3008).

    Attributes:
        pv_rated_voltage: PV array rated voltage in volts.
        pv_rated_current: PV array rated current in amps.
        pv_rated_power: PV array rated power in watts.
        battery_rated_voltage: Battery rated voltage in volts.
        battery_rated_current: Rated charging current in amps.
        battery_rated_power: Rated charging power in watts.
        charging_mode: Raw charging mode code.
    """

    model_config = ConfigDict(frozen=True)

    pv_rated_voltage: float
    pv_rated_current: float
    pv_rated_power: float
    battery_rated_voltage: float
    battery_rated_current: float
    battery_rated_power: float
    charging_mode: int

    @property
    def charging_mode_name(self) -> str:
        """Charging mode as text, ``"Unknown"`` for unlisted codes."""
        return _CHARGING_MODE_NAMES.get(self.charging_mode, "Unknown")


class RealTimeData(BaseModel):
    """Live PV, battery and load values plus temperatures (input 0x3100)."""

    model_config = ConfigDict(frozen=True)

    pv_voltage: float
    pv_current: float
    pv_power: float
    battery_voltage: float
    battery_current: float
    battery_power: float
    load_voltage: float
    load_current: float
    load_power: float
    battery_temperature: float
    case_temperature: float
    components_temperature: float


class RealTimeStatus(BaseModel):
    """Battery and charging status bitfields (input 0x3200-0x3201).

    Both words are kept exactly as read.  The properties below slice out
    the documented bit ranges.

    Battery status:
        D3-D0 voltage condition, D7-D4 temperature condition,
        D8 internal resistance abnormal, D15 wrong rated voltage
        identification.

    Charging status:
        D15-D14 input voltage status, D13 charging MOSFET short,
        D12 charging or anti-reverse MOSFET short, D11 anti-reverse MOSFET
        short, D10 input over current, D9 load over current, D8 load
        short, D7 load MOSFET short, D4 PV input short, D3-D2 charging
        phase, D1 fault, D0 running.
    """

    model_config = ConfigDict(frozen=True)

    battery_status: int
    charging_status: int

    # -- battery status word --

    @property
    def battery_voltage_status(self) -> str:
        return _BATTERY_VOLTAGE_STATUS.get(self.battery_status & 0x0F, "Unknown")

    @property
    def battery_temperature_status(self) -> str:
        return _BATTERY_TEMPERATURE_STATUS.get(
            (self.battery_status >> 4) & 0x0F, "Unknown"
        )

    @property
    def battery_internal_resistance_abnormal(self) -> bool:
        return _bit(self.battery_status, 8)

    @property
    def battery_rated_voltage_mismatch(self) -> bool:
        return _bit(self.battery_status, 15)

    # -- charging status word --

    @property
    def input_voltage_status(self) -> str:
        return _INPUT_VOLTAGE_STATUS[(self.charging_status >> 14) & 0x03]

    @property
    def charging_mosfet_short(self) -> bool:
        return _bit(self.charging_status, 13)

    @property
    def anti_reverse_or_charging_mosfet_short(self) -> bool:
        return _bit(self.charging_status, 12)

    @property
    def anti_reverse_mosfet_short(self) -> bool:
        return _bit(self.charging_status, 11)

    @property
    def input_over_current(self) -> bool:
        return _bit(self.charging_status, 10)

    @property
    def load_over_current(self) -> bool:
        return _bit(self.charging_status, 9)

    @property
    def load_short(self) -> bool:
        return _bit(self.charging_status, 8)

    @property
    def load_mosfet_short(self) -> bool:
        return _bit(self.charging_status, 7)

    @property
    def pv_input_short(self) -> bool:
        return _bit(self.charging_status, 4)

    @property
    def charging_phase(self) -> str:
        return _CHARGING_PHASE[(self.charging_status >> 2) & 0x03]

    @property
    def charging_fault(self) -> bool:
        return _bit(self.charging_status, 1)

    @property
    def charging_running(self) -> bool:
        return _bit(self.charging_status, 0)


class Settings(BaseModel):
    """Battery configuration and voltage setpoints (holding 0x9000-0x9009).

    Attributes:
        battery_type: Configured battery chemistry.
        battery_capacity: Battery rated capacity in amp-hours.
        temperature_compensation_coefficient: mV/C/2V.
        high_voltage_disconnect: Volts.
        charging_limit_voltage: Volts.
        over_voltage_reconnect: Volts.
        equalization_voltage: Volts.
        boost_voltage: Volts.
        float_voltage: Volts.
        boost_reconnect_voltage: Volts.
    """

    model_config = ConfigDict(frozen=True)

    battery_type: BatteryType
    battery_capacity: int
    temperature_compensation_coefficient: float
    high_voltage_disconnect: float
    charging_limit_voltage: float
    over_voltage_reconnect: float
    equalization_voltage: float
    boost_voltage: float
    float_voltage: float
    boost_reconnect_voltage: float


class StatisticalParameters(BaseModel):
    """Daily, monthly, yearly and lifetime statistics (input 0x3300).

    Energy fields are in kWh, ``co2_reduction`` in tons.
    ``ambient_temperature`` is ``None`` unless the buffer covered 0x331E.
    """

    model_config = ConfigDict(frozen=True)

    max_pv_voltage_today: float
    min_pv_voltage_today: float
    max_battery_voltage_today: float
    min_battery_voltage_today: float
    consumed_energy_today: float
    consumed_energy_month: float
    consumed_energy_year: float
    total_consumed_energy: float
    generated_energy_today: float
    generated_energy_month: float
    generated_energy_year: float
    total_generated_energy: float
    co2_reduction: float
    battery_current: float
    battery_temperature: float
    ambient_temperature: float | None = None


BlockRecord = RatedData | RealTimeData | RealTimeStatus | Settings | StatisticalParameters
"""Closed union of every decoded record type."""
