"""
Plain-text report formatter for decoded register blocks.

Voltages, currents and powers are shown with two decimals, energies and
temperatures with one, status words as uppercase hex exactly as read.

CHANGELOG:
- 2026-10-17: Initial creation

TODO:
- None
"""

from __future__ import annotations

from landstar.src.models import (
    BlockRecord,
    RatedData,
    RealTimeData,
    RealTimeStatus,
    Settings,
    StatisticalParameters,
)


def _heading(title: str) -> str:
    return f"-- {title} from Controller --"


def format_rated_data(data: RatedData) -> list[str]:
    return [
        _heading("Rated Data"),
        f"PV Rated Voltage: {data.pv_rated_voltage:0.2f} V",
        f"PV Rated Current: {data.pv_rated_current:0.2f} A",
        f"PV Rated Power: {data.pv_rated_power:0.2f} W",
        f"Battery Rated Voltage: {data.battery_rated_voltage:0.2f} V",
        f"Battery Rated Current: {data.battery_rated_current:0.2f} A",
        f"Battery Rated Power: {data.battery_rated_power:0.2f} W",
        f"Charging Mode: {data.charging_mode:X} ({data.charging_mode_name})",
    ]


def format_real_time_data(data: RealTimeData) -> list[str]:
    return [
        _heading("Real Time Data"),
        f"PV Array Voltage: {data.pv_voltage:0.2f} V",
        f"PV Array Current: {data.pv_current:0.2f} A",
        f"PV Array Power  : {data.pv_power:0.2f} W",
        f"Battery Voltage: {data.battery_voltage:0.2f} V",
        f"Battery Current: {data.battery_current:0.2f} A",
        f"Battery Power  : {data.battery_power:0.2f} W",
        f"Load Voltage: {data.load_voltage:0.2f} V",
        f"Load Current: {data.load_current:0.2f} A",
        f"Load Power  : {data.load_power:0.2f} W",
        f"Battery Temperature   : {data.battery_temperature:0.1f} *C",
        f"Case Temperature      : {data.case_temperature:0.1f} *C",
        f"Components Temperature: {data.components_temperature:0.1f} *C",
    ]


def format_real_time_status(status: RealTimeStatus) -> list[str]:
    """Raw words first, then the decoded bit ranges."""
    lines = [
        _heading("Real Time Status"),
        f"Battery Status : {status.battery_status:X}",
        f"Charging Status: {status.charging_status:X}",
        f"  Battery Voltage    : {status.battery_voltage_status}",
        f"  Battery Temperature: {status.battery_temperature_status}",
        f"  Input Voltage      : {status.input_voltage_status}",
        f"  Charging Phase     : {status.charging_phase}",
    ]
    faults = [
        label
        for label, flag in (
            ("battery internal resistance abnormal", status.battery_internal_resistance_abnormal),
            ("wrong rated voltage identification", status.battery_rated_voltage_mismatch),
            ("charging MOSFET short", status.charging_mosfet_short),
            ("charging or anti-reverse MOSFET short", status.anti_reverse_or_charging_mosfet_short),
            ("anti-reverse MOSFET short", status.anti_reverse_mosfet_short),
            ("input over current", status.input_over_current),
            ("load over current", status.load_over_current),
            ("load short", status.load_short),
            ("load MOSFET short", status.load_mosfet_short),
            ("PV input short", status.pv_input_short),
            ("charging fault", status.charging_fault),
        )
        if flag
    ]
    lines.append(f"  Faults             : {', '.join(faults) if faults else 'none'}")
    return lines


def format_settings(settings: Settings) -> list[str]:
    return [
        _heading("Settings"),
        f"Battery Type: {settings.battery_type.value}",
        f"Battery Rated Capacity: {settings.battery_capacity} AH",
        f"Temperature Compensation Coefficient: {settings.temperature_compensation_coefficient:0.2f}",
        f"High Voltage Disconnect: {settings.high_voltage_disconnect:0.2f} V",
        f"Charging Limit Voltage: {settings.charging_limit_voltage:0.2f} V",
        f"Over Voltage Reconnect: {settings.over_voltage_reconnect:0.2f} V",
        f"Equalization Voltage: {settings.equalization_voltage:0.2f} V",
        f"Boost Voltage: {settings.boost_voltage:0.2f} V",
        f"Float Voltage: {settings.float_voltage:0.2f} V",
        f"Boost Reconnect Voltage: {settings.boost_reconnect_voltage:0.2f} V",
    ]


def format_statistical_parameters(stats: StatisticalParameters) -> list[str]:
    ambient = (
        f"{stats.ambient_temperature:0.1f} *C"
        if stats.ambient_temperature is not None
        else "n/a"
    )
    return [
        _heading("Statistical Parameters"),
        f"Max PV Input Voltage Today: {stats.max_pv_voltage_today:0.2f} V",
        f"Min PV Input Voltage Today: {stats.min_pv_voltage_today:0.2f} V",
        f"Max Battery Voltage Today: {stats.max_battery_voltage_today:0.2f} V",
        f"Min Battery Voltage Today: {stats.min_battery_voltage_today:0.2f} V",
        f"Consumed Energy Today: {stats.consumed_energy_today:0.1f} KWH",
        f"Consumed Energy Month: {stats.consumed_energy_month:0.1f} KWH",
        f"Consumed Energy Year: {stats.consumed_energy_year:0.1f} KWH",
        f"Total Consumed Energy: {stats.total_consumed_energy:0.1f} KWH",
        f"Generated Energy Today: {stats.generated_energy_today:0.1f} KWH",
        f"Generated Energy Month: {stats.generated_energy_month:0.1f} KWH",
        f"Generated Energy Year: {stats.generated_energy_year:0.1f} KWH",
        f"Total Generated Energy: {stats.total_generated_energy:0.1f} KWH",
        f"Carbon Dioxide Reduction: {stats.co2_reduction:0.1f} Ton",
        f"Battery Current: {stats.battery_current:0.2f} A",
        f"Battery Temp: {stats.battery_temperature:0.1f} *C",
        f"Ambient Temp: {ambient}",
    ]


_FORMATTERS = {
    RatedData: format_rated_data,
    RealTimeData: format_real_time_data,
    RealTimeStatus: format_real_time_status,
    Settings: format_settings,
    StatisticalParameters: format_statistical_parameters,
}


def format_report(record: BlockRecord) -> str:
    """Render any decoded record as a multi-line text report.

    Raises:
        TypeError: If *record* is not one of the decoded record types.
    """
    formatter = _FORMATTERS.get(type(record))
    if formatter is None:
        raise TypeError(f"No report format for {type(record).__name__}")
    return "\n".join(formatter(record))
