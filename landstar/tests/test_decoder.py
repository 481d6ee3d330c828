"""
Tests for the register decoder -- converts raw words to typed records.

Verifies the /100 scaling rule, low-word-first U32 assembly, the five block
decoders and the short buffer check.

CHANGELOG:
- 2026-10-17: Initial creation

TODO:
- None
"""

from __future__ import annotations

import pytest
from landstar.src.decoder import (
    combine_u32,
    decode,
    decode_block,
    decode_rated_data,
    decode_real_time_data,
    decode_real_time_status,
    decode_settings,
    decode_statistical_parameters,
    decode_u16,
    decode_u32,
)
from landstar.src.exceptions import ShortBufferError, TransportError
from landstar.src.models import (
    BatteryType,
    RatedData,
    RealTimeStatus,
    Settings,
    StatisticalParameters,
)
from landstar.src.registers import ALL_BLOCKS, STATISTICAL_PARAMETERS_BLOCK

# ===========================================================================
# Scaling helpers
# ===========================================================================


class TestDecodeU16:
    """16-bit scaled value: raw / 100.0 exactly."""

    @pytest.mark.parametrize("raw", [0, 1, 99, 100, 1234, 0x7FFF, 0x8000, 0xFFFF])
    def test_exact_division(self, raw: int) -> None:
        assert decode_u16(raw) == raw / 100.0

    def test_zero(self) -> None:
        assert decode_u16(0x0000) == 0.0

    def test_max_word_is_unsigned(self) -> None:
        assert decode_u16(0xFFFF) == 655.35

    @pytest.mark.parametrize("raw", [-1, 0x10000, 0x1FFFF])
    def test_out_of_range_word_rejected(self, raw: int) -> None:
        with pytest.raises(ValueError, match="outside 0..0xFFFF"):
            decode_u16(raw)


class TestDecodeU32:
    """32-bit scaled value: ((hi << 16) | lo) / 100.0, low word first."""

    def test_datasheet_example(self) -> None:
        """0x3002 = 0x93E0, 0x3003 = 0x0004 -> 3000 W."""
        assert decode_u32(0x93E0, 0x0004) == 3000.0

    @pytest.mark.parametrize(
        ("lo", "hi"),
        [(0, 0), (1, 0), (0, 1), (0x1234, 0xABCD), (0xFFFF, 0xFFFF)],
    )
    def test_matches_formula(self, lo: int, hi: int) -> None:
        assert decode_u32(lo, hi) == ((hi << 16) | lo) / 100.0

    def test_order_sensitive(self) -> None:
        assert decode_u32(0x93E0, 0x0004) != decode_u32(0x0004, 0x93E0)

    def test_full_range_does_not_go_negative(self) -> None:
        assert combine_u32(0xFFFF, 0xFFFF) == 0xFFFFFFFF
        assert decode_u32(0xFFFF, 0xFFFF) == 42949672.95

    def test_high_word_only(self) -> None:
        assert combine_u32(0x0000, 0x0001) == 65536

    @pytest.mark.parametrize(("lo", "hi"), [(0x10000, 0), (0, 0x10000), (-1, 0)])
    def test_out_of_range_word_rejected(self, lo: int, hi: int) -> None:
        with pytest.raises(ValueError, match="outside 0..0xFFFF"):
            combine_u32(lo, hi)
        with pytest.raises(ValueError, match="outside 0..0xFFFF"):
            decode_u32(lo, hi)


# ===========================================================================
# Rated data
# ===========================================================================


class TestRatedData:
    def test_known_values(self, rated_words: list[int]) -> None:
        data = decode_rated_data(rated_words)
        assert isinstance(data, RatedData)
        assert data.pv_rated_voltage == 30.0
        assert data.pv_rated_current == 10.0
        assert data.pv_rated_power == 3000.0
        assert data.battery_rated_voltage == 12.0
        assert data.battery_rated_current == 10.0
        assert data.battery_rated_power == 150.0
        assert data.charging_mode == 1
        assert data.charging_mode_name == "PWM"

    def test_zero_block(self) -> None:
        data = decode_rated_data([0] * 9)
        assert data.pv_rated_voltage == 0.0
        assert data.pv_rated_power == 0.0


# ===========================================================================
# Real-time data
# ===========================================================================


class TestRealTimeData:
    def test_known_values(self, real_time_words: list[int]) -> None:
        data = decode_real_time_data(real_time_words)
        assert data.pv_voltage == 18.75
        assert data.pv_current == 3.12
        assert data.pv_power == 58.5
        assert data.battery_voltage == 13.42
        assert data.battery_current == 4.25
        assert data.battery_power == 57.03
        assert data.load_voltage == 13.38
        assert data.load_current == 1.5
        assert data.load_power == 20.07
        assert data.battery_temperature == 21.5
        assert data.case_temperature == 24.75
        assert data.components_temperature == 26.0

    def test_unused_words_ignored(self, real_time_words: list[int]) -> None:
        """Offsets 0x08-0x0B are not decoded."""
        noisy = list(real_time_words)
        noisy[0x08:0x0C] = [0xFFFF] * 4
        assert decode_real_time_data(noisy) == decode_real_time_data(real_time_words)

    def test_load_power_high_word(self, real_time_words: list[int]) -> None:
        real_time_words[0x0F] = 0x0001
        data = decode_real_time_data(real_time_words)
        assert data.load_power == ((1 << 16) | 2007) / 100.0


# ===========================================================================
# Real-time status
# ===========================================================================


class TestRealTimeStatus:
    def test_raw_passthrough(self) -> None:
        status = decode_real_time_status([0x0001, 0x0002])
        assert isinstance(status, RealTimeStatus)
        assert status.battery_status == 0x0001
        assert status.charging_status == 0x0002

    def test_no_scaling_applied(self) -> None:
        status = decode_real_time_status([0x8123, 0xC00D])
        assert status.battery_status == 0x8123
        assert status.charging_status == 0xC00D

    def test_out_of_range_word_rejected(self) -> None:
        with pytest.raises(ValueError, match="outside 0..0xFFFF"):
            decode_real_time_status([0x10000, 0x0000])


# ===========================================================================
# Settings
# ===========================================================================


class TestSettings:
    def test_known_values(self, settings_words: list[int]) -> None:
        settings = decode_settings(settings_words)
        assert isinstance(settings, Settings)
        assert settings.battery_type is BatteryType.GEL
        assert settings.battery_capacity == 100
        assert settings.temperature_compensation_coefficient == 3.0
        assert settings.high_voltage_disconnect == 16.0
        assert settings.charging_limit_voltage == 15.0
        assert settings.over_voltage_reconnect == 15.0
        assert settings.equalization_voltage == 14.6
        assert settings.boost_voltage == 14.4
        assert settings.float_voltage == 13.8
        assert settings.boost_reconnect_voltage == 13.2

    def test_word0_two_is_gel(self) -> None:
        words = [0] * 10
        words[0] = 2
        assert decode_settings(words).battery_type is BatteryType.GEL

    def test_unknown_battery_type_code(self, settings_words: list[int]) -> None:
        settings_words[0] = 9
        assert decode_settings(settings_words).battery_type is BatteryType.UNKNOWN

    def test_capacity_is_integer(self, settings_words: list[int]) -> None:
        settings_words[1] = 200
        capacity = decode_settings(settings_words).battery_capacity
        assert capacity == 200
        assert isinstance(capacity, int)


# ===========================================================================
# Statistical parameters
# ===========================================================================


class TestStatisticalParameters:
    def test_known_values(self, statistics_words: list[int]) -> None:
        stats = decode_statistical_parameters(statistics_words)
        assert isinstance(stats, StatisticalParameters)
        assert stats.max_pv_voltage_today == 22.1
        assert stats.min_pv_voltage_today == 0.0
        assert stats.max_battery_voltage_today == 14.4
        assert stats.min_battery_voltage_today == 12.1
        assert stats.consumed_energy_today == 0.25
        assert stats.consumed_energy_month == 7.4
        assert stats.consumed_energy_year == 1000.0
        assert stats.total_consumed_energy == 1310.72
        assert stats.generated_energy_today == 0.31
        assert stats.generated_energy_month == 9.0
        assert stats.generated_energy_year == 120.0
        assert stats.total_generated_energy == 450.0
        assert stats.co2_reduction == 0.45
        assert stats.battery_current == 3.5
        assert stats.battery_temperature == 19.9

    def test_all_zero_block(self) -> None:
        stats = decode_statistical_parameters([0] * 30)
        for name in (
            "consumed_energy_today",
            "consumed_energy_month",
            "consumed_energy_year",
            "total_consumed_energy",
            "generated_energy_today",
            "generated_energy_month",
            "generated_energy_year",
            "total_generated_energy",
            "co2_reduction",
        ):
            assert getattr(stats, name) == 0.0, name

    def test_ambient_temperature_absent_from_30_word_read(
        self, statistics_words: list[int]
    ) -> None:
        assert decode_statistical_parameters(statistics_words).ambient_temperature is None

    def test_ambient_temperature_decoded_when_covered(
        self, statistics_words: list[int]
    ) -> None:
        stats = decode_statistical_parameters([*statistics_words, 2210])
        assert stats.ambient_temperature == 22.1

    def test_undocumented_words_ignored(self, statistics_words: list[int]) -> None:
        noisy = list(statistics_words)
        noisy[0x16:0x1B] = [0xFFFF] * 5
        assert decode_statistical_parameters(noisy) == decode_statistical_parameters(
            statistics_words
        )


# ===========================================================================
# Short buffers
# ===========================================================================


class TestShortBuffer:
    """Buffers shorter than a block fail cleanly with no partial record."""

    @pytest.mark.parametrize("block", ALL_BLOCKS, ids=lambda b: b.block_name)
    def test_one_word_short_raises(self, block) -> None:
        with pytest.raises(ShortBufferError) as exc_info:
            decode(block.block_name, [0] * (block.required_words - 1))
        assert exc_info.value.block_name == block.block_name
        assert exc_info.value.expected == block.required_words
        assert exc_info.value.actual == block.required_words - 1

    @pytest.mark.parametrize("block", ALL_BLOCKS, ids=lambda b: b.block_name)
    def test_empty_buffer_raises(self, block) -> None:
        with pytest.raises(ShortBufferError):
            decode(block.block_name, [])

    def test_is_a_transport_error(self) -> None:
        with pytest.raises(TransportError):
            decode_rated_data([0] * 8)

    def test_u32_split_across_end_rejected(self) -> None:
        """7 words covers pv_rated_power but cuts battery_rated_power in half."""
        with pytest.raises(ShortBufferError):
            decode_rated_data([0] * 7)

    def test_longer_buffer_accepted(self, rated_words: list[int]) -> None:
        assert decode_rated_data([*rated_words, 0xFFFF]) == decode_rated_data(rated_words)


# ===========================================================================
# Generic dispatch
# ===========================================================================


class TestGenericDecode:
    def test_decode_block_returns_every_field(self, statistics_words: list[int]) -> None:
        fields = decode_block(STATISTICAL_PARAMETERS_BLOCK, statistics_words)
        assert set(fields) == {r.name for r in STATISTICAL_PARAMETERS_BLOCK.registers}

    def test_dispatch_by_name(self, settings_words: list[int]) -> None:
        assert decode("settings", settings_words) == decode_settings(settings_words)

    def test_unknown_block_name(self) -> None:
        with pytest.raises(KeyError):
            decode("no_such_block", [0] * 10)

    def test_decode_is_pure(self, real_time_words: list[int]) -> None:
        before = list(real_time_words)
        r1 = decode_real_time_data(real_time_words)
        r2 = decode_real_time_data(real_time_words)
        assert r1 == r2
        assert real_time_words == before
