"""
Pure decoder that turns raw register blocks into typed records.

Takes the word list returned for one register block, applies the U16/U32
conversions and the fixed /100 divisor described by the block's register
map, and returns the matching immutable pydantic record.

U32 values are assembled low word first: ``(words[i + 1] << 16) | words[i]``.
Reversing the order corrupts every power and energy reading.

These are pure functions: no side effects, no I/O.  A buffer shorter than
the block needs raises :class:`ShortBufferError` before any field is read,
so a partial record is never produced.

CHANGELOG:
- 2026-10-17: Initial creation

TODO:
- None
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from landstar.src.exceptions import ShortBufferError
from landstar.src.models import (
    BlockRecord,
    RatedData,
    RealTimeData,
    RealTimeStatus,
    Settings,
    StatisticalParameters,
    battery_type_from_code,
)
from landstar.src.registers import (
    BLOCKS_BY_NAME,
    RATED_DATA_BLOCK,
    REAL_TIME_DATA_BLOCK,
    REAL_TIME_STATUS_BLOCK,
    SCALE_DIVISOR,
    SETTINGS_BLOCK,
    STATISTICAL_PARAMETERS_BLOCK,
    RegisterBlock,
    RegisterDef,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Scaling helpers
# ---------------------------------------------------------------------------


def _check_word(raw: int) -> int:
    """Return *raw* unchanged, raising ``ValueError`` if it is not a 16-bit word."""
    if raw < 0 or raw > 0xFFFF:
        raise ValueError(f"Register value {raw!r} is outside 0..0xFFFF")
    return raw


def decode_u16(raw: int, divisor: int = SCALE_DIVISOR) -> float:
    """Scale a single unsigned 16-bit register: ``raw / 100.0``."""
    return _check_word(raw) / float(divisor)


def combine_u32(lo: int, hi: int) -> int:
    """Assemble two U16 registers (low word first) into unsigned 32-bit."""
    return (_check_word(hi) << 16) | _check_word(lo)


def decode_u32(lo: int, hi: int, divisor: int = SCALE_DIVISOR) -> float:
    """Scale a 32-bit value spread over two registers, low word first."""
    return combine_u32(lo, hi) / float(divisor)


# ---------------------------------------------------------------------------
# Generic table-driven decode
# ---------------------------------------------------------------------------


def _extract_value(reg_def: RegisterDef, words: Sequence[int]) -> int | float:
    """Convert and scale the field *reg_def* from an already length-checked buffer."""
    i = reg_def.offset
    if reg_def.reg_type == "U32":
        return decode_u32(words[i], words[i + 1], reg_def.divisor)
    if reg_def.reg_type == "U16":
        return decode_u16(words[i], reg_def.divisor)
    return _check_word(words[i])


def check_length(block: RegisterBlock, words: Sequence[int]) -> None:
    """Raise :class:`ShortBufferError` if *words* cannot cover *block*."""
    required = block.required_words
    if len(words) < required:
        raise ShortBufferError(block.block_name, required, len(words))


def decode_block(block: RegisterBlock, words: Sequence[int]) -> dict[str, int | float | None]:
    """Decode *words* into ``{field_name: value}`` using the block's map.

    Args:
        block: Register block definition describing offsets and types.
        words: Raw 16-bit words as read from ``block.start_address``.

    Returns:
        Dict of every field in the block.  ``"RAW"`` fields are ints,
        scaled fields are floats, optional fields past the end of
        *words* are ``None``.

    Raises:
        ShortBufferError: If *words* is shorter than ``block.required_words``.
        ValueError: If a decoded word is outside 0..0xFFFF.
    """
    check_length(block, words)

    fields: dict[str, int | float | None] = {}
    for reg_def in block.registers:
        if reg_def.offset + reg_def.word_count > len(words):
            # Only optional fields can get here after check_length().
            logger.debug(
                "Register '%s' at offset 0x%02X not covered by %d-word buffer",
                reg_def.name,
                reg_def.offset,
                len(words),
            )
            fields[reg_def.name] = None
            continue
        fields[reg_def.name] = _extract_value(reg_def, words)
    return fields


# ---------------------------------------------------------------------------
# Public API: one typed decode per block
# ---------------------------------------------------------------------------


def decode_rated_data(words: Sequence[int]) -> RatedData:
    """Decode the 9-word rated data block at input 0x3000."""
    return RatedData(**decode_block(RATED_DATA_BLOCK, words))


def decode_real_time_data(words: Sequence[int]) -> RealTimeData:
    """Decode the 19-word real-time data block at input 0x3100."""
    return RealTimeData(**decode_block(REAL_TIME_DATA_BLOCK, words))


def decode_real_time_status(words: Sequence[int]) -> RealTimeStatus:
    """Decode the 2-word status block at input 0x3200 (raw passthrough)."""
    return RealTimeStatus(**decode_block(REAL_TIME_STATUS_BLOCK, words))


def decode_settings(words: Sequence[int]) -> Settings:
    """Decode the 10-word settings block at holding 0x9000."""
    fields = decode_block(SETTINGS_BLOCK, words)
    fields["battery_type"] = battery_type_from_code(fields["battery_type"])
    return Settings(**fields)


def decode_statistical_parameters(words: Sequence[int]) -> StatisticalParameters:
    """Decode the 30-word statistics block at input 0x3300.

    Words 0x16-0x1A are read but not interpreted.
    """
    return StatisticalParameters(**decode_block(STATISTICAL_PARAMETERS_BLOCK, words))


_DECODERS = {
    RATED_DATA_BLOCK.block_name: decode_rated_data,
    REAL_TIME_DATA_BLOCK.block_name: decode_real_time_data,
    REAL_TIME_STATUS_BLOCK.block_name: decode_real_time_status,
    SETTINGS_BLOCK.block_name: decode_settings,
    STATISTICAL_PARAMETERS_BLOCK.block_name: decode_statistical_parameters,
}


def decode(block_name: str, words: Sequence[int]) -> BlockRecord:
    """Decode *words* with the typed decoder registered for *block_name*.

    Raises:
        KeyError: If *block_name* is not one of the known blocks.
        ShortBufferError: If *words* is too short for the block.
    """
    if block_name not in BLOCKS_BY_NAME:
        raise KeyError(f"Unknown register block '{block_name}'")
    return _DECODERS[block_name](words)
