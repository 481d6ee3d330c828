"""
Exceptions raised while talking to the charge controller.

CHANGELOG:
- 2026-10-17: Initial creation

TODO:
- None
"""

from __future__ import annotations


class ControllerConnectionError(Exception):
    """The serial port could not be opened or the Modbus client not set up.

    Fatal: the reader aborts startup.
    """


class TransportError(Exception):
    """A single register read transaction failed.

    The block is skipped and the reader carries on with the next one.
    """


class ShortBufferError(TransportError):
    """Fewer words were supplied than a block decode requires.

    Attributes:
        block_name: Name of the block being decoded.
        expected: Minimum number of words the block needs.
        actual: Number of words actually supplied.
    """

    def __init__(self, block_name: str, expected: int, actual: int) -> None:
        self.block_name = block_name
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Block '{block_name}': expected at least {expected} words, got {actual}"
        )
