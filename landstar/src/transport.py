"""
Synchronous Modbus RTU transport for the LandStar charge controller.

Wraps :class:`pymodbus.client.ModbusSerialClient` behind the small surface
the reader needs: connect, set the unit address, read N input or holding
registers, close.  The transport object is passed explicitly to every read
so several controllers (or a fake in tests) can be used side by side.

Serial ports support only ONE client at a time.  Reads are issued one after
another and never retried: a failed read raises :class:`TransportError` and
the caller decides what to skip.

CHANGELOG:
- 2026-10-17: Initial creation

TODO:
- None
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from landstar.src.exceptions import (
    ControllerConnectionError,
    ShortBufferError,
    TransportError,
)
from landstar.src.registers import HOLDING_BANK, INPUT_BANK
from pymodbus.client import ModbusSerialClient
from pymodbus.exceptions import ModbusException

if TYPE_CHECKING:
    from types import TracebackType

    from landstar.src.registers import RegisterBlock

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_PORT: str = "/dev/ttyUSB0"
DEFAULT_BAUDRATE: int = 115200
DEFAULT_PARITY: str = "N"
DEFAULT_BYTESIZE: int = 8
DEFAULT_STOPBITS: int = 1
DEFAULT_UNIT_ID: int = 0x01
"""Factory default controller ID (changeable via Solar Station Monitor or MT50)."""

MODBUS_TIMEOUT_S: float = 3.0
"""Timeout per Modbus RTU request in seconds."""


class ModbusTransport:
    """Modbus RTU serial transport for one charge controller.

    Args:
        port: Serial device path (e.g. ``/dev/ttyUSB0``).
        baudrate: Serial baud rate (default 115200).
        parity: ``"N"``, ``"E"`` or ``"O"`` (default ``"N"``).
        bytesize: Data bits per character (default 8).
        stopbits: Stop bits (default 1).
        unit_id: Modbus slave / unit ID (default 1).
        timeout: Per-request timeout in seconds.
    """

    def __init__(
        self,
        port: str = DEFAULT_PORT,
        *,
        baudrate: int = DEFAULT_BAUDRATE,
        parity: str = DEFAULT_PARITY,
        bytesize: int = DEFAULT_BYTESIZE,
        stopbits: int = DEFAULT_STOPBITS,
        unit_id: int = DEFAULT_UNIT_ID,
        timeout: float = MODBUS_TIMEOUT_S,
    ) -> None:
        self._port = port
        self._baudrate = baudrate
        self._parity = parity
        self._bytesize = bytesize
        self._stopbits = stopbits
        self._timeout = timeout
        self._unit_id = DEFAULT_UNIT_ID
        self.set_unit_address(unit_id)
        self._client: ModbusSerialClient | None = None

    @property
    def port(self) -> str:
        """Serial device path."""
        return self._port

    @property
    def unit_id(self) -> int:
        """Modbus unit ID used for every read."""
        return self._unit_id

    @property
    def connected(self) -> bool:
        return self._client is not None

    # -- lifecycle --

    def connect(self) -> None:
        """Open the serial port.

        Raises:
            ControllerConnectionError: If the port cannot be opened.
        """
        logger.info(
            "Opening %s, %d %d%s%d",
            self._port,
            self._baudrate,
            self._bytesize,
            self._parity,
            self._stopbits,
        )
        client = ModbusSerialClient(
            self._port,
            baudrate=self._baudrate,
            bytesize=self._bytesize,
            parity=self._parity,
            stopbits=self._stopbits,
            timeout=self._timeout,
            retries=0,
        )
        try:
            ok = client.connect()
        except (OSError, ModbusException) as err:
            client.close()
            raise ControllerConnectionError(
                f"Connection to {self._port} failed: {err}"
            ) from err

        if not ok:
            client.close()
            raise ControllerConnectionError(
                f"Connection to {self._port} failed (connect returned False)"
            )

        self._client = client
        logger.info("Connected to %s (unit 0x%02X)", self._port, self._unit_id)

    def close(self) -> None:
        """Close the serial port.  Safe to call more than once."""
        if self._client is not None:
            self._client.close()
            self._client = None
            logger.debug("Closed %s", self._port)

    def __enter__(self) -> ModbusTransport:
        self.connect()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def set_unit_address(self, address: int) -> None:
        """Set the Modbus unit ID for subsequent reads.

        Raises:
            ValueError: If *address* is outside 1-247.
        """
        if address < 1 or address > 247:
            raise ValueError(f"Modbus unit address must be between 1 and 247, got {address}")
        self._unit_id = address
        logger.debug("Unit address set to 0x%02X", address)

    # -- reads --

    def read_input_registers(self, address: int, count: int) -> list[int]:
        """Read *count* input registers (FC04) starting at *address*."""
        return self.read_registers(INPUT_BANK, address, count)

    def read_holding_registers(self, address: int, count: int) -> list[int]:
        """Read *count* holding registers (FC03) starting at *address*."""
        return self.read_registers(HOLDING_BANK, address, count)

    def read_registers(self, bank: str, address: int, count: int) -> list[int]:
        """Read *count* registers of *bank* starting at *address*.

        Args:
            bank: ``"input"`` or ``"holding"``.
            address: First register address.
            count: Number of 16-bit words.

        Returns:
            The words in address order.

        Raises:
            TransportError: If the transport is not connected, the request
                or the serial port fails, or the device answers with a
                Modbus exception.
            ValueError: If *bank* is not a known bank.
        """
        if self._client is None:
            raise TransportError("Transport is not connected")

        if bank == INPUT_BANK:
            read = self._client.read_input_registers
        elif bank == HOLDING_BANK:
            read = self._client.read_holding_registers
        else:
            raise ValueError(f"Unknown register bank '{bank}'")

        try:
            response = read(address, count=count, device_id=self._unit_id)
        except (OSError, ModbusException) as err:
            # pyserial's SerialException is an OSError and escapes pymodbus.
            raise TransportError(str(err)) from err

        if response.isError():
            raise TransportError(
                f"Modbus error reading {bank} registers "
                f"(address=0x{address:04X}, count={count}): {response}"
            )

        return list(response.registers)


def read_block(transport: ModbusTransport, block: RegisterBlock) -> list[int]:
    """Issue the single read for *block* and check the word count.

    Raises:
        TransportError: If the read fails.
        ShortBufferError: If fewer words came back than the block needs.
    """
    words = transport.read_registers(block.bank, block.start_address, block.count)
    if len(words) < block.required_words:
        raise ShortBufferError(block.block_name, block.required_words, len(words))
    logger.debug(
        "Read block '%s' (address=0x%04X, count=%d): %s",
        block.block_name,
        block.start_address,
        block.count,
        words,
    )
    return words
