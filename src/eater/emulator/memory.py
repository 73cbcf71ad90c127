"""
Memory Subsystem for the Eater Emulator
=======================================

The breadboard computer has a single 16-byte RAM. Addresses are 4 bits
wide, so every address produced by an instruction operand or by the
program counter is already in range; the mask applied on access simply
mirrors the four address lines of the real chip.

Memory Map:
    $0-$F  Program and data (shared, no separation)

Copyright (c) 2025 Eater Emulator Contributors
"""

import logging
from typing import Iterable, Union

from ..errors import ProgramLoadError, ProgramSizeError


logger = logging.getLogger(__name__)

MEMORY_SIZE = 16
ADDRESS_MASK = 0x0F


class Memory:
    """
    Fixed 16-byte RAM addressed by 4-bit indices.

    Memory is zero-initialized. A program image is written in one go with
    load(); after that only the store instruction changes it.

    Example:
        >>> mem = Memory()
        >>> mem.load(bytes([0x5F, 0xF0] + [0] * 14))
        >>> mem.read(0)
        95
    """

    SIZE = MEMORY_SIZE

    def __init__(self, data: Union[bytes, bytearray, None] = None):
        """
        Initialize memory.

        Args:
            data: Optional 16-byte initial image. Defaults to all zeros.
        """
        self._data = bytearray(self.SIZE)
        if data is not None:
            self.load(data)

    def read(self, address: int) -> int:
        """
        Read byte from memory.

        Args:
            address: 4-bit address (upper bits ignored)

        Returns:
            Byte value at address
        """
        return self._data[address & ADDRESS_MASK]

    def write(self, address: int, value: int) -> None:
        """
        Write byte to memory.

        Args:
            address: 4-bit address (upper bits ignored)
            value: Byte value to write (masked to 8 bits)
        """
        self._data[address & ADDRESS_MASK] = value & 0xFF

    def load(self, data: Union[bytes, bytearray, Iterable[int]]) -> None:
        """
        Replace the whole memory contents with a program image.

        The image is validated before anything is written, so a rejected
        image leaves memory untouched.

        Args:
            data: Exactly 16 byte values

        Raises:
            ProgramSizeError: If the image is not exactly 16 bytes
            ProgramLoadError: If any value is outside 0-255
        """
        if isinstance(data, (int, str)):
            raise ProgramLoadError(
                f"program image must be a byte sequence, got {type(data).__name__}"
            )
        try:
            image = bytes(data)
        except (TypeError, ValueError) as e:
            raise ProgramLoadError(f"program image is not a byte sequence: {e}") from e

        if len(image) != self.SIZE:
            raise ProgramSizeError(len(image), expected=self.SIZE)

        self._data[:] = image
        logger.debug(f"Loaded program image: {image.hex(' ')}")

    def clear(self) -> None:
        """Zero all memory cells."""
        self._data[:] = bytes(self.SIZE)

    def dump(self) -> bytes:
        """Return an immutable copy of the memory contents."""
        return bytes(self._data)

    def __getitem__(self, address: int) -> int:
        return self.read(address)

    def __setitem__(self, address: int, value: int) -> None:
        self.write(address, value)

    def __len__(self) -> int:
        return self.SIZE

    def __iter__(self):
        return iter(self._data)

    def __eq__(self, other) -> bool:
        if isinstance(other, Memory):
            return self._data == other._data
        if isinstance(other, (bytes, bytearray, list, tuple)):
            return list(self._data) == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"Memory({self._data.hex(' ')})"
