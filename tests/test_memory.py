"""
Memory Subsystem Unit Tests
===========================

Tests for the 16-byte RAM and program image loading.

Copyright (c) 2025 Eater Emulator Contributors
"""

import pytest
from eater.emulator import Memory
from eater.errors import EaterError, ProgramLoadError, ProgramSizeError


class TestMemory:
    """Test Memory class."""

    def test_memory_initialization(self):
        """Memory starts as 16 zero bytes."""
        mem = Memory()
        assert len(mem) == 16
        assert mem.dump() == bytes(16)

    def test_read_write(self):
        """Basic read/write works."""
        mem = Memory()
        mem.write(10, 0x42)
        assert mem.read(10) == 0x42

    def test_write_masks_value(self):
        """Written values are masked to 8 bits."""
        mem = Memory()
        mem.write(0, 0x1FF)
        assert mem.read(0) == 0xFF

    def test_address_masked_to_4_bits(self):
        """Only the low four address lines are decoded."""
        mem = Memory()
        mem.write(0x13, 0x55)
        assert mem.read(0x03) == 0x55

    def test_indexing(self):
        """Item access mirrors read/write."""
        mem = Memory()
        mem[15] = 0xA5
        assert mem[15] == 0xA5
        assert list(mem)[15] == 0xA5

    def test_equality_with_sequences(self):
        """Memory compares equal to a matching list or bytes."""
        mem = Memory()
        mem[1] = 2
        expected = [0, 2] + [0] * 14
        assert mem == expected
        assert mem == bytes(expected)
        assert mem == Memory(bytes(expected))

    def test_clear(self):
        """clear() zeroes every cell."""
        mem = Memory(bytes(range(16)))
        mem.clear()
        assert mem.dump() == bytes(16)


class TestLoad:
    """Test program image loading."""

    def test_load_16_bytes(self):
        """A 16-byte image is copied verbatim."""
        mem = Memory()
        mem.load(bytes(range(16)))
        assert mem.dump() == bytes(range(16))

    def test_load_accepts_list(self):
        """Any iterable of byte values is accepted."""
        mem = Memory()
        mem.load([0xFF] * 16)
        assert mem.read(7) == 0xFF

    @pytest.mark.parametrize("size", [0, 1, 15, 17, 32])
    def test_load_wrong_size(self, size):
        """Images that are not exactly 16 bytes are rejected."""
        mem = Memory()
        with pytest.raises(ProgramSizeError) as exc_info:
            mem.load(bytes(size))
        assert exc_info.value.actual == size
        assert exc_info.value.expected == 16

    def test_rejected_load_leaves_memory_untouched(self):
        """A failed load does not modify memory."""
        mem = Memory(bytes(range(16)))
        with pytest.raises(ProgramSizeError):
            mem.load(bytes([0xFF] * 15))
        assert mem.dump() == bytes(range(16))

    def test_load_rejects_out_of_range_values(self):
        """Values outside 0-255 raise ProgramLoadError."""
        mem = Memory()
        with pytest.raises(ProgramLoadError):
            mem.load([256] + [0] * 15)

    def test_load_rejects_integer(self):
        """An int is not mistaken for a zero-filled image."""
        mem = Memory()
        with pytest.raises(ProgramLoadError):
            mem.load(16)

    def test_load_errors_are_eater_errors(self):
        """Load errors share the package base class."""
        with pytest.raises(EaterError):
            Memory().load(b"")
