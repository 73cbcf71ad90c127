"""
Shared Test Configuration
=========================

Fixtures and helpers used across the emulator test modules.

Copyright (c) 2025 Eater Emulator Contributors
"""

from typing import Dict, Optional

import pytest

from eater.emulator import Interpreter, Simulator


def image(*code: int, data: Optional[Dict[int, int]] = None) -> bytes:
    """
    Build a 16-byte program image.

    Code bytes are placed from address 0, the rest is zero-filled, then
    data bytes are written at their addresses.

        image(0x1E, 0x2F, 0xF0, data={14: 5, 15: 7})
    """
    mem = bytearray(16)
    mem[:len(code)] = bytes(code)
    for address, value in (data or {}).items():
        mem[address] = value
    return bytes(mem)


@pytest.fixture
def outputs():
    """List collecting OUT values."""
    return []


@pytest.fixture
def sim(outputs):
    """Fresh fixed-timing simulator wired to the outputs list."""
    return Simulator(on_output=outputs.append)


@pytest.fixture
def vm(outputs):
    """Fresh interpreter wired to the outputs list."""
    return Interpreter(on_output=outputs.append)
