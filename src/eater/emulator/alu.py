"""
ALU and Flag Unit
=================

The breadboard ALU is a pair of 4-bit adders fed through XOR gates, so it
only knows two operations: add and subtract (two's-complement, no carry
in). The flags register latches two bits from the ALU output: Zero and
Carry.

Flag derivation matches the hardware's flag logic, which looks at the
8-bit sum and the adder's carry-out:

1. result == 0               -> Z set, C clear
2. carry-out (result wrapped) -> C set, Z clear
3. otherwise                 -> both clear

So Z and C are never set together. Note that for subtraction the carry
reported here is a borrow: it is set when b > a.

Copyright (c) 2025 Eater Emulator Contributors
"""

from dataclasses import dataclass
from enum import IntFlag


class Flags(IntFlag):
    """
    Status flags register.

    Bit layout:
        7  6  5  4  3  2  1  0
        -  -  -  -  -  -  C  Z
    """
    CLEAR = 0x00
    Z = 0x01  # Zero
    C = 0x02  # Carry (borrow on subtract)


@dataclass(frozen=True)
class AluResult:
    """
    Output of one ALU operation.

    Attributes:
        value: 8-bit result
        flags: Flags derived from this operation
    """
    value: int
    flags: Flags


def _flags_for(value: int, raw: int) -> Flags:
    """Derive Z/C from the 8-bit result and the unclamped result."""
    if value == 0:
        return Flags.Z
    if not 0 <= raw <= 0xFF:
        return Flags.C
    return Flags.CLEAR


def add(a: int, b: int) -> AluResult:
    """Add two 8-bit values, wrapping mod 256."""
    raw = (a & 0xFF) + (b & 0xFF)
    value = raw & 0xFF
    return AluResult(value, _flags_for(value, raw))


def subtract(a: int, b: int) -> AluResult:
    """Subtract b from a, wrapping mod 256."""
    raw = (a & 0xFF) - (b & 0xFF)
    value = raw & 0xFF
    return AluResult(value, _flags_for(value, raw))
