"""
Instruction Set Definition
==========================

Every instruction is one byte. The high nibble selects the operation and
the low nibble is the operand, whose meaning depends on the opcode:

    7  6  5  4  3  2  1  0
    [ opcode  ] [ operand ]

Operand Kinds
-------------
1. **NONE**: Operand ignored (NOP, OUT, HLT). Conventionally zero.
2. **ADDRESS**: 4-bit memory address (LDA, ADD, SUB, STA)
3. **IMMEDIATE**: 4-bit literal (LDI)
4. **TARGET**: 4-bit jump target (JMP, JC, JZ)

Instruction Table
-----------------
    $0  NOP          no operation
    $1  LDA addr     A <- mem[addr]
    $2  ADD addr     A <- A + mem[addr]      (Z, C)
    $3  SUB addr     A <- A - mem[addr]      (Z, C)
    $4  STA addr     mem[addr] <- A
    $5  LDI imm      A <- imm
    $6  JMP target   PC <- target
    $7  JC  target   PC <- target if C
    $8  JZ  target   PC <- target if Z
    $9-$D            undefined
    $E  OUT          display A
    $F  HLT          stop the clock

Copyright (c) 2025 Eater Emulator Contributors
"""

from dataclasses import dataclass
from enum import Enum, IntEnum, auto
from typing import Iterable, List, Optional

from ..errors import UndefinedOpcodeError


# =============================================================================
# Operand Kind Enumeration
# =============================================================================

class OperandKind(Enum):
    """How the low nibble of an instruction byte is interpreted."""
    NONE = auto()       # Ignored (NOP, OUT, HLT)
    ADDRESS = auto()    # Memory address (LDA, ADD, SUB, STA)
    IMMEDIATE = auto()  # Literal value (LDI)
    TARGET = auto()     # Jump target (JMP, JC, JZ)


# =============================================================================
# Opcode Enumeration
# =============================================================================

class Opcode(IntEnum):
    """The 11 defined opcode nibbles."""
    NOP = 0x0
    LDA = 0x1
    ADD = 0x2
    SUB = 0x3
    STA = 0x4
    LDI = 0x5
    JMP = 0x6
    JC = 0x7
    JZ = 0x8
    OUT = 0xE
    HLT = 0xF

    @property
    def operand_kind(self) -> OperandKind:
        """Operand interpretation for this opcode."""
        return OPERAND_KINDS[self]

    @property
    def uses_memory(self) -> bool:
        """True for opcodes that access memory through their operand."""
        return OPERAND_KINDS[self] is OperandKind.ADDRESS


OPERAND_KINDS = {
    Opcode.NOP: OperandKind.NONE,
    Opcode.LDA: OperandKind.ADDRESS,
    Opcode.ADD: OperandKind.ADDRESS,
    Opcode.SUB: OperandKind.ADDRESS,
    Opcode.STA: OperandKind.ADDRESS,
    Opcode.LDI: OperandKind.IMMEDIATE,
    Opcode.JMP: OperandKind.TARGET,
    Opcode.JC: OperandKind.TARGET,
    Opcode.JZ: OperandKind.TARGET,
    Opcode.OUT: OperandKind.NONE,
    Opcode.HLT: OperandKind.NONE,
}

# Opcode lookup by nibble; None marks the undefined slots $9-$D
_OPCODE_BY_NIBBLE: List[Optional[Opcode]] = [None] * 16
for _op in Opcode:
    _OPCODE_BY_NIBBLE[_op.value] = _op


# =============================================================================
# Decoded Instruction
# =============================================================================

@dataclass(frozen=True)
class Instruction:
    """
    A decoded instruction byte.

    Attributes:
        opcode: The operation
        operand: The raw low nibble (0-15), kept even when ignored
    """
    opcode: Opcode
    operand: int = 0

    @property
    def byte(self) -> int:
        """Encoded instruction byte."""
        return encode(self.opcode, self.operand)

    def __str__(self) -> str:
        """Format as assembly text, e.g. 'LDA 10' or 'HLT'."""
        if self.opcode.operand_kind is OperandKind.NONE:
            return self.opcode.name
        return f"{self.opcode.name} {self.operand}"


def decode(byte: int, address: Optional[int] = None) -> Instruction:
    """
    Split an instruction byte into opcode and operand.

    Args:
        byte: Instruction byte (0-255)
        address: Where the byte was fetched from (used in error messages)

    Returns:
        The decoded Instruction

    Raises:
        UndefinedOpcodeError: If the high nibble is $9-$D
    """
    byte &= 0xFF
    opcode = _OPCODE_BY_NIBBLE[byte >> 4]
    if opcode is None:
        raise UndefinedOpcodeError(byte, address)
    return Instruction(opcode, byte & 0x0F)


def encode(opcode: Opcode, operand: int = 0) -> int:
    """
    Build an instruction byte.

    Args:
        opcode: The operation
        operand: 4-bit operand (0-15)

    Raises:
        ValueError: If operand does not fit in 4 bits
    """
    if not 0 <= operand <= 0x0F:
        raise ValueError(f"operand must be 0-15, got {operand}")
    return (int(opcode) << 4) | operand


# =============================================================================
# Listing
# =============================================================================

def disassemble(image: Iterable[int]) -> List[str]:
    """
    Produce a plain listing of a memory image, one line per byte.

    Bytes whose high nibble is undefined are shown as data, since a
    program image routinely stores constants next to its code.

    Example:
        >>> disassemble([0x5F, 0xE0, 0xF0])
        ['$0: 5F  LDI 15', '$1: E0  OUT', '$2: F0  HLT']
    """
    lines = []
    for address, byte in enumerate(image):
        try:
            text = str(decode(byte, address))
        except UndefinedOpcodeError:
            text = f"DB ${byte:02X}"
        lines.append(f"${address:X}: {byte:02X}  {text}")
    return lines
