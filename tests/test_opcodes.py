"""
Instruction Decoder Tests
=========================

Tests for opcode decoding, encoding and the program listing.

Copyright (c) 2025 Eater Emulator Contributors
"""

import pytest
from eater.emulator import Instruction, Opcode, OperandKind, decode, disassemble, encode
from eater.errors import ExecutionError, UndefinedOpcodeError


class TestDecode:
    """Test decode()."""

    @pytest.mark.parametrize("byte,opcode,operand", [
        (0x00, Opcode.NOP, 0),
        (0x1A, Opcode.LDA, 10),
        (0x2F, Opcode.ADD, 15),
        (0x3F, Opcode.SUB, 15),
        (0x4E, Opcode.STA, 14),
        (0x55, Opcode.LDI, 5),
        (0x61, Opcode.JMP, 1),
        (0x75, Opcode.JC, 5),
        (0x83, Opcode.JZ, 3),
        (0xE0, Opcode.OUT, 0),
        (0xF0, Opcode.HLT, 0),
    ])
    def test_decode_defined_opcodes(self, byte, opcode, operand):
        """High nibble selects the opcode, low nibble is the operand."""
        assert decode(byte) == Instruction(opcode, operand)

    def test_ignored_operand_is_kept(self):
        """Operand-less opcodes still carry the raw low nibble."""
        inst = decode(0xE7)
        assert inst.opcode is Opcode.OUT
        assert inst.operand == 7

    @pytest.mark.parametrize("nibble", [0x9, 0xA, 0xB, 0xC, 0xD])
    def test_decode_undefined_opcodes(self, nibble):
        """Nibbles $9-$D raise UndefinedOpcodeError."""
        with pytest.raises(UndefinedOpcodeError) as exc_info:
            decode((nibble << 4) | 0x3, address=7)
        error = exc_info.value
        assert error.opcode == nibble
        assert error.byte == (nibble << 4) | 0x3
        assert error.address == 7
        assert "$7" in str(error)

    def test_undefined_opcode_is_execution_error(self):
        """UndefinedOpcodeError belongs to the execution error family."""
        with pytest.raises(ExecutionError):
            decode(0x90)

    def test_exactly_eleven_opcodes_defined(self):
        """Five of the sixteen nibbles are undefined."""
        defined = []
        for nibble in range(16):
            try:
                decode(nibble << 4)
                defined.append(nibble)
            except UndefinedOpcodeError:
                pass
        assert len(defined) == 11
        assert defined == [op.value for op in Opcode]


class TestOperandKind:
    """Test operand classification."""

    @pytest.mark.parametrize("opcode", [Opcode.LDA, Opcode.ADD, Opcode.SUB, Opcode.STA])
    def test_memory_opcodes(self, opcode):
        """Address-based opcodes use memory."""
        assert opcode.operand_kind is OperandKind.ADDRESS
        assert opcode.uses_memory

    @pytest.mark.parametrize("opcode,kind", [
        (Opcode.NOP, OperandKind.NONE),
        (Opcode.LDI, OperandKind.IMMEDIATE),
        (Opcode.JMP, OperandKind.TARGET),
        (Opcode.JC, OperandKind.TARGET),
        (Opcode.JZ, OperandKind.TARGET),
        (Opcode.OUT, OperandKind.NONE),
        (Opcode.HLT, OperandKind.NONE),
    ])
    def test_other_opcodes(self, opcode, kind):
        """Register and control opcodes do not touch memory."""
        assert opcode.operand_kind is kind
        assert not opcode.uses_memory


class TestEncode:
    """Test encode() and Instruction formatting."""

    def test_encode(self):
        """encode() packs opcode and operand."""
        assert encode(Opcode.LDA, 14) == 0x1E
        assert encode(Opcode.HLT) == 0xF0

    def test_encode_rejects_wide_operand(self):
        """Operands must fit in four bits."""
        with pytest.raises(ValueError):
            encode(Opcode.LDI, 16)

    def test_instruction_byte(self):
        """Instruction.byte re-encodes the instruction."""
        assert decode(0x75).byte == 0x75

    def test_instruction_str(self):
        """Instructions format as assembly text."""
        assert str(decode(0x1A)) == "LDA 10"
        assert str(decode(0xE0)) == "OUT"
        assert str(decode(0xF3)) == "HLT"


class TestDisassemble:
    """Test program listings."""

    def test_listing(self):
        """Each byte becomes one listing line."""
        lines = disassemble([0x5F, 0xE0, 0xF0])
        assert lines == ["$0: 5F  LDI 15", "$1: E0  OUT", "$2: F0  HLT"]

    def test_undefined_bytes_listed_as_data(self):
        """Bytes with undefined opcodes are shown as data."""
        lines = disassemble([0x1F] + [0] * 14 + [0xA5])
        assert lines[0] == "$0: 1F  LDA 15"
        assert lines[15] == "$F: A5  DB $A5"
        assert len(lines) == 16
