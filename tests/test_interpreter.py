"""
Interpreter Unit Tests
======================

Tests for the one-shot Interpreter, one instruction per step().

Copyright (c) 2025 Eater Emulator Contributors
"""

import pytest
from conftest import image
from eater.emulator import Flags, Interpreter
from eater.errors import ProgramSizeError, UndefinedOpcodeError


class TestInstructions:
    """Test each instruction in isolation."""

    def test_nop(self, vm):
        """NOP only advances PC."""
        assert not vm.step()
        assert vm.pc == 1
        assert vm.a == 0
        assert vm.flags == Flags.CLEAR
        assert vm.memory == [0] * 16

    def test_lda(self, vm):
        """LDA loads A from memory."""
        vm.load(image(0x1A, data={10: 0xA5}))
        vm.step()
        assert vm.pc == 1
        assert vm.a == 0xA5
        assert vm.flags == Flags.CLEAR

    def test_add_carry(self, vm):
        """Two ADDs of 0xFF leave 0xFE with carry."""
        vm.load(image(0x2F, 0x2F, data={15: 0xFF}))
        vm.step()
        vm.step()
        assert vm.pc == 2
        assert vm.a == 0xFE
        assert vm.flags == Flags.C

    def test_add_zero(self, vm):
        """Adding zero to zero sets Z."""
        vm.load(image(0x2F, 0x2F))
        vm.step()
        vm.step()
        assert vm.a == 0
        assert vm.flags == Flags.Z

    def test_add(self, vm):
        """Small sums clear both flags."""
        vm.load(image(0x2F, 0x2F, data={15: 1}))
        vm.step()
        vm.step()
        assert vm.a == 2
        assert vm.flags == Flags.CLEAR

    def test_sub(self, vm):
        """SUB wraps and reports borrow as carry."""
        vm.load(image(0x3F, 0x3F, data={15: 0x60}))
        vm.step()
        assert vm.a == 0xA0
        assert vm.flags == Flags.C
        vm.step()
        assert vm.a == 0x40
        assert vm.flags == Flags.CLEAR

    def test_sta(self, vm):
        """STA writes A to memory."""
        vm.load(image(0x4F))
        vm.a = 0x55
        vm.step()
        assert vm.memory[15] == 0x55

    def test_ldi(self, vm):
        """LDI loads the literal operand."""
        vm.load(image(0x5F))
        vm.step()
        assert vm.a == 0x0F

    def test_jmp(self, vm):
        """JMP sets PC to the target."""
        vm.load(image(0x6F))
        vm.step()
        assert vm.pc == 0xF

    def test_jc_not_taken(self, vm):
        """JC falls through with carry clear."""
        vm.load(image(0x7F))
        vm.step()
        assert vm.pc == 1

    def test_jc_taken(self, vm):
        """JC jumps with carry set."""
        vm.load(image(0x7F))
        vm.flags = Flags.C
        vm.step()
        assert vm.pc == 0xF

    def test_jz_taken(self, vm):
        """JZ jumps with zero set."""
        vm.load(image(0x8F))
        vm.flags = Flags.Z
        vm.step()
        assert vm.pc == 0xF

    def test_jz_not_taken(self, vm):
        """JZ falls through with zero clear."""
        vm.load(image(0x8F))
        vm.flags = Flags.C
        vm.step()
        assert vm.pc == 1

    def test_out(self, vm, outputs):
        """OUT emits A."""
        vm.load(image(0x57, 0xE0))
        vm.step()
        vm.step()
        assert outputs == [7]

    def test_out_without_hook(self):
        """OUT with no hook does not fail."""
        vm = Interpreter()
        vm.load(image(0xE0))
        assert not vm.step()

    def test_hlt(self, vm):
        """HLT sets the halt latch."""
        vm.load(image(0xF0))
        assert vm.step()
        assert vm.halted
        assert vm.pc == 1


class TestExecution:
    """Test run(), halting and errors."""

    def test_pc_wraps(self, vm):
        """PC wraps from 15 to 0."""
        vm.pc = 15
        vm.step()
        assert vm.pc == 0

    def test_halted_is_terminal(self, vm):
        """Steps after HLT change nothing."""
        vm.load(image(0xF0))
        vm.run()
        before = vm.snapshot()
        for _ in range(5):
            assert vm.step()
        assert vm.snapshot() == before
        assert vm.instructions == 1

    def test_count_program(self, vm, outputs):
        """Counting loop from the benchmark program outputs 3, 6, 9..."""
        # LDA 14; ADD 15; OUT; JC 5; JMP 1; HLT  with mem[15] = 3
        vm.load(image(0x1E, 0x2F, 0xE0, 0x75, 0x61, 0xF0, data={15: 0x03}))
        vm.run()
        assert outputs == list(range(3, 256, 3)) + [2]
        assert vm.halted

    def test_undefined_opcode_leaves_state(self, vm):
        """An undefined opcode raises and leaves the machine untouched."""
        vm.load(image(0x51, 0x90))
        vm.step()
        before = vm.snapshot()
        with pytest.raises(UndefinedOpcodeError) as exc_info:
            vm.step()
        assert exc_info.value.address == 1
        assert vm.snapshot() == before

    def test_rejected_program(self, vm):
        """A short image raises ProgramSizeError and the machine still works."""
        with pytest.raises(ProgramSizeError):
            vm.load(bytes(15))
        vm.load(image(0x52, 0xF0))
        vm.run()
        assert vm.a == 2

    def test_reset_keeps_memory(self, vm):
        """reset() clears registers but not memory."""
        vm.load(image(0x53, 0xF0))
        vm.run()
        vm.reset()
        assert not vm.halted
        assert vm.a == 0
        assert vm.pc == 0
        assert vm.instructions == 0
        assert vm.memory[0] == 0x53
