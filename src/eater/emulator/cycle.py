"""
Cycle States
============

The control logic of the breadboard computer steps through five clock
phases (T-states) for every instruction:

    T0  LATCH_PC   Counter Out, Memory Address In
    T1  FETCH      RAM Out, Instruction In, Counter Enable
    T2  EXECUTE_1  instruction-specific
    T3  EXECUTE_2  instruction-specific
    T4  EXECUTE_3  instruction-specific

A CycleState names the phase the machine will perform on its next
advance, together with whatever part of the instruction is still pending.
The operand slot narrows as the instruction progresses:

    FETCH      pc       the latched program counter
    EXECUTE_1  operand  raw low nibble of the instruction
    EXECUTE_2  operand  memory address, or None once consumed
    EXECUTE_3  operand  byte read from memory (ADD/SUB), otherwise None

States are immutable; the simulator replaces its state on every advance.

Copyright (c) 2025 Eater Emulator Contributors
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

from .opcodes import Opcode


class Phase(IntEnum):
    """Clock phase within one instruction."""
    LATCH_PC = 0
    FETCH = 1
    EXECUTE_1 = 2
    EXECUTE_2 = 3
    EXECUTE_3 = 4


@dataclass(frozen=True)
class CycleState:
    """
    Phase-tagged, partially resolved instruction.

    Attributes:
        phase: Phase performed on the next advance
        pc: Program counter snapshot (FETCH only)
        opcode: Decoded operation (execute phases only)
        operand: Pending operand for this phase, see module docstring
    """
    phase: Phase
    pc: Optional[int] = None
    opcode: Optional[Opcode] = None
    operand: Optional[int] = None

    @classmethod
    def latch_pc(cls) -> "CycleState":
        return cls(Phase.LATCH_PC)

    @classmethod
    def fetch(cls, pc: int) -> "CycleState":
        return cls(Phase.FETCH, pc=pc)

    @classmethod
    def execute(
        cls, phase: Phase, opcode: Opcode, operand: Optional[int] = None
    ) -> "CycleState":
        if phase < Phase.EXECUTE_1:
            raise ValueError(f"{phase.name} is not an execute phase")
        return cls(phase, opcode=opcode, operand=operand)

    def __str__(self) -> str:
        if self.phase is Phase.LATCH_PC:
            return "LatchPC"
        if self.phase is Phase.FETCH:
            return f"Fetch(${self.pc:X})"
        name = f"Execute{self.phase - Phase.EXECUTE_1 + 1}"
        if self.operand is None:
            return f"{name}({self.opcode.name})"
        return f"{name}({self.opcode.name} ${self.operand:X})"


LATCH_PC = CycleState.latch_pc()
