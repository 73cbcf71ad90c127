"""
One-Shot Interpreter
====================

Executes a whole instruction per step with a single dispatch on the
opcode. It knows nothing about clock phases and serves as the behavioral
reference for the cycle-accurate Simulator: for any program, both engines
must finish with the same memory, registers, flags and output.

Copyright (c) 2025 Eater Emulator Contributors
"""

import logging
from typing import Callable, Optional

from . import alu
from .machine import Machine
from .opcodes import Opcode, decode


logger = logging.getLogger(__name__)


class Interpreter(Machine):
    """
    Instruction-at-a-time engine.

    Example:
        >>> vm = Interpreter()
        >>> vm.load(bytes([0x53, 0xE0, 0xF0] + [0] * 13))
        >>> vm.run()
        >>> vm.a
        3
    """

    def __init__(self, on_output: Optional[Callable[[int], None]] = None):
        super().__init__(on_output)
        self.instructions = 0

    def reset(self) -> None:
        super().reset()
        self.instructions = 0

    def step(self) -> bool:
        """
        Fetch, decode and execute one instruction.

        Returns:
            True if the machine is halted

        Raises:
            UndefinedOpcodeError: If the fetched byte has an undefined
                opcode. The machine is left exactly as it was.
        """
        if self.halted:
            return True

        inst = decode(self.memory.read(self.pc), self.pc)
        self.pc += 1
        self.instructions += 1

        op = inst.opcode
        x = inst.operand

        if op is Opcode.NOP:
            pass
        elif op is Opcode.LDA:
            self.a = self.memory.read(x)
        elif op is Opcode.ADD:
            result = alu.add(self.a, self.memory.read(x))
            self.a = result.value
            self.flags = result.flags
        elif op is Opcode.SUB:
            result = alu.subtract(self.a, self.memory.read(x))
            self.a = result.value
            self.flags = result.flags
        elif op is Opcode.STA:
            self.memory.write(x, self.a)
        elif op is Opcode.LDI:
            self.a = x
        elif op is Opcode.JMP:
            self.pc = x
        elif op is Opcode.JC:
            if self.flag_c:
                self.pc = x
        elif op is Opcode.JZ:
            if self.flag_z:
                self.pc = x
        elif op is Opcode.OUT:
            self._emit(self.a)
        elif op is Opcode.HLT:
            self.state.halted = True

        return self.halted
