"""
Cycle-Accurate Simulator
========================

Reproduces the clock-phase timing of the breadboard computer. Each call to
advance() performs exactly one phase transition, so the intermediate
state of an instruction (latched PC, decoded opcode, address, fetched
operand) is observable between calls through the `cycle` attribute.

Phase Table
-----------
    LATCH_PC   snapshot PC                              -> FETCH(pc)
    FETCH      IR <- mem[pc], PC <- PC + 1, decode      -> EXECUTE_1
    EXECUTE_1  LDI: A <- imm
               JMP: PC <- target
               JC/JZ: PC <- target if flag set
               OUT: emit A
               HLT: set halt latch, stop here
               LDA/ADD/SUB/STA: pass address on        -> EXECUTE_2
    EXECUTE_2  LDA: A <- mem[addr]
               STA: mem[addr] <- A
               ADD/SUB: read operand byte               -> EXECUTE_3
    EXECUTE_3  ADD/SUB: A <- ALU result, update flags   -> LATCH_PC

With the default fixed timing every instruction except HLT takes all five
phases, idling where it has nothing to do, as the unmodified hardware
does. HLT takes three. With skip_idle_phases=True an instruction returns
to LATCH_PC as soon as its work is done (the microcode step-counter reset
mod): NOP, LDI, JMP, JC, JZ and OUT take three phases, LDA and STA four,
ADD and SUB five. Both modes produce the same results.

Copyright (c) 2025 Eater Emulator Contributors
"""

import logging
from typing import Callable, Optional

from . import alu
from .cycle import LATCH_PC, CycleState, Phase
from .machine import Machine
from .opcodes import Opcode, decode


logger = logging.getLogger(__name__)


class Simulator(Machine):
    """
    Phase-at-a-time engine.

    Attributes:
        cycle: The CycleState performed by the next advance()
        cycles: Number of phase transitions performed so far
        skip_idle_phases: Return to LATCH_PC as soon as an instruction
            has no work left
        trace: Log every phase transition at DEBUG level

    Example:
        >>> sim = Simulator()
        >>> sim.load(bytes([0x53, 0xE0, 0xF0] + [0] * 13))
        >>> sim.advance()
        False
        >>> str(sim.cycle)
        'Fetch($0)'
    """

    def __init__(
        self,
        on_output: Optional[Callable[[int], None]] = None,
        skip_idle_phases: bool = False,
        trace: bool = False,
    ):
        super().__init__(on_output)
        self.skip_idle_phases = skip_idle_phases
        self.trace = trace
        self.cycle: CycleState = LATCH_PC
        self.cycles = 0

    def reset(self) -> None:
        super().reset()
        self.cycle = LATCH_PC
        self.cycles = 0

    # ========================================
    # Phase Transitions
    # ========================================

    def advance(self) -> bool:
        """
        Perform exactly one phase transition.

        Returns:
            True if the machine is halted. Once halted, further calls
            return True without touching any state.

        Raises:
            UndefinedOpcodeError: If the FETCH phase decodes an undefined
                opcode. The machine is left exactly as it was.
        """
        if self.halted:
            return True

        current = self.cycle
        phase = current.phase

        if phase is Phase.LATCH_PC:
            following = CycleState.fetch(self.pc)
        elif phase is Phase.FETCH:
            following = self._fetch(current.pc)
        elif phase is Phase.EXECUTE_1:
            following = self._execute_1(current.opcode, current.operand)
        elif phase is Phase.EXECUTE_2:
            following = self._execute_2(current.opcode, current.operand)
        else:
            following = self._execute_3(current.opcode, current.operand)

        self.cycle = following
        self.cycles += 1

        if self.trace:
            logger.debug(
                f"{current} -> {following}: A=${self.a:02X} PC=${self.pc:X} "
                f"flags={self.flags!r}"
            )

        return self.halted

    def _fetch(self, pc: int) -> CycleState:
        # Decode before touching PC so an undefined opcode leaves no trace
        inst = decode(self.memory.read(pc), pc)
        self.pc += 1
        return CycleState.execute(Phase.EXECUTE_1, inst.opcode, inst.operand)

    def _execute_1(self, op: Opcode, operand: int) -> CycleState:
        if op is Opcode.LDI:
            self.a = operand
        elif op is Opcode.JMP:
            self.pc = operand
        elif op is Opcode.JC:
            if self.flag_c:
                self.pc = operand
        elif op is Opcode.JZ:
            if self.flag_z:
                self.pc = operand
        elif op is Opcode.OUT:
            self._emit(self.a)
        elif op is Opcode.HLT:
            self.state.halted = True
            return self.cycle

        if op.uses_memory:
            return CycleState.execute(Phase.EXECUTE_2, op, operand)
        return self._done(Phase.EXECUTE_2, op)

    def _execute_2(self, op: Opcode, address: Optional[int]) -> CycleState:
        if op is Opcode.LDA:
            self.a = self.memory.read(address)
        elif op is Opcode.STA:
            self.memory.write(address, self.a)
        elif op is Opcode.ADD or op is Opcode.SUB:
            return CycleState.execute(
                Phase.EXECUTE_3, op, self.memory.read(address)
            )
        return self._done(Phase.EXECUTE_3, op)

    def _execute_3(self, op: Opcode, value: Optional[int]) -> CycleState:
        if op is Opcode.ADD:
            self._apply(alu.add(self.a, value))
        elif op is Opcode.SUB:
            self._apply(alu.subtract(self.a, value))
        return LATCH_PC

    def _apply(self, result: alu.AluResult) -> None:
        self.a = result.value
        self.flags = result.flags

    def _done(self, phase: Phase, op: Opcode) -> CycleState:
        """Next state for an instruction with no work left."""
        if self.skip_idle_phases:
            return LATCH_PC
        return CycleState.execute(phase, op)

    # ========================================
    # Drivers
    # ========================================

    def step(self) -> bool:
        """
        Advance until the current instruction completes.

        Stops back at LATCH_PC, or as soon as the machine halts. Called
        mid-instruction, it finishes the instruction in progress.

        Returns:
            True if the machine is halted
        """
        if self.advance():
            return True
        while self.cycle.phase is not Phase.LATCH_PC:
            if self.advance():
                return True
        return False

    def run(self) -> None:
        """Advance until the halt latch is set. No iteration cap."""
        while not self.advance():
            pass
        logger.debug(f"Halted after {self.cycles} cycles: A=${self.a:02X} PC=${self.pc:X}")
