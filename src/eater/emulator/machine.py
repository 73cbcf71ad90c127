"""
Machine State and Common Engine Base
====================================

Both execution engines (the one-shot Interpreter and the cycle-accurate
Simulator) operate on the same programmer-visible state:

- A: 8-bit accumulator
- PC: 4-bit program counter (wraps mod 16)
- Flags: Z and C
- Halt latch: sticky, once set the machine never changes again
- 16 bytes of memory

Everything lives in a MachineState owned by one machine instance, so any
number of machines can coexist. The Machine base class wraps it with
masking register properties, program loading, the output hook and the
run-to-halt driver loop.

Copyright (c) 2025 Eater Emulator Contributors
"""

import copy
import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Union

from .alu import Flags
from .memory import Memory


logger = logging.getLogger(__name__)


@dataclass
class MachineState:
    """
    Complete programmer-visible state for snapshotting.

    Attributes:
        memory: 16-byte RAM
        a: Accumulator (0-255)
        pc: Program counter (0-15)
        flags: Z/C flags register
        halted: Halt latch
    """
    memory: Memory = field(default_factory=Memory)
    a: int = 0
    pc: int = 0
    flags: Flags = Flags.CLEAR
    halted: bool = False


class Machine:
    """
    Common base for the execution engines.

    Subclasses implement step(), which must return True once the halt
    latch is set. run() calls step() until that happens; there is no
    iteration cap, so a program without a reachable HLT never returns.
    Callers that need a budget should drive step() themselves or use
    the Emulator driver.

    Instrumentation hooks:
        on_output(value): called with the accumulator value each time an
            OUT instruction executes. When unset the value is only logged.
    """

    def __init__(self, on_output: Optional[Callable[[int], None]] = None):
        """
        Initialize a zeroed machine.

        Args:
            on_output: Optional sink for values emitted by OUT
        """
        self.state = MachineState()
        self.on_output = on_output

    # ========================================
    # Register Properties
    # ========================================

    @property
    def a(self) -> int:
        """Accumulator (8-bit)."""
        return self.state.a

    @a.setter
    def a(self, value: int) -> None:
        self.state.a = value & 0xFF

    @property
    def pc(self) -> int:
        """Program counter (4-bit)."""
        return self.state.pc

    @pc.setter
    def pc(self, value: int) -> None:
        self.state.pc = value & 0x0F

    @property
    def flags(self) -> Flags:
        """Flags register."""
        return self.state.flags

    @flags.setter
    def flags(self, value: Flags) -> None:
        self.state.flags = Flags(value & (Flags.Z | Flags.C))

    @property
    def flag_z(self) -> bool:
        """Zero flag."""
        return bool(self.state.flags & Flags.Z)

    @property
    def flag_c(self) -> bool:
        """Carry flag."""
        return bool(self.state.flags & Flags.C)

    @property
    def halted(self) -> bool:
        """Halt latch."""
        return self.state.halted

    @property
    def memory(self) -> Memory:
        """The machine's RAM."""
        return self.state.memory

    # ========================================
    # Loading and Inspection
    # ========================================

    def load(self, data: Union[bytes, bytearray, Iterable[int]]) -> None:
        """
        Load a 16-byte program image into memory.

        Registers are not touched; load into a fresh machine (or call
        reset() first) to start a program from the top.

        Raises:
            ProgramSizeError: If the image is not exactly 16 bytes
            ProgramLoadError: If the image holds non-byte values
        """
        self.state.memory.load(data)

    def reset(self) -> None:
        """Return registers, flags and the halt latch to power-on state."""
        memory = self.state.memory
        self.state = MachineState(memory=memory)

    def snapshot(self) -> MachineState:
        """Return an independent copy of the current state."""
        return copy.deepcopy(self.state)

    def _emit(self, value: int) -> None:
        """Deliver an OUT value to the output hook."""
        logger.debug(f"OUT {value}")
        if self.on_output:
            self.on_output(value)

    # ========================================
    # Execution
    # ========================================

    def step(self) -> bool:
        """Execute one unit of work. Returns True when halted."""
        raise NotImplementedError

    def run(self) -> None:
        """Step until the halt latch is set."""
        while not self.step():
            pass
        logger.debug(f"Halted: A=${self.a:02X} PC=${self.pc:X} flags={self.flags!r}")

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(a=${self.a:02X}, pc=${self.pc:X}, "
            f"flags={self.flags!r}, halted={self.halted})"
        )
