"""
Eater - Breadboard Computer Emulator
====================================

This package emulates a minimal SAP-1 style breadboard computer: 16 bytes
of memory, one 8-bit accumulator, a 4-bit program counter, Zero and Carry
flags and an 11-instruction opcode set.

Main Components
---------------
- **emulator**: Cycle-accurate simulator, one-shot interpreter and the
  Emulator driver
- **cli**: The `eater` command for running program images

Quick Start
-----------
Run a program image:
    >>> from eater import Emulator
    >>> emu = Emulator()
    >>> emu.load_file("count.bin")
    >>> result = emu.run()
    >>> print(result.outputs)

Step the simulator one clock phase at a time:
    >>> from eater import Simulator
    >>> sim = Simulator()
    >>> sim.load(program)
    >>> sim.advance()
    >>> print(sim.cycle)
    Fetch($0)

Or use the command-line tool:
    $ eater count.bin
    $ eater count.bin --interpreter --max-cycles 10000

Version History
---------------
1.0.0 - Initial release with simulator, interpreter and CLI
"""

__version__ = "1.0.0"
__author__ = "Eater Emulator Contributors"

# =============================================================================
# Public API Exports
# =============================================================================

from eater.emulator import (
    Emulator,
    EmulatorConfig,
    RunResult,
    StopReason,
    Simulator,
    Interpreter,
    MachineState,
    Phase,
    CycleState,
    Opcode,
    Instruction,
    Flags,
    Memory,
    decode,
    encode,
    disassemble,
    load_program,
)
from eater.errors import (
    EaterError,
    ProgramLoadError,
    ProgramSizeError,
    ExecutionError,
    UndefinedOpcodeError,
)

__all__ = [
    # Version info
    "__version__",
    "__author__",
    # Emulator
    "Emulator",
    "EmulatorConfig",
    "RunResult",
    "StopReason",
    "Simulator",
    "Interpreter",
    "MachineState",
    "Phase",
    "CycleState",
    "Opcode",
    "Instruction",
    "Flags",
    "Memory",
    "decode",
    "encode",
    "disassemble",
    "load_program",
    # Exception hierarchy
    "EaterError",
    "ProgramLoadError",
    "ProgramSizeError",
    "ExecutionError",
    "UndefinedOpcodeError",
]
