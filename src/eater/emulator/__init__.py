"""
Eater Breadboard Computer Emulator
==================================

Emulation of a SAP-1 style 8-bit breadboard computer:

- **Memory**: 16 bytes, 4-bit addresses
- **Registers**: 8-bit accumulator, 4-bit program counter, halt latch
- **Flags**: Zero and Carry, written only by ADD/SUB
- **Instruction set**: 11 opcodes in the high nibble, operand in the low

Two engines are provided:

- `Simulator`: cycle-accurate, one clock phase per advance()
- `Interpreter`: one whole instruction per step(), the reference baseline

Quick Start
-----------

Basic usage::

    >>> from eater.emulator import Simulator
    >>> out = []
    >>> sim = Simulator(on_output=out.append)
    >>> sim.load(bytes([0x53, 0xE0, 0xF0] + [0] * 13))
    >>> sim.run()
    >>> out
    [3]

With a cycle budget::

    >>> emu = Emulator(EmulatorConfig(max_cycles=1000))
    >>> emu.load_file("loop.bin")
    >>> result = emu.run()
    >>> if result.reason == StopReason.MAX_CYCLES:
    ...     print("Program did not halt")

Module Structure
----------------

- `emulator.py`: Emulator driver and EmulatorConfig
- `simulator.py`: Cycle-accurate Simulator
- `interpreter.py`: One-shot Interpreter
- `machine.py`: Shared MachineState and Machine base
- `cycle.py`: Phase and CycleState
- `opcodes.py`: Opcode table, decoder, listing
- `alu.py`: Add/subtract and flag derivation
- `memory.py`: 16-byte RAM

Copyright (c) 2025 Eater Emulator Contributors
"""

# Main entry point
from .emulator import (
    Emulator,
    EmulatorConfig,
    RunResult,
    StopReason,
    load_program,
)

# Engines
from .simulator import Simulator
from .interpreter import Interpreter
from .machine import Machine, MachineState

# Cycle states
from .cycle import Phase, CycleState

# Decoder
from .opcodes import (
    Opcode,
    OperandKind,
    Instruction,
    decode,
    encode,
    disassemble,
)

# ALU and memory
from .alu import Flags, AluResult
from .memory import Memory

__all__ = [
    # Main API
    "Emulator",
    "EmulatorConfig",
    "RunResult",
    "StopReason",
    "load_program",

    # Engines
    "Simulator",
    "Interpreter",
    "Machine",
    "MachineState",

    # Cycle states
    "Phase",
    "CycleState",

    # Decoder
    "Opcode",
    "OperandKind",
    "Instruction",
    "decode",
    "encode",
    "disassemble",

    # ALU and memory
    "Flags",
    "AluResult",
    "Memory",
]
