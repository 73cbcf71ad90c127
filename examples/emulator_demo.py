#!/usr/bin/env python3
"""
Breadboard Computer Emulator Demo
=================================

This script demonstrates how to use the emulator to:
1. Build a program image by hand
2. Print its listing
3. Run it on both engines
4. Single-step the simulator one clock phase at a time

Usage:
    source .venv/bin/activate
    python examples/emulator_demo.py

Copyright (c) 2025 Eater Emulator Contributors
"""

from eater.emulator import (
    Emulator,
    EmulatorConfig,
    Opcode,
    Simulator,
    disassemble,
    encode,
)


def main():
    # ==========================================================================
    # 1. Build a program image
    # ==========================================================================
    # Count up by threes from zero, printing each value, until the
    # accumulator carries past 255.
    #
    #   $0  LDA 14    A <- mem[14] (zero)
    #   $1  ADD 15    A <- A + mem[15]
    #   $2  OUT       print A
    #   $3  JC 5      stop once the add carries
    #   $4  JMP 1
    #   $5  HLT
    #   $F  data: 3
    program = bytearray(16)
    program[0] = encode(Opcode.LDA, 14)
    program[1] = encode(Opcode.ADD, 15)
    program[2] = encode(Opcode.OUT)
    program[3] = encode(Opcode.JC, 5)
    program[4] = encode(Opcode.JMP, 1)
    program[5] = encode(Opcode.HLT)
    program[15] = 3

    # ==========================================================================
    # 2. Print the listing
    # ==========================================================================
    print("Program listing:")
    for line in disassemble(program):
        print(f"  {line}")

    # ==========================================================================
    # 3. Run on both engines
    # ==========================================================================
    for engine in ("simulator", "interpreter"):
        emu = Emulator(EmulatorConfig(engine=engine, max_cycles=100_000))
        emu.load_bytes(program)
        result = emu.run()
        print(f"\n{engine}: {result}")
        print(f"  Outputs: {', '.join(str(v) for v in result.outputs)}")
        print(f"  A=${result.state.a:02X} PC=${result.state.pc:X}")

    # ==========================================================================
    # 4. Single-step the simulator
    # ==========================================================================
    print("\nFirst instruction, phase by phase:")
    sim = Simulator()
    sim.load(program)
    print(f"  {sim.cycle}")
    for _ in range(5):
        sim.advance()
        print(f"  {sim.cycle}  A=${sim.a:02X} PC=${sim.pc:X}")


if __name__ == "__main__":
    main()
