#!/usr/bin/env python3
"""
Engine Benchmark
================

Times the interpreter against the cycle-accurate simulator on the
count-by-threes program, reloading and rerunning it many times.

Usage:
    source .venv/bin/activate
    python examples/engine_benchmark.py [iterations]

Copyright (c) 2025 Eater Emulator Contributors
"""

import sys
import time

from eater.emulator import Interpreter, Simulator

PROGRAM = bytes([
    0x1E, 0x2F, 0xE0, 0x75, 0x61, 0xF0, 0x00, 0x00,
    0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x03,
])


def bench(name, machine, iterations):
    start = time.perf_counter()
    for _ in range(iterations):
        machine.reset()
        machine.load(PROGRAM)
        machine.run()
    elapsed = time.perf_counter() - start
    per_run = elapsed / iterations * 1e6
    print(f"{name:<28} {per_run:10.1f} us/run")


def main():
    iterations = int(sys.argv[1]) if len(sys.argv) > 1 else 200

    print(f"print 3's, {iterations} iterations")
    bench("Interpreter", Interpreter(), iterations)
    bench("Simulator", Simulator(), iterations)
    bench("Simulator (skip idle)", Simulator(skip_idle_phases=True), iterations)


if __name__ == "__main__":
    main()
