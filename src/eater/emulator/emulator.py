"""
Eater Emulator - Execution Driver
=================================

This module provides the `Emulator` class, a thin orchestrator over the two
execution engines that gives tools and tests one place to:

- Pick an engine (cycle-accurate simulator or one-shot interpreter)
- Load a program image from bytes or from a file
- Run with an optional cycle budget, collecting OUT values
- Inspect the final machine state

The engines themselves have no iteration cap; guarding against programs
that never halt is the driver's job, via EmulatorConfig.max_cycles.

Example usage:
    >>> from eater.emulator import Emulator, EmulatorConfig
    >>> emu = Emulator(EmulatorConfig(max_cycles=10_000))
    >>> emu.load_bytes(bytes([0x53, 0xE0, 0xF0] + [0] * 13))
    >>> result = emu.run()
    >>> result.reason, result.outputs
    (<StopReason.HALTED: 1>, [3])

Copyright (c) 2025 Eater Emulator Contributors
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union

from ..errors import ProgramLoadError, ProgramSizeError
from .interpreter import Interpreter
from .machine import Machine, MachineState
from .memory import MEMORY_SIZE
from .simulator import Simulator


logger = logging.getLogger(__name__)

ENGINES = ("simulator", "interpreter")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


# =============================================================================
# Configuration
# =============================================================================

@dataclass(frozen=True)
class EmulatorConfig:
    """
    Configuration for emulator initialization.

    Attributes:
        engine: "simulator" (cycle-accurate, default) or "interpreter"
        max_cycles: Budget for run(); phase transitions for the simulator,
            instructions for the interpreter. None means unbounded.
        skip_idle_phases: Simulator only; end each instruction as soon as
            its work is done instead of idling through all five phases
        trace: Simulator only; log every phase transition at DEBUG level

    Example:
        >>> config = EmulatorConfig(engine="interpreter", max_cycles=1000)
    """
    engine: str = "simulator"
    max_cycles: Optional[int] = None
    skip_idle_phases: bool = False
    trace: bool = False

    def __post_init__(self):
        if self.engine not in ENGINES:
            raise ValueError(
                f"engine must be one of {', '.join(ENGINES)}, got {self.engine!r}"
            )
        if self.max_cycles is not None and self.max_cycles < 0:
            raise ValueError(f"max_cycles must be >= 0, got {self.max_cycles}")

    @classmethod
    def from_env(cls) -> "EmulatorConfig":
        """
        Create configuration from environment variables.

        Environment variables:
            EATER_ENGINE: "simulator" or "interpreter"
            EATER_MAX_CYCLES: Integer cycle budget
            EATER_SKIP_IDLE_PHASES: 1/0, true/false, yes/no, on/off
            EATER_TRACE: Same boolean forms

        Raises:
            ValueError: If a variable holds an invalid value
        """
        kwargs = {}

        if engine := os.environ.get("EATER_ENGINE"):
            kwargs["engine"] = engine.lower()

        if max_cycles := os.environ.get("EATER_MAX_CYCLES"):
            try:
                kwargs["max_cycles"] = int(max_cycles)
            except ValueError:
                raise ValueError(f"EATER_MAX_CYCLES must be an integer, got {max_cycles!r}")

        for var, key in (
            ("EATER_SKIP_IDLE_PHASES", "skip_idle_phases"),
            ("EATER_TRACE", "trace"),
        ):
            if (raw := os.environ.get(var)) is not None:
                kwargs[key] = _parse_bool(var, raw)

        return cls(**kwargs)


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


# =============================================================================
# Run Results
# =============================================================================

class StopReason(Enum):
    """Why run() returned."""
    HALTED = auto()      # HLT executed
    MAX_CYCLES = auto()  # Cycle budget exhausted before HLT


@dataclass
class RunResult:
    """
    Outcome of Emulator.run().

    Attributes:
        reason: Why execution stopped
        cycles: Cycles consumed by this run (phases or instructions,
            depending on the engine)
        outputs: Values emitted by OUT during this run, in order
        state: Snapshot of the machine when execution stopped
    """
    reason: StopReason
    cycles: int
    outputs: List[int] = field(default_factory=list)
    state: Optional[MachineState] = None

    @property
    def halted(self) -> bool:
        return self.reason is StopReason.HALTED

    def __str__(self) -> str:
        match self.reason:
            case StopReason.HALTED:
                return f"Halted after {self.cycles} cycles"
            case StopReason.MAX_CYCLES:
                return f"Reached max cycles ({self.cycles})"
            case _:
                return "Unknown"


# =============================================================================
# Emulator
# =============================================================================

class Emulator:
    """
    Execution driver with program loading and a cycle budget.

    Attributes:
        config: The EmulatorConfig used to initialize this instance
        machine: The underlying Simulator or Interpreter
        outputs: Every value emitted by OUT since the last reset
    """

    def __init__(
        self,
        config: Optional[EmulatorConfig] = None,
        on_output: Optional[Callable[[int], None]] = None,
    ):
        """
        Initialize the emulator with the given configuration.

        Args:
            config: EmulatorConfig; defaults to the cycle-accurate
                simulator with no cycle budget.
            on_output: Optional callback receiving each OUT value as it
                is emitted, in addition to collecting it in `outputs`
        """
        self.config = config or EmulatorConfig()
        self.outputs: List[int] = []
        self.on_output = on_output

        if self.config.engine == "interpreter":
            self.machine: Machine = Interpreter(on_output=self._output_hook)
        else:
            self.machine = Simulator(
                on_output=self._output_hook,
                skip_idle_phases=self.config.skip_idle_phases,
                trace=self.config.trace,
            )

    def _output_hook(self, value: int) -> None:
        self.outputs.append(value)
        if self.on_output:
            self.on_output(value)

    # =========================================================================
    # Program Loading
    # =========================================================================

    def load_bytes(self, data: Union[bytes, bytearray, Iterable[int]]) -> None:
        """
        Load a 16-byte program image.

        Raises:
            ProgramSizeError: If the image is not exactly 16 bytes
            ProgramLoadError: If the image holds non-byte values
        """
        self.machine.load(data)

    def load_file(self, path: Union[str, Path]) -> None:
        """
        Load a raw 16-byte program image from a file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ProgramSizeError: If the file is not exactly 16 bytes
        """
        self.load_bytes(load_program(path))

    def reset(self) -> None:
        """Reset registers and counters, keeping memory and clearing outputs."""
        self.machine.reset()
        self.outputs.clear()

    # =========================================================================
    # Execution Control
    # =========================================================================

    @property
    def cycles(self) -> int:
        """Total cycles consumed since the last reset."""
        if isinstance(self.machine, Simulator):
            return self.machine.cycles
        return self.machine.instructions

    def _tick(self) -> bool:
        if isinstance(self.machine, Simulator):
            return self.machine.advance()
        return self.machine.step()

    def run(self, max_cycles: Optional[int] = None) -> RunResult:
        """
        Run until HLT or until the cycle budget is used up.

        Args:
            max_cycles: Budget for this call; defaults to config.max_cycles.
                None means no limit.

        Returns:
            RunResult describing why execution stopped

        Raises:
            UndefinedOpcodeError: If the program reaches an undefined opcode
        """
        budget = self.config.max_cycles if max_cycles is None else max_cycles
        start_cycles = self.cycles
        start_outputs = len(self.outputs)

        if budget is None:
            while not self._tick():
                pass
            reason = StopReason.HALTED
        else:
            reason = StopReason.HALTED if self.machine.halted else StopReason.MAX_CYCLES
            for _ in range(budget):
                if self._tick():
                    reason = StopReason.HALTED
                    break

        result = RunResult(
            reason=reason,
            cycles=self.cycles - start_cycles,
            outputs=self.outputs[start_outputs:],
            state=self.machine.snapshot(),
        )

        if reason is StopReason.MAX_CYCLES:
            logger.warning(f"Stopped after {budget} cycles without reaching HLT")
        else:
            logger.debug(str(result))

        return result


def load_program(path: Union[str, Path]) -> bytes:
    """
    Read a raw program image from disk and check its size.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ProgramSizeError: If the file is not exactly 16 bytes
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Program file not found: {path}")
    if path.is_dir():
        raise ProgramLoadError(f"Program path is a directory: {path}")

    data = path.read_bytes()
    logger.debug(f"Read {len(data)} bytes from {path}")
    if len(data) != MEMORY_SIZE:
        raise ProgramSizeError(len(data), expected=MEMORY_SIZE)
    return data
