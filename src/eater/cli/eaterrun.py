"""
eater - Program Runner Command-Line Interface
=============================================

This module implements the command-line interface for running 16-byte
program images on the emulator. Each value emitted by OUT is printed on
its own line as soon as it is produced.

Usage Examples
--------------
Run on the cycle-accurate simulator:
    $ eater count.bin

Run on the one-shot interpreter:
    $ eater count.bin --interpreter

Guard against programs that never halt:
    $ eater loop.bin --max-cycles 100000

Print a listing without running:
    $ eater count.bin --list

Trace every clock phase:
    $ eater count.bin --trace

Configuration can also come from the environment (EATER_ENGINE,
EATER_MAX_CYCLES, EATER_SKIP_IDLE_PHASES, EATER_TRACE); command-line
options take precedence.

Copyright (c) 2025 Eater Emulator Contributors
"""

import dataclasses
import logging
import sys
from pathlib import Path
from typing import Optional

import click

from eater import __version__
from eater.cli.errors import ExitCode, handle_cli_exception
from eater.emulator import Emulator, EmulatorConfig, StopReason, disassemble, load_program


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        force=True,
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "program",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-i", "--interpreter",
    is_flag=True,
    help="Use the one-shot interpreter instead of the cycle-accurate simulator",
)
@click.option(
    "-m", "--max-cycles",
    type=click.IntRange(min=0),
    default=None,
    help="Stop after this many cycles (simulator phases or interpreter "
         "instructions). Default: no limit.",
)
@click.option(
    "--skip-idle-phases",
    is_flag=True,
    help="Simulator only: end each instruction as soon as its work is done",
)
@click.option(
    "-l", "--list",
    "show_listing",
    is_flag=True,
    help="Print a listing of the program image and exit without running",
)
@click.option(
    "-t", "--trace",
    is_flag=True,
    help="Log every simulator phase transition (implies --verbose)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="eater")
def main(
    program: Path,
    interpreter: bool,
    max_cycles: Optional[int],
    skip_idle_phases: bool,
    show_listing: bool,
    trace: bool,
    verbose: bool,
) -> None:
    """
    Run a 16-byte program image on the breadboard computer emulator.

    PROGRAM is a raw memory image: exactly 16 bytes, high nibble opcode,
    low nibble operand.

    \b
    Examples:
        eater count.bin                   # Cycle-accurate simulator
        eater count.bin --interpreter     # One-shot interpreter
        eater loop.bin -m 100000          # Stop after 100000 cycles
        eater count.bin --list            # Show the listing only
    """
    verbose = verbose or trace
    setup_logging(verbose)

    try:
        data = load_program(program)

        if show_listing:
            for line in disassemble(data):
                click.echo(line)
            return

        config = EmulatorConfig.from_env()
        overrides = {}
        if interpreter:
            overrides["engine"] = "interpreter"
        if max_cycles is not None:
            overrides["max_cycles"] = max_cycles
        if skip_idle_phases:
            overrides["skip_idle_phases"] = True
        if trace:
            overrides["trace"] = True
        config = dataclasses.replace(config, **overrides)

        if verbose:
            click.echo(f"Program: {program} ({len(data)} bytes)", err=True)
            click.echo(f"Engine: {config.engine}", err=True)

        emu = Emulator(config, on_output=click.echo)
        emu.load_bytes(data)
        result = emu.run()

        if verbose:
            state = result.state
            click.echo(str(result), err=True)
            click.echo(
                f"A=${state.a:02X} PC=${state.pc:X} "
                f"Z={int(emu.machine.flag_z)} C={int(emu.machine.flag_c)}",
                err=True,
            )

        if result.reason is StopReason.MAX_CYCLES:
            click.echo(f"Error: {result}", err=True)
            sys.exit(ExitCode.CYCLE_LIMIT)

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Program")


if __name__ == "__main__":
    main()
