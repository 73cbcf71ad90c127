"""
Eater Command-Line Interface
============================

This package provides the command-line tool for the emulator:

- **eater**: Run a 16-byte program image on the simulator or interpreter

The tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["eaterrun"]
