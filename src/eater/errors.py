"""
Eater Emulator Error Hierarchy
==============================

This module defines the exception hierarchy for the whole package.
All exceptions inherit from EaterError, allowing callers to catch every
emulator-related error with a single except clause if desired.

Exception Hierarchy
-------------------
EaterError (base)
├── ProgramLoadError - program image cannot be loaded
│   └── ProgramSizeError - image is not exactly 16 bytes
└── ExecutionError - fault raised while a machine is running
    └── UndefinedOpcodeError - opcode nibble outside the instruction set

Design Philosophy
-----------------
Neither engine ever terminates the process. A rejected program or an
undefined opcode surfaces as an exception carrying enough context (the
offending byte, its address, the image size) for tests and tooling to
report it and carry on with a fresh machine.

Copyright (c) 2025 Eater Emulator Contributors
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class EaterError(Exception):
    """
    Base exception for all emulator errors.

    All exceptions in the package inherit from this class, allowing callers
    to catch every emulator-related error with a single except clause:

        try:
            sim.load(image)
            sim.run()
        except EaterError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Program Loading Exceptions
# =============================================================================

class ProgramLoadError(EaterError):
    """
    A program image could not be loaded into memory.

    Raised when the image contains values that are not bytes, or when
    the file holding the image cannot be interpreted. Memory is left
    untouched when this error is raised.
    """
    pass


class ProgramSizeError(ProgramLoadError):
    """
    Program image has the wrong length.

    The machine has exactly 16 bytes of memory and the image is loaded
    verbatim, with no header, so anything other than 16 bytes is rejected.

    Attributes:
        expected: Required image size in bytes
        actual: Size of the rejected image
    """

    def __init__(self, actual: int, expected: int = 16, message: str = ""):
        self.expected = expected
        self.actual = actual
        if not message:
            message = (
                f"program image must be exactly {expected} bytes, "
                f"got {actual}"
            )
        super().__init__(message)


# =============================================================================
# Execution Exceptions
# =============================================================================

class ExecutionError(EaterError):
    """Base exception for faults raised while a program is running."""
    pass


class UndefinedOpcodeError(ExecutionError):
    """
    Opcode nibble is not part of the instruction set.

    Nibbles 0x9 through 0xD have no instruction assigned. The decoder
    raises this error instead of guessing (treating them as NOP, say);
    the caller decides whether to abort or to inspect the machine.

    Attributes:
        opcode: The undefined high nibble (0x9-0xD)
        byte: The full instruction byte that was fetched
        address: Memory address the byte was fetched from, if known
    """

    def __init__(self, byte: int, address: Optional[int] = None):
        self.byte = byte & 0xFF
        self.opcode = (byte >> 4) & 0x0F
        self.address = address

        if address is None:
            message = f"undefined opcode ${self.opcode:X} in byte ${self.byte:02X}"
        else:
            message = (
                f"undefined opcode ${self.opcode:X} in byte ${self.byte:02X} "
                f"at address ${address:X}"
            )
        super().__init__(message)
