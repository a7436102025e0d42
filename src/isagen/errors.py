"""
isagen Error Hierarchy
======================

This module defines the exception hierarchy for the table compiler.
All exceptions inherit from IsagenError, allowing callers to catch every
compiler-related error with a single except clause.

Exception Hierarchy
-------------------
IsagenError (base)
├── TableError (problems with table rows)
│   ├── FormatError - malformed fixed-width row
│   └── OpcodeCollisionError - two real opcodes share the same bits
└── EncodingError - wildcard opcode reached the assembly encoder

Error messages for table rows follow this format:
    source:line: error: description
        offending row text
    hint: suggestion for fixing (when available)

Copyright (c) 2026 isagen Contributors
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class IsagenError(Exception):
    """
    Base exception for all table compiler errors.

        try:
            compile_table(text)
        except IsagenError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Row Location Tracking
# =============================================================================

@dataclass(frozen=True)
class RowLocation:
    """
    Location of a row in an instruction table.

    Attributes:
        source: Name of the table source (file name or "<table>")
        line: Line number in the source text (1-indexed)
    """
    source: str
    line: int

    def __str__(self) -> str:
        """Format as 'source:line' for error messages."""
        return f"{self.source}:{self.line}"


# =============================================================================
# Table Exceptions
# =============================================================================

class TableError(IsagenError):
    """
    Base exception for errors tied to instruction table rows.

    Attributes:
        message: The error description
        location: Where in the table the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        row_text: The offending row (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[RowLocation] = None,
        hint: Optional[str] = None,
        row_text: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.row_text = row_text
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, row text, and hint.

        Example output:
            <table>:12: error: row is too short (7 characters, need at least 10)
                0000000
            hint: rows are 8 opcode bits, 2 name index digits, then the mnemonic
        """
        if self.location:
            parts = [f"{self.location}: error: {self.message}"]
        else:
            parts = [f"error: {self.message}"]

        if self.row_text is not None:
            parts.append(f"    {self.row_text}")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class FormatError(TableError):
    """
    Malformed row in an instruction table.

    Raised when a row:
        - is shorter than the fixed-width prefix (8 bits + 2 digits)
        - has an opcode field with characters other than 0, 1 and 2
        - has a non-digit name start/end index
    """
    pass


class OpcodeCollisionError(TableError):
    """
    Two concrete opcodes expanded to the same bit pattern.

    Base rows must be distinct in bits 2-7, since bits 0-1 are reserved
    for the immediate addressing mode.
    """

    def __init__(self, first: str, second: str, opcode_bits: str):
        self.first = first
        self.second = second
        self.opcode_bits = opcode_bits
        super().__init__(
            f"opcode collision: '{first}' and '{second}' both encode as {opcode_bits}",
            hint="base instructions must differ in bits 2-7",
        )


# =============================================================================
# Encoding Exceptions
# =============================================================================

class EncodingError(IsagenError):
    """
    A wildcard opcode cannot be turned into an assembly value.

    Wildcard rows are filtered out before assembly encoding, so this is
    only raised when that invariant has been broken.
    """

    def __init__(self, mnemonic: str, opcode_bits: str):
        self.mnemonic = mnemonic
        self.opcode_bits = opcode_bits
        super().__init__(
            f"cannot turn opcode with wildcard to asm: {opcode_bits} ({mnemonic})"
        )
