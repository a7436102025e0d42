"""
Table Serializer
================

Renders expanded records into the two output formats.

Rule Table
----------
The fixed-width row format, one record per line, in expansion order.
Wildcard rows are included. This is the decode table read by the
emulator:

    0000000057add
    1000000057addi1

Assembly Table
--------------
One "<mnemonic> <decimal opcode>" line per concrete record, followed by
the register and port constants understood by the assembler:

    add 0
    addi1 128
    ...
    R0 0
    COUNTER 6

Copyright (c) 2026 isagen Contributors
"""

from typing import Iterable

from isagen.errors import EncodingError
from isagen.records import InstructionRecord


# =============================================================================
# Assembly Constants
# =============================================================================

# Static symbols appended to every assembly table
ASSEMBLY_CONSTANTS: tuple[tuple[str, int], ...] = (
    ("R0", 0),
    ("R1", 1),
    ("R2", 2),
    ("R3", 3),
    ("R4", 4),
    ("R5", 5),
    ("COUNTER", 6),
    ("INPUT", 7),
    ("OUTPUT", 7),
    ("_", 0),          # Discard target
)


# =============================================================================
# Rule Rows
# =============================================================================

def serialize_rule_row(record: InstructionRecord) -> str:
    """Render a record in the fixed-width rule row format."""
    return f"{record.opcode_bits}{record.name_start}{record.name_end}{record.mnemonic}"


def render_rule_table(records: Iterable[InstructionRecord]) -> str:
    """Render all records as rule rows, newline separated."""
    return "\n".join(serialize_rule_row(record) for record in records)


# =============================================================================
# Assembly Rows
# =============================================================================

def opcode_value(record: InstructionRecord) -> int:
    """
    Unsigned value of a concrete opcode.

    Raises:
        EncodingError: If the opcode contains a wildcard bit
    """
    if record.is_wildcard:
        raise EncodingError(record.mnemonic, record.opcode_bits)
    return int(record.opcode_bits, 2)


def serialize_assembly_row(record: InstructionRecord) -> str:
    """Render a concrete record as '<mnemonic> <decimal value>'."""
    return f"{record.mnemonic} {opcode_value(record)}"


def render_assembly_table(records: Iterable[InstructionRecord]) -> str:
    """
    Render the assembly table.

    Wildcard rows are skipped; the constants block always follows the
    opcode rows and ends with a newline.
    """
    rows = "\n".join(
        serialize_assembly_row(record)
        for record in records
        if not record.is_wildcard
    )
    constants = "\n".join(f"{name} {value}" for name, value in ASSEMBLY_CONSTANTS)
    return f"{rows}\n{constants}\n"
