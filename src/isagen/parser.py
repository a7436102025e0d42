"""
Instruction Table Parser
========================

Turns the fixed-width literal table into InstructionRecord objects.

Row Order
---------
The authored table is listed the way it is displayed in-game: the
highest opcodes at the top, opcode 0 at the bottom. Parsing in display
order reverses the rows so that index 0 of the result is the logical
first instruction. Generated rule tables are already ascending and are
parsed with display_order=False.

Example
-------
    >>> records = parse_table('''
    ... 0000000157sub
    ... 0000000057add
    ... ''')
    >>> [r.mnemonic for r in records]
    ['add', 'sub']

Copyright (c) 2026 isagen Contributors
"""

from pathlib import Path
from typing import Optional, Union
import logging

from isagen.errors import FormatError, RowLocation
from isagen.records import (
    InstructionRecord,
    OPCODE_ALPHABET,
    OPCODE_WIDTH,
    ROW_PREFIX_WIDTH,
)

# Logger for this module
logger = logging.getLogger(__name__)

ROW_FORMAT_HINT = (
    "rows are 8 opcode bits (0, 1 or 2), a name start digit, "
    "a name end digit, then the mnemonic"
)


# =============================================================================
# Row Parsing
# =============================================================================

def parse_rule_line(
    line: str,
    line_number: Optional[int] = None,
    source: str = "<table>",
) -> InstructionRecord:
    """
    Parse a single fixed-width table row.

    Args:
        line: The row text (surrounding whitespace is ignored)
        line_number: Line number for error messages (optional)
        source: Table name for error messages

    Returns:
        The parsed record

    Raises:
        FormatError: If the row is too short or a field is invalid
    """
    text = line.strip()
    location = RowLocation(source, line_number) if line_number is not None else None

    if len(text) < ROW_PREFIX_WIDTH:
        raise FormatError(
            f"row is too short ({len(text)} characters, need at least {ROW_PREFIX_WIDTH})",
            location=location,
            hint=ROW_FORMAT_HINT,
            row_text=text,
        )

    opcode_bits = text[:OPCODE_WIDTH]
    bad = sorted(set(opcode_bits) - OPCODE_ALPHABET)
    if bad:
        raise FormatError(
            f"invalid opcode bits '{opcode_bits}' (unexpected {', '.join(repr(c) for c in bad)})",
            location=location,
            hint=ROW_FORMAT_HINT,
            row_text=text,
        )

    start_char = text[OPCODE_WIDTH]
    end_char = text[OPCODE_WIDTH + 1]
    for label, char in (("start", start_char), ("end", end_char)):
        if not char.isdigit() or not char.isascii():
            raise FormatError(
                f"name {label} index must be a digit, got '{char}'",
                location=location,
                hint=ROW_FORMAT_HINT,
                row_text=text,
            )

    return InstructionRecord(
        opcode_bits=opcode_bits,
        name_start=int(start_char),
        name_end=int(end_char),
        mnemonic=text[ROW_PREFIX_WIDTH:],
    )


# =============================================================================
# Table Parsing
# =============================================================================

def parse_table(
    text: str,
    display_order: bool = True,
    source: str = "<table>",
) -> list[InstructionRecord]:
    """
    Parse a whole instruction table.

    Blank lines are skipped anywhere in the text.

    Args:
        text: The table text
        display_order: True if rows are listed top-of-display first
            (the authored form); the result is then reversed so index 0
            holds opcode 0. False keeps the rows as given.
        source: Table name for error messages

    Returns:
        Records in logical (ascending) order

    Raises:
        FormatError: On the first malformed row
    """
    records = []
    for line_number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        records.append(parse_rule_line(line, line_number=line_number, source=source))

    if display_order:
        records.reverse()

    logger.debug(f"Parsed {len(records)} rows from {source}")
    return records


def parse_table_file(
    path: Union[str, Path],
    display_order: bool = True,
) -> list[InstructionRecord]:
    """
    Read and parse an instruction table file.

    Args:
        path: Path to a UTF-8 table file
        display_order: See parse_table()

    Returns:
        Records in logical (ascending) order
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    return parse_table(text, display_order=display_order, source=str(path))
