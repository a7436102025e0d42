"""
Unit Tests for the Table Serializer
===================================

Test coverage includes:
- Rule row rendering
- Assembly row rendering and the wildcard guard
- Assembly constants appendix layout
"""

import pytest

from isagen.errors import EncodingError
from isagen.expander import expand_record
from isagen.parser import parse_rule_line
from isagen.records import InstructionRecord
from isagen.serializer import (
    ASSEMBLY_CONSTANTS,
    opcode_value,
    render_assembly_table,
    render_rule_table,
    serialize_assembly_row,
    serialize_rule_row,
)

CONSTANTS_BLOCK = """R0 0
R1 1
R2 2
R3 3
R4 4
R5 5
COUNTER 6
INPUT 7
OUTPUT 7
_ 0
"""


# =============================================================================
# Rule Row Tests
# =============================================================================

class TestRuleRows:
    """Tests for the fixed-width rule format."""

    def test_serialize_rule_row(self):
        """Fields are concatenated without separators."""
        record = InstructionRecord("00000001", 5, 7, "sub")

        assert serialize_rule_row(record) == "0000000157sub"

    def test_wildcard_row_verbatim(self):
        """Wildcard rows render exactly as authored."""
        line = "2212222222COND"

        assert serialize_rule_row(parse_rule_line(line)) == line

    def test_render_rule_table(self):
        """Rows are newline separated with no trailing newline."""
        rows = expand_record(InstructionRecord("00000000", 0, 7, "add"))

        assert render_rule_table(rows) == (
            "0000000007add\n"
            "1000000007addi1\n"
            "0100000007addi2\n"
            "1100000007addi12"
        )

    def test_render_empty(self):
        """No records render to an empty string."""
        assert render_rule_table([]) == ""


# =============================================================================
# Assembly Row Tests
# =============================================================================

class TestAssemblyRows:
    """Tests for the assembly format."""

    def test_add_variants(self):
        """The add family encodes as 0, 128, 64 and 192."""
        rows = expand_record(InstructionRecord("00000000", 0, 7, "add"))

        assert [serialize_assembly_row(r) for r in rows] == [
            "add 0",
            "addi1 128",
            "addi2 64",
            "addi12 192",
        ]

    def test_opcode_value(self):
        """Opcode bits are read as an unsigned base-2 number."""
        assert opcode_value(InstructionRecord("11100101", 3, 7, "jgteqi12")) == 229
        assert opcode_value(InstructionRecord("11111111", 0, 0, "x")) == 255

    def test_wildcard_rejected(self):
        """Encoding a wildcard row is a hard error."""
        record = InstructionRecord("12222222", 0, 0, "I_ARG1")

        with pytest.raises(EncodingError, match="wildcard") as exc_info:
            serialize_assembly_row(record)

        assert exc_info.value.opcode_bits == "12222222"
        assert exc_info.value.mnemonic == "I_ARG1"

    def test_render_skips_wildcards(self):
        """Wildcard rows never reach the assembly table."""
        records = [
            InstructionRecord("00000000", 0, 7, "add"),
            InstructionRecord("22122222", 2, 2, "COND"),
        ]

        text = render_assembly_table(records)

        assert "COND" not in text
        assert text == "add 0\n" + CONSTANTS_BLOCK

    def test_constants_appendix(self):
        """The constants block is fixed and ends with a newline."""
        assert ASSEMBLY_CONSTANTS[0] == ("R0", 0)
        assert ASSEMBLY_CONSTANTS[-1] == ("_", 0)
        assert render_assembly_table([]) == "\n" + CONSTANTS_BLOCK
