"""
Unit Tests for the Immediate-Mode Expander
==========================================

Test coverage includes:
- The per-mnemonic immediate policy table
- Variant derivation (bits 0-1 and mnemonic suffix)
- Wildcard passthrough
- Dropping and regenerating pre-expanded rows
- Opcode collision detection
"""

import logging

import pytest

from isagen.errors import OpcodeCollisionError
from isagen.expander import (
    IMMEDIATE_POLICIES,
    ImmediatePolicy,
    check_unique_opcodes,
    derive_variant,
    expand_record,
    expand_table,
    is_generated_variant,
    mode_tag_of,
    modes_for,
    policy_for,
)
from isagen.records import IMMEDIATE_MODES, ImmediateMode, InstructionRecord


@pytest.fixture
def add_record() -> InstructionRecord:
    """Base add instruction at opcode 0."""
    return InstructionRecord("00000000", 0, 7, "add")


# =============================================================================
# Policy Tests
# =============================================================================

class TestImmediatePolicy:
    """Tests for the immediate-mode policy lookup."""

    def test_no_argument_instructions(self):
        """read and pop take no immediate arguments."""
        assert policy_for("read") == ImmediatePolicy.NONE
        assert policy_for("pop") == ImmediatePolicy.NONE

    def test_single_argument_instructions(self):
        """not, write and push only take a first-argument immediate."""
        for mnemonic in ("not", "write", "push"):
            assert policy_for(mnemonic) == ImmediatePolicy.ARG1_ONLY

    def test_default_is_all(self):
        """Unlisted instructions get every variant."""
        assert policy_for("add") == ImmediatePolicy.ALL
        assert policy_for("jgteq") == ImmediatePolicy.ALL
        assert "add" not in IMMEDIATE_POLICIES

    def test_modes_for_policy(self):
        """Policies map to modes in canonical order."""
        assert modes_for(ImmediatePolicy.NONE) == ()
        assert modes_for(ImmediatePolicy.ARG1_ONLY) == (ImmediateMode.ARG1,)
        assert modes_for(ImmediatePolicy.ALL) == IMMEDIATE_MODES
        assert [m.tag for m in IMMEDIATE_MODES] == ["i1", "i2", "i12"]
        assert [m.bits for m in IMMEDIATE_MODES] == ["10", "01", "11"]


# =============================================================================
# Derivation Tests
# =============================================================================

class TestDeriveVariant:
    """Tests for single variant derivation."""

    def test_mode_bits_and_tag(self, add_record):
        """Each mode sets its bits and appends its tag."""
        expected = {
            ImmediateMode.ARG1: ("10000000", "addi1"),
            ImmediateMode.ARG2: ("01000000", "addi2"),
            ImmediateMode.BOTH: ("11000000", "addi12"),
        }
        for mode, (bits, mnemonic) in expected.items():
            variant = derive_variant(add_record, mode)
            assert variant.opcode_bits == bits
            assert variant.mnemonic == mnemonic

    def test_only_mode_bits_change(self):
        """Bits 2-7 and name indices are copied from the base row."""
        base = InstructionRecord("00100101", 3, 7, "jgteq")

        for mode in IMMEDIATE_MODES:
            variant = derive_variant(base, mode)
            assert variant.base_bits == base.base_bits
            assert variant.mode_bits == mode.bits
            assert variant.name_start == 3
            assert variant.name_end == 7

    def test_base_record_untouched(self, add_record):
        """Derivation returns a fresh record."""
        derive_variant(add_record, ImmediateMode.BOTH)

        assert add_record == InstructionRecord("00000000", 0, 7, "add")


# =============================================================================
# Record Expansion Tests
# =============================================================================

class TestExpandRecord:
    """Tests for expanding one record."""

    def test_add_expands_to_four(self, add_record):
        """A two-argument instruction gets base plus three variants."""
        rows = expand_record(add_record)

        assert [(r.mnemonic, r.opcode_bits) for r in rows] == [
            ("add", "00000000"),
            ("addi1", "10000000"),
            ("addi2", "01000000"),
            ("addi12", "11000000"),
        ]

    def test_not_expands_to_two(self):
        """A single-argument instruction never gets i2/i12 forms."""
        rows = expand_record(InstructionRecord("00000100", 5, 7, "not"))

        assert [(r.mnemonic, r.opcode_bits) for r in rows] == [
            ("not", "00000100"),
            ("noti1", "10000100"),
        ]

    def test_read_not_expanded(self):
        """A no-argument instruction gets no variants."""
        rows = expand_record(InstructionRecord("00010000", 4, 7, "read"))

        assert [r.mnemonic for r in rows] == ["read"]

    def test_mnemonic_lowercased(self):
        """Concrete mnemonics are normalized before expansion."""
        rows = expand_record(InstructionRecord("00000100", 5, 7, "NOT"))

        assert [r.mnemonic for r in rows] == ["not", "noti1"]

    def test_wildcard_passthrough(self):
        """Wildcard rows are neither lowercased nor expanded."""
        record = InstructionRecord("22122222", 2, 2, "COND")

        assert expand_record(record) == [record]


# =============================================================================
# Table Expansion Tests
# =============================================================================

class TestExpandTable:
    """Tests for expanding whole tables."""

    def test_order_and_wildcard_position(self, add_record):
        """Base rows are followed by their variants; wildcards stay in place."""
        records = [
            add_record,
            InstructionRecord("22122222", 2, 2, "COND"),
            InstructionRecord("00000001", 5, 7, "sub"),
        ]

        rows = expand_table(records)

        assert [r.mnemonic for r in rows] == [
            "add", "addi1", "addi2", "addi12",
            "COND",
            "sub", "subi1", "subi2", "subi12",
        ]

    def test_pre_expanded_rows_regenerated(self, add_record):
        """Variant rows in the input are dropped and derived again."""
        records = [
            add_record,
            InstructionRecord("01000000", 0, 7, "addi2"),
            InstructionRecord("10000000", 0, 7, "addi1"),
        ]

        rows = expand_table(records)

        assert [r.mnemonic for r in rows] == ["add", "addi1", "addi2", "addi12"]

    def test_variant_rows_follow_policy(self):
        """A pre-expanded variant the policy forbids is not kept."""
        records = [
            InstructionRecord("00010000", 4, 7, "read"),
            InstructionRecord("10010000", 4, 7, "readi1"),
        ]

        assert [r.mnemonic for r in expand_table(records)] == ["read"]

    def test_mismatched_variant_dropped_with_warning(self, caplog):
        """A row with mode bits but no matching suffix is still dropped."""
        records = [InstructionRecord("10000000", 0, 7, "add")]

        with caplog.at_level(logging.WARNING, logger="isagen.expander"):
            rows = expand_table(records)

        assert rows == []
        assert "expect suffix 'i1'" in caplog.text

    def test_tagged_base_row_not_reexpanded(self, add_record, caplog):
        """A '00' row whose name already carries a tag is dropped, not expanded."""
        records = [add_record, InstructionRecord("00000001", 5, 7, "subi1")]

        with caplog.at_level(logging.WARNING, logger="isagen.expander"):
            rows = expand_table(records)

        assert [r.mnemonic for r in rows] == ["add", "addi1", "addi2", "addi12"]
        assert "subi1" in caplog.text
        assert "expect suffix none" in caplog.text

    def test_mode_tag_of(self):
        """Tags are matched longest first and case-insensitively."""
        assert mode_tag_of("addi12") == ImmediateMode.BOTH
        assert mode_tag_of("addi2") == ImmediateMode.ARG2
        assert mode_tag_of("ADDI1") == ImmediateMode.ARG1
        assert mode_tag_of("add") is None
        assert mode_tag_of("jgteq") is None

    def test_wildcard_with_mode_bits_kept(self):
        """Field layout rows are not mistaken for variants."""
        record = InstructionRecord("12222222", 0, 0, "I_ARG1")

        assert not is_generated_variant(record)
        assert expand_table([record]) == [record]

    def test_idempotent(self, add_record):
        """Expanding an expanded table changes nothing."""
        once = expand_table([add_record, InstructionRecord("00000100", 5, 7, "not")])
        twice = expand_table(once)

        assert twice == once


# =============================================================================
# Collision Tests
# =============================================================================

class TestCheckUniqueOpcodes:
    """Tests for the opcode collision check."""

    def test_unique_table_passes(self, add_record):
        """Distinct base rows expand without collisions."""
        rows = expand_table([add_record, InstructionRecord("00000001", 5, 7, "sub")])

        check_unique_opcodes(rows)

    def test_collision_names_both(self):
        """Two rows sharing bits 2-7 collide after expansion."""
        rows = expand_table([
            InstructionRecord("00100001", 3, 7, "jneq"),
            InstructionRecord("00100001", 3, 7, "jlt"),
        ])

        with pytest.raises(OpcodeCollisionError) as exc_info:
            check_unique_opcodes(rows)

        error = exc_info.value
        assert error.first == "jneq"
        assert error.second == "jlt"
        assert error.opcode_bits == "00100001"
        assert "'jneq' and 'jlt'" in str(error)

    def test_wildcards_ignored(self):
        """Wildcard rows may share patterns."""
        check_unique_opcodes([
            InstructionRecord("22222222", 0, 0, "A"),
            InstructionRecord("22222222", 0, 0, "B"),
        ])
