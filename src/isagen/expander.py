"""
Immediate-Mode Expander
=======================

Expands base instruction rows into their immediate addressing variants.

For every base row the expander emits the row itself followed by one
derived row per applicable immediate mode. A derived row copies the
base row, overwrites opcode bits 0-1 with the mode bits and appends the
mode tag to the mnemonic:

    0000000057add     ->  00000000 add
                          10000000 addi1
                          01000000 addi2
                          11000000 addi12

Which modes apply is decided by IMMEDIATE_POLICIES, an explicit list of
instructions that take fewer immediate-capable arguments. Everything
not listed gets all three variants.

Wildcard rows pass through untouched. Rows that already are variants
(non-zero mode bits or an i1/i2/i12 mnemonic tag) are dropped and
re-derived from their base row, so expanding an expanded table gives
the same result.

Copyright (c) 2026 isagen Contributors
"""

from dataclasses import replace
from enum import Enum, auto
from typing import Iterable, Optional
import logging

from isagen.errors import OpcodeCollisionError
from isagen.records import (
    IMMEDIATE_MODES,
    ImmediateMode,
    InstructionRecord,
    NO_IMMEDIATE_BITS,
)

# Logger for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Immediate-Mode Policy
# =============================================================================

class ImmediatePolicy(Enum):
    """Which immediate variants an instruction gets."""
    NONE = auto()        # No immediate-capable argument
    ARG1_ONLY = auto()   # Only the first argument may be a literal
    ALL = auto()         # Either or both arguments may be literals


# Instructions that deviate from the ALL default
IMMEDIATE_POLICIES: dict[str, ImmediatePolicy] = {
    # No arguments
    "read": ImmediatePolicy.NONE,
    "pop": ImmediatePolicy.NONE,
    # Single argument: no i2/i12 forms
    "not": ImmediatePolicy.ARG1_ONLY,
    "write": ImmediatePolicy.ARG1_ONLY,
    "push": ImmediatePolicy.ARG1_ONLY,
}

_POLICY_MODES: dict[ImmediatePolicy, tuple[ImmediateMode, ...]] = {
    ImmediatePolicy.NONE: (),
    ImmediatePolicy.ARG1_ONLY: (ImmediateMode.ARG1,),
    ImmediatePolicy.ALL: IMMEDIATE_MODES,
}


def policy_for(mnemonic: str) -> ImmediatePolicy:
    """Look up the immediate policy of a (lowercase) mnemonic."""
    return IMMEDIATE_POLICIES.get(mnemonic, ImmediatePolicy.ALL)


def modes_for(policy: ImmediatePolicy) -> tuple[ImmediateMode, ...]:
    """Immediate modes generated under a policy, in canonical order."""
    return _POLICY_MODES[policy]


# =============================================================================
# Variant Derivation
# =============================================================================

def derive_variant(record: InstructionRecord, mode: ImmediateMode) -> InstructionRecord:
    """
    Derive the immediate-mode sibling of a base record.

    Args:
        record: A base (mode bits '00') non-wildcard record
        mode: The immediate mode to encode

    Returns:
        A new record with bits 0-1 set to the mode bits and the mode
        tag appended to the mnemonic
    """
    return replace(
        record,
        opcode_bits=mode.bits + record.base_bits,
        mnemonic=record.mnemonic + mode.tag,
    )


def mode_tag_of(mnemonic: str) -> Optional[ImmediateMode]:
    """
    Return the immediate mode whose tag ends a mnemonic, or None.

    The longest tag is tried first so that 'addi12' is not read as an
    'i2' variant.
    """
    name = mnemonic.lower()
    for mode in sorted(IMMEDIATE_MODES, key=lambda m: len(m.tag), reverse=True):
        if name.endswith(mode.tag):
            return mode
    return None


def is_generated_variant(record: InstructionRecord) -> bool:
    """
    True if a concrete row is an immediate variant of some base row.

    A row counts as a variant when its mode bits are non-zero (bits 0-1
    belong exclusively to the immediate mode) or when its mnemonic
    already carries an i1/i2/i12 tag.
    """
    if record.is_wildcard:
        return False
    return record.mode_bits != NO_IMMEDIATE_BITS or mode_tag_of(record.mnemonic) is not None


def expand_record(record: InstructionRecord) -> list[InstructionRecord]:
    """
    Expand one base record into itself plus its immediate variants.

    Wildcard rows are returned unchanged. Concrete rows get a lowercase
    mnemonic before their variants are derived.
    """
    if record.is_wildcard:
        # Field layout rows keep their authored name
        return [record]

    base = replace(record, mnemonic=record.mnemonic.lower())
    modes = modes_for(policy_for(base.mnemonic))
    return [base] + [derive_variant(base, mode) for mode in modes]


def expand_table(records: Iterable[InstructionRecord]) -> list[InstructionRecord]:
    """
    Expand a parsed table.

    Variant rows already present in the input are dropped and
    regenerated from their base rows, in canonical mode order. A
    dropped row whose mode bits and mnemonic tag disagree is logged as
    a warning.

    Args:
        records: Parsed records in logical order

    Returns:
        The expanded records
    """
    expanded: list[InstructionRecord] = []
    dropped = 0

    for record in records:
        if is_generated_variant(record):
            bits_mode = ImmediateMode.from_bits(record.mode_bits)
            tag_mode = mode_tag_of(record.mnemonic)
            if bits_mode != tag_mode:
                expected = f"'{bits_mode.tag}'" if bits_mode else "none"
                logger.warning(
                    f"Dropping '{record.mnemonic}' ({record.opcode_bits}): "
                    f"mode bits {record.mode_bits} expect suffix {expected}"
                )
            else:
                logger.debug(f"Skipping pre-expanded row '{record.mnemonic}'")
            dropped += 1
            continue

        rows = expand_record(record)
        if len(rows) > 1:
            logger.debug(
                f"Expanded '{rows[0].mnemonic}' into "
                f"{', '.join(r.mnemonic for r in rows[1:])}"
            )
        expanded.extend(rows)

    logger.debug(
        f"Expansion produced {len(expanded)} rows ({dropped} pre-expanded rows dropped)"
    )
    return expanded


# =============================================================================
# Validation
# =============================================================================

def check_unique_opcodes(records: Iterable[InstructionRecord]) -> None:
    """
    Verify that no two concrete records share opcode bits.

    Raises:
        OpcodeCollisionError: Naming both mnemonics on the first clash
    """
    seen: dict[str, str] = {}
    for record in records:
        if record.is_wildcard:
            continue
        other = seen.get(record.opcode_bits)
        if other is not None:
            raise OpcodeCollisionError(other, record.mnemonic, record.opcode_bits)
        seen[record.opcode_bits] = record.mnemonic
