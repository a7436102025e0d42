"""
Instruction Record Definitions
==============================

Data structures shared by the parser, expander and serializer.

Row Format
----------
Every table row is fixed width:

    Chars 0-7:  opcode bits (0, 1, or 2 = wildcard)
    Char 8:     name field start index (single digit)
    Char 9:     name field end index (single digit)
    Chars 10+:  mnemonic

    0000000157sub
    ^^^^^^^^      opcode bits
            ^     name start = 5
             ^    name end = 7
              ^^^ mnemonic

Opcode Layout
-------------
    Bits 0-1: immediate addressing mode
        00 = no immediates
        10 = first argument immediate   (suffix "i1")
        01 = second argument immediate  (suffix "i2")
        11 = both arguments immediate   (suffix "i12")
    Bits 2-7: base instruction

Rows whose bits contain the wildcard marker describe field layouts
(condition, argument and memory regions) rather than real opcodes.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


# =============================================================================
# Opcode Field Constants
# =============================================================================

OPCODE_WIDTH = 8           # Opcode bits per row
WILDCARD = "2"             # Don't-care marker, metadata rows only
OPCODE_ALPHABET = frozenset("012")
MODE_BITS_WIDTH = 2        # Leading bits reserved for the immediate mode
NO_IMMEDIATE_BITS = "00"

# Fixed-width prefix: opcode bits + name start digit + name end digit
ROW_PREFIX_WIDTH = OPCODE_WIDTH + 2


# =============================================================================
# Immediate Addressing Modes
# =============================================================================

class ImmediateMode(Enum):
    """
    Immediate addressing variants of an instruction.

    Each value is a (tag, bits) pair: the tag is appended to the base
    mnemonic and the bits replace bits 0-1 of the opcode.
    """
    ARG1 = ("i1", "10")    # First argument is a literal
    ARG2 = ("i2", "01")    # Second argument is a literal
    BOTH = ("i12", "11")   # Both arguments are literals

    @property
    def tag(self) -> str:
        """Mnemonic suffix for this mode."""
        return self.value[0]

    @property
    def bits(self) -> str:
        """Two-bit pattern stored in bits 0-1 of the opcode."""
        return self.value[1]

    @classmethod
    def from_bits(cls, bits: str) -> Optional["ImmediateMode"]:
        """Return the mode encoded by a two-bit pattern, or None for '00'."""
        for mode in cls:
            if mode.bits == bits:
                return mode
        return None


# Canonical order in which variants are generated
IMMEDIATE_MODES: tuple[ImmediateMode, ...] = (
    ImmediateMode.ARG1,
    ImmediateMode.ARG2,
    ImmediateMode.BOTH,
)


# =============================================================================
# Instruction Record
# =============================================================================

@dataclass(frozen=True)
class InstructionRecord:
    """
    One row of an instruction table.

    Frozen so that derived variants are always fresh copies and the
    base table cannot be changed during expansion.

    Attributes:
        opcode_bits: 8-character pattern over {0, 1, 2}
        name_start: Name field start index (opaque, passed through)
        name_end: Name field end index (opaque, passed through)
        mnemonic: Instruction name, or field label for wildcard rows
    """
    opcode_bits: str
    name_start: int
    name_end: int
    mnemonic: str

    @property
    def is_wildcard(self) -> bool:
        """True for metadata rows that contain a don't-care bit."""
        return WILDCARD in self.opcode_bits

    @property
    def mode_bits(self) -> str:
        """Bits 0-1, the immediate addressing mode field."""
        return self.opcode_bits[:MODE_BITS_WIDTH]

    @property
    def base_bits(self) -> str:
        """Bits 2-7, identifying the base instruction."""
        return self.opcode_bits[MODE_BITS_WIDTH:]

    def __str__(self) -> str:
        return f"{self.mnemonic} [{self.opcode_bits}]"
