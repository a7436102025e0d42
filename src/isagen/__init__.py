"""
isagen - Instruction Set Table Compiler
=======================================

This package expands a compact, hand-authored table of base opcode
patterns for a small 8-bit CPU into the two tables used by its
emulator and assembler:

- **Rule table** (instruction_rules.data): fixed-width decode rows,
  including the wildcard field layout rows
- **Assembly table** (assembly.data): "<mnemonic> <opcode>" rows plus
  the register and port constants

Main Components
---------------
- **parser**: Fixed-width row parsing
- **expander**: Immediate-mode variant generation (i1, i2, i12)
- **serializer**: Rule and assembly table rendering
- **compiler**: The parse/expand/validate/render pipeline

Quick Start
-----------
    >>> from isagen import compile_table
    >>> tables = compile_table()
    >>> print(tables.assembly_text.splitlines()[0])
    add 0

Or from the command line:
    $ isagen
    $ isagen -t my_table.txt -o build/
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from isagen.errors import (
    IsagenError,
    TableError,
    FormatError,
    OpcodeCollisionError,
    EncodingError,
    RowLocation,
)
from isagen.records import (
    InstructionRecord,
    ImmediateMode,
    IMMEDIATE_MODES,
    OPCODE_WIDTH,
    WILDCARD,
)
from isagen.parser import parse_rule_line, parse_table, parse_table_file
from isagen.expander import (
    ImmediatePolicy,
    IMMEDIATE_POLICIES,
    policy_for,
    modes_for,
    derive_variant,
    mode_tag_of,
    is_generated_variant,
    expand_record,
    expand_table,
    check_unique_opcodes,
)
from isagen.serializer import (
    ASSEMBLY_CONSTANTS,
    serialize_rule_row,
    render_rule_table,
    opcode_value,
    serialize_assembly_row,
    render_assembly_table,
)
from isagen.config import CompilerConfig
from isagen.compiler import CompiledTables, TableCompiler, compile_table
from isagen.table_data import BUILTIN_TABLE

__all__ = [
    # Version
    "__version__",
    # Errors
    "IsagenError",
    "TableError",
    "FormatError",
    "OpcodeCollisionError",
    "EncodingError",
    "RowLocation",
    # Records
    "InstructionRecord",
    "ImmediateMode",
    "IMMEDIATE_MODES",
    "OPCODE_WIDTH",
    "WILDCARD",
    # Parser
    "parse_rule_line",
    "parse_table",
    "parse_table_file",
    # Expander
    "ImmediatePolicy",
    "IMMEDIATE_POLICIES",
    "policy_for",
    "modes_for",
    "derive_variant",
    "mode_tag_of",
    "is_generated_variant",
    "expand_record",
    "expand_table",
    "check_unique_opcodes",
    # Serializer
    "ASSEMBLY_CONSTANTS",
    "serialize_rule_row",
    "render_rule_table",
    "opcode_value",
    "serialize_assembly_row",
    "render_assembly_table",
    # Compiler
    "CompilerConfig",
    "CompiledTables",
    "TableCompiler",
    "compile_table",
    "BUILTIN_TABLE",
]
