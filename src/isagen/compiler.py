"""
Table Compiler
==============

Runs the full pipeline for one instruction table:

1. **Parse** the fixed-width rows (parser)
2. **Expand** immediate-mode variants (expander)
3. **Validate** that concrete opcodes are unique (optional, on by default)
4. **Render** the rule table and the assembly table (serializer)

Both renderings are produced in memory before anything is written, and
both files are staged next to their targets before either is replaced,
so a failing run leaves existing output files untouched.

Example Usage
-------------
>>> from isagen import TableCompiler
>>> compiler = TableCompiler()
>>> tables = compiler.compile_builtin()
>>> compiler.write(tables)

Copyright (c) 2026 isagen Contributors
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union
import errno
import logging
import os
import tempfile

from isagen.config import CompilerConfig
from isagen.expander import check_unique_opcodes, expand_table
from isagen.parser import parse_table, parse_table_file
from isagen.records import InstructionRecord
from isagen.serializer import render_assembly_table, render_rule_table
from isagen.table_data import BUILTIN_TABLE

# Logger for this module
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompiledTables:
    """
    Result of compiling one instruction table.

    Attributes:
        records: The expanded records, in output order
        rules_text: Rendered rule (decode) table
        assembly_text: Rendered assembly table
    """
    records: tuple[InstructionRecord, ...]
    rules_text: str
    assembly_text: str

    @property
    def opcode_count(self) -> int:
        """Number of concrete (non-wildcard) opcodes."""
        return sum(1 for record in self.records if not record.is_wildcard)


class TableCompiler:
    """
    Compiles instruction tables into rule and assembly tables.

    Attributes:
        config: Output locations and validation settings
    """

    def __init__(self, config: Optional[CompilerConfig] = None):
        self.config = config if config is not None else CompilerConfig()

    def compile_string(
        self,
        text: str,
        source: str = "<table>",
        display_order: bool = True,
    ) -> CompiledTables:
        """
        Compile a table given as text.

        Args:
            text: Table rows in fixed-width format
            source: Name used in error messages
            display_order: True if rows are listed top-of-display first

        Returns:
            The expanded records and both renderings

        Raises:
            FormatError: On a malformed row
            OpcodeCollisionError: If collision checking is enabled and
                two concrete opcodes share bits
        """
        records = parse_table(text, display_order=display_order, source=source)
        return self._compile_records(records, source)

    def compile_file(
        self,
        path: Union[str, Path],
        display_order: bool = True,
    ) -> CompiledTables:
        """Compile a table stored in a UTF-8 file."""
        records = parse_table_file(path, display_order=display_order)
        return self._compile_records(records, str(path))

    def compile_builtin(self) -> CompiledTables:
        """Compile the built-in instruction table."""
        return self.compile_string(BUILTIN_TABLE, source="<builtin>")

    def _compile_records(
        self,
        records: list[InstructionRecord],
        source: str,
    ) -> CompiledTables:
        """Expand, validate and render parsed records."""
        expanded = expand_table(records)

        if self.config.check_collisions:
            check_unique_opcodes(expanded)

        tables = CompiledTables(
            records=tuple(expanded),
            rules_text=render_rule_table(expanded),
            assembly_text=render_assembly_table(expanded),
        )
        logger.info(
            f"Compiled {source}: {len(records)} rows -> "
            f"{len(expanded)} rules, {tables.opcode_count} opcodes"
        )
        return tables

    def write(self, tables: CompiledTables) -> tuple[Path, Path]:
        """
        Write both output files, replacing any existing ones.

        Each table goes to a temporary file next to its target first.
        The targets are only replaced once both temporary files are
        complete, so a failed write leaves the previous outputs intact.

        Returns:
            (rules_path, assembly_path)

        Raises:
            IsADirectoryError: If an output path names a directory
            OSError: If a file cannot be written
        """
        rules_path = self.config.rules_path
        assembly_path = self.config.assembly_path
        outputs = [
            (rules_path, tables.rules_text),
            (assembly_path, tables.assembly_text),
        ]

        for path, _ in outputs:
            if path.is_dir():
                raise IsADirectoryError(errno.EISDIR, "Output path is a directory", str(path))
            path.parent.mkdir(parents=True, exist_ok=True)

        staged: list[tuple[Path, Path]] = []
        try:
            for path, text in outputs:
                with tempfile.NamedTemporaryFile(
                    "w",
                    encoding="utf-8",
                    dir=path.parent,
                    prefix=f".{path.name}.",
                    suffix=".tmp",
                    delete=False,
                ) as handle:
                    staged.append((Path(handle.name), path))
                    handle.write(text)

            for temp_path, path in staged:
                os.replace(temp_path, path)
                logger.debug(f"Wrote {path}")
        finally:
            for temp_path, _ in staged:
                if temp_path.exists():
                    temp_path.unlink()

        return rules_path, assembly_path


def compile_table(
    text: str = BUILTIN_TABLE,
    display_order: bool = True,
    check_collisions: bool = True,
) -> CompiledTables:
    """
    Compile a table without writing any files.

    Example:
        >>> tables = compile_table()
        >>> tables.assembly_text.splitlines()[:2]
        ['add 0', 'addi1 128']
    """
    compiler = TableCompiler(CompilerConfig(check_collisions=check_collisions))
    return compiler.compile_string(text, display_order=display_order)
