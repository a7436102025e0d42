"""
isagen - Instruction Table Compiler Command-Line Interface
==========================================================

Compiles an instruction table into instruction_rules.data and
assembly.data. Without arguments the built-in table is compiled into
the current directory.

Usage Examples
--------------
Built-in table, current directory:
    $ isagen

Custom table and output directory:
    $ isagen -t table.txt -o build/

Re-expand a previously generated rule table:
    $ isagen -t instruction_rules.data --ascending -o regen/

Environment variables ISAGEN_OUTPUT_DIR, ISAGEN_RULES_FILE,
ISAGEN_ASSEMBLY_FILE and ISAGEN_CHECK_COLLISIONS provide defaults that
the options below override.

Copyright (c) 2026 isagen Contributors
"""

from pathlib import Path
from typing import Optional
import logging

import click

from isagen import __version__
from isagen.cli.errors import handle_cli_exception
from isagen.compiler import TableCompiler
from isagen.config import CompilerConfig


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.option(
    "-t", "--table",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Instruction table file (default: built-in table)",
)
@click.option(
    "--ascending",
    is_flag=True,
    help="Table rows are in ascending opcode order (e.g. a generated rule table) "
         "instead of display order",
)
@click.option(
    "-o", "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory for the output files (default: current directory)",
)
@click.option(
    "--rules-name",
    help="Rule table file name (default: instruction_rules.data)",
)
@click.option(
    "--assembly-name",
    help="Assembly table file name (default: assembly.data)",
)
@click.option(
    "--no-check",
    is_flag=True,
    help="Skip the check that no two opcodes expand to the same bits",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="isagen")
def main(
    table: Optional[Path],
    ascending: bool,
    output_dir: Optional[Path],
    rules_name: Optional[str],
    assembly_name: Optional[str],
    no_check: bool,
    verbose: bool,
) -> None:
    """
    Compile an instruction table into rule and assembly tables.

    Base instructions are expanded into their immediate addressing
    variants (i1, i2, i12). Field layout rows containing '2' are copied
    to the rule table and left out of the assembly table.

    \b
    Examples:
        isagen                       # Built-in table into ./
        isagen -t table.txt -o out/  # Custom table
        isagen --no-check            # Skip the opcode collision check
    """
    setup_logging(verbose)

    config = CompilerConfig.from_env()
    if output_dir is not None:
        config.output_dir = output_dir
    if rules_name:
        config.rules_filename = rules_name
    if assembly_name:
        config.assembly_filename = assembly_name
    if no_check:
        config.check_collisions = False

    compiler = TableCompiler(config)

    try:
        if table is not None:
            if verbose:
                click.echo(f"Compiling {table}...")
            tables = compiler.compile_file(table, display_order=not ascending)
        else:
            if verbose:
                click.echo("Compiling built-in table...")
            tables = compiler.compile_builtin()

        rules_path, assembly_path = compiler.write(tables)

        if verbose:
            click.echo(f"Wrote {len(tables.records)} rules to {rules_path}")
            click.echo(f"Wrote {tables.opcode_count} opcodes to {assembly_path}")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


if __name__ == "__main__":
    main()
