"""
Compiler Configuration
======================

Output locations and validation settings. Configuration can come from:
- Default values (defined here)
- Environment variables
- Command-line options (applied by the CLI on top of from_env())
"""

from dataclasses import dataclass, field
from pathlib import Path
import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_RULES_FILENAME = "instruction_rules.data"
DEFAULT_ASSEMBLY_FILENAME = "assembly.data"

_FALSE_VALUES = {"0", "false", "no", "off"}
_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class CompilerConfig:
    """
    Configuration for a table compiler run.

    Attributes:
        output_dir: Directory both output files are written to
        rules_filename: File name of the rule (decode) table
        assembly_filename: File name of the assembly table
        check_collisions: Fail when two concrete opcodes share bits
    """

    output_dir: Path = field(default_factory=lambda: Path("."))
    rules_filename: str = DEFAULT_RULES_FILENAME
    assembly_filename: str = DEFAULT_ASSEMBLY_FILENAME
    check_collisions: bool = True

    @property
    def rules_path(self) -> Path:
        """Full path of the rule table output."""
        return self.output_dir / self.rules_filename

    @property
    def assembly_path(self) -> Path:
        """Full path of the assembly table output."""
        return self.output_dir / self.assembly_filename

    @classmethod
    def from_env(cls) -> "CompilerConfig":
        """
        Create a CompilerConfig from environment variables.

        Environment variables (all optional):
            ISAGEN_OUTPUT_DIR: Output directory
            ISAGEN_RULES_FILE: Rule table file name
            ISAGEN_ASSEMBLY_FILE: Assembly table file name
            ISAGEN_CHECK_COLLISIONS: "0"/"false"/"no"/"off" disables the check

        Returns:
            CompilerConfig with values from environment variables
        """
        config = cls()

        if output_dir := os.environ.get("ISAGEN_OUTPUT_DIR"):
            config.output_dir = Path(output_dir)

        if rules := os.environ.get("ISAGEN_RULES_FILE"):
            config.rules_filename = rules

        if assembly := os.environ.get("ISAGEN_ASSEMBLY_FILE"):
            config.assembly_filename = assembly

        if check := os.environ.get("ISAGEN_CHECK_COLLISIONS"):
            value = check.strip().lower()
            if value in _FALSE_VALUES:
                config.check_collisions = False
            elif value in _TRUE_VALUES:
                config.check_collisions = True
            else:
                logger.warning(f"Ignoring invalid ISAGEN_CHECK_COLLISIONS={check!r}")

        return config
