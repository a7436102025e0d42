"""
isagen Command-Line Interface
=============================

- **isagen**: compile an instruction table into the rule and assembly tables

The tool is a Click-based CLI application with help and error reporting.
"""

__all__ = ["isagen"]
