"""Command-line interface for glyphcarve.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Progress bar over the characters being carved
- Verbose/quiet output modes
- Dry runs that carve without writing a mesh
"""

from glyphcarve.cli.app import cli, main

__all__ = ["cli", "main"]
