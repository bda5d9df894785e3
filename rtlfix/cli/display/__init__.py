"""Display utilities for the CLI."""

from .CLIDisplay import CLIDisplay

__all__ = ["CLIDisplay"]
