"""API module for rtlfix.

Command functions defined here are the single source of truth for the CLI.
Each returns a StageResult; library functions in the subpackages raise
RtlfixError subclasses and never print.
"""

__all__ = []
