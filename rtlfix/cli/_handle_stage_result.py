"""Decorator to handle StageResult for CLI display."""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import TypeVar

import click

from ._run_single_execution import _run_single_execution

F = TypeVar("F", bound=Callable)

DISPLAY_FORMATS = ("text", "json", "yaml")


def _extract_display_format() -> str:
    """Get the display format from the active Typer/Click context chain, "text" if unset."""
    current: click.Context | None = click.get_current_context(silent=True)
    while current is not None:
        obj = current.obj
        if isinstance(obj, dict) and "display_format" in obj:
            value = obj["display_format"]
            if value in DISPLAY_FORMATS:
                return value
            raise ValueError(f"Invalid display_format value: {value!r}")
        current = current.parent
    return "text"


def _handle_stage_result(
    func: F,
    result_printer: Callable[[dict], None] | None = None,
) -> F:
    """Wrap a command function to handle StageResult for CLI display.

    1. Announce (stderr)
    2. Progress (stderr)
    3. Result (stderr)
    4. Output (stdout: human summary, JSON or YAML)
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        from rtlfix.cli.display import CLIDisplay

        _run_single_execution(func, args, kwargs, CLIDisplay(), _extract_display_format(), result_printer)

    return wrapper  # type: ignore[return-value]
