"""StageResult dataclass for 4-stage command pattern."""

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field


@dataclass
class StageResult:
    """Result of an rtlfix command.

    The CLI shows announce before any work starts, then drives
    progress_callback, a generator that does the work, yields
    ``(fraction, message)`` pairs and fills in result, output and success.
    """

    announce: str
    progress_callback: Callable[["StageResult"], Iterator[tuple[float, str]]]
    result: str = ""
    output: dict = field(default_factory=dict)
    success: bool = False

    def run(self) -> "StageResult":
        """Drive progress_callback to completion without displaying progress."""
        for _ in self.progress_callback(self):
            pass
        return self
