"""Get rtlfix home directory path or path under it."""

import os
from pathlib import Path

from ...constants import RTLFIX_HOME_EXT


def get_home_dir(*parts: str) -> Path:
    """Get rtlfix home directory path or path under it.

    Checks RTLFIX_HOME environment variable first, defaults to ~/.rtlfix if not set.

    Examples:
        >>> get_home_dir()
        Path("/Users/user/.rtlfix")
        >>> get_home_dir("config.json")
        Path("/Users/user/.rtlfix/config.json")
    """
    home_env = os.environ.get("RTLFIX_HOME")
    if home_env:
        home = Path(home_env).expanduser().resolve()
    else:
        # Check HOME environment variable (for test isolation)
        user_home = os.environ.get("HOME")
        home = Path(user_home) / RTLFIX_HOME_EXT if user_home else Path.home() / RTLFIX_HOME_EXT

    return home / Path(*parts) if parts else home
