"""Check whether the Claude Desktop process is running."""

import logging
import subprocess
import sys

logger = logging.getLogger(__name__)


def is_app_running(process_name: str = "claude.exe") -> bool:
    """Return True if a process with this image name is running.

    Uses tasklist on Windows and pgrep elsewhere. A probe that cannot run
    counts as not running.
    """
    if sys.platform == "win32":
        cmd = ["tasklist", "/FI", f"IMAGENAME eq {process_name}", "/NH"]
    else:
        cmd = ["pgrep", "-x", process_name]

    try:
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=10)
    except (subprocess.TimeoutExpired, FileNotFoundError, OSError) as e:
        logger.debug("Process probe %s failed: %s", cmd[0], e)
        return False

    if sys.platform == "win32":
        return process_name.lower() in result.stdout.lower()
    return result.returncode == 0
