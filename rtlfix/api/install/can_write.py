"""Non-destructive write probe."""

import errno
from pathlib import Path

_LOCKED_ERRNOS = {errno.EACCES, errno.EPERM, errno.EBUSY}


def can_write(path: Path) -> bool:
    """Return False if path cannot be opened for read-write.

    The file is opened r+b and closed without writing. Errors other than
    permission or busy errors propagate.
    """
    try:
        with Path(path).open("r+b"):
            pass
    except PermissionError:
        return False
    except OSError as e:
        if e.errno in _LOCKED_ERRNOS:
            return False
        raise
    return True
