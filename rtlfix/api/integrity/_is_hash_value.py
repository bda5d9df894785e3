import re

_HEX64 = re.compile(rb"^[0-9a-f]{64}$")


def _is_hash_value(value: str | bytes) -> bool:
    """True for exactly 64 lowercase hex characters."""
    raw = value.encode("ascii", errors="replace") if isinstance(value, str) else value
    return bool(_HEX64.match(raw))
