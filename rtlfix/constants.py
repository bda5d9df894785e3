"""Shared constants for rtlfix."""

RTLFIX_HOME_EXT = ".rtlfix"  # user-level state/config directory suffix

# Name written into the marker file's "tool" field
TOOL_NAME = "rtlfix"

# Marker file kept next to app.asar
MARKER_FILE = ".rtl-patched.json"

BACKUP_SUFFIX = ".bak"
