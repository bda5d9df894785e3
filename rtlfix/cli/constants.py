"""CLI text constants."""

HELP = """
rtlfix - fix right-to-left text rendering in Claude Desktop

Usage:
  rtlfix patch      Apply the RTL fix (backs up original files first)
  rtlfix unpatch    Remove the RTL fix and restore original files
  rtlfix status     Show current patch status and Claude version info
  rtlfix help       Show this help message

Options:
  -d, --display     Output format: text (default), json or yaml
  --version         Show the rtlfix version

Safety:
  - Original files are backed up before any changes
  - Run "unpatch" anytime to restore the original state
  - If Claude crashes after patching, just run "unpatch" to fix it

Requirements:
  - Claude Desktop must NOT be running (close it first, check system tray)
"""
