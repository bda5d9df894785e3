"""rtlfix - right-to-left text fix for Claude Desktop.

Patches the packaged ``app.asar`` and the integrity hash embedded in the
launcher executable as one unit, and restores both from backups on demand.
"""
