"""Output schemas for patch, unpatch and status commands."""

from typing import Any

from pydantic import Field

from ._base import BaseOutputSchema
from ._registry import register_output_schema


class PatchPatchOutput(BaseOutputSchema):
    """Output schema for the patch command.

    Output structure:
    - errors / warnings: list[str]
    - version: Claude Desktop version, empty string if not located
    - state: last transaction state reached (e.g. "done", "rolled_back")
    - hash_before / hash_after: integrity hashes, empty strings when unknown
    - backup_skipped: True when existing backups were reused
    - rolled_back: True when live files were restored after a late failure
    - error_kind / hint: classification and remediation, empty on success
    - restore_error: message of a failed rollback, empty if none
    - pending: live files still waiting for their backup after a failed rollback
    """

    version: str = Field(..., description="Claude Desktop version, empty if not located")
    state: str = Field(..., description="Last transaction state reached")
    hash_before: str = Field(..., description="Embedded hash before patching")
    hash_after: str = Field(..., description="Embedded hash after patching")
    backup_skipped: bool = Field(..., description="Existing backups were reused")
    rolled_back: bool = Field(..., description="Live files were restored from backups")
    error_kind: str = Field(..., description="Error classification, empty on success")
    hint: str = Field(..., description="Remediation hint, empty on success")
    restore_error: str = Field(..., description="Rollback failure message, empty if none")
    pending: list[str] = Field(..., description="Live files still to be restored from their backups")


class PatchUnpatchOutput(BaseOutputSchema):
    """Output schema for the unpatch command."""

    version: str = Field(..., description="Claude Desktop version, empty if not located")
    restored: list[str] = Field(..., description="Live files rewritten from backups")
    pending: list[str] = Field(..., description="Live files still to be restored after a failed restore")
    error_kind: str = Field(..., description="Error classification, empty on success")
    hint: str = Field(..., description="Remediation hint, empty on success")


class PatchStatusOutput(BaseOutputSchema):
    """Output schema for the status command.

    code_patched is None when the code-level check could not run.
    """

    version: str = Field(..., description="Claude Desktop version, empty if not located")
    all_versions: list[str] = Field(..., description="Every installed app-X.Y.Z version, newest first")
    running: bool = Field(..., description="Claude Desktop process detected")
    patched: bool = Field(..., description="Marker file present")
    patch_info: dict[str, Any] | None = Field(..., description="Decoded marker, None if absent or unreadable")
    code_patched: bool | None = Field(..., description="Payload marker found inside app.asar")
    backups_exist: bool = Field(..., description="Both .bak files present")
    paths: dict[str, str] = Field(..., description="app_dir, asar and exe paths")
    error_kind: str = Field(..., description="Error classification, empty on success")
    hint: str = Field(..., description="Remediation hint, empty on success")


register_output_schema("patch", "patch", PatchPatchOutput)
register_output_schema("patch", "unpatch", PatchUnpatchOutput)
register_output_schema("patch", "status", PatchStatusOutput)
