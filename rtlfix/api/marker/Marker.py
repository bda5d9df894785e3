"""Marker record written after a successful patch."""

from pydantic import BaseModel, ConfigDict, Field


class MarkerHashes(BaseModel):
    model_config = ConfigDict(extra="allow")

    original: str = Field(..., description="Embedded hash before patching")
    patched: str = Field(..., description="Embedded hash after patching")


class Marker(BaseModel):
    """Contents of .rtl-patched.json.

    On disk the keys are camelCase (patchedAt, claudeVersion); both spellings
    are accepted when reading.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    tool: str = Field(..., description="Name of the tool that wrote the marker")
    tool_version: str = Field(..., alias="version", description="Version of that tool")
    patched_at: str = Field(..., alias="patchedAt", description="ISO-8601 time of the patch")
    claude_version: str = Field(..., alias="claudeVersion", description="Claude Desktop version patched")
    hashes: MarkerHashes

    @property
    def hash_before(self) -> str:
        return self.hashes.original

    @property
    def hash_after(self) -> str:
        return self.hashes.patched

    def to_json_dict(self) -> dict:
        """Dict with the on-disk key names."""
        return self.model_dump(mode="json", by_alias=True)
