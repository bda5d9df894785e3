"""Install locator configuration."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class InstallConfig(BaseModel):
    """Where to look for Claude Desktop and how to recognise it."""

    model_config = ConfigDict(extra="forbid")

    base_dir: str | None = Field(
        None,
        description="Directory holding app-X.Y.Z folders; defaults to %LOCALAPPDATA%/AnthropicClaude",
    )
    exe_name: str = Field("claude.exe", description="Launcher executable inside each app-X.Y.Z folder")
    process_name: str = Field("claude.exe", description="Process image name used by the running check")

    @field_validator("base_dir")
    @classmethod
    def _normalize_base_dir(cls, v: str | None) -> str | None:
        """Expand ~ and make absolute."""
        from pathlib import Path

        if v is None:
            return None
        return str(Path(v).expanduser().absolute())
