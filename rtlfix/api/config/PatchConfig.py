"""Patch transaction configuration."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PatchConfig(BaseModel):
    """Where the payload goes inside the archive and how the repack is checked."""

    model_config = ConfigDict(extra="forbid")

    target_path: str = Field(
        ".vite/build/mainView.js",
        description="File inside app.asar that receives the payload (forward slashes)",
    )
    trailing_comment: str = Field(
        "//# sourceMappingURL=mainView.js.map",
        description="Payload is inserted before this comment when present, else appended",
    )
    min_archive_size: int = Field(1000, ge=0, description="Repacked archives smaller than this are rejected")
    scratch_dir: str | None = Field(None, description="Parent of extraction directories; defaults to the system temp dir")

    @field_validator("target_path")
    @classmethod
    def _relative_target(cls, v: str) -> str:
        if not v or v.startswith("/") or ".." in v.split("/"):
            raise ValueError(f"target_path must be a relative path inside the archive, got {v!r}")
        return v
