"""Top-level rtlfix configuration."""

import json
import tempfile
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .get_home_dir import get_home_dir
from .InstallConfig import InstallConfig
from .LogConfig import LogConfig
from .PatchConfig import PatchConfig


class RtlfixConfig(BaseModel):
    """Top-level configuration; every section has working defaults."""

    model_config = ConfigDict(extra="forbid")

    install: InstallConfig = Field(default_factory=InstallConfig)
    patch: PatchConfig = Field(default_factory=PatchConfig)
    log: LogConfig = Field(default_factory=LogConfig)

    @classmethod
    def get_config_path(cls) -> Path:
        """Get path to config file based on RTLFIX_HOME or default to ~/.rtlfix."""
        return get_home_dir("config.json")

    @classmethod
    def load(cls) -> "RtlfixConfig":
        """Load and validate config from file.

        A missing file yields the defaults.

        Raises:
            ValueError: If the file holds invalid JSON or fails validation
        """
        path = cls.get_config_path()

        if not path.exists():
            return cls()

        try:
            with path.open(encoding="utf-8") as fh:
                raw = json.load(fh)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file {path}: {e}") from e

        try:
            return cls(**raw)
        except ValidationError as e:
            error_list = e.errors() or [{"msg": str(e), "loc": ()}]
            first = error_list[0]
            error_msg = first.get("msg", str(e))
            loc = first.get("loc", ())
            field = ".".join(str(x) for x in loc) if isinstance(loc, (list, tuple)) else ""
            detail = f"{field}: {error_msg}" if field else error_msg
            raise ValueError(f"Configuration validation error: {detail}") from e

    @property
    def scratch_root(self) -> Path:
        """Directory under which extraction scratch directories are created."""
        if self.patch.scratch_dir:
            return Path(self.patch.scratch_dir).expanduser()
        return Path(tempfile.gettempdir())
