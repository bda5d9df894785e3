"""Shared fields of every command output."""

from pydantic import BaseModel, ConfigDict, Field


class BaseOutputSchema(BaseModel):
    """Base schema for rtlfix command outputs.

    Unknown keys are rejected so a command cannot silently emit fields the
    CLI and JSON consumers do not know about.
    """

    model_config = ConfigDict(extra="forbid")

    errors: list[str] = Field(default_factory=list, description="Error messages, empty on success")
    warnings: list[str] = Field(default_factory=list, description="Non-fatal notices such as reused backups")
