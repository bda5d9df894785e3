"""Payload API module - the RTL fix injected into mainView.js."""

from .RtlPayload import RTL_MARKER, RtlPayload

__all__ = ["RTL_MARKER", "RtlPayload"]
