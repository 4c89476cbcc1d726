"""Command-line adapter for preference get/put commands."""

from .commands import PreferenceCommandHandler

__all__ = ["PreferenceCommandHandler"]
