"""Formatting commands applied to the document buffer."""

from .formatting import COMMAND_NAMES, CommandResult, Edit, apply_command

__all__ = ["COMMAND_NAMES", "CommandResult", "Edit", "apply_command"]
