"""Mapping from command names to their handlers."""

from __future__ import annotations

from .handler_base import CommandHandler


class CommandRegistry:
    """Holds the handler registered for each command name."""

    def __init__(self) -> None:
        self._commands: dict[str, CommandHandler] = {}

    def register(self, command: str, handler: CommandHandler) -> None:
        """Register a handler, replacing any earlier one for the command."""
        self._commands[command] = handler

    def get(self, command: str) -> CommandHandler | None:
        """Return the handler for a command, or None if there is none."""
        return self._commands.get(command)

    def __contains__(self, command: object) -> bool:
        return command in self._commands