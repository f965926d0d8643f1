"""Base class for command handlers and reply helpers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from .responses import FtpResponse, response_text
from .session import SessionState


def send_response(session: SessionState, response: FtpResponse) -> None:
    """Send a standard reply to the session's client."""
    session.send(response_text(response))


def send_custom_response(session: SessionState, text: str) -> None:
    """Send a preformatted reply to the session's client."""
    session.send(text)


class CommandHandler(ABC):
    """Handles one FTP command."""

    @abstractmethod
    def handle_request(self, args: Sequence[str], session: SessionState) -> None:
        """Carry out the command with its arguments for a session."""