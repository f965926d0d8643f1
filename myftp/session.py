"""Per-client state of a control connection."""

from __future__ import annotations

import socket
from dataclasses import dataclass
from enum import Enum
from typing import Any


class TransferMode(Enum):
    PASSIVE = "passive"
    ACTIVE = "active"
    NONE = "none"


@dataclass(eq=False)
class SessionState:
    """State of one client: login, working directory and data connection."""

    connection: Any
    root_directory: str
    authenticated: bool = False
    current_directory: str = "/"
    username: str = ""
    transfer_mode: TransferMode = TransferMode.NONE
    data_socket: socket.socket | None = None
    data_ip_address: str = ""
    data_port: int = 0

    def send(self, text: str) -> None:
        """Write text on the control connection."""
        try:
            self.connection.sendall(text.encode("utf-8", "surrogateescape"))
        except OSError as exc:
            raise ConnectionError(
                "an error occurred when writing to network socket"
            ) from exc

    def close(self) -> None:
        """Close the control connection."""
        try:
            self.connection.close()
        except OSError:
            pass