"""Commands that move data over the data connection: LIST, RETR and STOR."""

from __future__ import annotations

import os
import socket
import subprocess
from collections.abc import Callable, Sequence
from typing import TypeVar

from .handler_base import CommandHandler, send_response
from .responses import FtpResponse
from .session import SessionState, TransferMode

LS_COMMAND = "/bin/ls"
_CHUNK_SIZE = 8192

_T = TypeVar("_T")


def resolve_path(session: SessionState, requested: str | None = None) -> str:
    """Return the local path for a requested name, or for the current directory."""
    root = session.root_directory
    current = session.current_directory
    if requested is None:
        return root if current == "/" else root + current
    if requested.startswith("/"):
        return root + requested
    if current == "/":
        return root + "/" + requested
    return root + current + "/" + requested


def _run_transfer(
    session: SessionState, transfer: Callable[[socket.socket], _T]
) -> tuple[bool, _T | None]:
    """Open the data connection, run transfer on it and close it.

    Returns whether the connection could be opened, and what transfer returned.
    """
    data_socket = session.data_socket
    if data_socket is None:
        send_response(session, FtpResponse.CANT_OPEN_DATA_CONN)
        return False, None

    send_response(session, FtpResponse.FILE_STATUS_OK_OPENING_CONN)
    session.data_socket = None

    if session.transfer_mode is TransferMode.PASSIVE:
        try:
            connection, _ = data_socket.accept()
        except OSError:
            data_socket.close()
            send_response(session, FtpResponse.CANT_OPEN_DATA_CONN)
            return False, None
        with data_socket, connection:
            return True, transfer(connection)

    with data_socket:
        return True, transfer(data_socket)


def _list_directory(path: str, connection: socket.socket) -> None:
    """Write a long listing of path to the connection."""
    try:
        subprocess.run(
            [LS_COMMAND, "-la", path],
            stdout=connection.fileno(),
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError:
        pass


def _send_file(path: str, connection: socket.socket) -> None:
    """Write the contents of a file to the connection."""
    try:
        with open(path, "rb") as source:
            connection.sendfile(source)
    except OSError:
        pass


def _receive_file(path: str, connection: socket.socket) -> bool:
    """Write everything read from the connection into a file."""
    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o644)
    except OSError:
        return False
    try:
        with open(fd, "wb") as target:
            while chunk := connection.recv(_CHUNK_SIZE):
                target.write(chunk)
    except OSError:
        return False
    return True


class ListHandler(CommandHandler):
    """LIST: send a directory listing over the data connection."""

    def handle_request(self, args: Sequence[str], session: SessionState) -> None:
        if not session.authenticated:
            send_response(session, FtpResponse.NOT_LOGGED_IN)
            return
        if session.transfer_mode is TransferMode.NONE:
            send_response(session, FtpResponse.CANT_OPEN_DATA_CONN)
            return

        path = resolve_path(session, args[0] if args else None)
        if not os.path.isdir(path):
            send_response(session, FtpResponse.FILE_UNAVAILABLE)
            return

        opened, _ = _run_transfer(session, lambda conn: _list_directory(path, conn))
        if opened:
            send_response(session, FtpResponse.CLOSING_DATA_CONN)


class RetrHandler(CommandHandler):
    """RETR: send a file over the data connection."""

    def handle_request(self, args: Sequence[str], session: SessionState) -> None:
        if not session.authenticated:
            send_response(session, FtpResponse.NOT_LOGGED_IN)
            return
        if len(args) != 1:
            send_response(session, FtpResponse.SYNTAX_ERROR_PARAMS)
            return
        if session.transfer_mode is TransferMode.NONE:
            send_response(session, FtpResponse.CANT_OPEN_DATA_CONN)
            return

        path = resolve_path(session, args[0])
        if not os.path.isfile(path) or not os.access(path, os.R_OK):
            send_response(session, FtpResponse.FILE_UNAVAILABLE_NOT_FOUND)
            return

        opened, _ = _run_transfer(session, lambda conn: _send_file(path, conn))
        if opened:
            send_response(session, FtpResponse.CLOSING_DATA_CONN)


class StorHandler(CommandHandler):
    """STOR: store a file received over the data connection."""

    def handle_request(self, args: Sequence[str], session: SessionState) -> None:
        if not session.authenticated:
            send_response(session, FtpResponse.NOT_LOGGED_IN)
            return
        if len(args) != 1:
            send_response(session, FtpResponse.SYNTAX_ERROR_PARAMS)
            return
        if session.transfer_mode is TransferMode.NONE:
            send_response(session, FtpResponse.CANT_OPEN_DATA_CONN)
            return

        path = resolve_path(session, args[0])
        parent = os.path.dirname(path)
        if not os.path.isdir(parent) or not os.access(parent, os.W_OK):
            send_response(session, FtpResponse.FILE_UNAVAILABLE)
            return
        if os.path.exists(path) and not os.access(path, os.W_OK):
            send_response(session, FtpResponse.FILE_UNAVAILABLE)
            return

        opened, success = _run_transfer(session, lambda conn: _receive_file(path, conn))
        if not opened:
            return
        if success:
            send_response(session, FtpResponse.CLOSING_DATA_CONN)
        else:
            try:
                os.unlink(path)
            except OSError:
                pass
            send_response(session, FtpResponse.ACTION_ABORTED_LOCAL_ERROR)