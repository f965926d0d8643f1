"""Commands that set up the data connection: PASV and PORT."""

from __future__ import annotations

import re
import socket
from collections.abc import Sequence

from .auth_commands import reject
from .handler_base import CommandHandler, send_custom_response, send_response
from .responses import FtpResponse
from .session import SessionState, TransferMode

PASSIVE_ADDRESS = "127.0.0.1"

_LEADING_INTEGER = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")


def _leading_int(token: str) -> int:
    """Read the integer at the start of token, ignoring what follows it."""
    match = _LEADING_INTEGER.match(token)
    if match is None:
        raise ValueError(f"not a number: {token!r}")
    return int(match.group(1))


def parse_port_argument(arg: str) -> tuple[str, int]:
    """Parse "h1,h2,h3,h4,p1,p2" into an IPv4 address and a port number."""
    tokens = arg.split(",")
    if tokens[-1] == "":
        tokens.pop()
    values = []
    for token in tokens:
        value = _leading_int(token)
        if not 0 <= value <= 255:
            raise ValueError(f"value out of range: {value}")
        values.append(value)
    if len(values) != 6:
        raise ValueError("expected six comma separated values")
    address = ".".join(str(value) for value in values[:4])
    return address, values[4] * 256 + values[5]


def create_passive_socket() -> tuple[socket.socket, str, int]:
    """Open a listening socket on a free port; return it with its address and port."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind(("", 0))
        sock.listen(5)
        port = sock.getsockname()[1]
    except OSError:
        sock.close()
        raise
    return sock, PASSIVE_ADDRESS, port


def format_pasv_reply(ip_address: str, port: int) -> str:
    """Return the 227 reply announcing a passive data address."""
    host = ip_address.replace(".", ",")
    return f"227 Entering Passive Mode ({host},{port // 256},{port % 256}).\r\n"


def _attach(
    session: SessionState,
    sock: socket.socket,
    address: tuple[str, int],
    mode: TransferMode,
) -> None:
    """Replace the session's data socket and record where it points."""
    if session.data_socket is not None:
        session.data_socket.close()
    session.data_socket = sock
    session.data_ip_address, session.data_port = address
    session.transfer_mode = mode


class PasvHandler(CommandHandler):
    """PASV: listen for the client's data connection."""

    def handle_request(self, args: Sequence[str], session: SessionState) -> None:
        if reject(
            session,
            (not args, FtpResponse.SYNTAX_ERROR_PARAMS),
            (session.authenticated, FtpResponse.NOT_LOGGED_IN),
        ):
            return
        try:
            sock, ip_address, port = create_passive_socket()
        except OSError:
            send_response(session, FtpResponse.DATA_CONN_OPEN_NO_TRANSFER)
            return
        _attach(session, sock, (ip_address, port), TransferMode.PASSIVE)
        send_custom_response(session, format_pasv_reply(ip_address, port))


class PortHandler(CommandHandler):
    """PORT: connect to the address the client gives for data."""

    def handle_request(self, args: Sequence[str], session: SessionState) -> None:
        if reject(
            session,
            (session.authenticated, FtpResponse.NOT_LOGGED_IN),
            (len(args) == 1, FtpResponse.SYNTAX_ERROR),
        ):
            return
        try:
            address = parse_port_argument(args[0])
        except ValueError:
            send_response(session, FtpResponse.SYNTAX_ERROR)
            return
        if session.data_socket is not None:
            session.data_socket.close()
            session.data_socket = None

        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.connect(address)
        except OSError:
            sock.close()
            send_response(session, FtpResponse.CANT_OPEN_DATA_CONN)
            return
        _attach(session, sock, address, TransferMode.ACTIVE)
        send_response(session, FtpResponse.COMMAND_OK)