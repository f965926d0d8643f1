"""Command-line entry point and request dispatch of the FTP server."""

from __future__ import annotations

import functools
import os
import re
import sys
from collections.abc import Sequence

from .auth_commands import (
    HelpHandler,
    NoopHandler,
    PassHandler,
    PwdHandler,
    QuitHandler,
    UserHandler,
)
from .data_connection import PasvHandler, PortHandler
from .handler_base import send_response
from .logger import Logger, LogLevel
from .navigation import CdupHandler, CwdHandler, DeleHandler
from .registry import CommandRegistry
from .responses import FtpResponse
from .server import NetworkServer
from .session import SessionState
from .transfers import ListHandler, RetrHandler, StorHandler

HELP_FLAGS = ("-h", "--help")
USAGE = "USAGE: ./myftp port path"
HELP = (
    "\tport is the port number on which the server socket listens\n"
    "\tpath is the path to the home directory for the Anonymous user"
)

_WHITESPACE = " \t\n\r\f\v"
_LEADING_INTEGER = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")
_INT_MIN, _INT_MAX = -(2**31), 2**31 - 1


class InvalidArgument(Exception):
    """Raised when the command line or the served directory is unusable."""


def _parse_port(text: str) -> int:
    match = _LEADING_INTEGER.match(text)
    if match is None:
        raise InvalidArgument(f"invalid port: {text}")
    value = int(match.group(1))
    if not _INT_MIN <= value <= _INT_MAX:
        raise InvalidArgument(f"port out of range: {text}")
    return value


def parse_arguments(argv: Sequence[str]) -> tuple[int, str]:
    """Return the port and directory given on the command line."""
    if len(argv) == 1 and argv[0] in HELP_FLAGS:
        print(USAGE)
        print(HELP)
        raise InvalidArgument("invalid arguments")
    if len(argv) != 2:
        print(USAGE)
        raise InvalidArgument("invalid arguments")
    return _parse_port(argv[0]), argv[1]


def root_directory(path: str) -> str:
    """Return the canonical absolute form of an existing directory."""
    absolute = os.path.abspath(path)
    if not os.path.exists(absolute):
        raise InvalidArgument("The specified directory does not exist")
    if not os.path.isdir(absolute):
        raise InvalidArgument("The specified path is not a directory")
    return os.path.realpath(absolute)


def trim(text: str) -> str:
    """Strip leading and trailing whitespace."""
    return text.strip(_WHITESPACE)


def tokenize(text: str) -> list[str]:
    """Split on single spaces; empty fields between spaces are kept."""
    if not text:
        return []
    tokens = text.split(" ")
    if tokens[-1] == "":
        tokens.pop()
    return tokens


def build_registry() -> CommandRegistry:
    """Return a registry holding every supported command."""
    registry = CommandRegistry()
    handlers = {
        "USER": UserHandler(),
        "PASS": PassHandler(),
        "CWD": CwdHandler(),
        "QUIT": QuitHandler(),
        "DELE": DeleHandler(),
        "PWD": PwdHandler(),
        "NOOP": NoopHandler(),
        "CDUP": CdupHandler(),
        "PASV": PasvHandler(),
        "PORT": PortHandler(),
        "LIST": ListHandler(),
        "RETR": RetrHandler(),
        "STOR": StorHandler(),
        "HELP": HelpHandler(),
    }
    for command, handler in handlers.items():
        registry.register(command, handler)
    return registry


def handle_request(
    request: str, session: SessionState, registry: CommandRegistry
) -> None:
    """Parse one request line and run the matching command."""
    tokens = tokenize(trim(request))
    if not tokens:
        send_response(session, FtpResponse.SYNTAX_ERROR)
        return
    command, *args = tokens
    handler = registry.get(command.upper())
    if handler is None:
        send_response(session, FtpResponse.SYNTAX_ERROR)
        return
    handler.handle_request(args, session)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the server; return 84 on any error."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        port, path = parse_arguments(argv)
        root = root_directory(path)
        logger = Logger(LogLevel.TRACE)
        registry = build_registry()
        handler = functools.partial(handle_request, registry=registry)
        with NetworkServer(port, logger, root, handler) as server:
            server.run()
    except Exception as exc:
        print(exc, file=sys.stderr)
        return 84
    return 0


if __name__ == "__main__":
    sys.exit(main())