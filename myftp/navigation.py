"""Handlers that move around or change the served directory tree."""

from __future__ import annotations

import os
import posixpath
import shutil
from collections.abc import Sequence

from .auth_commands import reject
from .handler_base import CommandHandler, send_response
from .responses import FtpResponse
from .session import SessionState


def _normalize(path: str) -> str:
    """Normalize a virtual path lexically, keeping a single leading slash."""
    norm = posixpath.normpath(path)
    if norm.startswith("//"):
        norm = "/" + norm.lstrip("/")
    return norm


def _resolve_inside(root: str, target: str) -> str | None:
    """Return the canonical form of target if it exists inside root."""
    try:
        canonical = os.path.realpath(target, strict=True)
        relative = os.path.relpath(canonical, root)
    except (OSError, ValueError):
        return None
    if relative.startswith(".."):
        return None
    return canonical


def _change_directory(session: SessionState, new_directory: str) -> bool:
    """Move the session into new_directory; return whether it succeeded."""
    root = session.root_directory
    if new_directory.startswith("/"):
        new_current = new_directory
    else:
        new_current = posixpath.join(posixpath.join(root, session.current_directory), new_directory)
    target = os.path.join(root, new_current[1:])

    canonical = _resolve_inside(root, target)
    if canonical is None or not os.access(canonical, os.R_OK) or not os.path.isdir(canonical):
        return False

    dir_path = _normalize(new_current)
    if dir_path and not dir_path.endswith("/"):
        dir_path += "/"
    session.current_directory = dir_path
    return True


def _remove(path: str) -> bool:
    """Delete a file or a whole directory tree; return whether it worked."""
    try:
        if os.path.isdir(path):
            shutil.rmtree(path)
        else:
            os.remove(path)
    except OSError:
        return False
    return True


class CwdHandler(CommandHandler):
    """CWD: change the working directory."""

    def handle_request(self, args: Sequence[str], session: SessionState) -> None:
        if reject(
            session,
            (len(args) == 1, FtpResponse.SYNTAX_ERROR_PARAMS),
            (session.authenticated, FtpResponse.NOT_LOGGED_IN),
            (len(args) == 1 and args[0] != "", FtpResponse.SYNTAX_ERROR_PARAMS),
        ):
            return
        changed = _change_directory(session, args[0])
        send_response(
            session,
            FtpResponse.FILE_ACTION_COMPLETED if changed else FtpResponse.FILE_UNAVAILABLE_NOT_FOUND,
        )


class CdupHandler(CommandHandler):
    """CDUP: move to the parent directory; always replies "command okay"."""

    def handle_request(self, args: Sequence[str], session: SessionState) -> None:
        if not args and session.authenticated:
            _change_directory(session, "..")
        send_response(session, FtpResponse.COMMAND_OK)


class DeleHandler(CommandHandler):
    """DELE: delete a file or a whole directory tree."""

    def handle_request(self, args: Sequence[str], session: SessionState) -> None:
        if reject(
            session,
            (len(args) == 1, FtpResponse.SYNTAX_ERROR_PARAMS),
            (session.authenticated, FtpResponse.NOT_LOGGED_IN),
        ):
            return

        requested = args[0]
        root = session.root_directory
        if requested.startswith("/"):
            target = os.path.join(root, requested[1:])
        else:
            current = posixpath.join(root, session.current_directory)
            target = os.path.join(root, current[1:], requested)

        canonical = _resolve_inside(root, target)
        deleted = (
            canonical is not None
            and os.path.exists(canonical)
            and os.access(os.path.dirname(canonical), os.W_OK)
            and _remove(canonical)
        )
        send_response(
            session,
            FtpResponse.FILE_ACTION_COMPLETED if deleted else FtpResponse.FILE_UNAVAILABLE_NOT_FOUND,
        )