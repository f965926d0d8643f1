"""Handlers for login, session and informational commands."""

from __future__ import annotations

from collections.abc import Sequence

from .handler_base import CommandHandler, send_custom_response, send_response
from .responses import FtpResponse
from .session import SessionState

GUEST_USER = "Anonymous"


def reject(session: SessionState, *checks: tuple[bool, FtpResponse]) -> bool:
    """Send the response of the first failed check; return whether one failed."""
    for passed, response in checks:
        if not passed:
            send_response(session, response)
            return True
    return False


class UserHandler(CommandHandler):
    """USER: record the user name."""

    def handle_request(self, args: Sequence[str], session: SessionState) -> None:
        if reject(session, (len(args) == 1, FtpResponse.SYNTAX_ERROR_PARAMS)):
            return
        session.username = args[0]
        session.authenticated = True
        send_response(session, FtpResponse.USERNAME_OK_NEED_PASSWORD)


class PassHandler(CommandHandler):
    """PASS: only the anonymous user with an empty password may log in."""

    def handle_request(self, args: Sequence[str], session: SessionState) -> None:
        if reject(
            session,
            (len(args) <= 1, FtpResponse.SYNTAX_ERROR_PARAMS),
            (bool(session.username), FtpResponse.BAD_CMD_SEQUENCE),
        ):
            return
        if not args and session.username == GUEST_USER:
            session.authenticated = True
            send_response(session, FtpResponse.USER_LOGGED_IN)
        else:
            session.username = ""
            send_response(session, FtpResponse.NOT_LOGGED_IN)


class QuitHandler(CommandHandler):
    """QUIT: log out and close the control connection."""

    def handle_request(self, args: Sequence[str], session: SessionState) -> None:
        if reject(session, (not args, FtpResponse.SYNTAX_ERROR_PARAMS)):
            return
        session.authenticated = False
        send_response(session, FtpResponse.SERVICE_CLOSING)
        session.close()


class NoopHandler(CommandHandler):
    """NOOP: do nothing."""

    def handle_request(self, args: Sequence[str], session: SessionState) -> None:
        if not reject(session, (not args, FtpResponse.SYNTAX_ERROR_PARAMS)):
            send_response(session, FtpResponse.COMMAND_OK)


class HelpHandler(CommandHandler):
    """HELP: send the help reply."""

    def handle_request(self, args: Sequence[str], session: SessionState) -> None:
        if not reject(session, (not args, FtpResponse.SYNTAX_ERROR)):
            send_response(session, FtpResponse.HELP_MESSAGE)


class PwdHandler(CommandHandler):
    """PWD: report the current directory."""

    def handle_request(self, args: Sequence[str], session: SessionState) -> None:
        if reject(
            session,
            (not args, FtpResponse.SYNTAX_ERROR_PARAMS),
            (session.authenticated, FtpResponse.NOT_LOGGED_IN),
        ):
            return
        path = session.current_directory
        if path and not path.endswith("/"):
            path += "/"
        send_custom_response(session, f'257 "{path}" is current directory.\r\n')