import io

import pytest

from myftp.auth_commands import (
    GUEST_USER,
    HelpHandler,
    NoopHandler,
    PassHandler,
    PwdHandler,
    QuitHandler,
    UserHandler,
)
from myftp.responses import FtpResponse, response_text
from myftp.session import SessionState

PARAMS = response_text(FtpResponse.SYNTAX_ERROR_PARAMS)
NOT_LOGGED_IN = response_text(FtpResponse.NOT_LOGGED_IN)


class Wire(io.BytesIO):
    hung_up = False

    def sendall(self, data):
        self.write(data)

    def close(self):
        self.hung_up = True

    def drain(self):
        text = self.getvalue().decode()
        self.seek(0)
        self.truncate(0)
        return text


@pytest.fixture
def session():
    return SessionState(Wire(), "/srv/ftp")


@pytest.mark.parametrize(
    "handler, args, expected",
    [
        (NoopHandler(), [], response_text(FtpResponse.COMMAND_OK)),
        (NoopHandler(), ["x"], PARAMS),
        (HelpHandler(), [], "214 Help message.\r\n"),
        (HelpHandler(), ["USER"], response_text(FtpResponse.SYNTAX_ERROR)),
        (PassHandler(), [], "503 Bad sequence of commands.\r\n"),
        (PassHandler(), ["a", "b"], PARAMS),
        (UserHandler(), [], PARAMS),
        (UserHandler(), ["a", "b"], PARAMS),
        (PwdHandler(), [], NOT_LOGGED_IN),
    ],
)
def test_single_reply(session, handler, args, expected):
    handler.handle_request(args, session)
    assert session.connection.drain() == expected
    assert session.username == ""


def test_user_sets_name(session):
    UserHandler().handle_request([GUEST_USER], session)
    assert session.connection.drain() == "331 User name okay, need password.\r\n"
    assert (session.username, session.authenticated) == (GUEST_USER, True)


@pytest.mark.parametrize(
    "user, pass_args, expected, username",
    [
        (GUEST_USER, [], "230 User logged in, proceed.\r\n", GUEST_USER),
        ("someone", [], NOT_LOGGED_IN, ""),
        (GUEST_USER, ["password"], NOT_LOGGED_IN, ""),
    ],
)
def test_login_sequence(session, user, pass_args, expected, username):
    UserHandler().handle_request([user], session)
    session.connection.drain()
    PassHandler().handle_request(pass_args, session)
    assert session.connection.drain() == expected
    assert session.username == username


@pytest.mark.parametrize(
    "args, expected, hung_up, authenticated",
    [
        ([], "221 Service closing control connection.\r\n", True, False),
        (["now"], PARAMS, False, True),
    ],
)
def test_quit(session, args, expected, hung_up, authenticated):
    session.authenticated = True
    QuitHandler().handle_request(args, session)
    assert session.connection.drain() == expected
    assert session.connection.hung_up is hung_up
    assert session.authenticated is authenticated


@pytest.mark.parametrize(
    "current, args, expected",
    [
        ("/", [], '257 "/" is current directory.\r\n'),
        ("/docs", [], '257 "/docs/" is current directory.\r\n'),
        ("/", ["x"], PARAMS),
    ],
)
def test_pwd_logged_in(session, current, args, expected):
    session.authenticated = True
    session.current_directory = current
    PwdHandler().handle_request(args, session)
    assert session.connection.drain() == expected