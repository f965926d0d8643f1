import os
from types import SimpleNamespace

import pytest

from myftp.navigation import CdupHandler, CwdHandler, DeleHandler
from myftp.responses import FtpResponse, response_text
from myftp.session import SessionState

DONE = response_text(FtpResponse.FILE_ACTION_COMPLETED)
NOT_FOUND = response_text(FtpResponse.FILE_UNAVAILABLE_NOT_FOUND)
PARAMS = response_text(FtpResponse.SYNTAX_ERROR_PARAMS)
NOT_LOGGED_IN = response_text(FtpResponse.NOT_LOGGED_IN)
OK = response_text(FtpResponse.COMMAND_OK)


@pytest.fixture
def tree(tmp_path):
    root = tmp_path / "root"
    (root / "sub" / "inner").mkdir(parents=True)
    (root / "file.txt").write_text("data")
    (root / "sub" / "nested.txt").write_text("nested")
    (tmp_path / "outside.txt").write_text("outside")
    return tmp_path


@pytest.fixture
def session(tree):
    sent = []
    conn = SimpleNamespace(sent=sent, sendall=sent.append, close=lambda: None)
    state = SessionState(conn, os.path.realpath(tree / "root"))
    state.authenticated = True
    return state


def run(handler, session, args, start="/", authenticated=True):
    session.current_directory = start
    session.authenticated = authenticated
    handler.handle_request(args, session)
    return b"".join(session.connection.sent).decode()


@pytest.mark.parametrize(
    "start, args, expected, final",
    [
        ("/", ["sub"], DONE, "/sub/"),
        ("/sub/", ["inner"], DONE, "/sub/inner/"),
        ("/", ["/sub/inner"], DONE, "/sub/inner/"),
        ("/", ["sub/inner/.."], DONE, "/sub/"),
        ("/", ["missing"], NOT_FOUND, "/"),
        ("/", ["file.txt"], NOT_FOUND, "/"),
        ("/", [".."], NOT_FOUND, "/"),
        ("/", ["/.."], NOT_FOUND, "/"),
        ("/", ["sub/../.."], NOT_FOUND, "/"),
        ("/", [], PARAMS, "/"),
        ("/", ["a", "b"], PARAMS, "/"),
        ("/", [""], PARAMS, "/"),
    ],
)
def test_cwd(session, start, args, expected, final):
    assert run(CwdHandler(), session, args, start) == expected
    assert session.current_directory == final


def test_cwd_requires_login(session):
    assert run(CwdHandler(), session, ["sub"], authenticated=False) == NOT_LOGGED_IN
    assert session.current_directory == "/"


@pytest.mark.parametrize(
    "authenticated, start, args, final",
    [
        (True, "/sub/inner/", [], "/sub/"),
        (True, "/", [], "/"),
        (True, "/sub/", ["x"], "/sub/"),
        (False, "/sub/", [], "/sub/"),
    ],
)
def test_cdup(session, authenticated, start, args, final):
    assert run(CdupHandler(), session, args, start, authenticated) == OK
    assert session.current_directory == final


@pytest.mark.parametrize(
    "start, arg, removed",
    [
        ("/", "file.txt", "root/file.txt"),
        ("/sub/", "nested.txt", "root/sub/nested.txt"),
        ("/", "/sub", "root/sub"),
    ],
)
def test_dele_removes(session, tree, start, arg, removed):
    assert run(DeleHandler(), session, [arg], start) == DONE
    assert not (tree / removed).exists()


@pytest.mark.parametrize(
    "args, expected, authenticated",
    [
        (["nothing"], NOT_FOUND, True),
        (["../outside.txt"], NOT_FOUND, True),
        ([], PARAMS, True),
        (["a", "b"], PARAMS, True),
        (["file.txt"], NOT_LOGGED_IN, False),
    ],
)
def test_dele_refused(session, tree, args, expected, authenticated):
    assert run(DeleHandler(), session, args, authenticated=authenticated) == expected
    assert (tree / "outside.txt").exists()
    assert (tree / "root" / "file.txt").exists()