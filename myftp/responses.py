"""FTP reply codes and their standard texts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class FtpResponse(IntEnum):
    """Reply codes the server can send on the control connection."""

    RESTART_MARKER = 110
    SERVICE_READY_IN_MINUTES = 120
    DATA_CONN_OPEN_STARTING = 125
    FILE_STATUS_OK_OPENING_CONN = 150

    COMMAND_OK = 200
    COMMAND_SUPERFLUOUS = 202
    SYSTEM_STATUS = 211
    DIRECTORY_STATUS = 212
    FILE_STATUS = 213
    HELP_MESSAGE = 214
    SYSTEM_TYPE = 215
    SERVICE_READY = 220
    SERVICE_CLOSING = 221
    DATA_CONN_OPEN_NO_TRANSFER = 225
    CLOSING_DATA_CONN = 226
    ENTERING_PASSIVE_MODE = 227
    USER_LOGGED_IN = 230
    FILE_ACTION_COMPLETED = 250
    PATHNAME_CREATED = 257

    USERNAME_OK_NEED_PASSWORD = 331
    NEED_ACCOUNT_FOR_LOGIN = 332
    FILE_ACTION_PENDING = 350

    SERVICE_UNAVAILABLE = 421
    CANT_OPEN_DATA_CONN = 425
    CONN_CLOSED_TRANSFER_ABORTED = 426
    FILE_UNAVAILABLE = 450
    ACTION_ABORTED_LOCAL_ERROR = 451
    INSUFFICIENT_STORAGE = 452

    SYNTAX_ERROR = 500
    SYNTAX_ERROR_PARAMS = 501
    CMD_NOT_IMPLEMENTED = 502
    BAD_CMD_SEQUENCE = 503
    CMD_PARAM_NOT_IMPLEMENTED = 504
    NOT_LOGGED_IN = 530
    NEED_ACCOUNT_FOR_STORING = 532
    FILE_UNAVAILABLE_NOT_FOUND = 550
    PAGE_TYPE_UNKNOWN = 551
    EXCEEDED_STORAGE_ALLOCATION = 552
    FILENAME_NOT_ALLOWED = 553


@dataclass(frozen=True)
class ProtocolResponse:
    """A reply code paired with its message."""

    code: int
    msg: str

    def render(self) -> str:
        """Return the reply as it is written on the wire."""
        return f"{self.code} {self.msg}\r\n"


_MESSAGES = {
    # 2xx
    200: "Command okay.",
    202: "Command not implemented, superfluous at this site.",
    211: "System status, or system help reply.",
    212: "Directory status.",
    213: "File status.",
    214: "Help message.",
    215: "NAME system type.",
    220: "Service ready for new user.",
    221: "Service closing control connection.",
    225: "Data connection open; no transfer in progress.",
    226: "Closing data connection.",
    227: "Entering Passive Mode (h1,h2,h3,h4,p1,p2).",
    230: "User logged in, proceed.",
    250: "Requested file action okay, completed.",
    257: "{} created.",
    # 1xx
    110: "Restart marker reply.",
    120: "Service ready in nnn minutes.",
    125: "Data connection already open; transfer starting.",
    150: "File status okay; about to open data connection.",
    # 3xx
    331: "User name okay, need password.",
    332: "Need account for login.",
    350: "Requested file action pending further information.",
    # 4xx
    421: "Service not available, closing control connection.",
    425: "Can't open data connection.",
    426: "Connection closed; transfer aborted.",
    450: "Requested file action not taken. File unavailable.",
    451: "Requested action aborted. Local error in processing.",
    452: "Requested action not taken. Insufficient storage space in system.",
    # 5xx
    500: "Syntax error, command unrecognized.",
    501: "Syntax error in parameters or arguments.",
    502: "Command not implemented.",
    503: "Bad sequence of commands.",
    504: "Command not implemented for that parameter.",
    530: "Not logged in.",
    532: "Need account for storing files.",
    550: "Requested action not taken. File unavailable.",
    551: "Requested action aborted. Page type unknown.",
    552: "Requested file action aborted. Exceeded storage allocation.",
    553: "Requested action not taken. File name not allowed.",
}

RESPONSES: dict[int, ProtocolResponse] = {
    code: ProtocolResponse(code, msg) for code, msg in _MESSAGES.items()
}


def response_text(response: int) -> str:
    """Return the wire text of a standard reply; raise ValueError if unknown."""
    try:
        return RESPONSES[int(response)].render()
    except KeyError:
        raise ValueError("provided response code is invalid") from None