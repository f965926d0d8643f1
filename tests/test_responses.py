import pytest

from myftp.responses import RESPONSES, FtpResponse, ProtocolResponse, response_text


def test_render_format():
    assert ProtocolResponse(200, "Command okay.").render() == "200 Command okay.\r\n"


def test_response_text_not_logged_in():
    assert response_text(FtpResponse.NOT_LOGGED_IN) == "530 Not logged in.\r\n"


def test_response_text_accepts_plain_int():
    assert response_text(221) == response_text(FtpResponse.SERVICE_CLOSING)


@pytest.mark.parametrize("member", list(FtpResponse))
def test_every_code_has_text(member):
    text = response_text(member)
    assert text.startswith(f"{int(member)} ")
    assert text.endswith("\r\n")
    assert text[4:-2] == RESPONSES[int(member)].msg


def test_unknown_code_raises():
    with pytest.raises(ValueError, match="provided response code is invalid"):
        response_text(999)


@pytest.mark.parametrize("code", sorted(RESPONSES))
def test_table_matches_enum(code):
    assert int(FtpResponse(code)) == code
    assert response_text(code) == RESPONSES[code].render()
    assert response_text(FtpResponse(code)).startswith(f"{code} ")