import asyncio
import logging
import re

from curl_cffi.requests import errors

from conftest import CHECKIN_URL, FakeResponse, MemoryLogSink, checkin_body, ok_response
from glados_checkin.models.account import Account
from glados_checkin.models.outcome import BusinessFailure, ParseFailure, Success, TransportFailure


def test_success_logs_truncated_amounts(make_service, account, log_sink) -> None:
    service, session = make_service(lambda cookie: ok_response(change="12.50", balance="100.99"))

    outcome = asyncio.run(service.attempt(account))

    assert outcome == Success(message="Checkin! Got 1 Points", change="12", balance="100")
    assert len(log_sink.lines) == 1
    assert re.fullmatch(
        r"\[\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\] Account: alice@example.com, "
        r"Message: Checkin! Got 1 Points, Change: 12, Balance: 100",
        log_sink.lines[0],
    )


def test_request_carries_cookie_and_token(make_service, account) -> None:
    service, session = make_service(lambda cookie: ok_response())

    asyncio.run(service.attempt(account))

    call = session.calls[0]
    assert call["url"] == CHECKIN_URL
    assert call["headers"] == {"cookie": account.cookie}
    assert call["json"] == {"token": "glados.one"}


def test_success_defaults_message_and_missing_change(make_service, account, log_sink) -> None:
    body = '{"code": 1, "list": [{"balance": "7.9"}]}'
    service, _ = make_service(lambda cookie: FakeResponse(200, body))

    outcome = asyncio.run(service.attempt(account))

    assert outcome == Success(message="No message", change="0", balance="7")
    assert log_sink.lines[0].endswith("Message: No message, Change: 0, Balance: 7")


def test_negative_change_is_kept(make_service, account) -> None:
    service, _ = make_service(lambda cookie: ok_response(change="-3", balance="20"))

    outcome = asyncio.run(service.attempt(account))

    assert outcome.change == "-3"
    assert outcome.balance == "20"


def test_success_without_list_writes_no_log_line(make_service, account, log_sink) -> None:
    service, _ = make_service(lambda cookie: FakeResponse(200, checkin_body(message="Please Try Tomorrow")))

    outcome = asyncio.run(service.attempt(account))

    assert outcome == Success(message="Please Try Tomorrow", change="", balance="")
    assert log_sink.lines == []


def test_success_with_empty_list_writes_no_log_line(make_service, account, log_sink) -> None:
    service, _ = make_service(lambda cookie: FakeResponse(200, checkin_body(records=[])))

    outcome = asyncio.run(service.attempt(account))

    assert isinstance(outcome, Success)
    assert log_sink.lines == []


def test_business_failure_keeps_status_and_message(make_service, account, log_sink) -> None:
    body = checkin_body(code=-2, message="没有权限")
    service, _ = make_service(lambda cookie: FakeResponse(403, body))

    outcome = asyncio.run(service.attempt(account))

    assert outcome == BusinessFailure(http_status=403, message="没有权限")
    assert "HTTP状态码: 403" in outcome.describe()
    assert log_sink.lines == []


def test_business_failure_default_message(make_service, account) -> None:
    service, _ = make_service(lambda cookie: FakeResponse(200, '{"code": 0}'))

    outcome = asyncio.run(service.attempt(account))

    assert outcome == BusinessFailure(http_status=200, message="未知错误")


def test_non_integer_code_is_business_failure(make_service, account) -> None:
    service, _ = make_service(lambda cookie: FakeResponse(200, '{"code": "1", "message": "x"}'))

    outcome = asyncio.run(service.attempt(account))

    assert isinstance(outcome, BusinessFailure)


def test_parse_failure_preserves_raw_body(make_service, account, log_sink) -> None:
    raw = "<html>\n<body>502 Bad Gateway</body>\n</html>"
    service, _ = make_service(lambda cookie: FakeResponse(502, raw))

    outcome = asyncio.run(service.attempt(account))

    assert isinstance(outcome, ParseFailure)
    assert outcome.raw_body == raw
    assert outcome.parse_error
    assert "\n" not in outcome.describe()
    assert log_sink.lines == []


def test_transport_error_is_transport_failure(make_service, account) -> None:
    def handler(cookie):
        raise errors.RequestsError("connection refused")

    service, _ = make_service(handler)

    outcome = asyncio.run(service.attempt(account))

    assert isinstance(outcome, TransportFailure)
    assert "connection refused" in outcome.error


def test_illegal_cookie_fails_without_sending(make_service) -> None:
    service, session = make_service(lambda cookie: ok_response())
    bad = Account(email="bob@example.com", cookie="koa:sess=abc\r\nX-Injected: 1")

    outcome = asyncio.run(service.attempt(bad))

    assert isinstance(outcome, TransportFailure)
    assert session.calls == []


def test_log_write_failure_keeps_success(make_service, account, caplog) -> None:
    sink = MemoryLogSink(fail=True)
    service, _ = make_service(lambda cookie: ok_response(), sink=sink)

    with caplog.at_level(logging.ERROR):
        outcome = asyncio.run(service.attempt(account))

    assert isinstance(outcome, Success)
    assert "记录日志失败" in caplog.text


def test_non_latin1_cookie_fails_without_sending(make_service) -> None:
    service, session = make_service(lambda cookie: ok_response())
    bad = Account(email="bob@example.com", cookie="koa:sess=é中文")

    outcome = asyncio.run(service.attempt(bad))

    assert isinstance(outcome, TransportFailure)
    assert "Latin-1" in outcome.error
    assert session.calls == []


def test_multiline_message_stays_on_one_line(make_service, account, log_sink) -> None:
    body = checkin_body(message="line one\nline two", records=[{"change": "1", "balance": "2"}])
    service, _ = make_service(lambda cookie: FakeResponse(200, body))

    outcome = asyncio.run(service.attempt(account))

    assert outcome.message == "line one\nline two"
    assert len(log_sink.lines) == 1
    assert "\n" not in log_sink.lines[0]
    assert "Message: line one\\nline two, Change: 1" in log_sink.lines[0]
