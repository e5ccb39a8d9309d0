import json
from collections.abc import Callable

import pytest

from glados_checkin.config import settings as settings_module
from glados_checkin.core.exceptions import LogWriteError
from glados_checkin.core.log_sink import LogSink
from glados_checkin.models.account import Account
from glados_checkin.services.checkin import CheckinService

CHECKIN_URL = "https://glados.test/api/user/checkin"


class MemoryLogSink(LogSink):
    def __init__(self, fail: bool = False):
        self.lines: list[str] = []
        self.fail = fail

    async def append(self, line: str) -> None:
        if self.fail:
            raise LogWriteError("disk full")
        self.lines.append(line)


class FakeResponse:
    def __init__(self, status_code: int, text: str):
        self.status_code = status_code
        self.text = text


class FakeSession:
    """按请求的 cookie 调用 handler 生成响应，不访问网络"""

    def __init__(self, handler: Callable[[str], FakeResponse], **kwargs):
        self.handler = handler
        self.kwargs = kwargs
        self.calls: list[dict] = []
        self.closed = False

    async def post(self, url, headers=None, json=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "json": json, "timeout": timeout})
        return self.handler(headers["cookie"])

    async def close(self):
        self.closed = True


class RecordingSleep:
    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def checkin_body(code=1, message="Checkin! Got 1 Points", records=None) -> str:
    payload = {"code": code, "message": message}
    if records is not None:
        payload["list"] = records
    return json.dumps(payload)


def ok_response(change="1.000000000000000000", balance="100.980000000000000000") -> FakeResponse:
    return FakeResponse(200, checkin_body(records=[{"change": change, "balance": balance}]))


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("TIMEZONE", "UTC")
    monkeypatch.setattr(settings_module, "_settings", None)
    yield
    settings_module._settings = None


@pytest.fixture()
def account() -> Account:
    return Account(email="alice@example.com", cookie="koa:sess=abc; koa:sess.sig=def")


@pytest.fixture()
def log_sink() -> MemoryLogSink:
    return MemoryLogSink()


@pytest.fixture()
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture()
def make_service(log_sink: MemoryLogSink, recording_sleep: RecordingSleep):
    def _make(handler, max_retries: int = 3, retry_delay: int = 5, sink: LogSink | None = None):
        session = FakeSession(handler)
        service = CheckinService(
            session=session,
            log_sink=sink if sink is not None else log_sink,
            checkin_url=CHECKIN_URL,
            max_retries=max_retries,
            retry_delay=retry_delay,
            sleep=recording_sleep,
        )
        return service, session

    return _make
