"""Check-in service"""

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable

from curl_cffi.requests import AsyncSession, errors

from glados_checkin.config.constants import CHECKIN_PAYLOAD, DEFAULT_TIMEOUT, ILLEGAL_HEADER_CHARS
from glados_checkin.core.exceptions import RetryExhaustedError
from glados_checkin.core.log_sink import LogSink, safe_append
from glados_checkin.models.account import Account
from glados_checkin.models.outcome import (
    BusinessFailure,
    CheckinOutcome,
    ParseFailure,
    Success,
    TransportFailure,
)
from glados_checkin.models.response import CheckinResponse
from glados_checkin.utils.formatter import format_exhausted_line, format_success_line, truncate_decimal

logger = logging.getLogger(__name__)


class CheckinService:
    """
    Check-in service

    单个实例由所有账号的签到任务共享：HTTP 会话与日志写入均支持并发使用，
    服务本身不保存任何账号相关的状态。
    """

    def __init__(
        self,
        session: AsyncSession,
        log_sink: LogSink,
        checkin_url: str,
        max_retries: int,
        retry_delay: int,
        timeout: int = DEFAULT_TIMEOUT,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.session = session
        self.log_sink = log_sink
        self.checkin_url = checkin_url
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.timeout = timeout
        self._sleep = sleep

    async def checkin(self, account: Account) -> Success:
        """
        带重试的签到

        首次尝试也计入次数：max_retries=1 时失败一次即放弃，不等待。

        Args:
            account: 账号

        Returns:
            签到成功结果

        Raises:
            RetryExhaustedError: 尝试 max_retries 次后仍失败
        """
        attempts = 0
        while True:
            outcome = await self.attempt(account)
            if outcome.succeeded:
                return outcome

            attempts += 1
            if attempts >= self.max_retries:
                error_log = format_exhausted_line(account.email, attempts, outcome.describe())
                logger.error(error_log)
                await safe_append(self.log_sink, error_log)
                raise RetryExhaustedError(account, attempts, outcome)

            logger.warning(
                f"签到失败 [{outcome.kind.value}]，{self.retry_delay} 秒后重试 ({attempts}/{self.max_retries}): "
                f"账户 {account.email} - {outcome.describe()}"
            )
            await self._sleep(self.retry_delay)

    async def attempt(self, account: Account) -> CheckinOutcome:
        """
        执行一次签到请求并判定结果（不重试）

        Args:
            account: 账号

        Returns:
            Success / BusinessFailure / ParseFailure / TransportFailure 之一
        """
        logger.debug(f"开始签到: 账户 {account.email}")

        try:
            headers = self._build_headers(account.cookie)
        except ValueError as e:
            return TransportFailure(error=str(e))

        try:
            response = await self.session.post(
                self.checkin_url,
                headers=headers,
                json=CHECKIN_PAYLOAD,
                timeout=self.timeout,
            )
            status = response.status_code
            body = response.text
        except errors.RequestsError as e:
            return TransportFailure(error=str(e))

        logger.debug(f"签到响应: 账户 {account.email} status={status}")

        # 无论状态码如何都按 JSON 解析响应内容
        try:
            payload = json.loads(body)
        except ValueError as e:
            return ParseFailure(raw_body=body, parse_error=str(e))

        data = CheckinResponse.from_payload(payload)

        if not data.succeeded:
            return BusinessFailure(http_status=status, message=data.error_message)

        return await self._handle_success(account, data)

    async def _handle_success(self, account: Account, data: CheckinResponse) -> Success:
        """记录签到成功日志"""
        message = data.success_message
        record = data.first_record

        if record is None:
            # 没有余额明细：视为成功且不重试，但不写入日志文件
            logger.info(f"签到成功: 账户 {account.email}, {message} (响应中无余额明细)")
            return Success(message=message, change="", balance="")

        outcome = Success(
            message=message,
            change=truncate_decimal(record.change),
            balance=truncate_decimal(record.balance),
        )
        log_content = format_success_line(account.email, outcome.message, outcome.change, outcome.balance)
        logger.info(log_content)
        await safe_append(self.log_sink, log_content)
        return outcome

    @staticmethod
    def _build_headers(cookie: str) -> dict[str, str]:
        """
        构造请求头

        Raises:
            ValueError: Cookie 含有请求头中非法的字符
        """
        if any(ch in ILLEGAL_HEADER_CHARS for ch in cookie):
            raise ValueError("Cookie 含有非法字符，无法作为请求头")
        try:
            cookie.encode("latin-1")
        except UnicodeEncodeError as e:
            raise ValueError(f"Cookie 含有非 Latin-1 字符，无法作为请求头: {e}") from e
        return {"cookie": cookie}
