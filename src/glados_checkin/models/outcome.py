"""签到结果数据模型

每次签到尝试只产生以下四种结果之一。
"""

from dataclasses import dataclass

from glados_checkin.config.constants import OutcomeKind


@dataclass(frozen=True)
class Success:
    """签到成功"""

    message: str
    change: str
    balance: str

    kind = OutcomeKind.SUCCESS
    succeeded = True

    def describe(self) -> str:
        return f"签到成功: {self.message}"


@dataclass(frozen=True)
class BusinessFailure:
    """服务端返回了非成功业务码"""

    http_status: int
    message: str

    kind = OutcomeKind.BUSINESS_FAILURE
    succeeded = False

    def describe(self) -> str:
        return f"签到失败 - HTTP状态码: {self.http_status}, 错误信息: {self.message}"


@dataclass(frozen=True)
class ParseFailure:
    """响应内容不是合法 JSON，保留原始内容便于排查"""

    raw_body: str
    parse_error: str

    kind = OutcomeKind.PARSE_FAILURE
    succeeded = False

    def describe(self) -> str:
        return f"响应解析失败: {self.parse_error}, 响应内容: {self.raw_body!r}"


@dataclass(frozen=True)
class TransportFailure:
    """请求未能完成（网络、TLS、请求头构造）"""

    error: str

    kind = OutcomeKind.TRANSPORT_FAILURE
    succeeded = False

    def describe(self) -> str:
        return f"请求失败: {self.error}"


CheckinOutcome = Success | BusinessFailure | ParseFailure | TransportFailure
