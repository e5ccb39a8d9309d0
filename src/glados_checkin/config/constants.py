"""常量定义模块"""

from enum import Enum
from typing import Final


# ==================== 签到接口配置 ====================
CHECKIN_API: Final[str] = "/api/user/checkin"

# 固定的客户端标识载荷
CHECKIN_PAYLOAD: Final[dict[str, str]] = {"token": "glados.one"}


# ==================== 请求超时配置 ====================
DEFAULT_TIMEOUT: Final[int] = 15  # 默认超时 15 秒


# ==================== 响应字段默认值 ====================
SUCCESS_CODE: Final[int] = 1
DEFAULT_SUCCESS_MESSAGE: Final[str] = "No message"
DEFAULT_ERROR_MESSAGE: Final[str] = "未知错误"
DEFAULT_AMOUNT: Final[str] = "0"


# ==================== 日志格式 ====================
DATETIME_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

# 请求头中不允许出现的字符
ILLEGAL_HEADER_CHARS: Final[frozenset[str]] = frozenset({"\r", "\n", "\0"})


# ==================== 签到结果类型 ====================
class OutcomeKind(str, Enum):
    """签到结果类型枚举"""
    SUCCESS = "success"
    BUSINESS_FAILURE = "business_failure"
    PARSE_FAILURE = "parse_failure"
    TRANSPORT_FAILURE = "transport_failure"
