"""时区处理模块"""

from datetime import datetime
from zoneinfo import ZoneInfo

from glados_checkin.config.constants import DATETIME_FORMAT
from glados_checkin.config.settings import get_settings


def get_timezone() -> ZoneInfo:
    """获取配置的时区"""
    return ZoneInfo(get_settings().timezone)


def timestamp() -> str:
    """配置时区下当前时间的日志时间戳"""
    return datetime.now(get_timezone()).strftime(DATETIME_FORMAT)
