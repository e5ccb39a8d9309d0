"""签到程序启动入口"""

import asyncio
import logging
import sys

from curl_cffi.requests import AsyncSession

from glados_checkin.config.constants import DATETIME_FORMAT
from glados_checkin.config.loader import load_run_config
from glados_checkin.config.settings import get_settings
from glados_checkin.core.exceptions import ConfigError, TransportInitError
from glados_checkin.core.log_sink import FileLogSink
from glados_checkin.core.timezone import get_timezone
from glados_checkin.services.checkin import CheckinService
from glados_checkin.tasks.checkin_job import run_checkin_job

logger = logging.getLogger(__name__)


class Colors:
    """ANSI 颜色代码"""
    RESET = "\033[0m"
    BOLD = "\033[1m"


# 日志级别颜色映射（清爽配色）
LOG_COLORS = {
    logging.DEBUG: "\033[38;5;245m",      # 灰色（柔和）
    logging.INFO: "\033[38;5;79m",        # 青绿色（清爽）
    logging.WARNING: "\033[38;5;221m",    # 柔和橙黄
    logging.ERROR: "\033[38;5;203m",      # 柔和红
    logging.CRITICAL: "\033[1;38;5;203m", # 粗体柔和红
}

# 日志级别名称映射
LOG_LEVEL_NAMES = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO ",
    logging.WARNING: "WARN ",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "CRIT ",
}


class ColorFormatter(logging.Formatter):
    """带颜色和对齐的日志格式化器"""

    def formatTime(self, record, datefmt=None):
        """使用配置时区的时间格式化器"""
        from datetime import datetime

        dt = datetime.fromtimestamp(record.created, tz=get_timezone())
        return dt.strftime(datefmt or DATETIME_FORMAT)

    def format(self, record):
        """格式化日志记录，添加颜色"""
        level_color = LOG_COLORS.get(record.levelno, "")
        level_name = LOG_LEVEL_NAMES.get(record.levelno, record.levelname)

        # 复制一份，避免修改其他 handler 看到的记录
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = level_name

        result = super().format(record)

        if level_color:
            result = f"{level_color}{result}{Colors.RESET}"

        return result


class MaxLevelFilter(logging.Filter):
    """只放行低于指定级别的记录"""

    def __init__(self, max_level: int):
        super().__init__()
        self.max_level = max_level

    def filter(self, record):
        return record.levelno < self.max_level


def setup_logging(level: int) -> None:
    """
    配置控制台日志

    WARNING 以下输出到 stdout，WARNING 及以上输出到 stderr。
    """
    formatter = ColorFormatter(
        fmt="%(asctime)s - %(levelname)s - %(message)s",
        datefmt=DATETIME_FORMAT,
    )

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.addFilter(MaxLevelFilter(logging.WARNING))
    stdout_handler.setFormatter(formatter)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)
    stderr_handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=[stdout_handler, stderr_handler], force=True)

    # 隐藏冗余的库日志
    logging.getLogger("asyncio").setLevel(logging.INFO)
    logging.getLogger("curl_cffi").setLevel(logging.WARNING)


def create_session() -> AsyncSession:
    """
    创建共享 HTTP 会话

    Raises:
        TransportInitError: 会话创建失败
    """
    settings = get_settings()
    proxy_kwargs = settings.curl_proxy or {}
    try:
        return AsyncSession(impersonate=settings.impersonate_browser, **proxy_kwargs)
    except Exception as e:
        raise TransportInitError(f"HTTP 会话创建失败: {e}") from e


async def run() -> None:
    """
    加载配置并执行一次批量签到

    Raises:
        ConfigError: 配置加载失败（发生在任何请求之前）
        TransportInitError: HTTP 会话创建失败
    """
    settings = get_settings()
    config = load_run_config(settings.config_file)

    session = create_session()
    try:
        checkin_service = CheckinService(
            session=session,
            log_sink=FileLogSink(config.log_path),
            checkin_url=settings.checkin_url,
            max_retries=config.max_retries,
            retry_delay=config.retry_delay_seconds,
            timeout=settings.request_timeout,
        )
        await run_checkin_job(config, checkin_service)
    finally:
        await session.close()


def main() -> int:
    """启动签到，返回进程退出码"""
    settings = get_settings()
    setup_logging(settings.log_level)

    try:
        asyncio.run(run())
    except ConfigError as e:
        logger.error(f"配置错误: {e}")
        return 1
    except TransportInitError as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
