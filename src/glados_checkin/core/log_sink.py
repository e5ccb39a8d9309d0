"""签到日志文件写入"""

import asyncio
import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path

from glados_checkin.core.exceptions import LogWriteError

logger = logging.getLogger(__name__)


class LogSink(ABC):
    """日志写入接口（仅追加）"""

    @abstractmethod
    async def append(self, line: str) -> None:
        """
        追加一行日志

        Args:
            line: 日志内容（不含换行符）

        Raises:
            LogWriteError: 写入失败
        """
        pass


class FileLogSink(LogSink):
    """基于文件的日志写入，多个签到任务共享同一实例"""

    def __init__(self, file_path: str | Path):
        self.file_path = Path(file_path)
        self._lock = threading.Lock()

    async def append(self, line: str) -> None:
        await asyncio.to_thread(self._write, line)

    def _write(self, line: str) -> None:
        with self._lock:
            try:
                # 无法编码的字符（如孤立代理项）转义写入，不丢弃整行
                with self.file_path.open("a", encoding="utf-8", errors="backslashreplace") as f:
                    f.write(f"{line}\n")
            except (OSError, UnicodeError) as e:
                raise LogWriteError(f"{self.file_path}: {e}") from e


async def safe_append(sink: LogSink, line: str) -> bool:
    """
    写入日志，失败时仅输出错误信息，不中断签到流程

    Returns:
        是否写入成功
    """
    try:
        await sink.append(line)
        return True
    except LogWriteError as e:
        logger.error(f"记录日志失败: {e}")
        return False
