"""账号配置文件加载"""

import json
import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from glados_checkin.core.exceptions import ConfigError
from glados_checkin.models.account import Account

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


class RunConfig(BaseModel):
    """单次运行配置，加载后只读，所有签到任务共享"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    accounts: list[Account] = Field(..., description="账号列表")
    max_retries: int = Field(..., ge=0, description="最大尝试次数（包含首次）")
    retry_delay_seconds: int = Field(..., ge=0, alias="retry_delay", description="重试间隔（秒）")
    log_path: str = Field(..., alias="log_file", description="日志文件路径")

    @field_validator("accounts")
    @classmethod
    def validate_accounts(cls, v: list[Account]) -> list[Account]:
        if not v:
            raise ValueError("No accounts configured")
        return v

    @field_validator("max_retries")
    @classmethod
    def validate_max_retries(cls, v: int) -> int:
        if v == 0:
            raise ValueError("max_retries must be greater than 0")
        return v

    @field_validator("log_path")
    @classmethod
    def validate_log_path(cls, v: str) -> str:
        if not v:
            raise ValueError("log_file path must not be empty")
        return v


def _parse_content(path: Path, content: str):
    """根据扩展名选择 YAML 或 JSON 解析"""
    if path.suffix.lower() in YAML_SUFFIXES:
        return yaml.safe_load(content)
    return json.loads(content)


def load_run_config(path: str | Path) -> RunConfig:
    """
    加载并校验账号配置文件

    Args:
        path: 配置文件路径，.yaml/.yml 按 YAML 解析，其余按 JSON 解析

    Returns:
        运行配置

    Raises:
        ConfigError: 文件读取、解析或校验失败
    """
    path = Path(path)

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"无法读取配置文件 {path}: {e}") from e

    try:
        data = _parse_content(path, content)
    except (yaml.YAMLError, ValueError) as e:
        raise ConfigError(f"配置文件格式错误 {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"配置文件格式错误 {path}: 顶层必须是对象")

    try:
        config = RunConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"配置文件校验失败 {path}: {e}") from e

    logger.info(f"已加载配置: {len(config.accounts)} 个账号, 最大尝试 {config.max_retries} 次, 间隔 {config.retry_delay_seconds} 秒")
    return config
