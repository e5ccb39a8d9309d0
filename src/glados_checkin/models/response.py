"""签到接口响应模型

服务端字段类型不可靠，每个字段缺失或类型不符时都回落到默认值，
而不是校验失败。
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from glados_checkin.config.constants import (
    DEFAULT_AMOUNT,
    DEFAULT_ERROR_MESSAGE,
    DEFAULT_SUCCESS_MESSAGE,
    SUCCESS_CODE,
)


class CheckinRecord(BaseModel):
    """签到记录（响应 list 中的一项）"""

    model_config = ConfigDict(extra="ignore")

    change: str = DEFAULT_AMOUNT
    balance: str = DEFAULT_AMOUNT

    @field_validator("change", "balance", mode="before")
    @classmethod
    def string_or_default(cls, v: Any) -> str:
        return v if isinstance(v, str) else DEFAULT_AMOUNT


class CheckinResponse(BaseModel):
    """签到接口响应"""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    code: int = 0
    message: str | None = None
    records: list[Any] = Field(default_factory=list, alias="list")

    @field_validator("code", mode="before")
    @classmethod
    def integer_or_zero(cls, v: Any) -> int:
        # bool 是 int 的子类，但 JSON 的 true/false 不是合法业务码
        if isinstance(v, int) and not isinstance(v, bool):
            return v
        return 0

    @field_validator("message", mode="before")
    @classmethod
    def string_or_none(cls, v: Any) -> str | None:
        return v if isinstance(v, str) else None

    @field_validator("records", mode="before")
    @classmethod
    def list_or_empty(cls, v: Any) -> list:
        return v if isinstance(v, list) else []

    @classmethod
    def from_payload(cls, payload: Any) -> "CheckinResponse":
        """从已解析的 JSON 构造响应，非对象类型视为空响应"""
        if not isinstance(payload, dict):
            payload = {}
        return cls.model_validate(payload)

    @property
    def succeeded(self) -> bool:
        return self.code == SUCCESS_CODE

    @property
    def success_message(self) -> str:
        return self.message if self.message is not None else DEFAULT_SUCCESS_MESSAGE

    @property
    def error_message(self) -> str:
        return self.message if self.message is not None else DEFAULT_ERROR_MESSAGE

    @property
    def first_record(self) -> CheckinRecord | None:
        """list 中的第一条记录，list 缺失或为空时返回 None"""
        if not self.records:
            return None
        first = self.records[0]
        # 非对象元素的字段全部按缺失处理
        return CheckinRecord.model_validate(first if isinstance(first, dict) else {})
