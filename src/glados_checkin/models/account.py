"""账号数据模型"""

from pydantic import BaseModel, ConfigDict, Field


class Account(BaseModel):
    """账号模型（加载后不可修改）"""

    model_config = ConfigDict(frozen=True)

    email: str = Field(..., description="账号邮箱，仅用于日志标识")
    cookie: str = Field(..., description="会话 Cookie")
