"""数据模型模块"""

from glados_checkin.models.account import Account
from glados_checkin.models.outcome import (
    BusinessFailure,
    CheckinOutcome,
    ParseFailure,
    Success,
    TransportFailure,
)
from glados_checkin.models.response import CheckinRecord, CheckinResponse

__all__ = [
    "Account",
    "CheckinOutcome",
    "Success",
    "BusinessFailure",
    "ParseFailure",
    "TransportFailure",
    "CheckinRecord",
    "CheckinResponse",
]
