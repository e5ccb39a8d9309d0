"""业务服务模块"""

from glados_checkin.services.checkin import CheckinService

__all__ = [
    "CheckinService",
]
