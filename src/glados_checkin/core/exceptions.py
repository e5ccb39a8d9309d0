"""异常定义模块"""


class CheckinError(Exception):
    """签到程序异常基类"""


class ConfigError(CheckinError):
    """账号配置文件无法加载或校验失败"""


class TransportInitError(CheckinError):
    """HTTP 会话创建失败"""


class LogWriteError(CheckinError):
    """日志文件写入失败"""


class RetryExhaustedError(CheckinError):
    """
    重试次数用尽

    Attributes:
        account: 失败的账号
        attempts: 实际尝试次数
        outcome: 最后一次签到结果
    """

    def __init__(self, account, attempts: int, outcome):
        super().__init__(outcome.describe())
        self.account = account
        self.attempts = attempts
        self.outcome = outcome
