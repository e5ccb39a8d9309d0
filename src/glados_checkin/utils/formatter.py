"""格式化工具

日志文件每行一条记录，写入前转义文本中的换行符。
"""

from glados_checkin.core.timezone import timestamp


def truncate_decimal(value: str) -> str:
    """
    截断小数部分（不四舍五入）

    Args:
        value: 数字字符串，如 "12.50"

    Returns:
        第一个 "." 之前的部分，如 "12"
    """
    return value.split(".", 1)[0]


def single_line(text: str) -> str:
    """转义 CR/LF，保证内容不跨行"""
    return text.replace("\r", "\\r").replace("\n", "\\n")


def format_success_line(email: str, message: str, change: str, balance: str) -> str:
    """格式化签到成功日志"""
    return single_line(
        f"[{timestamp()}] Account: {email}, Message: {message}, "
        f"Change: {change}, Balance: {balance}"
    )


def format_exhausted_line(email: str, attempts: int, detail: str) -> str:
    """格式化重试用尽日志"""
    return single_line(f"[{timestamp()}] 账户 {email} 签到失败 (重试{attempts}次后): {detail}")


def format_failed_line(email: str, detail: str) -> str:
    """格式化账号处理失败日志"""
    return single_line(f"[{timestamp()}] 账户 {email} 处理失败: {detail}")
