"""批量签到任务"""

import asyncio
import logging

from glados_checkin.config.loader import RunConfig
from glados_checkin.core.exceptions import RetryExhaustedError
from glados_checkin.core.log_sink import safe_append
from glados_checkin.models.account import Account
from glados_checkin.services.checkin import CheckinService
from glados_checkin.utils.formatter import format_failed_line

logger = logging.getLogger(__name__)


async def run_checkin_job(config: RunConfig, checkin_service: CheckinService) -> list[bool]:
    """
    并发为所有账号签到

    每个账号一个独立任务，等待全部结束；单个账号失败不影响其他账号。

    Args:
        config: 运行配置
        checkin_service: 签到服务（所有任务共享）

    Returns:
        与 config.accounts 顺序一致的成功标记列表
    """

    async def checkin_with_catch(account: Account) -> bool:
        try:
            await checkin_service.checkin(account)
            return True
        except RetryExhaustedError as e:
            error = str(e)
        except Exception as e:
            logger.debug(f"签到任务异常: 账户 {account.email}", exc_info=True)
            error = f"签到异常: {e}"

        error_log = format_failed_line(account.email, error)
        logger.error(error_log)
        await safe_append(checkin_service.log_sink, error_log)
        return False

    logger.info(f"开始签到: 共 {len(config.accounts)} 个账号")

    tasks = [checkin_with_catch(account) for account in config.accounts]
    results_list = await asyncio.gather(*tasks)

    success_count = sum(results_list)
    logger.info(f"签到完成: 成功 {success_count}/{len(results_list)} 个账号")
    return results_list
