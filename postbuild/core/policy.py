"""结果处置策略

在阶段序列结束（自然完成或首个失败）后调用一次，
把「是否全部成功 + 配置」映射为最终构建结果。
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from postbuild.core.models import BuildResult

logger = logging.getLogger(__name__)


def finalize(
    all_succeeded: bool,
    mark_unstable_on_failure: bool,
    set_result: Callable[[BuildResult], None],
) -> bool:
    """返回交给宿主的 "handled ok" 标志

    - 全部成功: 不修改结果，返回 True
    - 失败且配置为标记不稳定: 结果置为 UNSTABLE，返回 True
    - 失败: 结果置为 FAILURE，返回 False
    """
    if all_succeeded:
        return True
    if mark_unstable_on_failure:
        set_result(BuildResult.UNSTABLE)
        logger.debug("构建后动作失败，构建标记为 UNSTABLE")
        return True
    set_result(BuildResult.FAILURE)
    logger.debug("构建后动作失败，构建标记为 FAILURE")
    return False
