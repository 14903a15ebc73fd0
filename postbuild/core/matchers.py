"""执行条件匹配

两个纯函数，决定某个动作组在当前构建上是否有资格执行:
- result_matches: 构建结果是否在动作组的结果过滤集合内
- role_matches: 当前节点角色（控制节点 / 工作节点）是否满足角色要求
"""

from __future__ import annotations

from collections.abc import Collection

from postbuild.core.models import BuildResult, Role


def result_matches(current: BuildResult | str | None, results: Collection[str]) -> bool:
    """构建结果是否满足过滤条件

    尚无结果（None）时一律不匹配；过滤集合为空时总是匹配。
    """
    if current is None:
        return False
    if not results:
        return True
    return str(current) in results


def role_matches(is_controller: bool, role: Role) -> bool:
    """节点角色是否满足要求"""
    if role is Role.CONTROLLER_ONLY:
        return is_controller
    if role is Role.WORKER_ONLY:
        return not is_controller
    return True
