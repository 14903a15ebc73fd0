"""领域协议定义

集中定义编排器与被委托执行方之间的接口契约（Protocol），
编排器只依赖抽象，宿主可注入自己的实现。

使用 typing.Protocol 而非 ABC，使得现有类无需修改继承关系即可满足协议。
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from postbuild.core.models import Build
    from postbuild.utils.logger import BuildLog
    from postbuild.utils.shell import CommandResult


# =========================================================================
# 进程启动协议
# =========================================================================

class Launcher(Protocol):
    """进程启动器协议

    抽象子进程执行（本地、SSH 远程、容器等）。
    输出逐行交给 log，调用阻塞直到进程退出。
    """

    @property
    def is_unix(self) -> bool:
        """目标节点是否为类 Unix 系统"""
        ...

    def launch(
        self,
        cmd: list[str],
        *,
        cwd: str | Path,
        env: dict[str, str] | None = None,
        log: BuildLog | None = None,
    ) -> CommandResult:
        """执行命令并返回结果；I/O 故障以 OSError 抛出"""
        ...


# =========================================================================
# 构建步骤协议
# =========================================================================

class BuildStep(Protocol):
    """可委托执行的构建步骤

    perform 返回 False 表示步骤失败；基础设施故障以 OSError 抛出。
    """

    def perform(self, build: Build, launcher: Launcher, log: BuildLog) -> bool:
        ...
