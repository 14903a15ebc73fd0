"""进程启动工具 — 统一子进程调用

通过 Launcher 协议抽象子进程执行，方便测试替换和跨平台适配。
默认实现 LocalLauncher 在本机启动进程，输出逐行写入构建日志。
"""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from postbuild.core.protocols import Launcher
    from postbuild.utils.logger import BuildLog

logger = logging.getLogger(__name__)


# =========================================================================
# 命令执行结果
# =========================================================================

@dataclass
class CommandResult:
    """命令执行结果（与 subprocess 解耦）"""

    returncode: int
    output: str = ""

    @property
    def success(self) -> bool:
        return self.returncode == 0


# =========================================================================
# 默认实现: 本地进程启动器
# =========================================================================

class LocalLauncher:
    """本地进程启动器（默认实现）

    stdout/stderr 合并后逐行转发到构建日志，进程结束后返回退出码。
    """

    @property
    def is_unix(self) -> bool:
        return os.name != "nt"

    def launch(
        self,
        cmd: list[str],
        *,
        cwd: str | Path,
        env: dict[str, str] | None = None,
        log: BuildLog | None = None,
    ) -> CommandResult:
        logger.debug("启动进程: %s (cwd=%s)", cmd, cwd)
        lines: list[str] = []
        with subprocess.Popen(
            cmd, cwd=str(cwd), env=env,
            stdout=subprocess.PIPE, stderr=subprocess.STDOUT,
            text=True, errors="replace",
        ) as proc:
            assert proc.stdout is not None
            for raw in proc.stdout:
                line = raw.rstrip("\n")
                lines.append(line)
                if log is not None:
                    log.write(line)
            returncode = proc.wait()
        logger.debug("进程退出: rc=%d", returncode)
        return CommandResult(returncode=returncode, output="\n".join(lines))


class EnvDecoratedLauncher:
    """在委托启动器之上叠加固定环境变量（如 BUILD_RESULT）"""

    def __init__(self, inner: Launcher, extra_env: dict[str, str]) -> None:
        self.inner = inner
        self.extra_env = dict(extra_env)

    @property
    def is_unix(self) -> bool:
        return self.inner.is_unix

    def launch(
        self,
        cmd: list[str],
        *,
        cwd: str | Path,
        env: dict[str, str] | None = None,
        log: BuildLog | None = None,
    ) -> CommandResult:
        merged = {**(env if env is not None else os.environ), **self.extra_env}
        return self.inner.launch(cmd, cwd=cwd, env=merged, log=log)


def decorate_by_env(launcher: Launcher, extra_env: dict[str, str]) -> Launcher:
    """返回叠加了 extra_env 的启动器；extra_env 为空时原样返回"""
    if not extra_env:
        return launcher
    return EnvDecoratedLauncher(launcher, extra_env)


# =========================================================================
# 全局默认启动器（可替换）
# =========================================================================

_default_launcher: Launcher = LocalLauncher()


def get_launcher() -> Launcher:
    """获取全局默认进程启动器"""
    return _default_launcher


def set_launcher(launcher: Launcher) -> None:
    """替换全局默认进程启动器（用于测试或远程执行场景）"""
    global _default_launcher  # noqa: PLW0603
    _default_launcher = launcher
