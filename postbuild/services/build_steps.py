"""构建步骤实现与工厂

步骤类型:
- shell:  内联 shell / batch 命令文本，交给进程启动器
- python: 内联 Python 脚本，交给脚本引擎

宿主可通过 register_step_type 注册自己的步骤类型。
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from postbuild.core.exceptions import ValidationError
from postbuild.services.command_executor import build_environment, run_script_content
from postbuild.services.script_engine import PythonScriptExecutor

if TYPE_CHECKING:
    from postbuild.core.config import Config
    from postbuild.core.models import Build
    from postbuild.core.protocols import BuildStep, Launcher
    from postbuild.utils.logger import BuildLog

logger = logging.getLogger(__name__)


# =========================================================================
# 内置步骤
# =========================================================================


@dataclass
class ShellStep:
    """执行一段 shell / batch 命令，退出码为 0 视为成功"""

    command: str
    # 解释器参数；为空时使用全局配置
    settings: Config | None = field(default=None, compare=False, repr=False)

    def perform(self, build: Build, launcher: Launcher, log: BuildLog) -> bool:
        rc = run_script_content(
            self.command, [],
            workspace=build.workspace, launcher=launcher,
            log=log, env=build_environment(build), config=self.settings,
        )
        if rc != 0:
            log.error(f"构建步骤返回非零退出码: {rc}")
        return rc == 0


@dataclass
class PythonStep:
    """执行一段 Python 脚本"""

    content: str

    def perform(self, build: Build, launcher: Launcher, log: BuildLog) -> bool:
        return PythonScriptExecutor(build, log, build.workspace).execute(
            self.content, name="<build-step>",
        )


# =========================================================================
# 步骤工厂
# =========================================================================

StepFactory = Callable[[dict[str, Any], "Config | None"], "BuildStep"]

_STEP_TYPES: dict[str, StepFactory] = {
    "shell": lambda d, settings: ShellStep(command=str(d.get("command", "")), settings=settings),
    "python": lambda d, settings: PythonStep(content=str(d.get("content", ""))),
}


def register_step_type(name: str, factory: StepFactory) -> None:
    """注册自定义步骤类型，factory(data, settings) 返回步骤实例"""
    _STEP_TYPES[name] = factory
    logger.debug("构建步骤类型已注册: %s", name)


def create_build_step(data: dict[str, Any], settings: Config | None = None) -> BuildStep:
    """根据 type 字段创建构建步骤，settings 传给需要启动进程的步骤"""
    step_type = str(data.get("type", "")).strip().lower()
    factory = _STEP_TYPES.get(step_type)
    if factory is None:
        raise ValidationError(
            f"未知的构建步骤类型: {step_type or '<空>'}",
            details=sorted(_STEP_TYPES),
        )
    return factory(data, settings)
