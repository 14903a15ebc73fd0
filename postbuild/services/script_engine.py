"""Python 脚本引擎

PythonScriptExecutor 在受控绑定下执行脚本文本:
    build      当前构建上下文 (postbuild.core.models.Build)
    workspace  工作空间路径
    log        构建日志 (BuildLog)
    args       脚本文件命令行参数（内联脚本为空列表）

脚本抛异常、调用 sys.exit(非 0)、或设置 result = False 视为失败。
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from postbuild.services.command import Command, load_script_content, resolve_script_path

if TYPE_CHECKING:
    from postbuild.core.models import Build
    from postbuild.utils.logger import BuildLog

logger = logging.getLogger(__name__)


class PythonScriptExecutor:
    """单次脚本求值"""

    def __init__(self, build: Build, log: BuildLog, workspace: Path) -> None:
        self.build = build
        self.log = log
        self.workspace = workspace

    def binding(self, args: list[str]) -> dict[str, Any]:
        return {
            "__name__": "__postbuild__",
            "build": self.build,
            "workspace": self.workspace,
            "log": self.log,
            "args": list(args),
        }

    def execute(self, content: str, args: list[str] | None = None, name: str = "<script>") -> bool:
        """执行脚本文本，返回是否成功"""
        scope = self.binding(args or [])
        try:
            code = compile(content, name, "exec")
            exec(code, scope)  # noqa: S102
        except SystemExit as e:
            if e.code in (None, 0):
                return True
            self.log.error(f"脚本以非零状态退出: {e.code}")
            return False
        except Exception as e:  # noqa: BLE001
            logger.debug("脚本执行异常: %s", name, exc_info=True)
            self.log.error(f"脚本执行失败: {type(e).__name__}: {e}")
            return False
        return scope.get("result", True) is not False


ExecutorFactory = Callable[[], PythonScriptExecutor]


class ScriptPreparer:
    """为内联脚本和 python 类型脚本文件准备并执行脚本"""

    def __init__(self, log: BuildLog, workspace: Path, executor_factory: ExecutorFactory) -> None:
        self.log = log
        self.workspace = workspace
        self.executor_factory = executor_factory

    def evaluate_script(self, content: str) -> bool:
        return self.executor_factory().execute(content)

    def evaluate_command(self, command: Command) -> bool:
        """执行 python 脚本文件，命令参数通过 args 传入"""
        script = resolve_script_path(self.workspace, command.script_path)
        self.log.info(f"执行 Python 脚本 {script}，参数 {command.parameters}")
        content = load_script_content(script)
        return self.executor_factory().execute(content, command.parameters, name=str(script))
