"""通用脚本文件执行器

职责:
- 定位并读取脚本文件
- 写出解释器临时脚本（shell / batch），追加命令参数
- 在工作空间中启动进程，输出写入构建日志，返回退出码
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from postbuild.core.exceptions import PostBuildScriptError
from postbuild.services.command import Command, load_script_content, resolve_script_path
from postbuild.services.interpreter import create_interpreter

if TYPE_CHECKING:
    from postbuild.core.config import Config
    from postbuild.core.models import Build
    from postbuild.core.protocols import Launcher
    from postbuild.utils.logger import BuildLog

logger = logging.getLogger(__name__)


class ScriptFileExecutor:
    """通用（shell / batch）脚本文件执行器"""

    def __init__(
        self, log: BuildLog, workspace: Path, launcher: Launcher,
        config: Config | None = None,
    ) -> None:
        self.log = log
        self.workspace = workspace
        self.launcher = launcher
        self.config = config

    def execute_command(self, command: Command, env: dict[str, str] | None = None) -> int:
        """执行脚本命令，返回进程退出码；I/O 故障抛 PostBuildScriptError"""
        script = resolve_script_path(self.workspace, command.script_path)
        self.log.info(f"执行脚本 {script}，参数 {command.parameters}")
        content = load_script_content(script)
        return run_script_content(
            content, command.parameters,
            workspace=self.workspace, launcher=self.launcher,
            log=self.log, env=env, config=self.config,
        )


def run_script_content(
    content: str,
    parameters: list[str],
    *,
    workspace: Path,
    launcher: Launcher,
    log: BuildLog,
    env: dict[str, str] | None = None,
    config: Config | None = None,
) -> int:
    """把脚本内容交给平台解释器执行，返回退出码"""
    interpreter = create_interpreter(content, launcher.is_unix, config)
    script_file: Path | None = None
    try:
        script_file = interpreter.create_script_file(workspace)
        args = [*interpreter.build_command_line(script_file), *parameters]
        result = launcher.launch(args, cwd=workspace, env=env, log=log)
    except OSError as e:
        raise PostBuildScriptError.wrap(e, "执行脚本出错") from e
    finally:
        if script_file is not None:
            script_file.unlink(missing_ok=True)
    if not result.success:
        logger.debug("脚本退出码非零: %d", result.returncode)
    return result.returncode


def build_environment(build: Build) -> dict[str, str]:
    """读取构建环境变量，失败时抛 PostBuildScriptError"""
    try:
        return build.get_environment()
    except (OSError, KeyError, RuntimeError) as e:
        raise PostBuildScriptError.wrap(e, "读取构建环境变量失败") from e
