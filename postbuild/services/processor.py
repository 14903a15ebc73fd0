"""构建后动作编排器

三个阶段按固定顺序执行:
1. script_files - 脚本文件（通用脚本 / Python 脚本文件）
2. scripts      - 内联 Python 脚本
3. build_steps  - 构建步骤组

每个动作组依次经过: 空载荷检查 → 角色过滤 → 结果过滤 → 宏替换 → 执行。
任一动作失败立即中止当前阶段及后续阶段，交给结果处置策略。
基础设施故障 (PostBuildScriptError) 在 process() 统一捕获，不会抛给宿主。
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from postbuild.core.exceptions import PostBuildScriptError
from postbuild.core.models import ScriptType
from postbuild.core.policy import finalize
from postbuild.services.command import Command
from postbuild.services.command_executor import ScriptFileExecutor, build_environment
from postbuild.services.script_engine import PythonScriptExecutor, ScriptPreparer
from postbuild.utils.macro import replace_macro
from postbuild.utils.shell import decorate_by_env

if TYPE_CHECKING:
    from postbuild.core.config import Config
    from postbuild.core.models import Build, Configuration, PostBuildItem
    from postbuild.core.protocols import Launcher
    from postbuild.utils.logger import BuildLog

logger = logging.getLogger(__name__)


class Processor:
    """一次构建的构建后动作编排"""

    def __init__(
        self,
        build: Build,
        launcher: Launcher,
        log: BuildLog,
        config: Configuration,
        settings: Config | None = None,
    ) -> None:
        self.build = build
        if build.result is None:
            self.launcher = launcher
        else:
            self.launcher = decorate_by_env(launcher, {"BUILD_RESULT": str(build.result)})
        self.log = log
        self.config = config
        self.settings = settings

    # ---- 入口 ----

    def process(self) -> bool:
        """执行全部阶段，返回交给宿主的 "handled ok" 标志"""
        self.log.info("开始执行构建后脚本")
        if self.config.empty:
            self.log.info("未配置任何构建后动作")
        try:
            succeeded = (
                self._process_script_files()
                and self._process_scripts()
                and self._process_build_steps()
            )
        except PostBuildScriptError as e:
            self.log.error(f"执行过程中出现问题: {e}")
            logger.debug("构建后流程中止", exc_info=True)
            succeeded = False
        return finalize(succeeded, self.config.mark_build_unstable, self.build.set_result)

    # ---- 阶段 ----

    def _process_script_files(self) -> bool:
        executor = ScriptFileExecutor(self.log, self.build.workspace, self.launcher, self.settings)
        preparer = self._create_script_preparer()
        for index, script_file in enumerate(self.config.script_files):
            file_path = (script_file.file_path or "").strip()
            if not file_path:
                self.log.error(f"脚本文件 #{index} 未配置文件路径，已跳过")
                continue
            if not self._eligible(script_file, file_path):
                continue

            env = build_environment(self.build)
            command = Command.parse(self._resolve(file_path, env), self.launcher.is_unix)
            if script_file.script_type is ScriptType.GENERIC:
                if executor.execute_command(command, env) != 0:
                    return False
            elif not preparer.evaluate_command(command):
                return False
        return True

    def _process_scripts(self) -> bool:
        preparer = self._create_script_preparer()
        for index, script in enumerate(self.config.scripts):
            if not (script.content or "").strip():
                continue
            if not self._eligible(script, f"Python 脚本 #{index}"):
                continue
            if not preparer.evaluate_script(script.content):
                return False
        return True

    def _process_build_steps(self) -> bool:
        for index, group in enumerate(self.config.build_steps):
            if not group.build_steps:
                continue
            if not self._eligible(group, f"构建步骤组 #{index}"):
                continue
            for step in group.build_steps:
                try:
                    ok = step.perform(self.build, self.launcher, self.log)
                except OSError as e:
                    raise PostBuildScriptError.wrap(e, "构建步骤执行出错") from e
                if not ok:
                    return False
        return True

    # ---- 过滤与解析 ----

    def _eligible(self, item: PostBuildItem, name: str) -> bool:
        """角色与结果过滤，不满足时记录原因"""
        if self.build.is_controller:
            role_fits = item.should_run_on_controller()
        else:
            role_fits = item.should_run_on_worker()
        if not role_fits:
            self.log.info(f"当前节点不具备角色 {item.role}，跳过 {name}")
            return False
        if not item.should_be_executed(self.build.result):
            results = sorted(item.results)
            self.log.info(
                f"构建结果 {self.build.result} 不在 {results} 中，跳过 {name}"
            )
            return False
        return True

    def _resolve(self, text: str, env: dict[str, str]) -> str:
        resolved = replace_macro(text, env)
        return replace_macro(resolved, self.build.build_variables)

    def _create_script_preparer(self) -> ScriptPreparer:
        workspace = self.build.workspace
        return ScriptPreparer(
            self.log, workspace,
            lambda: PythonScriptExecutor(self.build, self.log, workspace),
        )
