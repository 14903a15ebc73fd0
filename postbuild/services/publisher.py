"""宿主适配入口

宿主在构建结束后调用 PostBuildScript.perform(build, launcher, log)，
拿到一个布尔值用于自身记账；任何基础设施故障都不会抛给宿主。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from postbuild.services.processor import Processor
from postbuild.utils.logger import BuildLog
from postbuild.utils.shell import get_launcher

if TYPE_CHECKING:
    from postbuild.core.config import Config
    from postbuild.core.models import Build, Configuration
    from postbuild.core.protocols import Launcher

logger = logging.getLogger(__name__)


class PostBuildScript:
    """构建后脚本发布器"""

    def __init__(self, config: Configuration, settings: Config | None = None) -> None:
        if settings is None:
            from postbuild.core.config import get_config
            settings = get_config()
        self.config = config
        self.settings = settings

    @classmethod
    def from_file(cls, path: str | Path, settings: Config | None = None) -> PostBuildScript:
        from postbuild.core.loader import load_configuration
        if settings is None:
            from postbuild.core.config import get_config
            settings = get_config()
        return cls(load_configuration(path, settings), settings)

    def perform(
        self,
        build: Build,
        launcher: Launcher | None = None,
        log: BuildLog | None = None,
    ) -> bool:
        """执行构建后动作，返回 "handled ok" 标志"""
        if log is None:
            log = BuildLog(logging.getLogger(self.settings.log_name))
        processor = Processor(
            build, launcher or get_launcher(), log, self.config, self.settings,
        )
        ok = processor.process()
        logger.info("构建后动作结束: ok=%s result=%s", ok, build.result)
        return ok
