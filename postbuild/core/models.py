"""核心数据模型

所有核心数据类集中定义:
- 枚举: BuildResult / Role / ScriptType
- 动作组: PostBuildItem 及三种变体 ScriptFile / Script / PostBuildStep
- Configuration: 一次构建内不可变的动作组配置
- Build: 运行上下文（构建结果、节点、工作空间、变量）
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from postbuild.core.exceptions import ValidationError

if TYPE_CHECKING:
    from postbuild.core.protocols import BuildStep

# =========================================================================
# 枚举
# =========================================================================


class BuildResult(str, Enum):
    """构建结果，按严重程度递增排列"""

    SUCCESS = "SUCCESS"
    UNSTABLE = "UNSTABLE"
    FAILURE = "FAILURE"
    NOT_BUILT = "NOT_BUILT"
    ABORTED = "ABORTED"

    def __str__(self) -> str:
        return self.value

    @property
    def ordinal(self) -> int:
        return list(BuildResult).index(self)

    def is_worse_than(self, other: BuildResult) -> bool:
        return self.ordinal > other.ordinal

    @classmethod
    def parse(cls, name: str) -> BuildResult:
        try:
            return cls(name.strip().upper())
        except ValueError:
            raise ValidationError(f"未知的构建结果: {name}") from None


class Role(str, Enum):
    """动作组的节点角色要求"""

    ANY = "ANY"
    CONTROLLER_ONLY = "CONTROLLER_ONLY"
    WORKER_ONLY = "WORKER_ONLY"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, name: str | None) -> Role:
        """解析角色名，兼容旧配置中的 BOTH / MASTER / SLAVE"""
        if not name:
            return cls.ANY
        key = name.strip().upper()
        key = _LEGACY_ROLES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise ValidationError(f"未知的节点角色: {name}") from None


_LEGACY_ROLES = {
    "BOTH": "ANY",
    "MASTER": "CONTROLLER_ONLY",
    "SLAVE": "WORKER_ONLY",
}


class ScriptType(str, Enum):
    """脚本文件类型"""

    GENERIC = "generic"   # shell / batch，交给进程启动器
    PYTHON = "python"     # 交给脚本引擎求值

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, name: str | None) -> ScriptType:
        if not name:
            return cls.GENERIC
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise ValidationError(f"未知的脚本类型: {name}") from None


# =========================================================================
# 动作组
# =========================================================================


@dataclass
class PostBuildItem:
    """动作组公共部分: 结果过滤 + 角色过滤"""

    results: set[str] = field(default_factory=set)
    role: Role = Role.ANY

    def should_be_executed(self, result: BuildResult | str | None) -> bool:
        from postbuild.core.matchers import result_matches
        return result_matches(result, self.results)

    def should_run_on_controller(self) -> bool:
        from postbuild.core.matchers import role_matches
        return role_matches(True, self.role)

    def should_run_on_worker(self) -> bool:
        from postbuild.core.matchers import role_matches
        return role_matches(False, self.role)


@dataclass
class ScriptFile(PostBuildItem):
    """脚本文件动作，file_path 可带参数"""

    file_path: str = ""
    script_type: ScriptType = ScriptType.GENERIC


@dataclass
class Script(PostBuildItem):
    """内联 Python 脚本动作"""

    content: str = ""


@dataclass
class PostBuildStep(PostBuildItem):
    """构建步骤组动作，组内步骤顺序执行"""

    build_steps: list[BuildStep] = field(default_factory=list)


@dataclass(frozen=True)
class Configuration:
    """构建后动作配置 — 每次构建构造一次，运行期间不可变"""

    script_files: tuple[ScriptFile, ...] = ()
    scripts: tuple[Script, ...] = ()
    build_steps: tuple[PostBuildStep, ...] = ()
    mark_build_unstable: bool = False

    @property
    def empty(self) -> bool:
        return not (self.script_files or self.scripts or self.build_steps)


# =========================================================================
# 运行上下文
# =========================================================================


@dataclass
class Build:
    """一次构建的运行上下文

    built_on 为空表示构建在控制节点上执行。
    result 在构建完成前可能为 None。
    """

    workspace: Path
    result: BuildResult | None = None
    built_on: str = ""
    name: str = ""
    number: int = 0
    environment: dict[str, str] = field(default_factory=dict)
    build_variables: dict[str, str] = field(default_factory=dict)

    @property
    def is_controller(self) -> bool:
        return not self.built_on

    def get_environment(self) -> dict[str, str]:
        """构建环境变量（进程环境 + 构建级覆盖 + BUILD_* 信息）"""
        env = {**os.environ, **self.environment}
        if self.name:
            env["JOB_NAME"] = self.name
        if self.number:
            env["BUILD_NUMBER"] = str(self.number)
        env["WORKSPACE"] = str(self.workspace)
        if self.built_on:
            env["NODE_NAME"] = self.built_on
        return env

    def set_result(self, result: BuildResult) -> None:
        """更新构建结果，结果只能变差"""
        if self.result is None or result.is_worse_than(self.result):
            self.result = result
