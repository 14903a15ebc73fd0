"""测试共享 fixture — 假启动器 / 假构建步骤 / 记录型构建日志

假启动器在 launch 时从命令行中找出解释器临时脚本 (postbuild*)，读取内容并记录下来，
测试用 launcher.scripts 断言实际执行了什么，用 returncodes 控制退出码。
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pytest

from postbuild.core.models import Build, BuildResult
from postbuild.utils.logger import BuildLog
from postbuild.utils.shell import CommandResult


class RecordingLog(BuildLog):
    """把构建日志收集到列表里"""

    def __init__(self) -> None:
        super().__init__()
        self.messages: list[tuple[str, str]] = []

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    def write(self, line: str) -> None:
        self.messages.append(("out", line))

    def text(self, level: str | None = None) -> str:
        return "\n".join(m for lv, m in self.messages if level is None or lv == level)


class FakeLauncher:
    """记录调用的启动器"""

    def __init__(self, returncodes: list[int] | None = None, is_unix: bool = True) -> None:
        self.returncodes = list(returncodes or [])
        self._is_unix = is_unix
        self.calls: list[dict] = []

    @property
    def is_unix(self) -> bool:
        return self._is_unix

    @property
    def scripts(self) -> list[str]:
        return [c["script"] for c in self.calls]

    def launch(self, cmd, *, cwd, env=None, log=None) -> CommandResult:
        script = next(
            (Path(c).read_text(encoding="utf-8") for c in cmd
             if Path(c).parent == Path(cwd) and Path(c).name.startswith("postbuild")
             and Path(c).is_file()),
            "",
        )
        self.calls.append({"cmd": list(cmd), "cwd": cwd, "env": env, "script": script})
        rc = self.returncodes.pop(0) if self.returncodes else 0
        return CommandResult(returncode=rc)


@dataclass
class FakeStep:
    """返回固定结果的构建步骤"""

    ok: bool = True
    calls: int = 0
    error: Exception | None = None

    def perform(self, build, launcher, log) -> bool:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.ok


@pytest.fixture()
def log() -> RecordingLog:
    return RecordingLog()


@pytest.fixture()
def launcher() -> FakeLauncher:
    return FakeLauncher()


@pytest.fixture()
def build(tmp_path: Path) -> Build:
    return Build(workspace=tmp_path, result=BuildResult.SUCCESS)
