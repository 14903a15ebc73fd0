"""命令解释器 - Strategy Pattern

把脚本内容落成工作空间中的临时文件，并给出启动它的命令行:
- Shell: 类 Unix 节点；脚本自带 shebang 时按 shebang 启动，否则 sh -xe
- BatchFile: Windows 节点；cmd /c call
"""

from __future__ import annotations

import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from postbuild.core.config import Config


class CommandInterpreter(ABC):
    """解释器公共接口"""

    suffix: str = ""
    newline: str | None = None

    def __init__(self, content: str) -> None:
        self.content = content

    def create_script_file(self, directory: str | Path) -> Path:
        """在 directory 下创建临时脚本文件并写入内容"""
        fd, tmp = tempfile.mkstemp(
            dir=str(directory), prefix="postbuild", suffix=self.suffix,
        )
        with os.fdopen(fd, "w", encoding="utf-8", newline=self.newline) as f:
            f.write(self.file_content())
        return Path(tmp)

    def file_content(self) -> str:
        return self.content

    @abstractmethod
    def build_command_line(self, script: Path) -> list[str]:
        """返回执行 script 的参数列表"""


class Shell(CommandInterpreter):
    """POSIX shell 解释器"""

    suffix = ".sh"
    newline = "\n"

    def __init__(self, content: str, shell: str = "sh", flags: list[str] | None = None) -> None:
        super().__init__(content)
        self.shell = shell
        self.flags = ["-xe"] if flags is None else list(flags)

    def build_command_line(self, script: Path) -> list[str]:
        if self.content.startswith("#!"):
            first_line = self.content.splitlines()[0][2:]
            return [*first_line.split(), str(script)]
        return [self.shell, *self.flags, str(script)]


class BatchFile(CommandInterpreter):
    """Windows 批处理解释器"""

    suffix = ".bat"
    newline = "\r\n"

    def __init__(self, content: str, prefix: list[str] | None = None) -> None:
        super().__init__(content)
        self.prefix = ["cmd", "/c", "call"] if prefix is None else list(prefix)

    def file_content(self) -> str:
        return self.content + "\nexit %ERRORLEVEL%"

    def build_command_line(self, script: Path) -> list[str]:
        return [*self.prefix, str(script)]


def create_interpreter(content: str, is_unix: bool, config: Config | None = None) -> CommandInterpreter:
    """按目标节点平台选择解释器"""
    if config is None:
        from postbuild.core.config import get_config
        config = get_config()
    if is_unix:
        return Shell(content, shell=config.shell, flags=config.shell_flags)
    return BatchFile(content, prefix=config.batch_shell)
