"""脚本命令解析与脚本文件定位

Command: "脚本路径 参数1 参数2" 形式的命令，按 shell 引号规则拆分
resolve_script_path: 先按绝对路径查找，再按工作空间相对路径查找
load_script_content: 读取脚本文本
"""

from __future__ import annotations

import logging
import shlex
from dataclasses import dataclass, field
from pathlib import Path

from postbuild.core.exceptions import PostBuildScriptError

logger = logging.getLogger(__name__)


@dataclass
class Command:
    """已完成宏替换的脚本命令"""

    script_path: str
    parameters: list[str] = field(default_factory=list)

    @classmethod
    def parse(cls, text: str, is_unix: bool = True) -> Command:
        """拆分命令；Windows 节点保留路径中的反斜杠"""
        try:
            if is_unix:
                parts = shlex.split(text)
            else:
                parts = [_unquote(p) for p in shlex.split(text, posix=False)]
        except ValueError as e:
            # 引号不配对等情况，退化为按空白拆分
            logger.debug("命令按 shell 规则拆分失败 (%s)，改为按空白拆分: %s", e, text)
            parts = text.split()
        if not parts:
            raise PostBuildScriptError(f"脚本命令为空: {text!r}")
        return cls(script_path=parts[0], parameters=parts[1:])


def _unquote(part: str) -> str:
    if len(part) >= 2 and part[0] == part[-1] and part[0] in "\"'":
        return part[1:-1]
    return part


def resolve_script_path(workspace: str | Path, script_path: str) -> Path:
    """定位脚本文件，找不到时抛 PostBuildScriptError"""
    candidate = Path(script_path)
    if candidate.is_absolute() and candidate.is_file():
        return candidate
    relative = Path(workspace) / script_path
    if relative.is_file():
        return relative
    raise PostBuildScriptError(f"脚本文件不存在: {script_path} (workspace={workspace})")


def load_script_content(script: Path) -> str:
    """读取脚本内容"""
    try:
        return script.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise PostBuildScriptError.wrap(e, f"读取脚本失败 {script}") from e
