"""动作组配置加载

把 YAML 文件（或已解析的字典）转换为不可变的 Configuration。
字段缺省规则:
  results     缺省为空集合（总是匹配）
  role        缺省 ANY，兼容 BOTH / MASTER / SLAVE
  script_type 缺省 generic
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from postbuild.core.exceptions import ConfigError, ValidationError
from postbuild.core.models import (
    BuildResult,
    Configuration,
    PostBuildStep,
    Role,
    Script,
    ScriptFile,
    ScriptType,
)
from postbuild.utils.yaml_io import load_yaml

if TYPE_CHECKING:
    from postbuild.core.config import Config

logger = logging.getLogger(__name__)


def load_configuration(
    source: str | Path | dict[str, Any], settings: Config | None = None,
) -> Configuration:
    """从文件路径或字典构建 Configuration，settings 交给构建步骤使用"""
    if isinstance(source, dict):
        data = source
    else:
        path = Path(source)
        if not path.is_file():
            raise ConfigError(f"配置文件不存在: {path}")
        try:
            data = load_yaml(path)
        except (yaml.YAMLError, OSError, ValueError) as e:
            raise ConfigError(f"配置文件无法解析: {path}: {e}") from e

    from postbuild.services.build_steps import create_build_step

    config = Configuration(
        script_files=tuple(
            ScriptFile(
                results=_parse_results(entry),
                role=Role.parse(entry.get("role")),
                file_path=str(entry.get("file_path") or ""),
                script_type=ScriptType.parse(entry.get("script_type")),
            )
            for entry in _entries(data, "script_files")
        ),
        scripts=tuple(
            Script(
                results=_parse_results(entry),
                role=Role.parse(entry.get("role")),
                content=str(entry.get("content") or ""),
            )
            for entry in _entries(data, "scripts")
        ),
        build_steps=tuple(
            PostBuildStep(
                results=_parse_results(entry),
                role=Role.parse(entry.get("role")),
                build_steps=[create_build_step(s, settings) for s in _list(entry, "build_steps")],
            )
            for entry in _entries(data, "build_steps")
        ),
        mark_build_unstable=bool(data.get("mark_build_unstable", False)),
    )
    logger.info(
        "动作组配置已加载: 脚本文件=%d, 内联脚本=%d, 构建步骤组=%d",
        len(config.script_files), len(config.scripts), len(config.build_steps),
    )
    return config


def _entries(data: dict[str, Any], key: str) -> list[dict[str, Any]]:
    entries = _list(data, key)
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ValidationError(f"{key}[{i}] 必须是字典，实际为 {type(entry).__name__}")
    return entries


def _list(data: dict[str, Any], key: str) -> list[Any]:
    value = data.get(key) or []
    if not isinstance(value, list):
        raise ValidationError(f"{key} 必须是列表")
    return value


def _parse_results(entry: dict[str, Any]) -> set[str]:
    """results 支持列表或逗号分隔字符串，名称统一校验为 BuildResult"""
    raw = entry.get("results") or []
    if isinstance(raw, str):
        raw = raw.split(",")
    return {BuildResult.parse(str(r)).value for r in raw if str(r).strip()}
