"""集中配置管理

运行参数（非动作组配置）统一入口，支持从 YAML 文件加载 + 编程式覆盖。
动作组配置由 postbuild.core.loader 负责。
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field

from postbuild.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

# 动作组配置文件与运行参数文件的默认路径
CONFIG_FILE = "postbuild.yml"
SETTINGS_FILE = "postbuild-settings.yml"


@dataclass
class Config:
    """运行参数"""

    # 动作组配置文件
    config_file: str = CONFIG_FILE
    # 未指定 --workspace 时使用的工作空间
    workspace_dir: str = "."

    # 通用脚本解释器（无 shebang 时使用）
    shell: str = "sh"
    shell_flags: list[str] = field(default_factory=lambda: ["-xe"])
    batch_shell: list[str] = field(default_factory=lambda: ["cmd", "/c", "call"])

    # 构建日志 logger 名称
    log_name: str = "postbuild.build"

    # 自定义扩展 (放不到字段里的配置项)
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str = SETTINGS_FILE) -> Config:
        """从 YAML 文件加载配置，不存在则返回默认"""
        data = load_yaml(path)
        if not data:
            return cls()
        known = {f.name for f in cls.__dataclass_fields__.values()}
        matched = {k: v for k, v in data.items() if k in known}
        extra = {k: v for k, v in data.items() if k not in known}
        cfg = cls(**matched)
        cfg.extra = extra
        return cfg

    def to_dict(self) -> dict:
        return asdict(self)


# 全局单例，首次 import 时不加载文件；由 CLI 入口显式初始化
_current: Config | None = None


def get_config() -> Config:
    """获取当前配置（未初始化则返回默认值）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config()
    return _current


def init_config(path: str = SETTINGS_FILE) -> Config:
    """从文件初始化全局配置"""
    global _current  # noqa: PLW0603
    _current = Config.from_file(path)
    logger.info("配置已加载: %s", path)
    logger.debug("运行参数: %s", _current.to_dict())
    return _current


def reset_config() -> None:
    """重置全局配置（仅用于测试）"""
    global _current  # noqa: PLW0603
    _current = None
