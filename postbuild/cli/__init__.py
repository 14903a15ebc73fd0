"""postbuild 命令行接口

CLI 按领域拆分为子模块，每个模块注册自己的命令到 main group。
"""

import os

import click

from postbuild import __version__
from postbuild.utils.logger import setup_logging


def _parse_kv_pairs(pairs: tuple[str, ...]) -> dict[str, str]:
    """解析 key=value 参数对"""
    result: dict[str, str] = {}
    for p in pairs:
        if "=" in p:
            k, v = p.split("=", 1)
            result[k.strip()] = v.strip()
    return result


@click.group()
@click.version_option(version=__version__)
@click.option("--settings", default="", help="运行参数文件路径（YAML）")
def main(settings: str) -> None:
    """postbuild - 构建后动作执行器"""
    setup_logging(
        level=os.getenv("POSTBUILD_LOG_LEVEL", "INFO"),
        json_output=os.getenv("POSTBUILD_LOG_JSON", "") == "1",
    )
    if settings:
        from postbuild.core.config import init_config
        init_config(settings)


# 注册各领域子命令
from postbuild.cli.cmd_run import register as _reg_run  # noqa: E402

_reg_run(main)
