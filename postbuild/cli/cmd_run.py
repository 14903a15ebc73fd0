"""CLI — 执行与校验构建后动作"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from postbuild.cli import _parse_kv_pairs
from postbuild.core.exceptions import PostBuildError
from postbuild.core.models import Build, BuildResult, Configuration

if TYPE_CHECKING:
    from postbuild.core.config import Config

_RESULT_CHOICES = [r.value for r in BuildResult] + ["NONE"]


def register(group: click.Group) -> None:
    group.add_command(run)
    group.add_command(validate)


def _load(config_file: str, settings: Config | None = None) -> Configuration:
    from postbuild.core.loader import load_configuration
    try:
        return load_configuration(config_file, settings)
    except PostBuildError as e:
        raise click.ClickException(str(e)) from e


@click.command()
@click.argument("config_file", required=False)
@click.option("--workspace", "-w", default="", help="工作空间目录")
@click.option(
    "--result", "-r", default="SUCCESS",
    type=click.Choice(_RESULT_CHOICES, case_sensitive=False),
    help="构建结果（NONE 表示尚无结果）",
)
@click.option("--node", default="", help="执行节点名（为空表示控制节点）")
@click.option("--job", default="", help="任务名")
@click.option("--number", default=0, help="构建号")
@click.option("--var", multiple=True, help="构建变量，格式: key=value（可多次指定）")
def run(
    config_file: str | None, workspace: str, result: str, node: str,
    job: str, number: int, var: tuple[str, ...],
) -> None:
    """按配置执行构建后动作"""
    from postbuild.core.config import get_config
    from postbuild.services.publisher import PostBuildScript

    settings = get_config()
    config = _load(config_file or settings.config_file, settings)
    build = Build(
        workspace=Path(workspace or settings.workspace_dir).resolve(),
        result=None if result.upper() == "NONE" else BuildResult.parse(result),
        built_on=node,
        name=job,
        number=number,
        build_variables=_parse_kv_pairs(var),
    )
    ok = PostBuildScript(config, settings).perform(build)
    click.echo(f"构建结果: {build.result or '-'}")
    if not ok:
        raise SystemExit(1)


@click.command()
@click.argument("config_file", required=False)
def validate(config_file: str | None) -> None:
    """校验配置文件并列出全部动作组"""
    from postbuild.core.config import get_config

    config = _load(config_file or get_config().config_file)
    for i, sf in enumerate(config.script_files):
        click.echo(
            f"  script_files[{i}] {sf.script_type}: {sf.file_path or '<空>'} "
            f"role={sf.role} results={sorted(sf.results)}"
        )
    for i, s in enumerate(config.scripts):
        lines = len(s.content.splitlines())
        click.echo(f"  scripts[{i}] {lines} 行 role={s.role} results={sorted(s.results)}")
    for i, g in enumerate(config.build_steps):
        click.echo(
            f"  build_steps[{i}] {len(g.build_steps)} 个步骤 "
            f"role={g.role} results={sorted(g.results)}"
        )
    mode = "UNSTABLE" if config.mark_build_unstable else "FAILURE"
    click.echo(f"配置有效，失败时标记为 {mode}")
