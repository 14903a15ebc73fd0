"""宿主适配入口测试"""

from __future__ import annotations

import logging

from conftest import FakeLauncher, FakeStep

from postbuild.core.config import Config
from postbuild.core.models import Build, BuildResult, Configuration, PostBuildStep, Script
from postbuild.services.publisher import PostBuildScript
from postbuild.utils.shell import get_launcher, set_launcher


class TestPostBuildScript:
    def test_perform_with_explicit_collaborators(self, tmp_path, log) -> None:
        step = FakeStep(ok=False)
        publisher = PostBuildScript(
            Configuration(build_steps=(PostBuildStep(build_steps=[step]),)),
            Config(),
        )
        build = Build(workspace=tmp_path, result=BuildResult.SUCCESS)
        assert publisher.perform(build, FakeLauncher(), log) is False
        assert build.result is BuildResult.FAILURE
        assert step.calls == 1

    def test_default_log_and_launcher(self, tmp_path, caplog) -> None:
        fake = FakeLauncher()
        original = get_launcher()
        set_launcher(fake)
        try:
            (tmp_path / "a.sh").write_text("echo a", encoding="utf-8")
            publisher = PostBuildScript.from_file(_write_config(tmp_path), Config(log_name="ci.build"))
            build = Build(workspace=tmp_path, result=BuildResult.SUCCESS)
            with caplog.at_level(logging.INFO, logger="ci.build"):
                assert publisher.perform(build) is True
        finally:
            set_launcher(original)
        assert fake.scripts == ["echo a"]
        assert any(
            r.name == "ci.build" and "[PostBuildScript] - " in r.getMessage()
            for r in caplog.records
        )

    def test_unstable_flag(self, tmp_path, log) -> None:
        publisher = PostBuildScript(Configuration(
            scripts=(Script(content="result = False"),),
            mark_build_unstable=True,
        ))
        build = Build(workspace=tmp_path, result=BuildResult.SUCCESS)
        assert publisher.perform(build, FakeLauncher(), log) is True
        assert build.result is BuildResult.UNSTABLE


def _write_config(tmp_path):
    path = tmp_path / "postbuild.yml"
    path.write_text("script_files:\n  - file_path: a.sh\n", encoding="utf-8")
    return path
