"""数据模型测试"""

from __future__ import annotations

from pathlib import Path

import pytest

from postbuild.core.exceptions import PostBuildError, ValidationError
from postbuild.core.models import (
    Build,
    BuildResult,
    Configuration,
    PostBuildStep,
    Role,
    Script,
    ScriptFile,
    ScriptType,
)


class TestEnums:
    @pytest.mark.parametrize(("name", "expected"), [
        ("BOTH", Role.ANY),
        ("master", Role.CONTROLLER_ONLY),
        ("SLAVE", Role.WORKER_ONLY),
        ("WORKER_ONLY", Role.WORKER_ONLY),
        (None, Role.ANY),
        ("", Role.ANY),
    ])
    def test_role_parse(self, name, expected) -> None:
        assert Role.parse(name) is expected

    def test_role_parse_unknown(self) -> None:
        with pytest.raises(ValidationError, match="节点角色"):
            Role.parse("sometimes")

    def test_result_parse(self) -> None:
        assert BuildResult.parse(" unstable ") is BuildResult.UNSTABLE
        with pytest.raises(ValidationError):
            BuildResult.parse("GREEN")

    def test_script_type_parse(self) -> None:
        assert ScriptType.parse(None) is ScriptType.GENERIC
        assert ScriptType.parse("Python") is ScriptType.PYTHON
        with pytest.raises(ValidationError):
            ScriptType.parse("groovy")

    def test_validation_error_is_domain_error(self) -> None:
        err = ValidationError("x", details=["a"])
        assert isinstance(err, PostBuildError)
        assert err.code == "VALIDATION_ERROR"
        assert err.details == ["a"]

    def test_str_is_value(self) -> None:
        assert str(BuildResult.NOT_BUILT) == "NOT_BUILT"
        assert str(Role.ANY) == "ANY"


class TestItems:
    def test_defaults(self) -> None:
        sf = ScriptFile(file_path="a.sh")
        assert sf.results == set()
        assert sf.role is Role.ANY
        assert sf.script_type is ScriptType.GENERIC
        assert Script().content == ""
        assert PostBuildStep().build_steps == []

    def test_item_helpers(self) -> None:
        item = Script(results={"FAILURE"}, role=Role.WORKER_ONLY, content="x")
        assert item.should_be_executed(BuildResult.FAILURE) is True
        assert item.should_be_executed("SUCCESS") is False
        assert item.should_be_executed(None) is False
        assert item.should_run_on_controller() is False
        assert item.should_run_on_worker() is True

    def test_configuration_is_frozen(self) -> None:
        config = Configuration()
        assert config.empty is True
        with pytest.raises(AttributeError):
            config.mark_build_unstable = True  # type: ignore[misc]


class TestBuild:
    def test_is_controller(self) -> None:
        assert Build(workspace=Path(".")).is_controller is True
        assert Build(workspace=Path("."), built_on="agent-1").is_controller is False

    @pytest.mark.parametrize(("start", "new", "expected"), [
        (None, BuildResult.UNSTABLE, BuildResult.UNSTABLE),
        (BuildResult.SUCCESS, BuildResult.FAILURE, BuildResult.FAILURE),
        (BuildResult.FAILURE, BuildResult.UNSTABLE, BuildResult.FAILURE),
        (BuildResult.UNSTABLE, BuildResult.SUCCESS, BuildResult.UNSTABLE),
    ])
    def test_set_result_only_worsens(self, start, new, expected) -> None:
        build = Build(workspace=Path("."), result=start)
        build.set_result(new)
        assert build.result is expected

    def test_environment(self, tmp_path) -> None:
        build = Build(
            workspace=tmp_path, name="job", number=7,
            built_on="agent-1", environment={"FOO": "bar"},
        )
        env = build.get_environment()
        assert env["FOO"] == "bar"
        assert env["JOB_NAME"] == "job"
        assert env["BUILD_NUMBER"] == "7"
        assert env["WORKSPACE"] == str(tmp_path)
        assert env["NODE_NAME"] == "agent-1"
