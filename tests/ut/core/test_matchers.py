"""结果 / 角色匹配器测试"""

from __future__ import annotations

import pytest

from postbuild.core.matchers import result_matches, role_matches
from postbuild.core.models import BuildResult, Role


class TestResultMatches:
    @pytest.mark.parametrize(("current", "results", "expected"), [
        (BuildResult.SUCCESS, set(), True),
        (BuildResult.SUCCESS, {"SUCCESS"}, True),
        (BuildResult.FAILURE, {"SUCCESS", "UNSTABLE"}, False),
        (BuildResult.UNSTABLE, {"SUCCESS", "UNSTABLE"}, True),
        ("ABORTED", {"ABORTED"}, True),
    ])
    def test_membership(self, current, results, expected) -> None:
        assert result_matches(current, results) is expected

    @pytest.mark.parametrize("results", [set(), {"SUCCESS"}, {"FAILURE", "NOT_BUILT"}])
    def test_no_result_never_matches(self, results) -> None:
        assert result_matches(None, results) is False


class TestRoleMatches:
    @pytest.mark.parametrize(("is_controller", "role", "expected"), [
        (True, Role.ANY, True),
        (False, Role.ANY, True),
        (True, Role.CONTROLLER_ONLY, True),
        (False, Role.CONTROLLER_ONLY, False),
        (True, Role.WORKER_ONLY, False),
        (False, Role.WORKER_ONLY, True),
    ])
    def test_truth_table(self, is_controller, role, expected) -> None:
        assert role_matches(is_controller, role) is expected
