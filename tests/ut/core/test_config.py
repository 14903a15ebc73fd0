"""运行参数配置测试"""

from __future__ import annotations

import pytest

from postbuild.core.config import (
    CONFIG_FILE,
    SETTINGS_FILE,
    Config,
    get_config,
    init_config,
    reset_config,
)


@pytest.fixture(autouse=True)
def _reset():
    reset_config()
    yield
    reset_config()


class TestConfig:
    def test_defaults(self) -> None:
        cfg = Config()
        assert cfg.shell == "sh"
        assert cfg.shell_flags == ["-xe"]
        assert cfg.batch_shell == ["cmd", "/c", "call"]

    def test_from_missing_file(self, tmp_path) -> None:
        assert Config.from_file(str(tmp_path / "none.yml")) == Config()

    def test_from_file_with_extra(self, tmp_path) -> None:
        path = tmp_path / "settings.yml"
        path.write_text("shell: bash\nshell_flags: [-e]\nteam: ci\n", encoding="utf-8")
        cfg = Config.from_file(str(path))
        assert cfg.shell == "bash"
        assert cfg.shell_flags == ["-e"]
        assert cfg.extra == {"team": "ci"}
        assert cfg.to_dict()["shell"] == "bash"

    def test_global_accessors(self, tmp_path) -> None:
        assert get_config() is get_config()
        path = tmp_path / "settings.yml"
        path.write_text("log_name: my.build\n", encoding="utf-8")
        cfg = init_config(str(path))
        assert get_config() is cfg
        assert cfg.log_name == "my.build"

    def test_default_file_names(self, tmp_path, monkeypatch) -> None:
        assert Config().config_file == CONFIG_FILE
        assert SETTINGS_FILE != CONFIG_FILE
        monkeypatch.chdir(tmp_path)
        (tmp_path / SETTINGS_FILE).write_text("shell: zsh\n", encoding="utf-8")
        assert init_config().shell == "zsh"
        assert Config.from_file().shell == "zsh"
