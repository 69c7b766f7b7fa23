"""
Tests for configuration loading: idt.yml parsing and validation.
"""

import textwrap
from pathlib import Path

import pytest

from idt.core.config.loader import (
    CONFIG_FILE,
    ConfigError,
    Settings,
    find_config_file,
    load_settings,
)


@pytest.fixture
def valid_config(tmp_path: Path) -> Path:
    content = textwrap.dedent("""\
        max_workers: 4
        fail_on_error: false
        github_login: false
        http_timeout: 15
        command_timeout: 600
        skip:
          - php-cs-fixer
          - harper-ls
    """)
    path = tmp_path / CONFIG_FILE
    path.write_text(content)
    return path


class TestLoadSettings:
    def test_valid(self, valid_config: Path):
        settings = load_settings(valid_config)
        assert settings.max_workers == 4
        assert settings.fail_on_error is False
        assert settings.github_login is False
        assert settings.http_timeout == 15
        assert settings.command_timeout == 600
        assert settings.skip == ["php-cs-fixer", "harper-ls"]

    def test_defaults(self):
        settings = Settings()
        assert settings.max_workers is None
        assert settings.fail_on_error is True
        assert settings.github_login is True
        assert settings.command_timeout is None
        assert settings.skip == []

    def test_no_file_found(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert load_settings() == Settings()

    def test_auto_detect(self, valid_config: Path, monkeypatch):
        nested = valid_config.parent / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        assert load_settings().max_workers == 4

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / CONFIG_FILE
        path.write_text("")
        assert load_settings(path) == Settings()

    def test_explicit_missing(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_settings(tmp_path / "nope.yml")

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / CONFIG_FILE
        path.write_text("skip: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_settings(path)

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / CONFIG_FILE
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigError, match="Expected a YAML mapping"):
            load_settings(path)

    def test_unknown_key(self, tmp_path: Path):
        path = tmp_path / CONFIG_FILE
        path.write_text("max_wrokers: 2\n")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_settings(path)

    def test_zero_workers_rejected(self, tmp_path: Path):
        path = tmp_path / CONFIG_FILE
        path.write_text("max_workers: 0\n")
        with pytest.raises(ConfigError):
            load_settings(path)


class TestFindConfigFile:
    def test_found_in_start_dir(self, valid_config: Path):
        assert find_config_file(valid_config.parent) == valid_config.resolve()

    def test_walks_up(self, valid_config: Path):
        nested = valid_config.parent / "x" / "y"
        nested.mkdir(parents=True)
        assert find_config_file(nested) == valid_config.resolve()

    def test_not_found(self, tmp_path: Path):
        assert find_config_file(tmp_path) is None
