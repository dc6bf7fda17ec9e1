"""Tests for configuration loading."""

import os
from collections.abc import Generator
from pathlib import Path

import pytest

from objcov.config import ObjcovConfig, load_config
from objcov.config import loader as loader_module
from objcov.core.errors import ConfigError, ErrorCode


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Generator[None, None, None]:
    """Remove OBJCOV__* env vars and point the global config somewhere empty."""
    for key in [k for k in os.environ if k.startswith("OBJCOV__")]:
        monkeypatch.delenv(key)
    monkeypatch.setattr(loader_module, "GLOBAL_CONFIG_PATH", tmp_path / "global" / "config.yaml")
    yield


@pytest.fixture
def source_root(tmp_path: Path) -> Path:
    root = tmp_path / "src"
    root.mkdir()
    return root


def _write_repo_config(root: Path, text: str) -> Path:
    path = root / ".objcov" / "config.yaml"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


class TestLoadConfig:
    """Source precedence tests."""

    def test_given_no_sources_when_loaded_then_defaults(self, source_root: Path) -> None:
        config = load_config(source_root)

        assert isinstance(config, ObjcovConfig)
        assert config.tool.gcov_path == "gcov"
        assert config.tool.max_workers == 1
        assert config.report.exclude_header is True
        assert config.report.strict_parse is False

    def test_given_repo_yaml_when_loaded_then_values_applied(self, source_root: Path) -> None:
        _write_repo_config(source_root, "tool:\n  gcov_path: gcov-13\n  timeout_sec: 5\n")

        config = load_config(source_root)

        assert config.tool.gcov_path == "gcov-13"
        assert config.tool.timeout_sec == 5.0

    def test_given_single_file_root_when_loaded_then_sibling_config_used(
        self, source_root: Path
    ) -> None:
        src = source_root / "vm.c"
        src.write_text("")
        _write_repo_config(source_root, "report:\n  strict_parse: true\n")

        assert load_config(src).report.strict_parse is True

    def test_given_global_and_repo_yaml_when_loaded_then_repo_wins(
        self, source_root: Path, tmp_path: Path
    ) -> None:
        # Given
        global_path = tmp_path / "global" / "config.yaml"
        global_path.parent.mkdir(parents=True)
        global_path.write_text("tool:\n  gcov_path: gcov-12\n  max_workers: 3\n")
        _write_repo_config(source_root, "tool:\n  gcov_path: gcov-13\n")

        # When
        config = load_config(source_root)

        # Then
        assert config.tool.gcov_path == "gcov-13"
        assert config.tool.max_workers == 3

    def test_given_env_var_when_loaded_then_overrides_yaml(
        self, source_root: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _write_repo_config(source_root, "tool:\n  gcov_path: gcov-13\n")
        monkeypatch.setenv("OBJCOV__TOOL__GCOV_PATH", "llvm-cov-gcov")

        assert load_config(source_root).tool.gcov_path == "llvm-cov-gcov"

    def test_given_kwargs_when_loaded_then_highest_precedence(
        self, source_root: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("OBJCOV__TOOL__TIMEOUT_SEC", "30")

        config = load_config(source_root, tool={"timeout_sec": 2})

        assert config.tool.timeout_sec == 2.0

    def test_given_invalid_yaml_when_loaded_then_config_parse_error(
        self, source_root: Path
    ) -> None:
        _write_repo_config(source_root, "tool: [unclosed\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(source_root)
        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR

    def test_given_non_mapping_yaml_when_loaded_then_config_parse_error(
        self, source_root: Path
    ) -> None:
        _write_repo_config(source_root, "- just\n- a list\n")

        with pytest.raises(ConfigError):
            load_config(source_root)

    def test_given_invalid_value_when_loaded_then_config_invalid_value(
        self, source_root: Path
    ) -> None:
        _write_repo_config(source_root, "tool:\n  max_workers: 0\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(source_root)
        assert exc_info.value.code == ErrorCode.CONFIG_INVALID_VALUE
        assert exc_info.value.details["field"] == "tool.max_workers"
