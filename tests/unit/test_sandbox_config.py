"""Unit tests for config.py — SandboxConfig and ConfigLoader."""
from __future__ import annotations

from pathlib import Path

import pytest

from script_sandbox.config import ConfigLoader, SandboxConfig
from script_sandbox.errors import SandboxConfigError, SignatureParseError
from script_sandbox.signatures.model import ResolvedCall


@pytest.fixture()
def loader() -> ConfigLoader:
    return ConfigLoader()


@pytest.fixture()
def config_dir(tmp_path: Path) -> Path:
    (tmp_path / "lists").mkdir()
    (tmp_path / "lists" / "generic.txt").write_text(
        "method java.lang.String trim\n", encoding="utf-8"
    )
    (tmp_path / "lists" / "site.txt").write_text(
        "# site additions\nstaticMethod java.lang.Math max int int\n", encoding="utf-8"
    )
    (tmp_path / "lists" / "deny.txt").write_text("method java.io.File delete\n", encoding="utf-8")
    (tmp_path / "sandbox.yaml").write_text(
        "version: '1'\n"
        "whitelists:\n"
        "  - lists/generic.txt\n"
        "  - lists/site.txt\n"
        "blacklists:\n"
        "  - lists/deny.txt\n"
        "getenv_patterns:\n"
        "  - 'PATH_.*'\n",
        encoding="utf-8",
    )
    return tmp_path


class TestConfigLoader:
    def test_defaults(self, loader: ConfigLoader) -> None:
        config = loader.defaults()
        assert isinstance(config, SandboxConfig)
        assert config.whitelists == []
        assert config.getenv_patterns == []

    def test_load_file(self, loader: ConfigLoader, config_dir: Path) -> None:
        config = loader.load(config_dir / "sandbox.yaml")
        assert config.whitelists == [Path("lists/generic.txt"), Path("lists/site.txt")]
        assert config.getenv_patterns == ["PATH_.*"]
        assert config.base_dir == config_dir

    def test_missing_file(self, loader: ConfigLoader, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            loader.load(tmp_path / "nope.yaml")

    def test_empty_string_gives_defaults(self, loader: ConfigLoader) -> None:
        assert loader.load_string("").whitelists == []

    def test_unknown_keys_allowed(self, loader: ConfigLoader) -> None:
        config = loader.load_string("future_option: 3\n")
        assert config.version == "1"

    def test_unsupported_version(self, loader: ConfigLoader) -> None:
        with pytest.raises(SandboxConfigError, match="version"):
            loader.load_string("version: '99'\n")

    def test_invalid_pattern(self, loader: ConfigLoader) -> None:
        with pytest.raises(SandboxConfigError, match="getenv pattern"):
            loader.load_string("getenv_patterns: ['PATH_(']\n")

    def test_non_mapping(self, loader: ConfigLoader) -> None:
        with pytest.raises(SandboxConfigError, match="mapping"):
            loader.load_string("- a\n- b\n")

    def test_malformed_yaml(self, loader: ConfigLoader) -> None:
        with pytest.raises(SandboxConfigError):
            loader.load_string("whitelists: [unclosed\n")

    def test_error_names_config_file(self, loader: ConfigLoader, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("version: '7'\n", encoding="utf-8")
        with pytest.raises(SandboxConfigError) as info:
            loader.load(path)
        assert info.value.config_path == str(path)


class TestBuilders:
    def test_build_whitelist_concatenates_files(self, loader: ConfigLoader, config_dir: Path) -> None:
        whitelist = loader.load(config_dir / "sandbox.yaml").build_whitelist()
        assert whitelist.signature_count == 2
        assert whitelist.permits_method(ResolvedCall("java.lang.String", "trim")) is True
        assert whitelist.permits_static_method(
            ResolvedCall("java.lang.Math", "max", ("int", "int"))
        ) is True

    def test_build_whitelist_missing_file(self, loader: ConfigLoader, tmp_path: Path) -> None:
        config = loader.load_string("whitelists: [missing.txt]\n", base_dir=tmp_path)
        with pytest.raises(FileNotFoundError):
            config.build_whitelist()

    def test_build_whitelist_parse_error_names_its_own_file(
        self, loader: ConfigLoader, config_dir: Path
    ) -> None:
        site = config_dir / "lists" / "site.txt"
        site.write_text("# site additions\nmethod java.lang.String\n", encoding="utf-8")
        config = loader.load(config_dir / "sandbox.yaml")
        with pytest.raises(SignatureParseError) as exc_info:
            config.build_whitelist()
        assert exc_info.value.source == str(site)
        assert exc_info.value.line_number == 2

    def test_build_blacklists(self, loader: ConfigLoader, config_dir: Path) -> None:
        blacklists = loader.load(config_dir / "sandbox.yaml").build_blacklists()
        assert len(blacklists) == 1
        assert blacklists[0].permits_method(ResolvedCall("java.io.File", "delete")) is False

    def test_build_env_gate(self, loader: ConfigLoader, config_dir: Path) -> None:
        gate = loader.load(config_dir / "sandbox.yaml").build_env_gate()
        call = ResolvedCall("java.lang.System", "getenv", ("java.lang.String",))
        assert gate.is_allowed(call, ["PATH_HOME"]) is True
        assert gate.is_allowed(call, ["HOME"]) is False

    def test_absolute_paths_kept(self, loader: ConfigLoader, config_dir: Path) -> None:
        absolute = config_dir / "lists" / "generic.txt"
        config = loader.load_string(f"whitelists: ['{absolute}']\n")
        assert config.build_whitelist().signature_count == 1
