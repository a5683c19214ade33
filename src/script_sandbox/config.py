"""Sandbox configuration loader with Pydantic v2 validation.

Loads a ``sandbox.yaml`` file into a typed :class:`SandboxConfig` and builds
the evaluators it describes.  Relative definition-file paths are resolved
against the directory of the config file.

Schema
------
::

    version: "1"
    whitelists:
      - whitelists/generic.txt
      - whitelists/site.txt
    blacklists:
      - blacklists/dangerous.txt
    getenv_patterns:
      - "PATH_.*"
      - "BUILD_NUMBER"

Example
-------
>>> loader = ConfigLoader()
>>> config = loader.load(Path("sandbox.yaml"))
>>> whitelist = config.build_whitelist()
"""
from __future__ import annotations

import logging
import re
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from script_sandbox.env_gate import EnvReadGate
from script_sandbox.errors import SandboxConfigError
from script_sandbox.signatures.model import Signature
from script_sandbox.signatures.parser import parse_text
from script_sandbox.whitelists.blacklist import Blacklist
from script_sandbox.whitelists.static import DEFAULT_ENCODING, StaticWhitelist

logger = logging.getLogger(__name__)

_SUPPORTED_VERSIONS: frozenset[str] = frozenset(["1", "1.0"])


class SandboxConfig(BaseModel):
    """Top-level sandbox configuration schema.

    All sections are optional.  Unknown keys are kept so that newer config
    files still load.
    """

    model_config = {"extra": "allow"}

    version: str = Field(default="1")
    whitelists: list[Path] = Field(default_factory=list)
    blacklists: list[Path] = Field(default_factory=list)
    getenv_patterns: list[str] = Field(default_factory=list)
    base_dir: Path | None = Field(default=None, exclude=True)

    @field_validator("version", mode="before")
    @classmethod
    def validate_version(cls, value: object) -> str:
        version = str(value)
        if version not in _SUPPORTED_VERSIONS:
            raise ValueError(
                f"Unsupported config version {version!r}. Supported: {sorted(_SUPPORTED_VERSIONS)}."
            )
        return version

    @field_validator("getenv_patterns")
    @classmethod
    def validate_patterns(cls, values: list[str]) -> list[str]:
        for pattern in values:
            try:
                re.compile(pattern)
            except re.error as exc:
                raise ValueError(f"Invalid getenv pattern {pattern!r}: {exc}") from exc
        return values

    def resolve(self, path: Path) -> Path:
        if path.is_absolute() or self.base_dir is None:
            return path
        return self.base_dir / path

    def build_whitelist(self) -> StaticWhitelist:
        """Build one allow-list from all configured whitelist files, in order.

        Each file is parsed on its own, so a parse error names that file and
        its own line number.
        """
        signatures: list[Signature] = []
        sources: list[str] = []
        for path in self.whitelists:
            resolved = self.resolve(path)
            if not resolved.exists():
                raise FileNotFoundError(f"Whitelist definition not found: {resolved}")
            text = resolved.read_text(encoding=DEFAULT_ENCODING)
            signatures.extend(parse_text(text, source=str(resolved)))
            sources.append(str(resolved))
        return StaticWhitelist(
            (str(sig) for sig in signatures), source=", ".join(sources) or "<empty>"
        )

    def build_blacklists(self) -> list[Blacklist]:
        return [Blacklist.from_path(self.resolve(path)) for path in self.blacklists]

    def build_env_gate(self) -> EnvReadGate:
        return EnvReadGate(self.getenv_patterns)


class ConfigLoader:
    """Loads and validates sandbox YAML configuration.

    Example
    -------
    >>> loader = ConfigLoader()
    >>> config = loader.load(Path("sandbox.yaml"))
    """

    def load(self, config_path: str | Path) -> SandboxConfig:
        """Load and validate a sandbox YAML file.

        Raises
        ------
        FileNotFoundError:
            When the config file does not exist.
        SandboxConfigError:
            When the YAML is malformed or fails validation.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Sandbox config not found: {config_path}")

        try:
            with config_path.open("r", encoding="utf-8") as fh:
                raw: dict[str, object] = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise SandboxConfigError(f"Failed to parse YAML: {exc}", str(config_path)) from exc

        return self._validate(raw, config_path.parent, str(config_path))

    def load_string(self, yaml_content: str, base_dir: Path | None = None) -> SandboxConfig:
        """Load and validate a YAML string directly."""
        try:
            raw: dict[str, object] = yaml.safe_load(yaml_content) or {}
        except yaml.YAMLError as exc:
            raise SandboxConfigError(f"Failed to parse YAML string: {exc}") from exc
        return self._validate(raw, base_dir, None)

    def defaults(self) -> SandboxConfig:
        """Return a configuration with all defaults applied."""
        return SandboxConfig()

    def _validate(
        self,
        raw: dict[str, object],
        base_dir: Path | None,
        config_path: str | None,
    ) -> SandboxConfig:
        if not isinstance(raw, dict):
            raise SandboxConfigError("Sandbox config must be a YAML mapping (dict).", config_path)
        try:
            config = SandboxConfig.model_validate({**raw, "base_dir": base_dir})
        except ValidationError as exc:
            raise SandboxConfigError(str(exc), config_path) from exc
        logger.info(
            "Loaded sandbox config from %s (whitelists=%d, blacklists=%d, getenv_patterns=%d)",
            config_path or "<string>",
            len(config.whitelists),
            len(config.blacklists),
            len(config.getenv_patterns),
        )
        return config
