"""
envmerge configuration management (YAML + ENVMERGE_* overrides).
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import jsonschema
import yaml
from jsonschema import Draft202012Validator

from envmerge.core.exceptions import ConfigError
from envmerge.core.ingest import DiscoverySettings
from envmerge.core.models import ResolveOptions
from envmerge.core.utils import deep_merge, read_yaml, resolve_yaml_path
from envmerge.data import get_data_path, read_yaml as read_data_yaml

logger = logging.getLogger(__name__)

PROJECT_CONFIG_NAME = ".envmerge.yaml"

# ENVMERGE_* variable → (config path, kind)
ENV_OVERRIDES: Dict[str, tuple[tuple[str, str], str]] = {
    "ENVMERGE_STRICT": (("resolve", "strict"), "bool"),
    "ENVMERGE_SERVICE": (("resolve", "service"), "str"),
    "ENVMERGE_INCLUDE_ENV": (("resolve", "include_ambient_env"), "bool"),
    "ENVMERGE_FORMAT": (("output", "format"), "str"),
    "ENVMERGE_COLOR": (("output", "color"), "bool"),
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _as_bool(raw: str, *, key: str) -> bool:
    low = raw.strip().lower()
    if low in _TRUE:
        return True
    if low in _FALSE:
        return False
    raise ConfigError(f"{key} must be a boolean, got {raw!r}", context={"key": key})


class ConfigManager:
    """Load, merge, and validate envmerge configuration.

    Configuration sources (highest to lowest priority):
    1. Explicit overrides passed to :meth:`resolve_options` (CLI flags)
    2. Environment variables: ENVMERGE_*
    3. Project config: <base>/.envmerge.yaml (or .yml)
    4. Bundled defaults: envmerge.data/config/defaults.yaml
    """

    def __init__(
        self,
        base_path: Union[str, Path, None] = None,
        *,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.base_path = Path(base_path) if base_path is not None else Path.cwd()
        self.environ = os.environ if environ is None else environ
        self.defaults_path = get_data_path("config", "defaults.yaml")
        self._config: Optional[Dict[str, Any]] = None

    @property
    def project_config_path(self) -> Path:
        return resolve_yaml_path(self.base_path / PROJECT_CONFIG_NAME)

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        try:
            data = read_yaml(path, default={}, raise_on_error=True)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}", context={"path": str(path)}) from exc
        if not isinstance(data, dict):
            raise ConfigError(
                f"Config file {path} must contain a mapping, got {type(data).__name__}",
                context={"path": str(path)},
            )
        return data

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> Dict[str, Any]:
        for key, ((section, name), kind) in ENV_OVERRIDES.items():
            raw = self.environ.get(key)
            if raw is None:
                continue
            value: Any = _as_bool(raw, key=key) if kind == "bool" else raw.strip()
            logger.debug("Config override from %s: %s.%s=%r", key, section, name, value)
            cfg = deep_merge(cfg, {section: {name: value}})
        return cfg

    def validate_schema(self, cfg: Dict[str, Any]) -> None:
        schema = read_data_yaml("schemas", "config.schema.yaml")
        validator = Draft202012Validator(schema)
        errors = sorted(validator.iter_errors(cfg), key=lambda e: list(e.absolute_path))
        if not errors:
            return
        first: jsonschema.ValidationError = errors[0]
        where = ".".join(str(p) for p in first.absolute_path) or "<root>"
        raise ConfigError(
            f"Invalid configuration at {where}: {first.message}",
            context={"path": where, "errors": len(errors)},
        )

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Return the merged configuration document."""
        cfg = self.load_yaml(self.defaults_path)

        project_path = self.project_config_path
        if project_path.exists():
            logger.debug("Loading project config %s", project_path)
            cfg = deep_merge(cfg, self.load_yaml(project_path))

        cfg = self.apply_env_overrides(cfg)
        if validate:
            self.validate_schema(cfg)
        self._config = cfg
        return cfg

    def get_all(self) -> Dict[str, Any]:
        if self._config is None:
            return self.load_config()
        return self._config

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a dot-notation key (e.g. ``output.format``)."""
        node: Any = self.get_all()
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def discovery_settings(self) -> DiscoverySettings:
        section = self.get("discovery", {}) or {}
        return DiscoverySettings(
            template=section["template"],
            base=section["base"],
            local=section["local"],
            variant_prefix=section["variant_prefix"],
            exclude=tuple(section.get("exclude") or ()),
            manifests=tuple(section["manifests"]),
        )

    def resolve_options(
        self,
        *,
        include_ambient_env: Optional[bool] = None,
        service_name: Optional[str] = None,
        strict_mode: Optional[bool] = None,
        compare_with: Union[str, Path, None] = None,
    ) -> ResolveOptions:
        """Build resolve options, letting explicit arguments win over config."""
        section = self.get("resolve", {}) or {}
        return ResolveOptions(
            include_ambient_env=(
                bool(section.get("include_ambient_env", False))
                if include_ambient_env is None
                else include_ambient_env
            ),
            service_name=str(section.get("service") or "") if service_name is None else service_name,
            strict_mode=bool(section.get("strict", False)) if strict_mode is None else strict_mode,
            compare_with=Path(compare_with) if compare_with else None,
        )


__all__ = ["PROJECT_CONFIG_NAME", "ENV_OVERRIDES", "ConfigManager"]
