"""Environment variable resolution with precedence tracking.

``resolve()`` is a sequential pipeline:

  discover → parse each artifact → aggregate per name → finalize
  → (ambient merge) → (service filter) → undefined detection

Per-artifact failures become warnings on the Resolution. The only failure a
caller sees is the strict-mode :class:`UndefinedVariablesError`, which still
carries the resolution.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Tuple, Union

from envmerge.core.exceptions import ManifestError, UndefinedVariablesError
from envmerge.core.ingest import DiscoverySettings, discover_artifacts, parse_env_file, parse_manifest
from envmerge.core.layers import Layer
from envmerge.core.models import Resolution, ResolveOptions, Source, Variable

logger = logging.getLogger(__name__)

AMBIENT_SOURCE_FILE = "environment"


class ResolutionBuilder:
    """Mutable aggregation state for a single resolve call."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.resolution = Resolution(path=str(path))
        self._finalized = False

    def warn(self, message: str) -> None:
        logger.warning(message)
        self.resolution.warnings.append(message)

    def add_source(self, name: str, source: Source) -> None:
        if self._finalized:
            raise RuntimeError("Resolution already finalized")
        by_name = self.resolution.by_name
        var = by_name.get(name)
        if var is None:
            var = Variable(name=name)
            by_name[name] = var
        var.add(source)

    def add_all(self, observations: Iterable[Tuple[str, Source]]) -> None:
        for name, source in observations:
            self.add_source(name, source)

    def ingest_env_file(self, path: Path, layer: Layer) -> None:
        self.resolution.env_files.append(str(path))
        try:
            self.add_all(parse_env_file(path, layer))
        except (OSError, UnicodeDecodeError) as exc:
            self.warn(f"Error parsing {path.name}: {exc}")

    def ingest_manifest(self, path: Path) -> None:
        self.resolution.compose_files.append(str(path))
        try:
            self.add_all(parse_manifest(path, on_warning=self.warn))
        except ManifestError as exc:
            self.warn(f"Error parsing {path.name}: {exc}")

    def finalize(self) -> Resolution:
        """Sort every chain, compute winners and conflicts, order variables by name."""
        for var in self.resolution.by_name.values():
            var.finalize()
        self.resolution.variables = sorted(self.resolution.by_name.values(), key=lambda v: v.name)
        self._finalized = True
        return self.resolution


def merge_ambient_env(resolution: Resolution, environ: Mapping[str, str]) -> int:
    """Overlay process environment values onto already tracked variables.

    Names the project never mentions are ignored. Returns the number of
    variables that were overridden.
    """
    merged = 0
    for name, value in sorted(environ.items()):
        var = resolution.by_name.get(name)
        if var is None:
            continue
        var.apply_override(Source(layer=Layer.OS_ENV, file=AMBIENT_SOURCE_FILE, value=value))
        merged += 1
    logger.debug("Merged %d ambient environment value(s)", merged)
    return merged


def filter_to_service(resolution: Resolution, service: str) -> None:
    """Keep only variables that are unscoped or scoped to ``service``."""
    kept = [v for v in resolution.variables if v.used_by_service(service)]
    resolution.variables = kept
    resolution.by_name = {v.name: v for v in kept}


def find_undefined(resolution: Resolution) -> List[str]:
    """Names that are referenced but never assigned a non-empty value."""
    return [v.name for v in resolution.variables if v.is_undefined()]


def resolve(
    base_path: Union[str, Path],
    options: Optional[ResolveOptions] = None,
    *,
    settings: Optional[DiscoverySettings] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Resolution:
    """Scan ``base_path`` and resolve every environment variable.

    Args:
        base_path: Directory holding env files and compose manifests
        options: Ambient merge, service filter and strict mode switches
        settings: File names to discover (defaults to the standard layout)
        environ: Ambient environment (defaults to ``os.environ``)

    Returns:
        The finalized Resolution

    Raises:
        UndefinedVariablesError: In strict mode when undefined variables remain
    """
    options = options or ResolveOptions()
    artifacts = discover_artifacts(base_path, settings)

    builder = ResolutionBuilder(base_path)
    for path, layer in artifacts.env_files:
        builder.ingest_env_file(path, layer)
    for path in artifacts.manifests:
        builder.ingest_manifest(path)
    resolution = builder.finalize()

    if options.include_ambient_env:
        merge_ambient_env(resolution, os.environ if environ is None else environ)

    if options.service_name:
        filter_to_service(resolution, options.service_name)

    resolution.undefined = find_undefined(resolution)
    logger.debug(
        "Resolved %d variable(s) in %s (%d warning(s), %d undefined)",
        len(resolution.variables),
        resolution.path,
        len(resolution.warnings),
        len(resolution.undefined),
    )

    if options.strict_mode and resolution.undefined:
        raise UndefinedVariablesError(resolution.undefined, resolution=resolution)

    return resolution


__all__ = [
    "AMBIENT_SOURCE_FILE",
    "ResolutionBuilder",
    "merge_ambient_env",
    "filter_to_service",
    "find_undefined",
    "resolve",
]
