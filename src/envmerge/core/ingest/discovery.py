"""Artifact discovery in a base directory.

Discovery order is deterministic and defines the tie-break between
observations that share a layer:

1. the fixed env files (template, base, local) in that order
2. other ``.env.*`` variants, alphabetically
3. compose manifests in candidate order
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple, Union

from envmerge.core.layers import Layer

logger = logging.getLogger(__name__)


DEFAULT_MANIFESTS: Tuple[str, ...] = (
    "docker-compose.yml",
    "docker-compose.yaml",
    "compose.yml",
    "compose.yaml",
)


@dataclass(frozen=True)
class DiscoverySettings:
    """File names envmerge looks for in a base directory."""

    template: str = ".env.example"
    base: str = ".env"
    local: str = ".env.local"
    variant_prefix: str = ".env."
    exclude: Tuple[str, ...] = ()
    manifests: Tuple[str, ...] = DEFAULT_MANIFESTS

    def fixed_env_files(self) -> List[Tuple[str, Layer]]:
        return [
            (self.template, Layer.ENV_EXAMPLE),
            (self.base, Layer.ENV),
            (self.local, Layer.ENV_LOCAL),
        ]

    def is_variant(self, name: str) -> bool:
        if not name.startswith(self.variant_prefix):
            return False
        if name in (self.template, self.base, self.local):
            return False
        return name not in self.exclude


@dataclass
class Artifacts:
    """Discovered input files, in ingestion order."""

    env_files: List[Tuple[Path, Layer]] = field(default_factory=list)
    manifests: List[Path] = field(default_factory=list)


def discover_artifacts(
    base_path: Union[str, Path],
    settings: DiscoverySettings | None = None,
) -> Artifacts:
    """Find env files and compose manifests directly inside ``base_path``.

    A missing or unreadable directory yields no artifacts.
    """
    settings = settings or DiscoverySettings()
    base = Path(base_path)
    found = Artifacts()

    for name, layer in settings.fixed_env_files():
        candidate = base / name
        if candidate.is_file():
            found.env_files.append((candidate, layer))

    try:
        names = sorted(os.listdir(base))
    except OSError as exc:
        logger.debug("Cannot list %s: %s", base, exc)
        names = []

    for name in names:
        if settings.is_variant(name) and (base / name).is_file():
            found.env_files.append((base / name, Layer.ENV_OTHER))

    for name in settings.manifests:
        candidate = base / name
        if candidate.is_file():
            found.manifests.append(candidate)

    logger.debug(
        "Discovered %d env file(s) and %d manifest(s) in %s",
        len(found.env_files),
        len(found.manifests),
        base,
    )
    return found


__all__ = ["DEFAULT_MANIFESTS", "DiscoverySettings", "Artifacts", "discover_artifacts"]
