"""Compose manifest ingestion.

A manifest is a YAML document with a top-level ``services`` mapping. Each
service may declare:

- ``env_file``: a path, a list of paths, or a list of ``{path: ...}`` entries
  (compose long syntax), resolved relative to the manifest's directory and
  parsed as ``compose env_file`` observations scoped to the service
- ``environment``: either a ``NAME: value`` mapping or a list of
  ``NAME=VALUE`` / bare ``NAME`` strings, producing ``compose inline``
  observations scoped to the service

The loose YAML shapes are normalized here; nothing past this module sees
them.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import yaml

from envmerge.core.exceptions import ManifestError
from envmerge.core.ingest.envfile import parse_env_file
from envmerge.core.layers import Layer
from envmerge.core.models import Source

logger = logging.getLogger(__name__)

WarningSink = Callable[[str], None]


def load_manifest(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a manifest and return its ``services`` mapping.

    Raises:
        ManifestError: If the file is unreadable, is not valid YAML, or the
            document/``services`` section has the wrong shape
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestError(str(exc), context={"path": str(path)}) from exc

    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ManifestError(str(exc), context={"path": str(path)}) from exc

    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ManifestError(
            f"expected a mapping at document root, got {type(document).__name__}",
            context={"path": str(path)},
        )

    services = document.get("services")
    if services is None:
        return {}
    if not isinstance(services, dict):
        raise ManifestError(
            f"'services' must be a mapping, got {type(services).__name__}",
            context={"path": str(path)},
        )

    for name, body in services.items():
        if body is not None and not isinstance(body, dict):
            raise ManifestError(
                f"service '{name}' must be a mapping, got {type(body).__name__}",
                context={"path": str(path), "service": str(name)},
            )
    return services


def env_file_entries(value: Any) -> List[str]:
    """Normalize an ``env_file`` declaration into a list of relative paths."""
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        return []

    entries: List[str] = []
    for item in value:
        if isinstance(item, str):
            entries.append(item)
        elif isinstance(item, dict) and isinstance(item.get("path"), str):
            entries.append(item["path"])
    return entries


def _scalar_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def inline_entries(value: Any) -> List[Tuple[str, Optional[str]]]:
    """Normalize an ``environment`` declaration into ``(name, value)`` pairs.

    Pass-through references (a bare ``- NAME`` list entry or a ``NAME:`` key
    with no value) yield ``None``; ``NAME=`` is an explicit empty string.
    """
    if isinstance(value, dict):
        return [(str(key), _scalar_text(val)) for key, val in value.items()]
    if not isinstance(value, list):
        return []

    entries: List[Tuple[str, Optional[str]]] = []
    for item in value:
        if not isinstance(item, str):
            continue
        key, sep, val = item.partition("=")
        if key:
            entries.append((key, val if sep else None))
    return entries


def parse_manifest(
    path: Union[str, Path],
    *,
    on_warning: Optional[WarningSink] = None,
) -> List[Tuple[str, Source]]:
    """Parse a compose manifest into ``(name, source)`` observations.

    Services are visited in document order; for each service the
    ``env_file`` observations come before the inline ones.

    Raises:
        ManifestError: If the manifest itself cannot be loaded
    """
    path = Path(path)
    services = load_manifest(path)
    base_dir = path.parent
    observations: List[Tuple[str, Source]] = []

    for raw_name, body in services.items():
        service = str(raw_name)
        if not body:
            continue

        for rel in env_file_entries(body.get("env_file")):
            env_path = base_dir / rel
            if not env_path.is_file():
                logger.debug("Service %s references missing env_file %s", service, env_path)
                continue
            try:
                observations.extend(
                    parse_env_file(env_path, Layer.COMPOSE_ENV_FILE, service=service)
                )
            except (OSError, UnicodeDecodeError) as exc:
                message = f"Error parsing {rel} (env_file of service {service}): {exc}"
                logger.warning(message)
                if on_warning is not None:
                    on_warning(message)

        for key, value in inline_entries(body.get("environment")):
            observations.append(
                (
                    key,
                    Source(
                        layer=Layer.COMPOSE_INLINE,
                        file=str(path),
                        service=service,
                        value=value or "",
                        is_inline=True,
                        is_reference=value is None,
                    ),
                )
            )

    logger.debug("Parsed %d observation(s) from manifest %s", len(observations), path)
    return observations


__all__ = [
    "load_manifest",
    "env_file_entries",
    "inline_entries",
    "parse_manifest",
]
