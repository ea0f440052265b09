"""Line-oriented ``KEY=value`` env file parsing.

Rules:
- blank lines and lines whose trimmed text starts with ``#`` are skipped
  (there is no inline comment stripping: ``KEY=a # b`` keeps ``a # b``)
- a leading ``export `` token is dropped
- the line is split on the first ``=``; lines without one are ignored
- one matching pair of outer ``"`` or ``'`` quotes is removed from the value
- ``${OTHER}`` references are kept as literal text
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

from envmerge.core.layers import Layer
from envmerge.core.models import Source

logger = logging.getLogger(__name__)

_EXPORT_PREFIX = "export "


def unquote(value: str) -> str:
    """Strip exactly one pair of matching outer quotes, if present."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def parse_line(raw: str) -> Optional[Tuple[str, str]]:
    """Parse a single env line into ``(key, value)`` or None if it carries no assignment."""
    line = raw.strip()
    if not line or line.startswith("#"):
        return None

    if line.startswith(_EXPORT_PREFIX):
        line = line[len(_EXPORT_PREFIX):].strip()

    key, sep, value = line.partition("=")
    if not sep:
        return None

    key = key.strip()
    if not key:
        return None
    return key, unquote(value.strip())


def parse_env_text(
    text: str,
    *,
    file: str,
    layer: Layer,
    service: str = "",
) -> List[Tuple[str, Source]]:
    """Parse env file content into ``(name, source)`` observations.

    Args:
        text: Raw file content (``\\r\\n`` line endings are accepted)
        file: Artifact identifier recorded on each observation
        layer: Layer every observation belongs to
        service: Compose service scope (only for ``env_file`` references)

    Returns:
        One pair per accepted line, in file order, with 1-based line numbers
    """
    pairs: List[Tuple[str, Source]] = []
    for lineno, raw in enumerate(text.split("\n"), start=1):
        parsed = parse_line(raw)
        if parsed is None:
            continue
        key, value = parsed
        pairs.append(
            (
                key,
                Source(layer=layer, file=file, line=lineno, service=service, value=value),
            )
        )
    return pairs


def parse_env_file(
    path: Union[str, Path],
    layer: Layer,
    *,
    service: str = "",
) -> List[Tuple[str, Source]]:
    """Read and parse an env file.

    A leading UTF-8 byte order mark is dropped. I/O and decoding errors
    propagate to the caller, which decides whether they become warnings.
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8-sig")
    pairs = parse_env_text(text, file=str(path), layer=layer, service=service)
    logger.debug("Parsed %d variable(s) from %s (%s)", len(pairs), path, layer.label)
    return pairs


__all__ = ["unquote", "parse_line", "parse_env_text", "parse_env_file"]
