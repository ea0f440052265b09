"""File I/O helpers: YAML reads and atomic text writes."""
from __future__ import annotations

import fcntl
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Optional, TextIO, Union

import yaml

PathLike = Union[str, Path]


def read_yaml(path: PathLike, default: Any = None, raise_on_error: bool = False) -> Any:
    """Read YAML with error handling.

    Returns ``default`` if the file is missing, empty or invalid, unless
    ``raise_on_error`` is True.
    """
    path = Path(path)
    if not path.exists():
        if raise_on_error:
            raise FileNotFoundError(f"File not found: {path}")
        return default

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return data if data is not None else default
    except (OSError, yaml.YAMLError):
        if raise_on_error:
            raise
        return default


def resolve_yaml_path(path: PathLike) -> Path:
    """Resolve a path that may exist as either ``.yaml`` or ``.yml``.

    ``.yaml`` is preferred when both exist. If neither exists the input is
    returned unchanged.
    """
    p = Path(path)
    base = p.with_suffix("") if p.suffix in {".yml", ".yaml"} else p
    for ext in (".yaml", ".yml"):
        candidate = base.with_suffix(ext)
        if candidate.exists():
            return candidate
    return p


def atomic_write(path: PathLike, write_fn: Callable[[TextIO], None], *, encoding: str = "utf-8") -> None:
    """Write to ``path`` atomically using a temp file + fsync + rename.

    The parent directory is created if missing and any leftover temp file is
    removed on failure.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    tmp_path: Optional[Path] = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding=encoding,
            dir=str(path.parent),
            delete=False,
        ) as f:
            tmp_path = Path(f.name)
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
            write_fn(f)
            f.flush()
            os.fsync(f.fileno())
            fcntl.flock(f.fileno(), fcntl.LOCK_UN)

        os.replace(str(tmp_path), str(path))
    finally:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()


def write_text(path: PathLike, content: str) -> None:
    """Atomically write UTF-8 text to ``path``."""
    atomic_write(Path(path), lambda f: f.write(content))


__all__ = ["read_yaml", "resolve_yaml_path", "atomic_write", "write_text"]
