"""Source layers and their precedence.

Every observation of a variable belongs to exactly one layer. Layers form a
closed, totally ordered set (low → high precedence):

  .env.example → .env → .env.local → .env.* → compose env_file
  → compose inline → OS environment

The ranking lives in an explicit table so reordering the enum members never
changes resolution results.
"""
from __future__ import annotations

from enum import Enum
from typing import Dict


class Layer(str, Enum):
    """Where an observation was declared."""

    ENV_EXAMPLE = "env_example"
    ENV = "env"
    ENV_LOCAL = "env_local"
    ENV_OTHER = "env_other"
    COMPOSE_ENV_FILE = "compose_env_file"
    COMPOSE_INLINE = "compose_inline"
    OS_ENV = "os_env"

    @property
    def precedence(self) -> int:
        """Rank of this layer; higher wins."""
        return _PRECEDENCE[self]

    @property
    def label(self) -> str:
        """Human-readable name used in reports."""
        return _LABELS[self]

    def __str__(self) -> str:
        return self.label


_PRECEDENCE: Dict[Layer, int] = {
    Layer.ENV_EXAMPLE: 0,
    Layer.ENV: 1,
    Layer.ENV_LOCAL: 2,
    Layer.ENV_OTHER: 3,
    Layer.COMPOSE_ENV_FILE: 4,
    Layer.COMPOSE_INLINE: 5,
    Layer.OS_ENV: 6,
}

_LABELS: Dict[Layer, str] = {
    Layer.ENV_EXAMPLE: ".env.example",
    Layer.ENV: ".env",
    Layer.ENV_LOCAL: ".env.local",
    Layer.ENV_OTHER: ".env.*",
    Layer.COMPOSE_ENV_FILE: "compose env_file",
    Layer.COMPOSE_INLINE: "compose inline",
    Layer.OS_ENV: "OS environment",
}


def precedence(layer: Layer) -> int:
    """Return the precedence rank for ``layer`` (higher wins)."""
    return _PRECEDENCE[layer]


def layers_by_precedence() -> list[Layer]:
    """Return all layers ordered low → high."""
    return sorted(Layer, key=precedence)


__all__ = ["Layer", "precedence", "layers_by_precedence"]
