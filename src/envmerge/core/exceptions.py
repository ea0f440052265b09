from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Sequence

if TYPE_CHECKING:
    from envmerge.core.models import Resolution


class EnvmergeError(Exception):
    """Base exception for envmerge."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class ManifestError(EnvmergeError, ValueError):
    """Raised when a compose manifest cannot be read or has an invalid shape."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        EnvmergeError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class ConfigError(EnvmergeError, ValueError):
    """Raised when envmerge configuration is invalid."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        EnvmergeError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class UndefinedVariablesError(EnvmergeError):
    """Strict mode found variables that are referenced but never assigned.

    The partially built resolution stays attached so callers can still
    render diagnostics.
    """

    undefined: List[str]
    resolution: "Resolution | None"

    def __init__(
        self,
        undefined: Sequence[str],
        *,
        resolution: "Resolution | None" = None,
    ) -> None:
        names = list(undefined)
        message = f"strict mode: {len(names)} undefined variable(s): {', '.join(names)}"
        super().__init__(message, context={"count": len(names), "undefined": names})
        self.undefined = names
        self.resolution = resolution


__all__ = [
    "EnvmergeError",
    "ManifestError",
    "ConfigError",
    "UndefinedVariablesError",
]
