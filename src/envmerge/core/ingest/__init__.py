"""Source ingestion: discovery and parsing of env files and compose manifests.

Ingestion has no knowledge of precedence; it only turns artifacts into
``(name, Source)`` observations tagged with their layer and service scope.
"""

from .discovery import Artifacts, DiscoverySettings, discover_artifacts
from .envfile import parse_env_file, parse_env_text, parse_line, unquote
from .manifest import env_file_entries, inline_entries, load_manifest, parse_manifest

__all__ = [
    "Artifacts",
    "DiscoverySettings",
    "discover_artifacts",
    "parse_env_file",
    "parse_env_text",
    "parse_line",
    "unquote",
    "env_file_entries",
    "inline_entries",
    "load_manifest",
    "parse_manifest",
]
