"""envmerge core: ingestion, precedence resolution and comparison."""

from .compare import compare
from .exceptions import ConfigError, EnvmergeError, ManifestError, UndefinedVariablesError
from .layers import Layer, layers_by_precedence, precedence
from .models import CompareResult, DiffVar, Resolution, ResolveOptions, Source, Variable
from .resolver import filter_to_service, find_undefined, merge_ambient_env, resolve

__all__ = [
    "compare",
    "ConfigError",
    "EnvmergeError",
    "ManifestError",
    "UndefinedVariablesError",
    "Layer",
    "layers_by_precedence",
    "precedence",
    "CompareResult",
    "DiffVar",
    "Resolution",
    "ResolveOptions",
    "Source",
    "Variable",
    "filter_to_service",
    "find_undefined",
    "merge_ambient_env",
    "resolve",
]
