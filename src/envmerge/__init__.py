"""
envmerge - Environment Resolution Inspector

envmerge explains what environment variables actually resolve to and why,
tracing precedence across .env files, .env.local overrides, .env.example
templates, compose env_file references and compose inline environment blocks.
"""

__version__ = "0.3.0"
__all__ = ["__version__"]
