"""Shared helpers for the envmerge test suite."""
