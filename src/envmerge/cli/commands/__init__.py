"""Top-level envmerge commands (auto-discovered by the dispatcher)."""
