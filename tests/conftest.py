import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'envmerge' and tests/ importable for helpers
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from envmerge.core.config import ENV_OVERRIDES
from envmerge.core.log_config import reset_cli_logging_for_tests
from envmerge.data import clear_caches


@pytest.fixture(autouse=True)
def _isolate_envmerge_state(monkeypatch):
    """Tests must be deterministic regardless of the developer shell.

    ENVMERGE_* variables change configuration, and the CLI installs a
    package-level log handler; both are cleared around every test.
    """
    for key in ENV_OVERRIDES:
        monkeypatch.delenv(key, raising=False)
    clear_caches()
    yield
    reset_cli_logging_for_tests()


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """An empty project directory to drop env files and manifests into."""
    root = tmp_path / "project"
    root.mkdir()
    return root
