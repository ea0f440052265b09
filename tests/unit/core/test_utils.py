from __future__ import annotations

from pathlib import Path

import pytest

from envmerge.core.utils import atomic_write, deep_merge, read_yaml, resolve_yaml_path, write_text
from envmerge.data import get_data_path, read_text

from helpers.io_utils import write_text as write_fixture

pytestmark = pytest.mark.fast


def test_deep_merge_merges_mappings_and_replaces_lists() -> None:
    base = {"a": 1, "nested": {"x": 1, "y": [1, 2]}, "list": [1]}
    override = {"nested": {"y": [3]}, "list": [2, 3], "new": True}

    merged = deep_merge(base, override)

    assert merged == {"a": 1, "nested": {"x": 1, "y": [3]}, "list": [2, 3], "new": True}
    assert base == {"a": 1, "nested": {"x": 1, "y": [1, 2]}, "list": [1]}


def test_read_yaml_defaults(tmp_path: Path) -> None:
    assert read_yaml(tmp_path / "missing.yaml", default={}) == {}
    write_fixture(tmp_path / "bad.yaml", "a: [\n")
    assert read_yaml(tmp_path / "bad.yaml", default="fallback") == "fallback"
    with pytest.raises(FileNotFoundError):
        read_yaml(tmp_path / "missing.yaml", raise_on_error=True)


def test_resolve_yaml_path_prefers_yaml(tmp_path: Path) -> None:
    write_fixture(tmp_path / "cfg.yml", "a: 1\n")
    assert resolve_yaml_path(tmp_path / "cfg.yaml") == tmp_path / "cfg.yml"

    write_fixture(tmp_path / "cfg.yaml", "a: 2\n")
    assert resolve_yaml_path(tmp_path / "cfg.yml") == tmp_path / "cfg.yaml"

    assert resolve_yaml_path(tmp_path / "none.yaml") == tmp_path / "none.yaml"


def test_atomic_write_replaces_content_and_leaves_no_temp_files(tmp_path: Path) -> None:
    target = tmp_path / "sub" / "out.txt"
    write_text(target, "first\n")
    write_text(target, "second\n")

    assert target.read_text(encoding="utf-8") == "second\n"
    assert [p.name for p in target.parent.iterdir()] == ["out.txt"]


def test_atomic_write_failure_keeps_original(tmp_path: Path) -> None:
    target = tmp_path / "out.txt"
    write_text(target, "original\n")

    def boom(f) -> None:
        f.write("partial")
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        atomic_write(target, boom)

    assert target.read_text(encoding="utf-8") == "original\n"
    assert [p.name for p in tmp_path.iterdir()] == ["out.txt"]


def test_bundled_data_files_exist() -> None:
    assert get_data_path("config", "defaults.yaml").is_file()
    assert get_data_path("schemas", "config.schema.yaml").is_file()
    assert "{% for var in variables %}" in read_text("templates", "report.md.j2")
