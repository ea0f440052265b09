from __future__ import annotations

from pathlib import Path

import pytest

from envmerge.core.compare import compare
from envmerge.core.layers import Layer
from envmerge.core.models import DiffVar, Resolution, Source
from envmerge.core.resolver import ResolutionBuilder, resolve

from helpers.io_utils import write_env

pytestmark = pytest.mark.fast


def _resolution(path: str, values: dict[str, str]) -> Resolution:
    builder = ResolutionBuilder(path)
    for name, value in values.items():
        builder.add_source(name, Source(layer=Layer.ENV, file=f"{path}/.env", value=value))
    return builder.finalize()


def test_compare_partitions_names() -> None:
    first = _resolution("dev", {"SHARED": "same", "DB": "dev-db", "ONLY_DEV": "1"})
    second = _resolution("prod", {"SHARED": "same", "DB": "prod-db", "ONLY_PROD": "1"})

    result = compare(first, second)

    assert result.only_in_first == ["ONLY_DEV"]
    assert result.only_in_second == ["ONLY_PROD"]
    assert result.different == [DiffVar(name="DB", first_value="dev-db", second_value="prod-db")]
    assert result.same == ["SHARED"]
    assert result.is_identical() is False


def test_compare_is_symmetric() -> None:
    first = _resolution("a", {"X": "1", "Y": "2", "Z": "3"})
    second = _resolution("b", {"Y": "20", "Z": "3", "W": "4"})

    forward = compare(first, second)
    backward = compare(second, first)

    assert forward.only_in_first == backward.only_in_second
    assert forward.only_in_second == backward.only_in_first
    assert forward.same == backward.same
    assert [(d.name, d.first_value, d.second_value) for d in forward.different] == [
        (d.name, d.second_value, d.first_value) for d in backward.different
    ]


def test_compare_lists_are_sorted() -> None:
    first = _resolution("a", {"ZED": "1", "ALPHA": "1", "MID": "x", "B_ONLY": "1"})
    second = _resolution("b", {"MID": "y", "ALPHA": "1", "ZED": "1", "A_ONLY": "1", "C_ONLY": "1"})

    result = compare(first, second)

    assert result.same == ["ALPHA", "ZED"]
    assert result.only_in_first == ["B_ONLY"]
    assert result.only_in_second == ["A_ONLY", "C_ONLY"]


def test_compare_identical_and_empty() -> None:
    same = _resolution("a", {"K": "v"})
    assert compare(same, same).is_identical() is True
    assert compare(Resolution(path="x"), Resolution(path="y")).to_dict() == {
        "only_in_first": [],
        "only_in_second": [],
        "different": [],
        "same": [],
    }


def test_compare_does_not_modify_inputs(tmp_path: Path) -> None:
    write_env(tmp_path / "dev", ".env", "A=1\nB=2\n")
    write_env(tmp_path / "prod", ".env", "A=1\nB=3\nC=4\n")
    first = resolve(tmp_path / "dev")
    second = resolve(tmp_path / "prod")
    before = (first.to_dict(), second.to_dict())

    result = compare(first, second)

    assert (first.to_dict(), second.to_dict()) == before
    assert [d.name for d in result.different] == ["B"]
    assert result.only_in_second == ["C"]


def test_compare_uses_final_values_only() -> None:
    builder = ResolutionBuilder("a")
    builder.add_source("K", Source(layer=Layer.ENV, file=".env", value="old"))
    builder.add_source("K", Source(layer=Layer.ENV_LOCAL, file=".env.local", value="new"))
    first = builder.finalize()
    second = _resolution("b", {"K": "new"})

    assert compare(first, second).same == ["K"]
