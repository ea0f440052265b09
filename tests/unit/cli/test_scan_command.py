from __future__ import annotations

import json
from pathlib import Path

import pytest

from envmerge.cli._dispatcher import main as cli_main

from helpers.io_utils import write_compose, write_env, write_text, write_yaml


@pytest.fixture
def project(project_dir: Path) -> Path:
    write_env(project_dir, ".env", "API_KEY=from_base\nDATABASE_URL=postgres://localhost/db\n")
    write_env(project_dir, ".env.local", "API_KEY=from_local\n")
    write_compose(
        project_dir,
        {
            "api": {"environment": {"NODE_ENV": "production"}},
            "worker": {"environment": ["QUEUE=jobs"]},
        },
    )
    return project_dir


def test_scan_text_report(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = cli_main(["scan", str(project)])

    captured = capsys.readouterr()
    assert code == 0
    assert captured.out.startswith("Environment Resolution Report")
    assert "Variables resolved: 4" in captured.out
    assert "conflicts: from_base" in captured.out
    assert "\033[" not in captured.out
    assert captured.err == ""


def test_scan_json_report(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = cli_main(["scan", str(project), "--json"])

    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["path"] == str(project.resolve())
    names = [v["name"] for v in data["variables"]]
    assert names == ["API_KEY", "DATABASE_URL", "NODE_ENV", "QUEUE"]
    assert data["undefined"] == []


def test_scan_markdown_report(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = cli_main(["scan", str(project), "--format", "markdown"])

    assert code == 0
    assert capsys.readouterr().out.startswith("# Environment Resolution Report")


def test_scan_only_overridden(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = cli_main(["scan", str(project), "--json", "--only-overridden"])

    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert [v["name"] for v in data["variables"]] == ["API_KEY"]


def test_scan_service_filter(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = cli_main(["scan", str(project), "--json", "--service", "worker"])

    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert [v["name"] for v in data["variables"]] == ["API_KEY", "DATABASE_URL", "QUEUE"]


def test_scan_include_env(
    project: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("API_KEY", "from_shell")

    code = cli_main(["scan", str(project), "--json", "--include-env"])

    assert code == 0
    data = json.loads(capsys.readouterr().out)
    api = next(v for v in data["variables"] if v["name"] == "API_KEY")
    assert api["final_value"] == "from_shell"
    assert api["final_from"]["layer"] == "OS environment"


def test_scan_strict_prints_report_then_fails(project_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    write_env(project_dir, ".env", "EMPTY_VAR=\n")
    write_compose(project_dir, {"api": {"environment": ["SECRET_KEY"]}})

    code = cli_main(["scan", str(project_dir), "--strict"])

    captured = capsys.readouterr()
    assert code == 1
    assert "Undefined Variables\n  • SECRET_KEY" in captured.out
    assert "Error: strict mode: 1 undefined variable(s): SECRET_KEY" in captured.err


def test_scan_strict_json_error(project_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    write_compose(project_dir, {"api": {"environment": ["SECRET_KEY"]}})

    code = cli_main(["scan", str(project_dir), "--strict", "--json"])

    captured = capsys.readouterr()
    assert code == 1
    assert json.loads(captured.out)["undefined"] == ["SECRET_KEY"]
    error = json.loads(captured.err)
    assert error["error"] == "strict_mode"
    assert error["context"] == {"count": 1, "undefined": ["SECRET_KEY"]}


def test_scan_strict_passes_without_undefined(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli_main(["scan", str(project), "--strict"]) == 0


def test_scan_strict_from_project_config(project_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    write_compose(project_dir, {"api": {"environment": ["SECRET_KEY"]}})
    write_yaml(project_dir / ".envmerge.yaml", {"resolve": {"strict": True}})

    assert cli_main(["scan", str(project_dir)]) == 1


def test_scan_format_from_environment(
    project: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("ENVMERGE_FORMAT", "json")

    assert cli_main(["scan", str(project)]) == 0
    assert json.loads(capsys.readouterr().out)["path"] == str(project.resolve())


def test_scan_invalid_config(project_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    write_yaml(project_dir / ".envmerge.yaml", {"output": {"format": "xml"}})

    code = cli_main(["scan", str(project_dir)])

    assert code == 1
    assert "Error: Invalid configuration at output.format" in capsys.readouterr().err


def test_scan_reports_broken_manifest_as_warning(project_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    write_env(project_dir, ".env", "KEPT=yes\n")
    write_text(project_dir / "docker-compose.yml", "services: [unclosed\n")

    code = cli_main(["scan", str(project_dir)])

    captured = capsys.readouterr()
    assert code == 0
    assert "Warnings\n  • Error parsing docker-compose.yml:" in captured.out
    assert "WARNING" not in captured.err


def test_scan_verbose_logs_to_stderr(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli_main(["scan", str(project), "--verbose"]) == 0

    assert "DEBUG envmerge.core.resolver: Resolved 4 variable(s)" in capsys.readouterr().err


def test_scan_write_effective(project: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    target = tmp_path / "out" / ".env.effective"

    code = cli_main(["scan", str(project), "--write-effective", str(target)])

    assert code == 0
    assert target.read_text(encoding="utf-8") == (
        "API_KEY=from_local\nDATABASE_URL=postgres://localhost/db\nNODE_ENV=production\nQUEUE=jobs\n"
    )
    assert f"✓ Wrote 4 variable(s) to {target}" in capsys.readouterr().err


def test_scan_compare_with(project: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    other = tmp_path / "other"
    write_env(other, ".env", "API_KEY=from_local\nEXTRA=1\n")

    code = cli_main(["scan", str(project), "--compare-with", str(other)])

    assert code == 0
    out = capsys.readouterr().out
    assert "# Environment Comparison:" in out
    assert f"## Only in {other} (1)\n  - EXTRA" in out


def test_scan_compare_with_json(project: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    other = tmp_path / "other"
    write_env(other, ".env", "API_KEY=other\n")

    code = cli_main(["scan", str(project), "--json", "--compare-with", str(other)])

    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["compare"]["with"] == str(other)
    assert data["compare"]["different"] == [
        {"name": "API_KEY", "first_value": "from_local", "second_value": "other"}
    ]
    assert data["compare"]["only_in_first"] == ["DATABASE_URL", "NODE_ENV", "QUEUE"]


def test_scan_write_effective_reports_skipped_multi_line_values(
    project_dir: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    write_env(project_dir, ".env", "PLAIN=x\n")
    write_compose(project_dir, {"api": {"environment": {"CERT": "line1\nline2\n"}}})
    target = tmp_path / ".env.effective"

    code = cli_main(["scan", str(project_dir), "--write-effective", str(target)])

    err = capsys.readouterr().err
    assert code == 0
    assert target.read_text(encoding="utf-8") == "PLAIN=x\n"
    assert "✓ Wrote 1 variable(s)" in err
    assert "Skipped 1 variable(s) that do not fit on one env line: CERT" in err
