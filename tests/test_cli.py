"""CLI tests via click's CliRunner against a temporary data directory."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from insomnia_store.cli import main
from insomnia_store.models.enums import RecordType
from insomnia_store.store import codec
from insomnia_store.store.local import file_name


@pytest.fixture
def runner(data_dir: Path) -> CliRunner:
    return CliRunner(env={"INSOMNIA_APP_DATA_DIR": str(data_dir), "INSOMNIA_MCP_LOG_LEVEL": "ERROR"})


@pytest.fixture
def seeded(data_dir: Path) -> Path:
    codec.write_records(
        data_dir / file_name(RecordType.WORKSPACE),
        [
            {"_id": "wrk_1", "type": "Workspace", "parentId": "proj_1", "name": "API", "scope": "collection",
             "created": 1, "modified": 1},
            {"_id": "wrk_2", "type": "Workspace", "parentId": "proj_1", "name": "Design", "scope": "design",
             "created": 1, "modified": 1},
        ],
    )
    codec.write_records(
        data_dir / file_name(RecordType.REQUEST),
        [{"_id": "req_1", "type": "Request", "parentId": "wrk_1", "name": "Ping", "method": "GET",
          "url": "https://x/ping", "created": 1, "modified": 1}],
    )
    return data_dir


def test_bootstrap_creates_missing_environments(runner: CliRunner, seeded: Path) -> None:
    result = runner.invoke(main, ["bootstrap"])
    assert result.exit_code == 0, result.output
    assert "Created 1 base environment(s)." in result.stdout

    again = runner.invoke(main, ["bootstrap"])
    assert again.exit_code == 0
    assert "Created 0 base environment(s)." in again.stdout

    environments = codec.read_records(seeded / file_name(RecordType.ENVIRONMENT))
    assert [e["parentId"] for e in environments] == ["wrk_1"]


def test_list_prints_json(runner: CliRunner, seeded: Path) -> None:
    result = runner.invoke(main, ["list"])

    assert result.exit_code == 0, result.output
    (collection,) = json.loads(result.stdout)
    assert collection["id"] == "wrk_1"
    assert [r["name"] for r in collection["requests"]] == ["Ping"]


def test_list_empty(runner: CliRunner) -> None:
    result = runner.invoke(main, ["list"])
    assert result.exit_code == 0
    assert json.loads(result.stdout) == []


def test_export_to_stdout(runner: CliRunner, seeded: Path) -> None:
    result = runner.invoke(main, ["export"])

    assert result.exit_code == 0, result.output
    document = json.loads(result.stdout)
    assert document["__export_format"] == 4
    assert sorted(r["_type"] for r in document["resources"]) == ["environment", "request", "workspace"]


def test_export_to_file(runner: CliRunner, seeded: Path, tmp_path: Path) -> None:
    target = tmp_path / "export.json"

    result = runner.invoke(main, ["export", "--output", str(target)])

    assert result.exit_code == 0, result.output
    assert f"Exported 3 resource(s) to {target}." in result.stdout
    assert json.loads(target.read_text(encoding="utf-8"))["_type"] == "export"


def test_corrupt_store_fails_cleanly(runner: CliRunner, data_dir: Path) -> None:
    (data_dir / file_name(RecordType.WORKSPACE)).write_text("{broken\n", encoding="utf-8")

    result = runner.invoke(main, ["list"])

    assert result.exit_code == 1
    assert "[CORRUPT_STORE]" in result.output
