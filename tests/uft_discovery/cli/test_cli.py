"""CLI tests for the detect, show and config commands."""

import json

from typer.testing import CliRunner

from uft_discovery.cli import app
from uft_discovery.config import DiscoveryConfig
from uft_discovery.service import INITIAL_DETECTION_FILE

runner = CliRunner()


def test_detect_full_json(workspace, touch):
    touch(workspace, "Tests/LoginTest/script.st")
    touch(workspace, "Data/users.xlsx")

    result = runner.invoke(app, ["detect", str(workspace), "--full", "--json"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["schema_version"] == 1
    assert data["full_scan"] is True
    assert [(t["package"], t["name"], t["status"]) for t in data["tests"]] == [
        ("Tests", "LoginTest", "new")
    ]
    assert [r["relative_path"] for r in data["resource_files"]] == ["Data\\users.xlsx"]
    assert (workspace / INITIAL_DETECTION_FILE).exists()


def test_detect_text_output(workspace, touch):
    touch(workspace, "Tests/LoginTest/script.st")

    result = runner.invoke(app, ["detect", str(workspace), "--job", "nightly"])

    assert result.exit_code == 0, result.output
    assert "Executing full sync" in result.stdout
    assert "Found 1 tests with status NEW" in result.stdout
    assert "LoginTest" in result.stdout
    assert "Result queued for dispatch" in result.stdout


def test_detect_with_changes_file(workspace, touch, tmp_path):
    touch(workspace, "Tests/LoginTest/script.st")
    runner.invoke(app, ["config", "set", str(workspace), "--scm", "svn"])
    (workspace / INITIAL_DETECTION_FILE).touch()
    changes = tmp_path / "changes.json"
    changes.write_text(
        json.dumps(
            {
                "changes": [
                    {"path": "Tests/LoginTest/script.st", "edit_type": "edit"},
                    {"path": "Tests/OldSuite", "edit_type": "delete", "kind": "dir"},
                ]
            }
        ),
        encoding="utf-8",
    )

    result = runner.invoke(
        app, ["detect", str(workspace), "--changes", str(changes), "--build-id", "7", "--json"]
    )

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["full_scan"] is False
    assert [t["status"] for t in data["tests"]] == ["modified"]
    assert data["deleted_folders"] == ["Tests\\OldSuite"]


def test_detect_svn_without_changes_fails(workspace, touch):
    runner.invoke(app, ["config", "set", str(workspace), "--scm", "svn"])
    (workspace / INITIAL_DETECTION_FILE).touch()

    result = runner.invoke(app, ["detect", str(workspace), "--build-id", "5"])

    assert result.exit_code == 1
    assert "--changes is required" in result.output


def test_detect_missing_workspace(tmp_path):
    result = runner.invoke(app, ["detect", str(tmp_path / "missing")])

    assert result.exit_code == 1
    assert "Workspace not found" in result.output


def test_show_last_result(workspace, touch):
    touch(workspace, "Tests/LoginTest/script.st")
    runner.invoke(app, ["detect", str(workspace), "--json"])

    result = runner.invoke(app, ["show", str(workspace), "--json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["tests"][0]["name"] == "LoginTest"


def test_show_without_result(workspace):
    result = runner.invoke(app, ["show", str(workspace)])

    assert result.exit_code == 1
    assert "No detection result" in result.output


def test_config_set_and_show(workspace):
    result = runner.invoke(
        app,
        ["config", "set", str(workspace), "--scm", "svn", "--job", "nightly", "--full-scan-delay", "15"],
    )

    assert result.exit_code == 0, result.output
    assert "Discovery configuration saved" in result.stdout
    assert "- scm: svn" in result.stdout
    config = DiscoveryConfig.load(workspace)
    assert (config.scm, config.job_name, config.full_scan_delay_seconds) == ("svn", "nightly", 15)

    shown = runner.invoke(app, ["config", "show", str(workspace)])
    assert json.loads(shown.stdout)["job_name"] == "nightly"


def test_config_set_rejects_unknown_scm(workspace):
    result = runner.invoke(app, ["config", "set", str(workspace), "--scm", "cvs"])

    assert result.exit_code == 1
    assert "Invalid scm" in result.output


def test_detect_queue_outlives_the_process(workspace, touch):
    touch(workspace, "Tests/LoginTest/script.st")

    detected = runner.invoke(
        app, ["detect", str(workspace), "--full", "--job", "nightly", "--build-number", "3"]
    )
    assert detected.exit_code == 0, detected.output

    shown = runner.invoke(app, ["queue", "show", str(workspace), "--json"])
    assert shown.exit_code == 0, shown.output
    assert json.loads(shown.stdout) == [{"job_name": "nightly", "build_number": 3}]

    popped = runner.invoke(app, ["queue", "pop", str(workspace)])
    assert json.loads(popped.stdout) == {"job_name": "nightly", "build_number": 3}
    assert json.loads(runner.invoke(app, ["queue", "pop", str(workspace)]).stdout) is None


def test_detect_without_changes_queues_nothing(workspace):
    runner.invoke(app, ["detect", str(workspace), "--full", "--job", "nightly"])

    shown = runner.invoke(app, ["queue", "show", str(workspace)])

    assert shown.exit_code == 0, shown.output
    assert "Dispatch queue is empty" in shown.stdout


def test_show_with_undecodable_result(workspace):
    result_path = DiscoveryConfig.load(workspace).result_path(workspace)
    result_path.parent.mkdir(parents=True)
    result_path.write_bytes(b'{"schema_version": 1, "tests": ["\xff\xfe"]}')

    result = runner.invoke(app, ["show", str(workspace)])

    assert result.exit_code == 1
    assert "No detection result" in result.output
