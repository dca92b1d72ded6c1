"""Tests for harvesting backend coverage out of the API container."""

import subprocess
from unittest.mock import Mock, patch

from stack.jacoco import CONTAINER_EXEC_FILE, BackendCoverageHarvester


def make_harvester(tmp_path, runner=None):
    return BackendCoverageHarvester(
        container="api",
        output_dir=tmp_path / "backend",
        cli_jar_in_container="/jacoco/jacococli.jar",
        local_cli_jar=tmp_path / "jacococli.jar",
        port=6300,
        classes_dir=tmp_path / "classes",
        sources_dir=tmp_path / "src",
        runner=runner or Mock(),
    )


def test_dump_targets_agent_port(tmp_path):
    harvester = make_harvester(tmp_path)

    harvester.dump()

    cmd = harvester.runner.call_args[0][0]
    assert cmd[:3] == ["docker", "exec", "api"]
    assert cmd[cmd.index("--port") + 1] == "6300"
    assert cmd[-1] == CONTAINER_EXEC_FILE


def test_copy_exec_creates_output_dir(tmp_path):
    harvester = make_harvester(tmp_path)

    harvester.copy_exec()

    assert (tmp_path / "backend").is_dir()
    cmd = harvester.runner.call_args[0][0]
    assert cmd == [
        "docker", "cp", f"api:{CONTAINER_EXEC_FILE}",
        str(tmp_path / "backend" / "jacoco.exec"),
    ]


def test_failed_step_does_not_stop_later_steps(tmp_path):
    def runner(cmd, **kwargs):
        if cmd[1] == "exec":
            raise subprocess.CalledProcessError(1, cmd)
        return Mock(returncode=0)

    harvester = make_harvester(tmp_path, runner=runner)

    with patch("stack.jacoco.generate_report", return_value=tmp_path / "x.xml"):
        results = harvester.harvest()

    assert results == {
        "dump": False,
        "copy_exec": True,
        "copy_cli": True,
        "report": True,
    }


def test_missing_report_is_a_failed_step(tmp_path):
    harvester = make_harvester(tmp_path)

    with patch("stack.jacoco.generate_report", return_value=None):
        results = harvester.harvest()

    assert results["report"] is False
    assert results["dump"] is True
