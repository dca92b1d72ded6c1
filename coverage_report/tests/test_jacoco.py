"""Tests for JaCoCo report parsing and generation."""

import subprocess
from unittest.mock import Mock

from coverage_report.jacoco import (
    generate_report,
    parse_line_totals,
    parse_package_lines,
)
from coverage_report.summary import CoverageCount

REPORT_XML = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<report name="creatorpipeline-api">
  <package name="com/creatorpipeline/api/pipeline">
    <class name="com/creatorpipeline/api/pipeline/PipelineService">
      <method name="create" desc="()V" line="12">
        <counter type="INSTRUCTION" missed="0" covered="9"/>
        <counter type="LINE" missed="0" covered="3"/>
      </method>
      <counter type="LINE" missed="2" covered="8"/>
    </class>
    <counter type="INSTRUCTION" missed="4" covered="40"/>
    <counter type="LINE" missed="2" covered="8"/>
  </package>
  <package name="com/creatorpipeline/api/series">
    <counter type="LINE" missed="10" covered="10"/>
  </package>
  <counter type="INSTRUCTION" missed="30" covered="70"/>
  <counter type="LINE" missed="12" covered="18"/>
  <counter type="METHOD" missed="1" covered="9"/>
</report>
"""


def test_report_totals_use_report_level_counter():
    # The first LINE counter belongs to a method, not the report
    assert parse_line_totals(REPORT_XML) == CoverageCount(covered=18, total=30)


def test_totals_fall_back_when_only_package_counters_exist():
    xml = '<report><package name="a"><counter type="LINE" missed="1" covered="3"/></package></report>'

    assert parse_line_totals(xml) == CoverageCount(3, 4)


def test_no_line_counter():
    assert parse_line_totals("<report/>") is None


def test_package_lines():
    assert parse_package_lines(REPORT_XML) == [
        ("com.creatorpipeline.api.pipeline", CoverageCount(8, 10)),
        ("com.creatorpipeline.api.series", CoverageCount(10, 20)),
    ]


class TestGenerateReport:
    def prerequisites(self, tmp_path):
        exec_file = tmp_path / "jacoco.exec"
        exec_file.write_bytes(b"\x01\xc0\xc0")
        classes = tmp_path / "classes"
        classes.mkdir()
        jar = tmp_path / "jacococli.jar"
        jar.write_bytes(b"PK")
        return exec_file, classes, jar

    def test_missing_exec_file(self, tmp_path, caplog):
        runner = Mock()

        result = generate_report(
            tmp_path / "missing.exec", tmp_path, tmp_path, tmp_path / "cli.jar",
            tmp_path / "out", runner=runner,
        )

        assert result is None
        runner.assert_not_called()
        assert "No JaCoCo execution data" in caplog.text

    def test_missing_classes_points_at_raw_data(self, tmp_path, caplog):
        exec_file, _, jar = self.prerequisites(tmp_path)
        runner = Mock()

        result = generate_report(
            exec_file, tmp_path / "nope", tmp_path, jar, tmp_path / "out", runner=runner,
        )

        assert result is None
        runner.assert_not_called()
        assert str(exec_file) in caplog.text

    def test_missing_cli_jar(self, tmp_path):
        exec_file, classes, _ = self.prerequisites(tmp_path)
        runner = Mock()

        result = generate_report(
            exec_file, classes, tmp_path, tmp_path / "gone.jar", tmp_path / "out",
            runner=runner,
        )

        assert result is None
        runner.assert_not_called()

    def test_cli_failure_degrades_to_none(self, tmp_path):
        exec_file, classes, jar = self.prerequisites(tmp_path)
        runner = Mock(side_effect=subprocess.CalledProcessError(1, ["java"]))

        assert generate_report(exec_file, classes, tmp_path, jar, tmp_path, runner=runner) is None

    def test_runs_cli_and_returns_xml(self, tmp_path):
        exec_file, classes, jar = self.prerequisites(tmp_path)
        out = tmp_path / "out"
        out.mkdir()

        def runner(cmd, **kwargs):
            (out / "jacoco.xml").write_text(REPORT_XML)

        result = generate_report(exec_file, classes, tmp_path / "src", jar, out, runner=runner)

        assert result == out / "jacoco.xml"

    def test_cli_arguments(self, tmp_path):
        exec_file, classes, jar = self.prerequisites(tmp_path)
        runner = Mock()

        generate_report(exec_file, classes, tmp_path / "src", jar, tmp_path, runner=runner)

        cmd = runner.call_args[0][0]
        assert cmd[:5] == ["java", "-jar", str(jar), "report", str(exec_file)]
        assert cmd[cmd.index("--xml") + 1] == str(tmp_path / "jacoco.xml")
        assert cmd[cmd.index("--html") + 1] == str(tmp_path / "html")
