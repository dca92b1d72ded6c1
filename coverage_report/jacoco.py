"""
Backend (JaCoCo) report generation and parsing.

The XML report nests ``<counter type="LINE" missed=".." covered=".."/>``
elements at every level (method, class, package, report). Counters for an
element follow its children, so the last LINE counter in a block is the one
that belongs to the block itself.
"""

import logging
import re
import subprocess
from pathlib import Path

from coverage_report.summary import CoverageCount

logger = logging.getLogger(__name__)

LINE_COUNTER_RE = re.compile(
    r'<counter type="LINE" missed="(\d+)" covered="(\d+)"\s*/>'
)
PACKAGE_RE = re.compile(r'<package name="([^"]+)"[^>]*>(.*?)</package>', re.S)


def _last_line_counter(text):
    matches = LINE_COUNTER_RE.findall(text)
    if not matches:
        return None
    missed, covered = (int(v) for v in matches[-1])
    return CoverageCount(covered=covered, total=missed + covered)


def parse_line_totals(xml):
    """Report-level line coverage, or None if the XML has no LINE counter."""
    # Package bodies are skipped so only report-level counters remain
    outside_packages = PACKAGE_RE.sub("", xml)
    return _last_line_counter(outside_packages) or _last_line_counter(xml)


def parse_package_lines(xml):
    """Per-package line coverage as ``[(dotted package name, CoverageCount)]``."""
    packages = []
    for name, body in PACKAGE_RE.findall(xml):
        counts = _last_line_counter(body)
        if counts is not None:
            packages.append((name.replace("/", "."), counts))
    return packages


def generate_report(
    exec_file, classes_dir, sources_dir, cli_jar, output_dir, runner=subprocess.run
):
    """Render XML, HTML and CSV reports with the JaCoCo CLI.

    Missing prerequisites degrade to a warning that points at the raw data.

    Returns:
        Path | None: the XML report, or None if it could not be generated
    """
    exec_file = Path(exec_file)
    classes_dir = Path(classes_dir)
    cli_jar = Path(cli_jar)
    output_dir = Path(output_dir)

    if not exec_file.exists():
        logger.warning("No JaCoCo execution data at %s", exec_file)
        return None
    if not classes_dir.is_dir():
        logger.warning(
            "API class files not found at %s; build the API classes first. "
            "Raw coverage data: %s",
            classes_dir,
            exec_file,
        )
        return None
    if not cli_jar.exists():
        logger.warning(
            "jacococli.jar not found at %s; cannot generate report. "
            "Raw coverage data: %s",
            cli_jar,
            exec_file,
        )
        return None

    xml_file = output_dir / "jacoco.xml"
    cmd = [
        "java", "-jar", str(cli_jar), "report", str(exec_file),
        "--classfiles", str(classes_dir),
        "--sourcefiles", str(sources_dir),
        "--xml", str(xml_file),
        "--html", str(output_dir / "html"),
        "--csv", str(output_dir / "jacoco.csv"),
    ]
    try:
        runner(cmd, check=True, capture_output=True)
    except (subprocess.CalledProcessError, OSError) as e:
        logger.warning(
            "Could not generate JaCoCo report: %s. Raw coverage data: %s", e, exec_file
        )
        return None

    if not xml_file.exists():
        logger.warning("JaCoCo did not write %s", xml_file)
        return None
    return xml_file
