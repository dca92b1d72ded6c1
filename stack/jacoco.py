"""
Harvest JaCoCo coverage from the running API container.

The API runs with the JaCoCo agent listening on a TCP port. Before the stack
is stopped, the agent is told to dump its in-memory execution data, and the
dump plus the JaCoCo CLI jar are copied out of the container so the report
can be rendered on the host.
"""

import logging
import subprocess
from pathlib import Path

from coverage_report.jacoco import generate_report
from pipeline_e2e import settings

logger = logging.getLogger(__name__)

CONTAINER_EXEC_FILE = "/tmp/jacoco.exec"


class BackendCoverageHarvester:
    def __init__(
        self,
        container,
        output_dir,
        cli_jar_in_container=settings.JACOCO_CLI_IN_CONTAINER,
        local_cli_jar=settings.JACOCO_CLI_LOCAL,
        port=settings.JACOCO_PORT,
        classes_dir=settings.API_CLASSES_DIR,
        sources_dir=settings.API_SOURCES_DIR,
        runner=subprocess.run,
    ):
        self.container = container
        self.output_dir = Path(output_dir)
        self.cli_jar_in_container = cli_jar_in_container
        self.local_cli_jar = Path(local_cli_jar)
        self.port = port
        self.classes_dir = Path(classes_dir)
        self.sources_dir = Path(sources_dir)
        self.runner = runner

    @property
    def exec_file(self):
        return self.output_dir / "jacoco.exec"

    def dump(self):
        """Ask the agent to write its execution data inside the container."""
        self.runner(
            [
                "docker", "exec", self.container,
                "java", "-jar", self.cli_jar_in_container, "dump",
                "--address", "localhost",
                "--port", str(self.port),
                "--destfile", CONTAINER_EXEC_FILE,
            ],
            check=True,
            capture_output=True,
        )

    def copy_exec(self):
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.runner(
            ["docker", "cp", f"{self.container}:{CONTAINER_EXEC_FILE}", str(self.exec_file)],
            check=True,
            capture_output=True,
        )

    def copy_cli(self):
        self.runner(
            [
                "docker", "cp",
                f"{self.container}:{self.cli_jar_in_container}",
                str(self.local_cli_jar),
            ],
            check=True,
            capture_output=True,
        )

    def report(self):
        xml_file = generate_report(
            exec_file=self.exec_file,
            classes_dir=self.classes_dir,
            sources_dir=self.sources_dir,
            cli_jar=self.local_cli_jar,
            output_dir=self.output_dir,
            runner=self.runner,
        )
        if xml_file is None:
            raise RuntimeError(f"Report not generated; raw data in {self.exec_file}")

    def harvest(self):
        """Run every step; a failing step does not stop the next one.

        Returns:
            dict: step name -> True if the step succeeded
        """
        results = {}
        for name in ("dump", "copy_exec", "copy_cli", "report"):
            step = getattr(self, name)
            try:
                step()
                results[name] = True
            except (subprocess.CalledProcessError, OSError, RuntimeError) as e:
                logger.warning("JaCoCo %s step failed: %s", name, e)
                results[name] = False
        return results
