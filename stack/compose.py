import logging
import subprocess

logger = logging.getLogger(__name__)


class Compose:
    """Run ``docker compose`` against the E2E compose file."""

    def __init__(self, compose_file, project_dir, runner=subprocess.run):
        self.compose_file = str(compose_file)
        self.project_dir = str(project_dir)
        self.runner = runner

    def command(self, *args):
        return ["docker", "compose", "-f", self.compose_file, *args]

    def run(self, *args):
        cmd = self.command(*args)
        logger.info("Running: %s", " ".join(cmd))
        return self.runner(cmd, cwd=self.project_dir, check=True)

    def build(self):
        return self.run("build")

    def up(self):
        return self.run("up", "-d")

    def down(self):
        return self.run("down", "-v")
