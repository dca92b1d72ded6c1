"""
Lifecycle of the application stack for one test run.

The manager is a process-wide singleton: setup runs before the first test,
teardown after the last one. Setup failures abort the run; teardown never
raises, because test results have already been recorded by then.
"""

import enum
import logging
import os
from functools import partial

from api_client.health import wait_for_health
from pipeline_e2e import settings
from stack.compose import Compose
from stack.jacoco import BackendCoverageHarvester

logger = logging.getLogger(__name__)


class LifecycleState(enum.Enum):
    NOT_STARTED = "not started"
    BUILDING = "building"
    STARTING = "starting"
    WAITING_FOR_HEALTH = "waiting for health"
    READY = "ready"
    TEARING_DOWN = "tearing down"
    STOPPED = "stopped"


class EnvironmentSetupError(RuntimeError):
    """The stack could not be brought to a healthy state."""


class EnvironmentManager:
    """Bring the compose stack up before the run and down afterwards.

    Args:
        compose: object with build(), up() and down()
        health_check: zero-argument callable returning True once healthy
        harvester: optional BackendCoverageHarvester run before shutdown
        manage_stack: when False the stack is owned elsewhere and only the
            health wait is performed
    """

    def __init__(self, compose, health_check, harvester=None, manage_stack=True):
        self.compose = compose
        self.health_check = health_check
        self.harvester = harvester
        self.manage_stack = manage_stack
        self.state = LifecycleState.NOT_STARTED

    def setup(self):
        if self.state not in (LifecycleState.NOT_STARTED, LifecycleState.STOPPED):
            raise RuntimeError(f"Environment already {self.state.value}")

        logger.info("Starting E2E test environment")
        try:
            if self.manage_stack:
                self.state = LifecycleState.BUILDING
                logger.info("Building Docker images")
                self.compose.build()

                self.state = LifecycleState.STARTING
                logger.info("Starting Docker Compose services")
                self.compose.up()

            self.state = LifecycleState.WAITING_FOR_HEALTH
            logger.info("Waiting for API to be healthy")
            if not self.health_check():
                raise EnvironmentSetupError(
                    "API failed to become healthy within timeout"
                )
        except Exception as e:
            logger.error("Failed to start E2E test environment: %s", e)
            self._shutdown_quietly()
            self.state = LifecycleState.STOPPED
            if isinstance(e, EnvironmentSetupError):
                raise
            raise EnvironmentSetupError(str(e)) from e

        self.state = LifecycleState.READY
        logger.info("E2E test environment ready")

    def teardown(self):
        logger.info("Tearing down E2E test environment")
        self.state = LifecycleState.TEARING_DOWN
        try:
            if self.harvester is not None:
                results = self.harvester.harvest()
                logger.info("Backend coverage harvest: %s", results)
        except Exception as e:
            logger.warning("Backend coverage harvest failed: %s", e)

        if self.manage_stack:
            try:
                logger.info("Stopping Docker Compose services")
                self.compose.down()
            except Exception as e:
                logger.warning("Teardown encountered issues: %s", e)

        self.state = LifecycleState.STOPPED
        logger.info("E2E test environment cleaned up")

    def _shutdown_quietly(self):
        if not self.manage_stack:
            return
        try:
            self.compose.down()
        except Exception as e:
            logger.debug("Ignoring cleanup error after failed setup: %s", e)


_manager = None


def build_manager():
    compose = Compose(settings.COMPOSE_FILE, settings.PROJECT_DIR)
    health_check = partial(
        wait_for_health,
        settings.HEALTH_URL,
        attempts=settings.HEALTH_ATTEMPTS,
        interval=settings.HEALTH_INTERVAL,
    )
    harvester = None
    if settings.BACKEND_COVERAGE_ENABLED:
        harvester = BackendCoverageHarvester(
            container=settings.API_CONTAINER,
            output_dir=settings.BACKEND_COVERAGE_DIR,
        )
    return EnvironmentManager(
        compose,
        health_check,
        harvester=harvester,
        manage_stack=settings.MANAGE_STACK,
    )


def get_manager():
    """Return the process-wide EnvironmentManager."""
    global _manager
    if _manager is None:
        _manager = build_manager()
    return _manager


def parallel_worker_count():
    """Number of pytest-xdist workers in this run, 1 when not distributed.

    The stack has a single shared database, so anything above 1 must be
    refused before setup.
    """
    try:
        return max(int(os.getenv("PYTEST_XDIST_WORKER_COUNT", "1")), 1)
    except ValueError:
        return 1
