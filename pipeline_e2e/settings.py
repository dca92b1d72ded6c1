"""
Settings for the Creator Pipeline E2E suite.

Values come from environment variables so CI and local runs can point the
suite at a different stack without editing code. Paths are relative to the
working directory the test run is started from.
"""

import os
from pathlib import Path

TRUTHY = {"1", "true", "yes", "on"}


def env_flag(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in TRUTHY


# Application under test
BASE_URL = os.getenv("BASE_URL", "http://localhost:13000").rstrip("/")
API_URL = os.getenv("API_URL", "http://localhost:18080/api/v1").rstrip("/")
HEALTH_URL = API_URL.replace("/api/v1", "") + "/actuator/health"

# Source-level instrumentation is baked into the UI build when this is set
ISTANBUL_ENABLED = env_flag("VITE_COVERAGE")

# Stack lifecycle
PROJECT_DIR = Path.cwd()
COMPOSE_FILE = os.getenv("E2E_COMPOSE_FILE", "docker-compose.test.yml")
MANAGE_STACK = env_flag("E2E_MANAGE_STACK", default=True)
HEALTH_ATTEMPTS = int(os.getenv("E2E_HEALTH_ATTEMPTS", "60"))
HEALTH_INTERVAL = float(os.getenv("E2E_HEALTH_INTERVAL", "2.0"))

# Backend (JaCoCo) coverage harvest
BACKEND_COVERAGE_ENABLED = env_flag("E2E_BACKEND_COVERAGE")
API_CONTAINER = os.getenv("E2E_API_CONTAINER", "e2e-creatorpipeline-api")
JACOCO_PORT = 6300
JACOCO_CLI_IN_CONTAINER = "/jacoco/jacococli.jar"
JACOCO_CLI_LOCAL = Path(os.getenv("E2E_JACOCO_CLI", "/tmp/jacococli.jar"))
API_PROJECT_DIR = PROJECT_DIR.parent / "creatorpipeline-api"
API_CLASSES_DIR = API_PROJECT_DIR / "build" / "classes" / "java" / "main"
API_SOURCES_DIR = API_PROJECT_DIR / "src" / "main" / "java"

# Coverage output layout
COVERAGE_DIR = PROJECT_DIR / "coverage"
V8_COVERAGE_DIR = COVERAGE_DIR / "v8"
ISTANBUL_COVERAGE_DIR = COVERAGE_DIR / "istanbul"
BACKEND_COVERAGE_DIR = COVERAGE_DIR / "backend"
FRONTEND_HTML_DIR = COVERAGE_DIR / "frontend" / "html"
ISTANBUL_OUTPUT_DIR = COVERAGE_DIR / "frontend-istanbul"

LOG_LEVEL = os.getenv("E2E_LOG_LEVEL", "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "{asctime} {levelname} {name}: {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": LOG_LEVEL,
    },
    "loggers": {
        "urllib3": {
            "level": "WARNING",
        },
    },
}
