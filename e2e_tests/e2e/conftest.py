"""
Pytest fixtures for end-to-end browser testing with Playwright.

The suite runs against the Creator Pipeline stack started by Docker Compose.
Scenarios share one database, so they MUST run serially:

    pytest -m e2e e2e_tests/            # sequential (default)

Running with pytest-xdist workers (-n 2 or more) is refused at session start.
"""

import pytest
from playwright.sync_api import expect

from api_client import ApiClient
from coverage_report.recorder import CoverageRecorder
from pages import (
    AlertDialogPage,
    BoardPage,
    CalendarPage,
    DialogPage,
    PipelineListPage,
    SeriesListPage,
    SidebarNav,
)
from pipeline_e2e import settings
from pipeline_e2e.log import configure_logging
from stack.lifecycle import (
    EnvironmentSetupError,
    get_manager,
    parallel_worker_count,
)

expect.set_options(timeout=5_000)


@pytest.fixture(scope="session", autouse=True)
def e2e_environment():
    """Start the stack before the first test and stop it after the last."""
    configure_logging()

    if parallel_worker_count() > 1:
        pytest.exit(
            "E2E scenarios share one database and must run serially (-n 0)",
            returncode=4,
        )

    manager = get_manager()
    try:
        manager.setup()
    except EnvironmentSetupError as e:
        pytest.exit(f"Failed to start E2E test environment: {e}", returncode=1)

    yield manager

    manager.teardown()


@pytest.fixture(scope="session")
def browser_type_launch_args(browser_type_launch_args):
    """Configure Playwright browser launch arguments."""
    return {**browser_type_launch_args, "headless": True}


@pytest.fixture(scope="session")
def browser_context_args(browser_context_args):
    """Point every browser context at the UI under test."""
    return {
        **browser_context_args,
        "base_url": settings.BASE_URL,
        "viewport": {"width": 1280, "height": 720},
    }


@pytest.fixture
def page(context, request):
    """A fresh page whose coverage is recorded for the whole test body."""
    page = context.new_page()
    with CoverageRecorder(
        page,
        origin=settings.BASE_URL,
        v8_dir=settings.V8_COVERAGE_DIR,
        istanbul_dir=settings.ISTANBUL_COVERAGE_DIR,
        collect_istanbul=settings.ISTANBUL_ENABLED,
        title=request.node.name,
    ):
        yield page


@pytest.fixture(scope="session")
def api(e2e_environment):
    return ApiClient()


@pytest.fixture
def clean_api(api):
    """Empty database before and after the test."""
    api.cleanup_all()
    yield api
    api.cleanup_all()


# Page objects


@pytest.fixture
def sidebar(page):
    return SidebarNav(page)


@pytest.fixture
def pipeline_list(page):
    return PipelineListPage(page)


@pytest.fixture
def series_list(page):
    return SeriesListPage(page)


@pytest.fixture
def dialog(page):
    return DialogPage(page)


@pytest.fixture
def alert_dialog(page):
    return AlertDialogPage(page)


@pytest.fixture
def board(page):
    return BoardPage(page)


@pytest.fixture
def calendar(page):
    return CalendarPage(page)
