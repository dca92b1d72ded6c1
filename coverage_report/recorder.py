"""
Per-test coverage fragments.

Byte-range coverage comes from Chromium's precise coverage over a CDP
session; source-level coverage comes from the ``window.__coverage__`` object
an instrumented UI build maintains. One JSON fragment per (test, worker) is
written for each kind; file names are unique per test and worker so parallel
workers never overwrite each other.
"""

import json
import logging
import os
import re
from pathlib import Path
from urllib.parse import urlsplit

from playwright.sync_api import Error as PlaywrightError

logger = logging.getLogger(__name__)

FIRST_PARTY_EXTENSIONS = (".js", ".ts", ".tsx")
ISTANBUL_GLOBAL = "() => window.__coverage__ || null"


def sanitize_title(title):
    return re.sub(r"[^a-z0-9]", "-", title, flags=re.I).lower()


def fragment_path(directory, title, worker):
    return Path(directory) / f"{sanitize_title(title)}-{worker}.json"


def worker_index():
    """Index of the current pytest-xdist worker (gw3 -> 3), 0 when not distributed."""
    worker = os.getenv("PYTEST_XDIST_WORKER", "")
    digits = worker.lstrip("gw")
    return int(digits) if digits.isdigit() else 0


def is_first_party(url, origin):
    """True for application scripts; vendor chunks and dependencies are excluded."""
    if not url.startswith(origin.rstrip("/")):
        return False
    if "node_modules" in url or "chunk-" in url:
        return False
    return urlsplit(url).path.endswith(FIRST_PARTY_EXTENSIONS)


def write_fragment(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    return path


class CoverageRecorder:
    """Collect coverage for one page across one test body.

    Use as a context manager so collection stops even when the test fails::

        with CoverageRecorder(page, origin, v8_dir, istanbul_dir) as recorder:
            ...
            recorder.title = request.node.name
    """

    def __init__(
        self,
        page,
        origin,
        v8_dir,
        istanbul_dir=None,
        collect_istanbul=False,
        title="test",
        worker=None,
    ):
        self.page = page
        self.origin = origin
        self.v8_dir = Path(v8_dir)
        self.istanbul_dir = Path(istanbul_dir) if istanbul_dir else None
        self.collect_istanbul = collect_istanbul and istanbul_dir is not None
        self.title = title
        self.worker = worker_index() if worker is None else worker
        self.cdp = None

    def start(self):
        try:
            self.cdp = self.page.context.new_cdp_session(self.page)
            self.cdp.send("Profiler.enable")
            self.cdp.send(
                "Profiler.startPreciseCoverage",
                {"callCount": True, "detailed": True},
            )
        except PlaywrightError as e:
            # CDP is only available in Chromium
            logger.debug("Byte coverage unavailable: %s", e)
            self.cdp = None

    def take_byte_coverage(self):
        if self.cdp is None:
            return []
        try:
            result = self.cdp.send("Profiler.takePreciseCoverage")
            self.cdp.send("Profiler.stopPreciseCoverage")
            self.cdp.detach()
        except PlaywrightError as e:
            logger.warning("Could not collect byte coverage: %s", e)
            return []
        finally:
            self.cdp = None
        entries = result.get("result", [])
        return [e for e in entries if is_first_party(e.get("url", ""), self.origin)]

    def take_source_coverage(self):
        if not self.collect_istanbul:
            return None
        try:
            return self.page.evaluate(ISTANBUL_GLOBAL)
        except PlaywrightError as e:
            logger.warning("Could not read source coverage: %s", e)
            return None

    def stop(self):
        """Write fragments for this test and return their paths."""
        written = []
        entries = self.take_byte_coverage()
        if entries:
            path = fragment_path(self.v8_dir, self.title, self.worker)
            written.append(write_fragment(path, entries))

        source = self.take_source_coverage()
        if source:
            path = fragment_path(self.istanbul_dir, self.title, self.worker)
            written.append(write_fragment(path, source))

        for path in written:
            logger.debug("Wrote coverage fragment %s", path)
        return written

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        try:
            self.stop()
        except OSError as e:
            logger.warning("Could not write coverage fragment: %s", e)
        return False
