"""
Browser tests using Playwright against the Docker Compose stack.

IMPORTANT: E2E tests MUST NOT be run in parallel. Every scenario reads and
writes the same database. Use:
    pytest -m e2e e2e_tests/ -n 0    # Explicitly disable parallel execution
    pytest -m e2e e2e_tests/         # Or omit -n flag (defaults to sequential)
"""
