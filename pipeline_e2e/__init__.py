"""
End-to-end test harness for the Creator Pipeline application.

Packages:
- api_client: REST helpers for seeding, verifying and cleaning up data
- stack: bring the Docker Compose stack up and down around a test run
- pages: Playwright page objects, one per UI region
- coverage_report: per-test coverage fragments and the merged reports
"""
