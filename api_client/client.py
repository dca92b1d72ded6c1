"""
REST helpers for E2E test data management.

Tests seed data through these helpers, drive the UI, and then verify the
persisted state here again. All endpoints live under the versioned API base
(``/api/v1`` by default) and wrap their payload in ``{"data": ...}``.
"""

import logging

import requests

from pipeline_e2e import settings

logger = logging.getLogger(__name__)

# snake_case keyword -> JSON field name
FIELD_NAMES = {
    "publish_days": "publishDays",
    "scheduled_date": "scheduledDate",
    "published_date": "publishedDate",
    "workflow_template_id": "workflowTemplateId",
}


class ApiError(Exception):
    """A non-2xx response from the API."""

    def __init__(self, method, path, status, body):
        self.method = method
        self.path = path
        self.status = status
        self.body = body
        super().__init__(f"API {method} {path} failed: {status} - {body}")


def to_payload(fields):
    """Translate keyword arguments into a JSON body, dropping None values."""
    return {
        FIELD_NAMES.get(key, key): value
        for key, value in fields.items()
        if value is not None
    }


class ApiClient:
    """Thin wrapper around a requests.Session pointed at the test API."""

    def __init__(self, base_url=None, session=None, timeout=10):
        self.base_url = (base_url or settings.API_URL).rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        self.timeout = timeout

    def request(self, method, path, body=None):
        url = f"{self.base_url}{path}"
        response = self.session.request(
            method, url, json=body, timeout=self.timeout
        )
        if not response.ok:
            raise ApiError(method, path, response.status_code, response.text)

        # DELETE returns 204 No Content
        if response.status_code == 204:
            return None
        return response.json().get("data")

    def status_of(self, path):
        """GET a path and return only the status code (no error raised)."""
        response = self.session.get(f"{self.base_url}{path}", timeout=self.timeout)
        return response.status_code

    # Pipelines

    def create_pipeline(self, name, description=None):
        return self.request(
            "POST", "/pipelines", to_payload({"name": name, "description": description})
        )

    def get_pipeline(self, pipeline_id):
        return self.request("GET", f"/pipelines/{pipeline_id}")

    def list_pipelines(self):
        return self.request("GET", "/pipelines") or []

    def update_pipeline(self, pipeline_id, **fields):
        return self.request("PUT", f"/pipelines/{pipeline_id}", to_payload(fields))

    def delete_pipeline(self, pipeline_id):
        self.request("DELETE", f"/pipelines/{pipeline_id}")

    # Series

    def create_series(
        self, pipeline_id, name, publish_days=("MONDAY",), description=None
    ):
        body = to_payload(
            {
                "name": name,
                "publish_days": list(publish_days),
                "description": description,
            }
        )
        return self.request("POST", f"/pipelines/{pipeline_id}/series", body)

    def get_series(self, series_id):
        return self.request("GET", f"/series/{series_id}")

    def list_series(self, pipeline_id):
        return self.request("GET", f"/pipelines/{pipeline_id}/series") or []

    def update_series(self, series_id, **fields):
        if "publish_days" in fields and fields["publish_days"] is not None:
            fields["publish_days"] = list(fields["publish_days"])
        return self.request("PUT", f"/series/{series_id}", to_payload(fields))

    def delete_series(self, series_id):
        self.request("DELETE", f"/series/{series_id}")

    # Episodes

    def create_episode(
        self, series_id, title, description=None, scheduled_date=None
    ):
        body = to_payload(
            {
                "title": title,
                "description": description,
                "scheduled_date": scheduled_date,
            }
        )
        return self.request("POST", f"/series/{series_id}/episodes", body)

    def get_episode(self, episode_id):
        return self.request("GET", f"/episodes/{episode_id}")

    def list_episodes(self, series_id):
        return self.request("GET", f"/series/{series_id}/episodes") or []

    def update_episode(self, episode_id, **fields):
        return self.request("PUT", f"/episodes/{episode_id}", to_payload(fields))

    def update_episode_status(self, episode_id, status):
        return self.request(
            "PATCH", f"/episodes/{episode_id}/status", {"status": status}
        )

    def delete_episode(self, episode_id):
        self.request("DELETE", f"/episodes/{episode_id}")

    def get_suggested_date(self, series_id):
        return self.request("GET", f"/series/{series_id}/episodes/suggested-date")

    # Cleanup

    def cleanup_all(self):
        """Delete every pipeline; cascade delete removes series and episodes.

        Errors are logged and ignored since data may already be gone.

        Returns:
            int: number of pipelines deleted
        """
        deleted = 0
        try:
            for pipeline in self.list_pipelines():
                self.delete_pipeline(pipeline["id"])
                deleted += 1
        except (ApiError, requests.RequestException) as e:
            logger.info(
                "Cleanup completed (some items may have already been deleted): %s", e
            )
        return deleted
