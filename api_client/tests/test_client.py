"""
Unit tests for api_client.client.

The HTTP session is mocked; these tests pin down the request shapes, the
``{"data": ...}`` unwrapping, error context and cleanup behaviour.
"""

from unittest.mock import Mock

import pytest
import requests

from api_client.client import ApiClient, ApiError, to_payload


def make_response(status=200, data=None, text=""):
    response = Mock()
    response.status_code = status
    response.ok = 200 <= status < 300
    response.text = text
    response.json.return_value = {"data": data}
    return response


@pytest.fixture
def session():
    session = Mock()
    session.headers = {}
    return session


@pytest.fixture
def client(session):
    return ApiClient(base_url="http://api.test/api/v1/", session=session)


class TestRequest:
    def test_unwraps_data_envelope(self, client, session):
        session.request.return_value = make_response(data={"id": 7, "name": "P"})

        result = client.get_pipeline(7)

        assert result == {"id": 7, "name": "P"}
        session.request.assert_called_once_with(
            "GET", "http://api.test/api/v1/pipelines/7", json=None, timeout=10
        )

    def test_delete_returns_none_on_204(self, client, session):
        session.request.return_value = make_response(status=204)

        assert client.delete_pipeline(3) is None
        session.request.return_value.json.assert_not_called()

    def test_error_carries_method_path_status_and_body(self, client, session):
        session.request.return_value = make_response(status=404, text="Not Found")

        with pytest.raises(ApiError) as excinfo:
            client.get_series(42)

        error = excinfo.value
        assert error.method == "GET"
        assert error.path == "/series/42"
        assert error.status == 404
        assert error.body == "Not Found"
        assert str(error) == "API GET /series/42 failed: 404 - Not Found"

    def test_sets_json_content_type(self, session):
        ApiClient(base_url="http://api.test", session=session)
        assert session.headers["Content-Type"] == "application/json"

    def test_status_of_does_not_raise(self, client, session):
        session.get.return_value = make_response(status=404)
        assert client.status_of("/series/1") == 404


class TestPayloads:
    def test_to_payload_renames_and_drops_none(self):
        assert to_payload(
            {"name": "x", "publish_days": ["MONDAY"], "description": None}
        ) == {"name": "x", "publishDays": ["MONDAY"]}

    def test_create_series_defaults_to_monday(self, client, session):
        session.request.return_value = make_response(data={"id": 1})

        client.create_series(5, "Weekly Vlog")

        session.request.assert_called_once_with(
            "POST",
            "http://api.test/api/v1/pipelines/5/series",
            json={"name": "Weekly Vlog", "publishDays": ["MONDAY"]},
            timeout=10,
        )

    def test_update_series_sends_camel_case_days(self, client, session):
        session.request.return_value = make_response(data={"id": 1})

        client.update_series(1, name="Renamed", publish_days=("MONDAY", "FRIDAY"))

        _, kwargs = session.request.call_args
        assert kwargs["json"] == {
            "name": "Renamed",
            "publishDays": ["MONDAY", "FRIDAY"],
        }

    def test_create_episode_with_scheduled_date(self, client, session):
        session.request.return_value = make_response(data={"id": 9})

        client.create_episode(2, "Pilot", scheduled_date="2026-01-05")

        args, kwargs = session.request.call_args
        assert args == ("POST", "http://api.test/api/v1/series/2/episodes")
        assert kwargs["json"] == {"title": "Pilot", "scheduledDate": "2026-01-05"}

    def test_episode_status_uses_patch(self, client, session):
        session.request.return_value = make_response(data={"status": "EDITING"})

        client.update_episode_status(4, "EDITING")

        args, kwargs = session.request.call_args
        assert args == ("PATCH", "http://api.test/api/v1/episodes/4/status")
        assert kwargs["json"] == {"status": "EDITING"}

    def test_list_returns_empty_list_when_data_missing(self, client, session):
        session.request.return_value = make_response(data=None)
        assert client.list_pipelines() == []


class TestCleanupAll:
    def test_deletes_every_pipeline(self, client, session):
        session.request.side_effect = [
            make_response(data=[{"id": 1}, {"id": 2}]),
            make_response(status=204),
            make_response(status=204),
        ]

        assert client.cleanup_all() == 2
        methods = [c.args[0] for c in session.request.call_args_list]
        assert methods == ["GET", "DELETE", "DELETE"]

    def test_swallows_api_errors(self, client, session):
        session.request.side_effect = [
            make_response(data=[{"id": 1}, {"id": 2}]),
            make_response(status=404, text="gone"),
        ]

        assert client.cleanup_all() == 0

    def test_swallows_connection_errors(self, client, session):
        session.request.side_effect = requests.ConnectionError("refused")

        assert client.cleanup_all() == 0
