"""Tests for api_client.health polling."""

from unittest.mock import Mock

import requests

from api_client.health import is_healthy, wait_for_health

HEALTH_URL = "http://api.test/actuator/health"


def health_response(status_code=200, body=None, json_error=False):
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    if json_error:
        response.json.side_effect = ValueError("not json")
    else:
        response.json.return_value = body
    return response


def test_is_healthy_requires_status_up():
    assert is_healthy(health_response(body={"status": "UP"}))
    assert not is_healthy(health_response(body={"status": "DOWN"}))
    assert not is_healthy(health_response(503, body={"status": "UP"}))
    assert not is_healthy(health_response(json_error=True))
    assert not is_healthy(health_response(body=["UP"]))


def test_stops_at_first_healthy_answer():
    session = Mock()
    session.get.side_effect = [
        requests.ConnectionError("refused"),
        health_response(503),
        health_response(body={"status": "UP"}),
        health_response(body={"status": "UP"}),
    ]
    sleep = Mock()

    assert wait_for_health(HEALTH_URL, attempts=10, interval=2, session=session, sleep=sleep)

    assert session.get.call_count == 3
    assert sleep.call_count == 2
    sleep.assert_called_with(2)


def test_returns_false_after_budget_exhausted():
    session = Mock()
    session.get.return_value = health_response(body={"status": "DOWN"})
    sleep = Mock()

    assert wait_for_health(HEALTH_URL, attempts=4, interval=0.5, session=session, sleep=sleep) is False

    assert session.get.call_count == 4
    # No sleep after the final attempt
    assert sleep.call_count == 3


def test_connection_errors_never_raise():
    session = Mock()
    session.get.side_effect = requests.ConnectionError("refused")

    assert wait_for_health(HEALTH_URL, attempts=2, session=session, sleep=Mock()) is False
