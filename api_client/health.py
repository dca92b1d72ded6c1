"""
Health polling for the backend under test.

The backend exposes a Spring Boot actuator endpoint that answers
``{"status": "UP"}`` once it can serve traffic.
"""

import logging
import time

import requests

logger = logging.getLogger(__name__)


def is_healthy(response):
    """True when the response is 2xx and reports status UP."""
    if not response.ok:
        return False
    try:
        body = response.json()
    except ValueError:
        return False
    return isinstance(body, dict) and body.get("status") == "UP"


def wait_for_health(url, attempts=30, interval=1.0, session=None, sleep=time.sleep):
    """Poll ``url`` until it reports UP or the attempt budget runs out.

    Returns:
        bool: True on the first healthy answer, False once every attempt
        has failed. Never raises for connection problems.
    """
    http = session or requests
    for attempt in range(1, attempts + 1):
        try:
            response = http.get(url, timeout=max(interval, 1.0))
            if is_healthy(response):
                logger.info("Health check passed after %d attempt(s)", attempt)
                return True
            logger.debug(
                "Health attempt %d/%d: HTTP %s", attempt, attempts, response.status_code
            )
        except requests.RequestException as e:
            logger.debug("Health attempt %d/%d: %s", attempt, attempts, e)

        if attempt < attempts:
            sleep(interval)

    logger.warning("Health check failed after %d attempts: %s", attempts, url)
    return False
