from api_client.client import ApiClient, ApiError
from api_client.health import wait_for_health

__all__ = ["ApiClient", "ApiError", "wait_for_health"]
