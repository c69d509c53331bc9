"""HTTP client for talking with the expense API."""
import logging
from typing import Any, Dict, List, Optional

import requests

from services.errors import ClientNetworkError
from utils.settings import DEFAULT_API_URL

logger = logging.getLogger(__name__)


def _server_message(response: requests.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return response.text or None
    if isinstance(body, dict):
        return body.get("message")
    return None


class ExpenseClient:
    """Thin wrapper over the REST endpoints; every failure surfaces as ``ClientNetworkError``."""

    def __init__(self, base_url: str = DEFAULT_API_URL, session: Optional[requests.Session] = None, timeout: Optional[float] = None):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str = "", **kwargs: Any) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            raise ClientNetworkError(f"{method} {url} failed: {exc}") from exc

        if not response.ok:
            message = _server_message(response) or response.reason
            raise ClientNetworkError(f"{method} {url} returned {response.status_code}: {message}", status_code=response.status_code)
        try:
            return response.json()
        except ValueError as exc:
            raise ClientNetworkError(f"{method} {url} returned invalid JSON") from exc

    def list_expenses(self) -> List[Dict[str, Any]]:
        return self._request("GET")

    def create_expense(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", json=payload)

    def delete_expense(self, expense_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/{expense_id}")

    def health(self) -> Dict[str, Any]:
        return self._request("GET", "/test")
