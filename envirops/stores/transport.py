"""
Transports used by the API-client stores.

A transport sends one request to the envirops API and returns the decoded
JSON body, or raises NetworkError. Stores receive the transport in their
constructor so tests can swap the HTTP layer.
"""
import logging
from typing import Any, Dict, Optional

import requests

from envirops.exceptions import NetworkError

logger = logging.getLogger(__name__)


def _error_message(status_code: int, body: Any) -> str:
    if isinstance(body, dict) and body.get('error'):
        return body['error']
    return f"Error {status_code} del servidor"


class HttpTransport:
    """requests-based transport talking to a running API."""

    def __init__(self, base_url: str, timeout: float = 10, session: Optional[requests.Session] = None,
                 headers: Optional[Dict[str, str]] = None):
        """
        Args:
            base_url: e.g. http://localhost:5000
            timeout: seconds per request
            session: requests session to reuse (connection pooling)
            headers: extra headers sent with every request
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()
        self.headers = {'Accept': 'application/json', 'Content-Type': 'application/json'}
        self.headers.update(headers or {})

    def request(self, method: str, path: str, json: Any = None, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method, url, json=json, params=params, headers=self.headers, timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"[API] {method} {path} failed: {e}")
            raise NetworkError(f"No se pudo conectar con el servidor: {e}") from e

        try:
            body = response.json() if response.content else None
        except ValueError:
            body = None

        if response.status_code >= 400:
            logger.warning(f"[API] {method} {path} -> {response.status_code}")
            raise NetworkError(_error_message(response.status_code, body), response.status_code, body)
        return body


class FlaskClientTransport:
    """Transport over a Flask test client (in-process API, used by tests and scripts)."""

    def __init__(self, client):
        self.client = client

    def request(self, method: str, path: str, json: Any = None, params: Optional[Dict[str, Any]] = None) -> Any:
        response = self.client.open(path, method=method, json=json, query_string=params)
        body = response.get_json(silent=True)
        if response.status_code >= 400:
            logger.warning(f"[API] {method} {path} -> {response.status_code}")
            raise NetworkError(_error_message(response.status_code, body), response.status_code, body)
        return body
