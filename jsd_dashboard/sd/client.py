"""
HTTP client for the Jira Service Desk REST API.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from jsd_dashboard.sd.errors import SDConnectionError


@dataclass
class SDClient:
    base_url: str
    timeout_seconds: float = 10.0
    transport: Optional[httpx.BaseTransport] = None

    def _url(self, path: str) -> str:
        base = self.base_url.rstrip("/")
        path = path if path.startswith("/") else "/" + path
        return f"{base}{path}"

    def _headers(self, token: str, json: bool = False) -> Dict[str, str]:
        h: Dict[str, str] = {
            "Accept": "application/json",
            "Authorization": f"Basic {token}",
        }
        if json:
            h["Content-Type"] = "application/json"
        return h

    def _send(self, method: str, path: str, token: str, json: Optional[Dict[str, Any]] = None) -> httpx.Response:
        try:
            with httpx.Client(timeout=self.timeout_seconds, transport=self.transport) as client:
                return client.request(
                    method,
                    self._url(path),
                    headers=self._headers(token, json=json is not None),
                    json=json,
                )
        except httpx.TransportError as e:
            raise SDConnectionError(f"{method} {path} failed: {e.__class__.__name__}: {e}") from e

    def get(self, path: str, token: str) -> httpx.Response:
        return self._send("GET", path, token)

    def delete(self, path: str, token: str, json: Optional[Dict[str, Any]] = None) -> httpx.Response:
        return self._send("DELETE", path, token, json=json)
