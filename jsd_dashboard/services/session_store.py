"""
Session store: the Basic-auth token lives in one signed, http-only cookie.

`SessionStore` holds the cookie policy; a `SessionContext` is opened per request,
stages persist/clear, and writes the change onto the outgoing response.
"""

from typing import Any, Dict, Optional

from itsdangerous import BadSignature, BadTimeSignature, URLSafeTimedSerializer
from loguru import logger

SESSION_COOKIE_NAME = "jira-auth"
SESSION_TTL_SECONDS = 60 * 60 * 24 * 7  # 7 days
SESSION_SALT = "jsd-dashboard-session-v1"

_SET = "set"
_CLEAR = "clear"


class SessionStore:
    def __init__(self, secret: str, secure: bool = False, ttl_seconds: int = SESSION_TTL_SECONDS) -> None:
        if not secret:
            raise ValueError("session secret must be non-empty")
        self.secure = bool(secure)
        self.ttl_seconds = int(ttl_seconds)
        self._serializer = URLSafeTimedSerializer(secret_key=secret, salt=SESSION_SALT)

    def encode(self, token: str) -> str:
        return self._serializer.dumps(token)

    def decode(self, value: Optional[str]) -> Optional[str]:
        if not value:
            return None
        try:
            token = self._serializer.loads(value, max_age=self.ttl_seconds)
        except (BadSignature, BadTimeSignature) as e:
            logger.debug("Session cookie rejected: {}", e.__class__.__name__)
            return None
        return token if isinstance(token, str) and token else None

    def cookie_kwargs(self, value: str) -> Dict[str, Any]:
        return {
            "key": SESSION_COOKIE_NAME,
            "value": value,
            "max_age": self.ttl_seconds,
            "httponly": True,
            "secure": self.secure,
            "samesite": "strict",
            "path": "/",
        }

    def clear_cookie_kwargs(self) -> Dict[str, Any]:
        return {
            "key": SESSION_COOKIE_NAME,
            "httponly": True,
            "secure": self.secure,
            "samesite": "strict",
            "path": "/",
        }

    def open(self, cookie_value: Optional[str]) -> "SessionContext":
        return SessionContext(self, self.decode(cookie_value))


class SessionContext:
    def __init__(self, store: SessionStore, token: Optional[str]) -> None:
        self._store = store
        self._token = token
        self._pending: Optional[str] = None

    def current(self) -> Optional[str]:
        return self._token

    def persist(self, token: str) -> None:
        if not token:
            raise ValueError("token must be non-empty")
        self._token = token
        self._pending = _SET

    def clear(self) -> None:
        self._token = None
        self._pending = _CLEAR

    @property
    def dirty(self) -> bool:
        return self._pending is not None

    def apply(self, response: Any) -> None:
        if self._pending == _SET and self._token:
            response.set_cookie(**self._store.cookie_kwargs(self._store.encode(self._token)))
        elif self._pending == _CLEAR:
            response.delete_cookie(**self._store.clear_cookie_kwargs())
        self._pending = None
