"""
Service Desk authentication: Basic credentials verified against /myself.
"""

from dataclasses import dataclass
from typing import Optional

from loguru import logger

from jsd_dashboard.sd.client import SDClient
from jsd_dashboard.sd.credentials import encode_basic_token
from jsd_dashboard.sd.errors import ConnectionFailedError, InvalidCredentialsError, SDConnectionError
from jsd_dashboard.sd.models import UserProfile, parse_user_profile

MYSELF_PATH = "/rest/api/2/myself"


@dataclass(frozen=True)
class AuthResult:
    token: str
    user: UserProfile


def _fetch_profile(client: SDClient, token: str) -> UserProfile:
    resp = client.get(MYSELF_PATH, token=token)
    if not resp.is_success:
        logger.warning("SD profile fetch failed: {} {}", resp.status_code, resp.reason_phrase)
        raise InvalidCredentialsError(resp.status_code)
    try:
        data = resp.json()
    except ValueError as e:
        raise ConnectionFailedError(f"unparseable profile body: {e}") from e
    if not isinstance(data, dict):
        raise ConnectionFailedError("profile body is not a JSON object")
    return parse_user_profile(data)


def authenticate(client: SDClient, username: str, password: str) -> AuthResult:
    token = encode_basic_token(username, password)
    logger.info("Attempting SD login for {}", username)
    try:
        user = _fetch_profile(client, token)
    except SDConnectionError as e:
        logger.error("SD login connection error: {}", e)
        raise ConnectionFailedError(str(e)) from e
    logger.info("SD login ok for {} (key={})", username, user.key)
    return AuthResult(token=token, user=user)


def current_user(client: SDClient, token: Optional[str]) -> Optional[UserProfile]:
    """
    Re-validate a stored token. Any failure means "logged out", never an error.
    """
    if not token:
        return None
    try:
        return _fetch_profile(client, token)
    except (InvalidCredentialsError, ConnectionFailedError, SDConnectionError) as e:
        logger.warning("SD current user check failed: {}", e)
        return None
