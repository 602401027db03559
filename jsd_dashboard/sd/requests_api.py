"""
Service Desk customer requests: list + "delete".
GET    /rest/servicedeskapi/request/
DELETE /rest/servicedeskapi/request/{key}/participant  {"usernames": []}

The delete call removes every participant from the request; the issue itself stays.
"""

import re
from typing import List

from loguru import logger

from jsd_dashboard.sd.client import SDClient
from jsd_dashboard.sd.errors import (
    FetchError,
    InvalidRequestIdError,
    RemoteDeleteError,
    RequestForbiddenError,
    RequestNotFoundError,
    SDConnectionError,
)
from jsd_dashboard.sd.models import ServiceDeskRequest, parse_request

REQUESTS_PATH = "/rest/servicedeskapi/request/"

_REQUEST_ID_RE = re.compile(r"[A-Z]+-[0-9]+")


def is_valid_request_id(request_id: str) -> bool:
    return bool(_REQUEST_ID_RE.fullmatch(str(request_id or "")))


def parse_request_listing(data) -> List[ServiceDeskRequest]:
    if not isinstance(data, dict):
        raise FetchError("SD list_requests returned non-object JSON")
    values = data.get("values") or []
    if not isinstance(values, list):
        raise FetchError("SD list_requests: 'values' is not a list")
    return [parse_request(v) for v in values if isinstance(v, dict)]


def list_requests(client: SDClient, token: str) -> List[ServiceDeskRequest]:
    try:
        resp = client.get(REQUESTS_PATH, token=token)
    except SDConnectionError as e:
        raise FetchError(str(e)) from e

    if not resp.is_success:
        raise FetchError(
            f"Failed to fetch service desk requests: {resp.status_code}",
            status_code=resp.status_code,
            body=resp.text,
        )
    try:
        data = resp.json()
    except ValueError as e:
        raise FetchError(f"SD list_requests returned invalid JSON: {e}", status_code=resp.status_code) from e

    out = parse_request_listing(data)
    logger.debug("SD list_requests ok ({} requests)", len(out))
    return out


def delete_request(client: SDClient, token: str, request_id: str) -> None:
    if not is_valid_request_id(request_id):
        raise InvalidRequestIdError(request_id)

    logger.info("Removing participants from SD request {}", request_id)
    resp = client.delete(f"{REQUESTS_PATH}{request_id}/participant", token=token, json={"usernames": []})

    if resp.status_code == 404:
        raise RequestNotFoundError(request_id)
    if resp.status_code == 403:
        raise RequestForbiddenError(request_id)
    if not resp.is_success:
        logger.error("SD delete_request {} failed: {} {}", request_id, resp.status_code, resp.text)
        raise RemoteDeleteError(resp.status_code, resp.text)

    logger.info("SD request {} participants removed", request_id)
