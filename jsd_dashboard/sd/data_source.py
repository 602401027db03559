"""
Data source: remote Service Desk API or fixed in-memory mock data.
Chosen once at startup (settings.use_mock_data).
"""

from abc import ABC, abstractmethod
import copy
from typing import Any, Dict, List, Optional

from loguru import logger

from jsd_dashboard.sd import auth_api, requests_api
from jsd_dashboard.sd.auth_api import AuthResult
from jsd_dashboard.sd.client import SDClient
from jsd_dashboard.sd.errors import InvalidRequestIdError, RequestNotFoundError
from jsd_dashboard.sd.models import ServiceDeskRequest, UserProfile, parse_request, parse_user_profile


class ServiceDeskSource(ABC):
    is_mock = False

    @abstractmethod
    def authenticate(self, username: str, password: str) -> AuthResult: ...

    @abstractmethod
    def current_user(self, token: Optional[str]) -> Optional[UserProfile]: ...

    @abstractmethod
    def list_requests(self, token: str) -> List[ServiceDeskRequest]: ...

    @abstractmethod
    def delete_request(self, token: str, request_id: str) -> None: ...


class RemoteSource(ServiceDeskSource):
    def __init__(self, client: SDClient) -> None:
        self._client = client

    def authenticate(self, username: str, password: str) -> AuthResult:
        return auth_api.authenticate(self._client, username=username, password=password)

    def current_user(self, token: Optional[str]) -> Optional[UserProfile]:
        return auth_api.current_user(self._client, token)

    def list_requests(self, token: str) -> List[ServiceDeskRequest]:
        return requests_api.list_requests(self._client, token=token)

    def delete_request(self, token: str, request_id: str) -> None:
        requests_api.delete_request(self._client, token=token, request_id=request_id)


MOCK_TOKEN = "mock-credentials"

MOCK_USER_RAW: Dict[str, Any] = {
    "key": "mock-user",
    "name": "mockuser",
    "emailAddress": "mock@example.com",
    "displayName": "Mock User",
}


def _mock_date(epoch_millis: int, friendly: str) -> Dict[str, Any]:
    return {"iso8601": None, "jira": None, "friendly": friendly, "epochMillis": epoch_millis}


def _mock_request(n: int, summary: str, status: str, epoch_millis: int, friendly: str) -> Dict[str, Any]:
    return {
        "issueId": str(10000 + n),
        "issueKey": f"SD-{n}",
        "requestTypeId": "1",
        "serviceDeskId": "1",
        "createdDate": _mock_date(epoch_millis, friendly),
        "reporter": {
            "key": "mock-user",
            "name": "mockuser",
            "displayName": "Mock User",
            "emailAddress": "mock@example.com",
            "active": True,
        },
        "requestFieldValues": [
            {"fieldId": "summary", "label": "Summary", "value": summary},
            {"fieldId": "priority", "label": "Priority", "value": {"name": "Medium", "id": "3"}},
        ],
        "currentStatus": {"status": status, "statusDate": _mock_date(epoch_millis, friendly)},
        "_links": {"web": f"/servicedesk/customer/portal/1/SD-{n}"},
    }


MOCK_REQUESTS_RAW: List[Dict[str, Any]] = [
    _mock_request(3, "VPN access for new laptop", "Waiting for support", 1718002800000, "10/Jun/24 9:00 AM"),
    _mock_request(2, "Printer on 2nd floor is jammed", "In Progress", 1717916400000, "09/Jun/24 9:00 AM"),
    _mock_request(1, "Reset my password", "Resolved", 1717830000000, "08/Jun/24 9:00 AM"),
]


class MockSource(ServiceDeskSource):
    """
    In-memory stand-in for environments without access to the remote API.
    """

    is_mock = True

    def __init__(self) -> None:
        self._user = parse_user_profile(copy.deepcopy(MOCK_USER_RAW))
        self._requests = [parse_request(copy.deepcopy(r)) for r in MOCK_REQUESTS_RAW]
        self._participants: Dict[str, List[str]] = {r.issue_key: ["mockuser"] for r in self._requests}

    def authenticate(self, username: str, password: str) -> AuthResult:
        if not username or not password:
            raise ValueError("username and password must be non-empty")
        logger.info("Using mock login")
        return AuthResult(token=MOCK_TOKEN, user=self._user)

    def current_user(self, token: Optional[str]) -> Optional[UserProfile]:
        return self._user if token else None

    def list_requests(self, token: str) -> List[ServiceDeskRequest]:
        return list(self._requests)

    def participants(self, request_id: str) -> List[str]:
        return list(self._participants.get(request_id, []))

    def delete_request(self, token: str, request_id: str) -> None:
        if not requests_api.is_valid_request_id(request_id):
            raise InvalidRequestIdError(request_id)
        if request_id not in self._participants:
            raise RequestNotFoundError(request_id)
        self._participants[request_id] = []
        logger.info("Mock: participants removed from {}", request_id)


def build_source(settings: Any) -> ServiceDeskSource:
    if bool(getattr(settings, "use_mock_data", False)):
        logger.info("Data source: mock (USE_MOCK_DATA=true)")
        return MockSource()

    client = SDClient(
        base_url=settings.jira_base_url,
        timeout_seconds=float(settings.http_timeout_seconds),
    )
    logger.info("Data source: remote ({})", settings.jira_base_url)
    return RemoteSource(client)
