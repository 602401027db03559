import httpx
import pytest
from fastapi.testclient import TestClient

from conftest import make_settings
from front.app import create_app
from jsd_dashboard.sd.data_source import MockSource
from jsd_dashboard.services.session_store import SESSION_COOKIE_NAME

ALICE = {"key": "u1", "displayName": "Alice"}

SD_1 = {
    "issueId": "1",
    "issueKey": "SD-1",
    "requestTypeId": "7",
    "serviceDeskId": "3",
    "createdDate": {"friendly": "Today 9:00 AM", "epochMillis": 1717837200000},
    "reporter": {"displayName": "Alice", "emailAddress": "alice@example.com"},
    "currentStatus": {"status": "Open"},
    "requestFieldValues": [
        {"fieldId": "summary", "label": "Summary", "value": "Laptop will not boot"},
        {"fieldId": "priority", "label": "Priority", "value": {"name": "High"}},
    ],
}


class FakeJira:
    """Routes httpx requests the way the remote API would answer them."""

    def __init__(self, password: str = "secret", listing=None, delete_status: int = 204) -> None:
        self.password = password
        self.listing = listing if listing is not None else {"values": [SD_1]}
        self.delete_status = delete_status
        self.deletes = []

    def __call__(self, req: httpx.Request) -> httpx.Response:
        import base64

        token = req.headers.get("Authorization", "").replace("Basic ", "")
        _, _, password = base64.b64decode(token).decode("utf-8").partition(":")
        if password != self.password:
            return httpx.Response(401, text="Unauthorized")

        path = req.url.path
        if path.endswith("/rest/api/2/myself"):
            return httpx.Response(200, json=ALICE)
        if path.endswith("/rest/servicedeskapi/request/") and req.method == "GET":
            if isinstance(self.listing, Exception):
                raise self.listing
            return httpx.Response(200, json=self.listing)
        if req.method == "DELETE":
            self.deletes.append(path)
            return httpx.Response(self.delete_status, text="remote says no")
        return httpx.Response(404)


def _login(client: TestClient, username: str = "alice", password: str = "secret"):
    return client.post("/login", data={"username": username, "password": password}, follow_redirects=False)


def test_end_to_end_login_then_list(remote_app) -> None:
    client = remote_app(FakeJira())

    r = _login(client)
    assert r.status_code == 303
    assert r.headers["location"] == "/dashboard"
    assert SESSION_COOKIE_NAME in r.cookies

    page = client.get("/dashboard")
    assert page.status_code == 200
    assert "Welcome back, Alice" in page.text
    assert "Laptop will not boot" in page.text
    assert "SD-1" in page.text
    assert "Connected to Jira API successfully" in page.text


def test_login_with_bad_password_sets_no_cookie(remote_app) -> None:
    client = remote_app(FakeJira())

    r = _login(client, password="wrong")

    assert r.status_code == 401
    assert "Invalid credentials" in r.text
    assert SESSION_COOKIE_NAME not in r.cookies
    assert client.get("/dashboard", follow_redirects=False).headers["location"] == "/"


def test_login_requires_both_fields(remote_app) -> None:
    jira = FakeJira()
    client = remote_app(jira)
    r = client.post("/login", data={"username": "alice", "password": ""}, follow_redirects=False)
    assert r.status_code == 400
    assert "Username and password are required" in r.text


def test_login_connection_failure(remote_app) -> None:
    def down(req: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("down", request=req)

    r = _login(remote_app(down))
    assert r.status_code == 503
    assert "Connection failed" in r.text


def test_root_redirects_when_logged_in(remote_app) -> None:
    client = remote_app(FakeJira())
    assert "Sign In" in client.get("/").text

    _login(client)
    r = client.get("/", follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"] == "/dashboard"


def test_logout_clears_session(remote_app) -> None:
    client = remote_app(FakeJira())
    _login(client)

    r = client.post("/logout", follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"] == "/"

    assert client.get("/dashboard", follow_redirects=False).status_code == 303


def test_revoked_credential_demotes_to_login(remote_app) -> None:
    jira = FakeJira()
    client = remote_app(jira)
    _login(client)

    jira.password = "rotated"
    r = client.get("/dashboard", follow_redirects=False)

    assert r.status_code == 303
    assert r.headers["location"] == "/"
    assert SESSION_COOKIE_NAME not in client.cookies


def test_untouched_session_sends_no_cookie_header(remote_app) -> None:
    client = remote_app(FakeJira())
    _login(client)

    page = client.get("/dashboard")
    assert page.status_code == 200
    assert "set-cookie" not in page.headers


def test_listing_failure_shows_error_but_keeps_session(remote_app) -> None:
    jira = FakeJira(listing=httpx.ReadTimeout("slow"))
    client = remote_app(jira)
    _login(client)

    page = client.get("/dashboard")
    assert page.status_code == 200
    assert "Failed to load service desk requests from API" in page.text
    assert "No Service Requests" not in page.text

    jira.listing = {"values": []}
    assert "No Service Requests" in client.get("/dashboard").text


def test_detail_page(remote_app) -> None:
    client = remote_app(FakeJira())
    _login(client)

    page = client.get("/dashboard/requests/SD-1")
    assert page.status_code == 200
    assert "Laptop will not boot" in page.text
    assert "High" in page.text
    assert "alice@example.com" in page.text

    assert client.get("/dashboard/requests/SD-404").status_code == 404


def test_delete_success_redirects_to_refreshed_listing(remote_app) -> None:
    jira = FakeJira()
    client = remote_app(jira)
    _login(client)

    r = client.post("/dashboard/requests/SD-1/delete", follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"] == "/dashboard/requests?deleted=SD-1"
    assert jira.deletes == ["/jira/rest/servicedeskapi/request/SD-1/participant"]

    page = client.get(r.headers["location"])
    assert "Participants removed from SD-1" in page.text


@pytest.mark.parametrize("status,expected", [(404, 404), (403, 403), (500, 502)])
def test_delete_remote_errors(remote_app, status: int, expected: int) -> None:
    client = remote_app(FakeJira(delete_status=status))
    _login(client)

    r = client.post("/dashboard/requests/SD-999/delete")
    assert r.status_code == expected


def test_delete_invalid_id_never_reaches_remote(remote_app) -> None:
    jira = FakeJira()
    client = remote_app(jira)
    _login(client)

    r = client.post("/dashboard/requests/not-valid-id/delete")
    assert r.status_code == 400
    assert "Invalid request ID format" in r.text
    assert jira.deletes == []


def test_mock_mode_end_to_end() -> None:
    client = TestClient(create_app(settings=make_settings(use_mock_data=True), source=MockSource()))

    assert client.get("/healthz").json() == {"ok": True, "mock": True}
    assert "Demo mode" in client.get("/").text

    _login(client, "anyone", "anything")
    page = client.get("/dashboard")
    assert "Currently using demo data" in page.text
    assert "Reset my password" in page.text


def test_mock_detail_page_has_no_portal_link() -> None:
    client = TestClient(create_app(settings=make_settings(use_mock_data=True), source=MockSource()))
    _login(client, "anyone", "anything")

    page = client.get("/dashboard/requests/SD-1")
    assert page.status_code == 200
    assert "Reset my password" in page.text
    assert "Open in Jira" not in page.text


def test_remote_detail_page_links_to_portal(remote_app) -> None:
    web = "https://jira.example.test/jira/servicedesk/customer/portal/3/SD-1"
    client = remote_app(FakeJira(listing={"values": [dict(SD_1, _links={"web": web})]}))
    _login(client)

    page = client.get("/dashboard/requests/SD-1")
    assert "Open in Jira" in page.text
    assert web in page.text
