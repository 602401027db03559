import httpx
import pytest

from jsd_dashboard.sd.auth_api import authenticate, current_user
from jsd_dashboard.sd.credentials import encode_basic_token
from jsd_dashboard.sd.errors import ConnectionFailedError, InvalidCredentialsError

PROFILE = {
    "key": "u1",
    "name": "alice",
    "displayName": "Alice",
    "emailAddress": "alice@example.com",
    "avatarUrls": {"48x48": "https://x/a.png"},
}


def test_authenticate_success_returns_token_and_profile(make_client) -> None:
    client = make_client(lambda req: httpx.Response(200, json=PROFILE))

    result = authenticate(client, "alice", "secret")

    assert result.token == encode_basic_token("alice", "secret")
    assert result.user.key == "u1"
    assert result.user.display_name == "Alice"
    assert result.user.raw == PROFILE

    (req,) = client.transport.calls
    assert req.method == "GET"
    assert req.url.path == "/jira/rest/api/2/myself"
    assert req.headers["Authorization"] == f"Basic {result.token}"
    assert req.headers["Accept"] == "application/json"


@pytest.mark.parametrize("status", [401, 403, 500])
def test_authenticate_non_2xx_is_invalid_credentials(make_client, status: int) -> None:
    client = make_client(lambda req: httpx.Response(status, text="nope"))

    with pytest.raises(InvalidCredentialsError) as ei:
        authenticate(client, "alice", "wrong")
    assert ei.value.status_code == status


def test_authenticate_timeout_is_connection_failed(make_client) -> None:
    def handler(req: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=req)

    client = make_client(handler)
    with pytest.raises(ConnectionFailedError):
        authenticate(client, "alice", "secret")


def test_authenticate_unparseable_body_is_connection_failed(make_client) -> None:
    client = make_client(lambda req: httpx.Response(200, text="<html>login</html>"))
    with pytest.raises(ConnectionFailedError):
        authenticate(client, "alice", "secret")


def test_current_user_fails_soft(make_client) -> None:
    ok = make_client(lambda req: httpx.Response(200, json=PROFILE))
    assert current_user(ok, "dG9rZW4=").key == "u1"

    revoked = make_client(lambda req: httpx.Response(401))
    assert current_user(revoked, "dG9rZW4=") is None

    def boom(req: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("down", request=req)

    assert current_user(make_client(boom), "dG9rZW4=") is None


def test_current_user_without_token_makes_no_call(make_client) -> None:
    client = make_client(lambda req: httpx.Response(200, json=PROFILE))
    assert current_user(client, None) is None
    assert client.transport.calls == []
