import pytest
import requests
from urllib3.exceptions import InsecureRequestWarning

from abiquo_client import AbiquoClient
from abiquo_client.auth.basic import BasicAuth
from abiquo_client.auth.oauth import OAuth1Auth
from abiquo_client.auth.token import TokenAuth
from abiquo_client.exceptions import ResolutionError
from abiquo_client.models import Enterprise, Link
from abiquo_client.options import EnterpriseListOptions

BASE_URL = "https://abiquo.example.com/api"


def test_relative_path_is_joined_to_base_url(client, requests_mock):
    matcher = requests_mock.get(f"{BASE_URL}/admin/enterprises/7", json={"id": 7, "name": "e"})

    client.get("admin/enterprises/7", Enterprise)

    assert matcher.called_once


def test_absolute_link_is_used_verbatim(client, requests_mock):
    matcher = requests_mock.get(
        "https://other.example.com/api/admin/enterprises/3", json={"id": 3, "name": "x"}
    )

    enterprise = client.get("https://other.example.com/api/admin/enterprises/3", Enterprise)

    assert matcher.called_once
    assert enterprise.id == "3"


def test_media_types_carry_api_version(requests_mock):
    client = AbiquoClient(
        base_url=BASE_URL, auth_strategy=BasicAuth("u", "p"), api_version="3.10"
    )
    matcher = requests_mock.post(f"{BASE_URL}/admin/enterprises", json={"id": 1, "name": "a"})

    client.post("/admin/enterprises", Enterprise(name="a"), Enterprise)

    headers = matcher.last_request.headers
    assert headers["Accept"] == "application/vnd.abiquo.enterprise+json; version=3.10"
    assert headers["Content-Type"] == "application/vnd.abiquo.enterprise+json; version=3.10"


def test_explicit_version_in_media_type_is_kept(client, requests_mock):
    matcher = requests_mock.get(f"{BASE_URL}/admin/enterprises/1", json={"id": 1})

    client.get(
        "/admin/enterprises/1",
        Enterprise,
        accept="application/vnd.abiquo.enterprise+json; version=2.6",
    )

    assert matcher.last_request.headers["Accept"].endswith("version=2.6")
    assert matcher.last_request.headers["Accept"].count("version=") == 1


def test_basic_auth_header_is_sent(client, requests_mock):
    matcher = requests_mock.get(f"{BASE_URL}/admin/enterprises/1", json={"id": 1})

    client.enterprises.get_enterprise(1)

    assert matcher.last_request.headers["Authorization"].startswith("Basic ")


def test_token_auth_header_is_sent(requests_mock):
    client = AbiquoClient(base_url=BASE_URL, auth_strategy=TokenAuth(token="abc123"))
    matcher = requests_mock.get(f"{BASE_URL}/login", json={"nick": "admin"})

    client.enterprises.get_current_user()

    assert matcher.last_request.headers["Authorization"] == "Bearer abc123"


def test_oauth_requests_are_signed(requests_mock):
    client = AbiquoClient(
        base_url=BASE_URL,
        auth_strategy=OAuth1Auth(
            consumer_key="consumer-key",
            consumer_secret="consumer-secret",
            access_token="access-token",
            access_token_secret="access-token-secret",
        ),
    )
    matcher = requests_mock.get(f"{BASE_URL}/login", json={"nick": "admin"})

    client.enterprises.get_current_user()

    header = matcher.last_request.headers["Authorization"]
    assert header.startswith("OAuth ")
    for param in (
        "oauth_consumer_key",
        "oauth_token",
        "oauth_signature_method",
        "oauth_signature",
        "oauth_timestamp",
        "oauth_nonce",
        "oauth_version",
    ):
        assert f"{param}=" in header
    assert 'oauth_consumer_key="consumer-key"' in header
    assert 'oauth_token="access-token"' in header


def test_oauth_signature_covers_query_string(requests_mock):
    strategy = OAuth1Auth(
        consumer_key="consumer-key",
        consumer_secret="consumer-secret",
        access_token="access-token",
        access_token_secret="access-token-secret",
    )
    client = AbiquoClient(base_url=BASE_URL, auth_strategy=strategy)
    matcher = requests_mock.get(f"{BASE_URL}/admin/enterprises", json={"collection": []})

    client.enterprises.list_enterprises(EnterpriseListOptions(has="acme"))

    assert matcher.last_request.qs == {"has": ["acme"]}
    assert "oauth_signature=" in matcher.last_request.headers["Authorization"]


def test_path_segments_are_escaped(client, requests_mock):
    matcher = requests_mock.get(
        f"{BASE_URL}/config/hypervisortypes/a%2Fb%3Fc", json={"name": "a/b?c"}
    )

    assert client.configuration.get_hypervisor_type("a/b?c").name == "a/b?c"
    assert matcher.called_once


def test_empty_success_body_returns_none(client, requests_mock):
    requests_mock.delete(f"{BASE_URL}/admin/enterprises/1", status_code=204)

    assert client.request("DELETE", "/admin/enterprises/1") is None


def test_request_logging_includes_method_and_url(caplog, client, requests_mock):
    requests_mock.get(f"{BASE_URL}/admin/enterprises", json={"collection": []})

    with caplog.at_level("INFO", logger="abiquo_client.client"):
        client.enterprises.list_enterprises()

    assert f"Abiquo request GET {BASE_URL}/admin/enterprises" in caplog.text


def test_debug_logging_masks_credentials(caplog, client, requests_mock):
    requests_mock.post(f"{BASE_URL}/admin/enterprises", json={"id": 1, "name": "Acme"})

    with caplog.at_level("DEBUG", logger="abiquo_client.http"):
        client.enterprises.create_enterprise("Acme")

    assert ">> Authorization: ***" in caplog.text
    assert "Basic " not in caplog.text
    assert '>> Body: {"name": "Acme"}' in caplog.text
    assert "<< 200" in caplog.text


def test_transport_failure_is_surfaced_unchanged():
    class ExplodingSession:
        def __init__(self):
            self.calls = 0

        def request(self, *args, **kwargs):  # pragma: no cover - helper
            self.calls += 1
            raise requests.exceptions.ConnectionError("connection refused")

        def close(self):  # pragma: no cover - helper
            pass

    session = ExplodingSession()
    client = AbiquoClient(
        base_url=BASE_URL, auth_strategy=BasicAuth("u", "p"), session=session
    )

    with pytest.raises(requests.exceptions.ConnectionError, match="connection refused"):
        client.enterprises.list_enterprises()

    assert session.calls == 1


def test_disables_insecure_warning_when_verify_disabled(monkeypatch):
    captured: list[object] = []

    def fake_disable(warning):  # pragma: no cover - helper
        captured.append(warning)

    monkeypatch.setattr("abiquo_client.client.urllib3.disable_warnings", fake_disable)

    AbiquoClient(base_url=BASE_URL, auth_strategy=BasicAuth("u", "p"), verify_ssl=False)

    assert captured and captured[0] is InsecureRequestWarning


def test_config_is_immutable(client):
    with pytest.raises(AttributeError):
        client.config.base_url = "https://elsewhere"


def test_refresh_follows_edit_link(client, requests_mock):
    href = f"{BASE_URL}/admin/enterprises/5"
    requests_mock.get(href, json={"id": 5, "name": "renamed"})
    stale = Enterprise(
        id=5,
        name="old",
        links=[Link(rel="edit", href=href, type=Enterprise.MEDIA_TYPE)],
    )

    fresh = client.refresh(stale)

    assert fresh.name == "renamed"


def test_refresh_falls_back_to_self_link(client, requests_mock):
    href = f"{BASE_URL}/cloud/locations/2"
    requests_mock.get(href, json={"id": 2, "name": "loc"})
    dto = Enterprise(id=2, links=[Link(rel="self", href=href)])

    assert client.refresh(dto).name == "loc"


def test_refresh_without_links_raises(client):
    with pytest.raises(ResolutionError):
        client.refresh(Enterprise(id=1))


def test_edit_puts_to_edit_link(client, requests_mock):
    href = f"{BASE_URL}/admin/enterprises/5"
    matcher = requests_mock.put(href, json={"id": 5, "name": "new"})
    dto = Enterprise(id=5, name="new", links=[Link(rel="edit", href=href)])

    updated = client.edit(dto)

    assert updated.name == "new"
    assert matcher.last_request.json()["name"] == "new"


def test_delete_resource_uses_edit_link(client, requests_mock):
    href = f"{BASE_URL}/admin/enterprises/5"
    matcher = requests_mock.delete(href, status_code=204)

    client.delete_resource(Enterprise(id=5, links=[Link(rel="edit", href=href)]))

    assert matcher.called_once


def test_delete_resource_without_edit_link_raises(client):
    with pytest.raises(ResolutionError):
        client.delete_resource(Enterprise(id=5))
