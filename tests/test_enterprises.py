from urllib.parse import parse_qs, urlparse

from abiquo_client.models import Enterprise, User
from abiquo_client.options import EnterpriseListOptions, ListOptions

BASE_URL = "https://abiquo.example.com/api"


def test_create_enterprise_returns_server_assigned_record(client, requests_mock):
    matcher = requests_mock.post(
        f"{BASE_URL}/admin/enterprises",
        status_code=201,
        json={"id": "42", "name": "Acme"},
    )

    enterprise = client.enterprises.create_enterprise("Acme")

    assert isinstance(enterprise, Enterprise)
    assert enterprise.id == "42"
    assert enterprise.name == "Acme"
    assert matcher.last_request.json() == {"name": "Acme"}


def test_get_enterprise_uses_collection_path(client, requests_mock):
    requests_mock.get(
        f"{BASE_URL}/admin/enterprises/7",
        json={
            "id": 7,
            "name": "Seven",
            "links": [{"rel": "edit", "href": f"{BASE_URL}/admin/enterprises/7"}],
        },
    )

    enterprise = client.enterprises.get_enterprise(7)

    assert enterprise.name == "Seven"
    assert enterprise.edit_link.href.endswith("/admin/enterprises/7")


def test_list_enterprises_preserves_payload_order(client, requests_mock):
    requests_mock.get(
        f"{BASE_URL}/admin/enterprises",
        json={
            "collection": [
                {"id": 3, "name": "c"},
                {"id": 1, "name": "a"},
                {"id": 2, "name": "b"},
            ],
            "totalSize": 3,
        },
    )

    enterprises = client.enterprises.list_enterprises()

    assert [e.id for e in enterprises] == ["3", "1", "2"]


def test_list_enterprises_sends_options(client, requests_mock):
    matcher = requests_mock.get(f"{BASE_URL}/admin/enterprises", json={"collection": []})
    options = EnterpriseListOptions(has="Ac me", limit=10, included=True)

    client.enterprises.list_enterprises(options)

    query = parse_qs(urlparse(matcher.last_request.url).query)
    assert query == {"has": ["Ac me"], "limit": ["10"], "included": ["true"]}


def test_find_enterprise_by_name(client, requests_mock):
    requests_mock.get(
        f"{BASE_URL}/admin/enterprises",
        json={"collection": [{"id": 1, "name": "a"}, {"id": 2, "name": "b"}]},
    )

    assert client.enterprises.find_enterprise("b").id == "2"
    assert client.enterprises.find_enterprise("zzz") is None


def test_get_current_user(client, requests_mock):
    matcher = requests_mock.get(
        f"{BASE_URL}/login",
        json={"id": 1, "nick": "admin", "name": "Cloud", "surname": "Admin", "active": True},
    )

    user = client.enterprises.get_current_user()

    assert isinstance(user, User)
    assert user.nick == "admin"
    assert user.active is True
    assert matcher.last_request.headers["Accept"].startswith(User.MEDIA_TYPE)


def test_list_users(client, requests_mock):
    matcher = requests_mock.get(
        f"{BASE_URL}/admin/enterprises/_/users",
        json={"collection": [{"nick": "u1"}, {"nick": "u2"}]},
    )

    users = client.enterprises.list_users(ListOptions(order_by="nick", asc=False))

    assert [u.nick for u in users] == ["u1", "u2"]
    query = parse_qs(urlparse(matcher.last_request.url).query)
    assert query == {"by": ["nick"], "asc": ["false"]}
