from abiquo_client import iterate_pages
from abiquo_client.models import Enterprises

BASE_URL = "https://abiquo.example.com/api"


def test_iterate_pages_follows_next_links(client, requests_mock):
    first = requests_mock.get(
        f"{BASE_URL}/admin/enterprises",
        json={
            "collection": [{"id": 1, "name": "a"}, {"id": 2, "name": "b"}],
            "links": [{"rel": "next", "href": f"{BASE_URL}/admin/enterprises/page2"}],
            "totalSize": 3,
        },
    )
    second = requests_mock.get(
        f"{BASE_URL}/admin/enterprises/page2",
        json={"collection": [{"id": 3, "name": "c"}], "totalSize": 3},
    )

    page = client.get("/admin/enterprises", Enterprises)
    assert first.call_count == 1
    assert second.call_count == 0

    names = [enterprise.name for enterprise in iterate_pages(client, page)]

    assert names == ["a", "b", "c"]
    assert second.call_count == 1


def test_iterate_single_page_makes_no_requests(client, requests_mock):
    page = Enterprises.model_validate({"collection": [{"id": 1, "name": "a"}]})

    assert [e.id for e in iterate_pages(client, page)] == ["1"]
    assert requests_mock.call_count == 0
