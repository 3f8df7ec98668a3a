import pytest

from abiquo_client import AbiquoClient
from abiquo_client.auth.basic import BasicAuth


@pytest.fixture
def client():
    return AbiquoClient(
        base_url="https://abiquo.example.com/api",
        auth_strategy=BasicAuth("admin", "xabiquo"),
    )
