"""Fixed Abiquo API paths, relative to the configured base URL."""

from __future__ import annotations

from urllib.parse import quote

ENTERPRISES_URL = "/admin/enterprises"
USERS_URL = "/admin/enterprises/_/users"
DATACENTERS_URL = "/admin/datacenters"
LOCATIONS_URL = "/cloud/locations"
LOGIN_URL = "/login"
LICENSES_URL = "/config/licenses"
HYPERVISORTYPES_URL = "/config/hypervisortypes"


def item_path(collection: str, identifier: object) -> str:
    """Append one escaped path segment to a collection path."""
    return f"{collection}/{quote(str(identifier), safe='')}"
