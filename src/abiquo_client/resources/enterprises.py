"""Enterprise and user operations."""

from __future__ import annotations

from ..models import Enterprise, Enterprises, User, Users, find_by_name
from ..models.base import Identifier
from ..options import EnterpriseListOptions, ListOptions
from ..paths import ENTERPRISES_URL, LOGIN_URL, USERS_URL, item_path
from .base import ResourceBase


class EnterprisesResource(ResourceBase):
    """Manage Abiquo enterprises (tenants) and their users."""

    def create_enterprise(self, name: str) -> Enterprise:
        return self._post(ENTERPRISES_URL, Enterprise(name=name), Enterprise)

    def get_enterprise(self, enterprise_id: Identifier | int) -> Enterprise:
        return self._get(item_path(ENTERPRISES_URL, enterprise_id), Enterprise)

    def list_enterprises(self, options: EnterpriseListOptions | None = None) -> list[Enterprise]:
        return self._list(ENTERPRISES_URL, Enterprises, options)

    def find_enterprise(self, name: str) -> Enterprise | None:
        return find_by_name(self.list_enterprises(), name)

    def get_current_user(self) -> User:
        """Return the user the configured credentials authenticate as."""
        return self._get(LOGIN_URL, User)

    def list_users(self, options: ListOptions | None = None) -> list[User]:
        """List users across all enterprises."""
        return self._list(USERS_URL, Users, options)
