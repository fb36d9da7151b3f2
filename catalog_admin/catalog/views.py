"""Configuration of the role-gated catalog view."""
from dataclasses import dataclass
from typing import Optional

from catalog_admin.catalog.access import AccessPolicy
from catalog_admin.catalog.dispatcher import CommandDispatcher
from catalog_admin.catalog.models import UserSession
from catalog_admin.catalog.roles import Role, role_of
from catalog_admin.catalog.store import ProductStore
from catalog_admin.gateway import RemoteGateway


@dataclass(frozen=True)
class CatalogView:
    """
    One mounted variant of the catalog page.

    ``requires_auth`` sends anonymous visitors to the login page.
    ``enforces_role_gate`` hides and refuses mutations for viewers; without
    it every visitor gets the editor controls and the backend's
    access-control list is the only check.
    """

    name: str
    prefix: str
    title: str
    requires_auth: bool
    enforces_role_gate: bool

    def effective_role(self, session: Optional[UserSession], editors_team_id: str) -> Role:
        if not self.enforces_role_gate:
            return Role.EDITOR
        return role_of(session, editors_team_id)

    def build_dispatcher(
        self,
        gateway: RemoteGateway,
        session: Optional[UserSession],
        policy: AccessPolicy,
    ) -> CommandDispatcher:
        # The redirect after a mutation does the reload
        store = ProductStore(gateway, policy, reload_after_mutation=False)
        return CommandDispatcher(store, self.effective_role(session, policy.editors_team_id))


DASHBOARD = CatalogView(
    name="dashboard",
    prefix="/dashboard",
    title="Product Management",
    requires_auth=True,
    enforces_role_gate=True,
)

PRODUCTS = CatalogView(
    name="products",
    prefix="/products",
    title="Products",
    requires_auth=False,
    enforces_role_gate=False,
)

VIEWS = (DASHBOARD, PRODUCTS)
