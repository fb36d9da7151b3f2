"""Role-gated commands over the product store."""
import logging

from catalog_admin.catalog.models import Draft, Product
from catalog_admin.catalog.roles import Role
from catalog_admin.catalog.store import ProductStore

logger = logging.getLogger(__name__)


class CommandDispatcher:
    """
    Runs mutating commands only for editors.

    For any other role the commands return ``False`` without touching the
    gateway, the draft or the list, even when invoked directly. The role is
    fixed for the lifetime of the dispatcher.
    """

    def __init__(self, store: ProductStore, role: Role):
        self.store = store
        self.role = role

    @property
    def can_mutate(self) -> bool:
        return self.role == Role.EDITOR

    def _refuse(self, command: str) -> bool:
        logger.info(f"Refused {command} for role {self.role.value}")
        return False

    async def load(self) -> bool:
        return await self.store.reload()

    async def commit(self, draft: Draft) -> bool:
        if not self.can_mutate:
            return self._refuse("commit")
        return await self.store.commit(draft)

    async def remove(self, product_id: str, confirmed: bool) -> bool:
        if not self.can_mutate:
            return self._refuse("remove")
        return await self.store.remove(product_id, confirmed)

    def edit(self, product: Product) -> bool:
        if not self.can_mutate:
            return self._refuse("edit")
        self.store.edit(product)
        return True

    def cancel(self) -> None:
        self.store.cancel()
