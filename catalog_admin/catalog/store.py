"""Product synchronization store."""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from pydantic import ValidationError

from catalog_admin.catalog.access import AccessPolicy
from catalog_admin.catalog.models import Draft, Product
from catalog_admin.gateway import ErrorKind, GatewayError, RemoteGateway
from catalog_admin.gateway.ids import unique_id

logger = logging.getLogger(__name__)


class Operation(str, Enum):
    LOAD = "load"
    SAVE = "save"
    DELETE = "delete"


_BASE_MESSAGES = {
    Operation.LOAD: "Failed to load products",
    Operation.SAVE: "Failed to save product",
    Operation.DELETE: "Failed to delete product",
}

_HINTS = {
    ErrorKind.AUTHENTICATION: "Your session has expired. Please sign in again.",
    ErrorKind.PERMISSION: "You do not have permission to do that.",
    ErrorKind.NOT_FOUND: "The product no longer exists.",
    ErrorKind.VALIDATION: "The product data was rejected.",
    ErrorKind.NETWORK: "The product service could not be reached. Please try again.",
}


@dataclass(frozen=True)
class StoreError:
    """Recoverable failure surfaced to the page."""

    operation: Operation
    kind: ErrorKind

    @property
    def message(self) -> str:
        return f"{_BASE_MESSAGES[self.operation]}. {_HINTS[self.kind]}"


class ProductStore:
    """
    Mirror of the remote product list plus one draft.

    Every successful mutation is followed by a full ``reload()``; the local
    list is never patched in place. ``products`` is always the result of the
    last successful reload (or empty).

    Pages answer a mutation with a redirect whose GET performs that reload,
    so they build the store with ``reload_after_mutation=False``.
    """

    def __init__(
        self,
        gateway: RemoteGateway,
        policy: AccessPolicy,
        id_factory: Callable[[], str] = unique_id,
        reload_after_mutation: bool = True,
    ):
        self.gateway = gateway
        self.policy = policy
        self.id_factory = id_factory
        self.reload_after_mutation = reload_after_mutation
        self.products: List[Product] = []
        self.draft: Draft = Draft.empty()
        self.error: Optional[StoreError] = None

    def _fail(self, operation: Operation, error: GatewayError) -> None:
        self.error = StoreError(operation, error.kind)
        logger.warning(f"Product {operation.value} failed: {error.kind.value} (status={error.status_code})")

    def find(self, product_id: str) -> Optional[Product]:
        for product in self.products:
            if product.id == product_id:
                return product
        return None

    async def reload(self) -> bool:
        """
        Replace the local list with the backend's full list.

        On failure the previous list is kept and a load error is recorded.
        """
        try:
            documents = await self.gateway.list_documents()
            products = [Product.model_validate(doc) for doc in documents]
        except GatewayError as e:
            self._fail(Operation.LOAD, e)
            return False
        except ValidationError as e:
            logger.error(f"Backend returned malformed product documents: {e}")
            self.error = StoreError(Operation.LOAD, ErrorKind.VALIDATION)
            return False

        self.products = products
        return True

    async def commit(self, draft: Draft) -> bool:
        """
        Persist a draft: update when bound, create otherwise.

        On success the draft is cleared and the list reloaded (unless the
        caller reloads itself). On failure the draft is kept so typed input
        survives.
        """
        self.draft = draft
        self.error = None

        try:
            if draft.product_id is not None:
                await self.gateway.update_document(draft.product_id, draft.fields())
                logger.info(f"Updated product {draft.product_id}")
            else:
                document_id = self.id_factory()
                await self.gateway.create_document(
                    document_id, draft.fields(), self.policy.permissions()
                )
                logger.info(f"Created product {document_id}")
        except GatewayError as e:
            self._fail(Operation.SAVE, e)
            return False

        self.draft = Draft.empty()
        if self.reload_after_mutation:
            await self.reload()
        return True

    async def remove(self, product_id: str, confirmed: bool) -> bool:
        """
        Delete a product once the user has confirmed.

        A declined confirmation is a silent no-op. The list is only changed
        by the reload that follows a completed delete.
        """
        if not confirmed:
            return False

        self.error = None
        try:
            await self.gateway.delete_document(product_id)
        except GatewayError as e:
            self._fail(Operation.DELETE, e)
            return False

        logger.info(f"Deleted product {product_id}")
        if self.reload_after_mutation:
            await self.reload()
        return True

    def edit(self, product: Product) -> None:
        """Load a product into the draft (update mode)."""
        self.draft = Draft.from_product(product)

    def cancel(self) -> None:
        """Discard the draft and return to create mode."""
        self.draft = Draft.empty()

