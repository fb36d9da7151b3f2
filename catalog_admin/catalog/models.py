"""Catalog data model: products, drafts and resolved sessions."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, FrozenSet, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    """
    A catalog item as stored by the backend.

    ``id``, ``created_at`` and ``updated_at`` are stamped by the backend and
    never sent back to it.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(alias="$id")
    name: str
    price: float
    description: Optional[str] = None
    category: Optional[str] = None
    in_stock: bool = Field(default=True, alias="inStock")
    created_at: Optional[datetime] = Field(default=None, alias="$createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="$updatedAt")


@dataclass(frozen=True)
class Unbound:
    """Create mode: the draft has no product behind it yet."""


@dataclass(frozen=True)
class BoundTo:
    """Update mode: the draft shadows an existing product."""

    product_id: str


Binding = Union[Unbound, BoundTo]


@dataclass(frozen=True)
class Draft:
    """Unpersisted form state for a product being created or edited."""

    name: str = ""
    price: Optional[float] = None
    description: str = ""
    category: str = ""
    in_stock: bool = True
    binding: Binding = field(default_factory=Unbound)

    @classmethod
    def empty(cls) -> "Draft":
        return cls()

    @classmethod
    def from_product(cls, product: Product) -> "Draft":
        """Copy a product's editable fields into an update-mode draft."""
        return cls(
            name=product.name,
            price=product.price,
            description=product.description or "",
            category=product.category or "",
            in_stock=product.in_stock,
            binding=BoundTo(product.id),
        )

    @property
    def is_update(self) -> bool:
        return isinstance(self.binding, BoundTo)

    @property
    def product_id(self) -> Optional[str]:
        if isinstance(self.binding, BoundTo):
            return self.binding.product_id
        return None

    def fields(self) -> Dict[str, Any]:
        """Editable fields in the backend's attribute names."""
        return {
            "name": self.name,
            "price": self.price,
            "description": self.description or None,
            "category": self.category or None,
            "inStock": self.in_stock,
        }


@dataclass(frozen=True)
class UserSession:
    """Authenticated identity of the current browser plus its team ids."""

    user_id: str
    name: str = ""
    email: str = ""
    team_ids: FrozenSet[str] = frozenset()

    @property
    def display_name(self) -> str:
        return self.name or self.email or self.user_id
