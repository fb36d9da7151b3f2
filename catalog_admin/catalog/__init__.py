"""Catalog core: session guard, product store and role-gated commands."""
from .access import AccessPolicy
from .dispatcher import CommandDispatcher
from .models import BoundTo, Draft, Product, Unbound, UserSession
from .roles import Role, role_of
from .session_guard import SessionGuard
from .store import Operation, ProductStore, StoreError
from .views import DASHBOARD, PRODUCTS, VIEWS, CatalogView

__all__ = [
    "AccessPolicy",
    "CommandDispatcher",
    "BoundTo",
    "Draft",
    "Product",
    "Unbound",
    "UserSession",
    "Role",
    "role_of",
    "SessionGuard",
    "Operation",
    "ProductStore",
    "StoreError",
    "CatalogView",
    "DASHBOARD",
    "PRODUCTS",
    "VIEWS",
]
