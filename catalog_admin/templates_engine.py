"""
Centralized template rendering.

Every response gets the application context (name, CSRF token, current
session) so the page templates stay pure projections of the state the
routes hand them.
"""
from pathlib import Path
from typing import Any, Optional

from fastapi import Request
from fastapi.templating import Jinja2Templates
from starlette.responses import Response

from catalog_admin.middleware.csrf import CSRFProtectionMiddleware
from catalog_admin.settings import settings

TEMPLATES_DIR = Path(__file__).parent / "templates"


def price_filter(value: Any) -> str:
    """Format a price with the configured currency and two decimals."""
    try:
        amount = float(value)
    except (TypeError, ValueError):
        amount = 0.0
    return f"{settings.CURRENCY_SYMBOL}{amount:.2f}"


def input_number_filter(value: Optional[float]) -> str:
    """Render a number for an <input type=number>, blank when unset."""
    if value is None:
        return ""
    return f"{value:g}"


class CatalogTemplates(Jinja2Templates):
    """Jinja2Templates that injects app context and a fresh CSRF token."""

    def TemplateResponse(
        self,
        request: Request,
        name: str,
        context: Optional[dict] = None,
        status_code: int = 200,
        headers: Optional[dict] = None,
    ) -> Response:
        context = dict(context or {})
        csrf_token = CSRFProtectionMiddleware.generate_token()
        context.setdefault("session", None)
        context.update({
            "app_name": "Product Catalog",
            "csrf_token": csrf_token,
        })

        response = super().TemplateResponse(
            request=request,
            name=name,
            context=context,
            status_code=status_code,
            headers=headers,
        )
        CSRFProtectionMiddleware.set_csrf_cookie(response, csrf_token)
        return response


# Singleton instance for use across the application
templates = CatalogTemplates(directory=str(TEMPLATES_DIR))

templates.env.filters["price"] = price_filter
templates.env.filters["input_number"] = input_number_filter
