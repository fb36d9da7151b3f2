"""Catalog pages: one router factory for every mounted view variant."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from catalog_admin.catalog import (
    AccessPolicy,
    BoundTo,
    CatalogView,
    CommandDispatcher,
    Draft,
    Unbound,
    UserSession,
)
from catalog_admin.dependencies import (
    get_access_policy,
    get_current_session,
    get_gateway,
    require_session_page,
)
from catalog_admin.gateway import RemoteGateway
from catalog_admin.templates_engine import templates

logger = logging.getLogger(__name__)


def build_catalog_router(view: CatalogView) -> APIRouter:
    """
    Build the routes for one catalog view variant.

    The variant decides whether anonymous visitors are sent to the login
    page and whether viewers are refused mutations.
    """
    router = APIRouter(prefix=view.prefix, tags=["catalog"])
    session_dependency = require_session_page if view.requires_auth else get_current_session

    def back_to_list() -> RedirectResponse:
        return RedirectResponse(url=view.prefix, status_code=303)

    def render(
        request: Request,
        dispatcher: CommandDispatcher,
        session: Optional[UserSession],
    ):
        store = dispatcher.store
        return templates.TemplateResponse(
            request,
            "catalog/index.html",
            {
                "view": view,
                "session": session,
                "role": dispatcher.role.value,
                "can_mutate": dispatcher.can_mutate,
                "products": store.products,
                "draft": store.draft,
                "error": store.error.message if store.error else None,
            },
        )

    async def render_after_failure(
        request: Request,
        dispatcher: CommandDispatcher,
        session: Optional[UserSession],
    ):
        # Show the mutation's error even if the refreshed list also fails
        failure = dispatcher.store.error
        await dispatcher.load()
        dispatcher.store.error = failure
        return render(request, dispatcher, session)

    @router.get("", response_class=HTMLResponse, name=f"{view.name}_page")
    async def catalog_page(
        request: Request,
        edit: Optional[str] = None,
        session: Optional[UserSession] = Depends(session_dependency),
        gateway: RemoteGateway = Depends(get_gateway),
        policy: AccessPolicy = Depends(get_access_policy),
    ):
        """Product list, plus the create/update form for editors."""
        dispatcher = view.build_dispatcher(gateway, session, policy)
        await dispatcher.load()

        if edit:
            product = dispatcher.store.find(edit)
            if product is not None:
                dispatcher.edit(product)

        return render(request, dispatcher, session)

    @router.post("/save", name=f"{view.name}_save")
    async def save_product(
        request: Request,
        name: str = Form(...),
        price: float = Form(...),
        description: str = Form(""),
        category: str = Form(""),
        in_stock: Optional[str] = Form(None),
        product_id: Optional[str] = Form(None),
        session: Optional[UserSession] = Depends(session_dependency),
        gateway: RemoteGateway = Depends(get_gateway),
        policy: AccessPolicy = Depends(get_access_policy),
    ):
        """Create a product, or update the one the form is bound to."""
        dispatcher = view.build_dispatcher(gateway, session, policy)
        draft = Draft(
            name=name,
            price=price,
            description=description,
            category=category,
            in_stock=in_stock is not None,
            binding=BoundTo(product_id) if product_id else Unbound(),
        )

        committed = await dispatcher.commit(draft)
        if committed or not dispatcher.can_mutate:
            return back_to_list()

        return await render_after_failure(request, dispatcher, session)

    @router.get("/{product_id}/delete", response_class=HTMLResponse, name=f"{view.name}_confirm_delete")
    async def confirm_delete(
        request: Request,
        product_id: str,
        session: Optional[UserSession] = Depends(session_dependency),
        gateway: RemoteGateway = Depends(get_gateway),
        policy: AccessPolicy = Depends(get_access_policy),
    ):
        """Ask the user to confirm a delete."""
        dispatcher = view.build_dispatcher(gateway, session, policy)
        if not dispatcher.can_mutate:
            return back_to_list()

        await dispatcher.load()
        product = dispatcher.store.find(product_id)
        if product is None:
            return back_to_list()

        return templates.TemplateResponse(
            request,
            "catalog/confirm_delete.html",
            {"view": view, "session": session, "product": product},
        )

    @router.post("/{product_id}/delete", name=f"{view.name}_delete")
    async def delete_product(
        request: Request,
        product_id: str,
        confirm: str = Form("no"),
        session: Optional[UserSession] = Depends(session_dependency),
        gateway: RemoteGateway = Depends(get_gateway),
        policy: AccessPolicy = Depends(get_access_policy),
    ):
        """Delete after an explicit yes; anything else aborts silently."""
        dispatcher = view.build_dispatcher(gateway, session, policy)
        confirmed = confirm == "yes"

        removed = await dispatcher.remove(product_id, confirmed)
        if removed or not confirmed or not dispatcher.can_mutate:
            return back_to_list()

        return await render_after_failure(request, dispatcher, session)

    return router
