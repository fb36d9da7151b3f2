"""FastAPI dependencies for the gateway handle and session resolution."""
from typing import Optional

from fastapi import Cookie, Depends, HTTPException, Request, status

from catalog_admin.catalog import AccessPolicy, SessionGuard, UserSession
from catalog_admin.gateway import AppwriteGateway, RemoteGateway
from catalog_admin.settings import settings


def get_gateway(
    request: Request,
    session_secret: Optional[str] = Cookie(None, alias=settings.SESSION_COOKIE_NAME),
) -> RemoteGateway:
    """Gateway handle bound to this browser's session (if any)."""
    return AppwriteGateway(request.app.state.http_client, settings, session_secret)


def get_access_policy() -> AccessPolicy:
    return AccessPolicy(
        editors_team_id=settings.EDITORS_TEAM_ID,
        viewers_team_id=settings.VIEWERS_TEAM_ID,
    )


async def get_current_session(
    gateway: RemoteGateway = Depends(get_gateway),
) -> Optional[UserSession]:
    """
    Resolve the current session (optional).

    Returns:
        UserSession if authenticated, None otherwise
    """
    return await SessionGuard(gateway).resolve()


async def require_session_page(
    session: Optional[UserSession] = Depends(get_current_session),
) -> UserSession:
    """
    Require a session for page routes (redirects to login).

    Raises:
        HTTPException with redirect to login page
    """
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_303_SEE_OTHER,
            detail="Redirect to login",
            headers={"Location": "/login"}
        )
    return session
