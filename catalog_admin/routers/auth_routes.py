"""Authentication routes: password login, federated login and logout."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from catalog_admin.catalog import SessionGuard, UserSession
from catalog_admin.dependencies import get_current_session, get_gateway
from catalog_admin.gateway import AuthenticationError, GatewayError, RemoteGateway
from catalog_admin.settings import settings
from catalog_admin.templates_engine import templates

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

INVALID_CREDENTIALS = "Invalid email or password"
LOGIN_FAILED = "Login failed. Please try again."
FEDERATED_LOGIN_FAILED = "Federated login failed. Please try again."

AFTER_LOGIN_URL = "/dashboard"


def _set_session_cookie(response: RedirectResponse, secret: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=secret,
        httponly=settings.COOKIE_HTTPONLY,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE,
        max_age=settings.SESSION_MAX_AGE
    )


def _render_login(request: Request, error: Optional[str] = None, email: str = "", status_code: int = 200):
    return templates.TemplateResponse(
        request,
        "auth/login.html",
        {
            "error": error,
            "email": email,
            "oauth_provider": settings.OAUTH_PROVIDER,
        },
        status_code=status_code,
    )


@router.get("/", include_in_schema=False)
async def home():
    return RedirectResponse(url=AFTER_LOGIN_URL, status_code=302)


@router.get("/login", response_class=HTMLResponse)
async def login_page(
    request: Request,
    error: Optional[str] = None,
    session: Optional[UserSession] = Depends(get_current_session),
):
    """Credential-entry page."""
    # Already logged in — redirect
    if session:
        return RedirectResponse(url=AFTER_LOGIN_URL, status_code=302)

    return _render_login(request, error=FEDERATED_LOGIN_FAILED if error else None)


@router.post("/auth/login")
async def login(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
    gateway: RemoteGateway = Depends(get_gateway),
):
    """Exchange email and password for a backend session."""
    try:
        secret = await gateway.create_email_session(email, password)
    except AuthenticationError:
        logger.info("Password login rejected")
        return _render_login(request, error=INVALID_CREDENTIALS, email=email, status_code=401)
    except GatewayError as e:
        logger.warning(f"Password login failed ({e.kind.value})")
        return _render_login(request, error=LOGIN_FAILED, email=email, status_code=502)

    response = RedirectResponse(url=AFTER_LOGIN_URL, status_code=303)
    _set_session_cookie(response, secret)
    return response


@router.get("/auth/oauth")
async def federated_login(gateway: RemoteGateway = Depends(get_gateway)):
    """Send the browser to the identity provider."""
    url = gateway.federated_login_url(
        provider=settings.OAUTH_PROVIDER,
        success=settings.oauth_success_url,
        failure=settings.oauth_failure_url,
        scopes=settings.oauth_scopes_list,
    )
    return RedirectResponse(url=url, status_code=303)


@router.get("/auth/oauth/callback")
async def federated_callback(
    userId: Optional[str] = None,
    secret: Optional[str] = None,
    gateway: RemoteGateway = Depends(get_gateway),
):
    """Turn the provider's one-time token into a session."""
    if not userId or not secret:
        return RedirectResponse(url="/login?error=true", status_code=303)

    try:
        session_secret = await gateway.create_token_session(userId, secret)
    except GatewayError as e:
        logger.warning(f"Federated login failed ({e.kind.value})")
        return RedirectResponse(url="/login?error=true", status_code=303)

    response = RedirectResponse(url=AFTER_LOGIN_URL, status_code=303)
    _set_session_cookie(response, session_secret)
    return response


@router.post("/auth/logout")
async def logout(gateway: RemoteGateway = Depends(get_gateway)):
    """Invalidate the backend session and forget it locally."""
    await SessionGuard(gateway).logout()

    response = RedirectResponse(url="/login", status_code=303)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return response
