"""Appwrite REST client used as the remote gateway."""
import http.cookiejar
import json
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

import httpx

from catalog_admin.gateway.base import RemoteGateway
from catalog_admin.gateway.errors import (
    AuthenticationError,
    NetworkError,
    error_from_response,
)
from catalog_admin.settings import Settings

logger = logging.getLogger(__name__)


def create_http_client(
    settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None
) -> httpx.AsyncClient:
    """
    Create the process-wide HTTP client shared by all gateway handles.

    The client never stores cookies: session secrets travel only in the
    per-handle ``X-Appwrite-Session`` header, so one browser's backend
    session can never leak into another browser's calls.
    """
    no_cookies = http.cookiejar.DefaultCookiePolicy(allowed_domains=[])
    return httpx.AsyncClient(
        base_url=settings.APPWRITE_ENDPOINT,
        timeout=settings.GATEWAY_TIMEOUT,
        cookies=http.cookiejar.CookieJar(policy=no_cookies),
        transport=transport,
        headers={
            "Content-Type": "application/json",
            "X-Appwrite-Project": settings.APPWRITE_PROJECT,
        },
    )


class AppwriteGateway(RemoteGateway):
    """
    Thin wrapper over the backend's account, teams and databases APIs.

    One handle is built per request and bound to that browser's session
    secret (or to none, for anonymous calls). The underlying
    ``httpx.AsyncClient`` is shared.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        settings: Settings,
        session_secret: Optional[str] = None,
    ):
        self.client = client
        self.settings = settings
        self.session_secret = session_secret

    @property
    def has_session(self) -> bool:
        return bool(self.session_secret)

    @property
    def _documents_path(self) -> str:
        return (
            f"/databases/{self.settings.APPWRITE_DATABASE_ID}"
            f"/collections/{self.settings.APPWRITE_TABLE_ID}/documents"
        )

    def _get_headers(self) -> Dict[str, str]:
        """Get per-request headers."""
        headers = {"X-Appwrite-Project": self.settings.APPWRITE_PROJECT}
        if self.session_secret:
            headers["X-Appwrite-Session"] = self.session_secret
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        json_body: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        """Send a request and raise the matching GatewayError on failure."""
        try:
            response = await self.client.request(
                method, path, json=json_body, headers=self._get_headers()
            )
        except httpx.HTTPError as e:
            logger.error(f"Gateway {method} {path} failed: {e}")
            raise NetworkError(str(e)) from e

        if response.is_error:
            error = error_from_response(response)
            logger.warning(
                f"Gateway {method} {path} returned {response.status_code} ({error.error_type})"
            )
            raise error

        return response

    @staticmethod
    def _body(response: httpx.Response) -> Dict[str, Any]:
        if response.status_code == 204 or not response.content:
            return {}
        return response.json()

    def _session_secret_from(self, response: httpx.Response) -> str:
        """
        Extract the session secret from a session-creation response.

        Server keys get it in the body; browser-style calls get it as the
        ``a_session_<project>`` cookie, or in ``X-Fallback-Cookies`` when the
        backend could not set a cookie for our domain.
        """
        body = self._body(response)
        if body.get("secret"):
            return body["secret"]

        cookie_name = f"a_session_{self.settings.APPWRITE_PROJECT}"
        secret = response.cookies.get(cookie_name) or response.cookies.get(f"{cookie_name}_legacy")
        if secret:
            return secret

        fallback = response.headers.get("X-Fallback-Cookies")
        if fallback:
            try:
                cookies = json.loads(fallback)
            except ValueError:
                cookies = {}
            if isinstance(cookies, dict) and cookies.get(cookie_name):
                return cookies[cookie_name]

        raise AuthenticationError("Session created but no session secret was returned")

    # Identity

    async def get_account(self) -> Dict[str, Any]:
        response = await self._request("GET", "/account")
        return self._body(response)

    async def create_email_session(self, email: str, password: str) -> str:
        response = await self._request(
            "POST",
            "/account/sessions/email",
            {"email": email, "password": password},
        )
        return self._session_secret_from(response)

    def federated_login_url(
        self, provider: str, success: str, failure: str, scopes: List[str]
    ) -> str:
        """
        URL the browser must be sent to for a federated login.

        The browser cannot send the project header, so the project goes in
        the query string.
        """
        params = [
            ("project", self.settings.APPWRITE_PROJECT),
            ("success", success),
            ("failure", failure),
        ]
        params.extend(("scopes[]", scope) for scope in scopes)
        return (
            f"{self.settings.APPWRITE_ENDPOINT}/account/tokens/oauth2/{provider}"
            f"?{urlencode(params)}"
        )

    async def create_token_session(self, user_id: str, secret: str) -> str:
        response = await self._request(
            "POST",
            "/account/sessions/token",
            {"userId": user_id, "secret": secret},
        )
        return self._session_secret_from(response)

    async def delete_session(self, session_id: str = "current") -> None:
        await self._request("DELETE", f"/account/sessions/{session_id}")

    # Team membership

    async def list_teams(self) -> List[str]:
        response = await self._request("GET", "/teams")
        return [t["$id"] for t in self._body(response).get("teams", [])]

    # Document store

    async def list_documents(self) -> List[Dict[str, Any]]:
        response = await self._request("GET", self._documents_path)
        return self._body(response).get("documents", [])

    async def create_document(
        self,
        document_id: str,
        data: Dict[str, Any],
        permissions: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"documentId": document_id, "data": data}
        if permissions is not None:
            payload["permissions"] = permissions
        response = await self._request("POST", self._documents_path, payload)
        return self._body(response)

    async def update_document(self, document_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        response = await self._request(
            "PATCH", f"{self._documents_path}/{document_id}", {"data": data}
        )
        return self._body(response)

    async def delete_document(self, document_id: str) -> None:
        await self._request("DELETE", f"{self._documents_path}/{document_id}")

    async def ping(self) -> bool:
        await self._request("GET", "/health/version")
        return True
