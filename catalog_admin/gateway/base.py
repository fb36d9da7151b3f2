"""Interface the catalog core consumes from the remote gateway."""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class RemoteGateway(ABC):
    """
    Identity, team membership and document-store operations.

    Implementations raise ``GatewayError`` subclasses on failure.
    """

    @property
    @abstractmethod
    def has_session(self) -> bool:
        """Whether a session secret is bound to this handle."""

    # Identity

    @abstractmethod
    async def get_account(self) -> Dict[str, Any]:
        ...

    @abstractmethod
    async def create_email_session(self, email: str, password: str) -> str:
        """Exchange credentials for a session; returns the session secret."""

    @abstractmethod
    def federated_login_url(
        self, provider: str, success: str, failure: str, scopes: List[str]
    ) -> str:
        ...

    @abstractmethod
    async def create_token_session(self, user_id: str, secret: str) -> str:
        """Exchange a federated login token for a session secret."""

    @abstractmethod
    async def delete_session(self, session_id: str = "current") -> None:
        ...

    # Team membership

    @abstractmethod
    async def list_teams(self) -> List[str]:
        """Team ids the current identity belongs to."""

    # Document store

    @abstractmethod
    async def list_documents(self) -> List[Dict[str, Any]]:
        ...

    @abstractmethod
    async def create_document(
        self,
        document_id: str,
        data: Dict[str, Any],
        permissions: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        ...

    @abstractmethod
    async def update_document(self, document_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        ...

    @abstractmethod
    async def delete_document(self, document_id: str) -> None:
        ...

    @abstractmethod
    async def ping(self) -> bool:
        """Check the backend is reachable."""
