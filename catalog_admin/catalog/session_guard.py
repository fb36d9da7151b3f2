"""Resolve the current identity and its team memberships."""
import logging
from typing import Optional

from catalog_admin.catalog.models import UserSession
from catalog_admin.gateway import GatewayError, RemoteGateway

logger = logging.getLogger(__name__)


class SessionGuard:
    """
    Gatekeeper run before any catalog view renders.

    ``resolve()`` returns a UserSession only once both the identity and the
    membership lookups have succeeded; any failure yields ``None``
    (unauthenticated) and is not retried.
    """

    def __init__(self, gateway: RemoteGateway):
        self.gateway = gateway

    async def resolve(self) -> Optional[UserSession]:
        """
        Resolve the session bound to the gateway handle.

        Returns:
            UserSession if authenticated, None otherwise
        """
        if not self.gateway.has_session:
            return None

        try:
            account = await self.gateway.get_account()
            team_ids = await self.gateway.list_teams()
        except GatewayError as e:
            logger.info(f"Session resolution failed ({e.kind.value}): treating as unauthenticated")
            return None

        session = UserSession(
            user_id=account["$id"],
            name=account.get("name") or "",
            email=account.get("email") or "",
            team_ids=frozenset(team_ids),
        )
        logger.debug(f"Resolved session for user {session.user_id} with {len(session.team_ids)} teams")
        return session

    async def logout(self) -> None:
        """
        Invalidate the current session at the backend.

        A session the backend already considers gone is not an error; the
        caller clears local state either way.
        """
        if not self.gateway.has_session:
            return

        try:
            await self.gateway.delete_session("current")
        except GatewayError as e:
            logger.warning(f"Remote logout failed ({e.kind.value}); clearing local session anyway")
