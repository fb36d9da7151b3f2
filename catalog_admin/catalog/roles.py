"""Role derivation from team membership."""
from enum import Enum
from typing import Optional

from catalog_admin.catalog.models import UserSession


class Role(str, Enum):
    EDITOR = "editor"
    VIEWER = "viewer"


def role_of(session: Optional[UserSession], editors_team_id: str) -> Role:
    """
    Derive the role for a session.

    Editor iff the editors team is among the session's teams. Everyone
    else, including members of neither team, is a viewer.
    """
    if session is not None and editors_team_id in session.team_ids:
        return Role.EDITOR
    return Role.VIEWER
