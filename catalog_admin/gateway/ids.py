"""Document identifiers and permission strings in the backend's syntax."""
import secrets
import time


def unique_id(padding: int = 7) -> str:
    """
    Generate a fresh document id.

    Hex epoch seconds (8 chars) + hex sub-second microseconds (5 chars) +
    random hex padding. Ids sort roughly by creation time.
    """
    now = time.time()
    seconds = int(now)
    micros = int((now - seconds) * 1_000_000)
    suffix = secrets.token_hex((padding + 1) // 2)[:padding]
    return f"{seconds:08x}{micros:05x}{suffix}"


def team(team_id: str) -> str:
    """Role string for every member of a team."""
    return f"team:{team_id}"


def read(role: str) -> str:
    return f'read("{role}")'


def create(role: str) -> str:
    return f'create("{role}")'


def update(role: str) -> str:
    return f'update("{role}")'


def delete(role: str) -> str:
    return f'delete("{role}")'
