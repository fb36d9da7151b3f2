"""Access-control list stamped on new products."""
from dataclasses import dataclass
from typing import List

from catalog_admin.gateway import ids


@dataclass(frozen=True)
class AccessPolicy:
    """Editors may read and write; viewers may only read."""

    editors_team_id: str
    viewers_team_id: str

    def permissions(self) -> List[str]:
        editors = ids.team(self.editors_team_id)
        viewers = ids.team(self.viewers_team_id)
        return [
            ids.read(editors),
            ids.read(viewers),
            ids.create(editors),
            ids.update(editors),
            ids.delete(editors),
        ]
