"""User domain entity.

This module contains the caller identity consulted by actions when
deciding whether a request is authorized.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable


class Role(Enum):
    """Caller trust levels, in ascending order."""

    VISITOR = "visitor"
    COLLABORATOR = "collaborator"
    ADMINISTRATOR = "administrator"

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "Role":
        """Pick the highest known role out of a list of role names.

        Unknown names are ignored; no known name means a regular visitor.

        Args:
            names (Iterable[str]): Role names, e.g. from a token's claims.

        Returns:
            Role: The highest matching role.

        Example:
            >>> Role.from_names(["offline_access", "collaborator"])
            <Role.COLLABORATOR: 'collaborator'>
        """
        ranking = list(cls)
        best = cls.VISITOR
        for name in names:
            try:
                role = cls(name.lower())
            except ValueError:
                continue
            if ranking.index(role) > ranking.index(best):
                best = role
        return best


@dataclass(frozen=True)
class UserEntity:
    """Domain entity representing an authenticated caller.

    Read-only from the point of view of actions.

    Attributes:
        id (str): Identity provider subject of the user.
        name (str): Display name.
        role (Role): Trust level of the user.
    """

    id: str
    name: str
    role: Role = Role.VISITOR

    def is_administrator(self) -> bool:
        return self.role is Role.ADMINISTRATOR

    def is_collaborator(self) -> bool:
        """Administrators count as collaborators too."""
        return self.role in (Role.COLLABORATOR, Role.ADMINISTRATOR)
