from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Iterator

VIEW_RABBITS = "view_rabbits"
MANAGE_FEEDING = "manage_feeding"
VIEW_REPORTS = "view_reports"
MANAGE_BREEDING = "manage_breeding"
MANAGE_ROLES = "manage_roles"
MANAGE_FARMS = "manage_farms"
ALL = "all"


@dataclass(frozen=True, slots=True)
class Permissions:
    """Capability tokens held by a role. ``all`` grants every capability."""

    tokens: frozenset[str] = frozenset()

    @classmethod
    def of(cls, *tokens: str) -> Permissions:
        return cls(frozenset(tokens))

    @classmethod
    def parse(cls, raw: Any) -> Permissions:
        """Build from stored permission data: a list of strings or its JSON encoding.

        Raises ``ValueError`` when the payload has any other shape.
        """
        if isinstance(raw, str):
            try:
                raw = json.loads(raw)
            except json.JSONDecodeError as exc:
                raise ValueError("Permissions payload is not valid JSON") from exc
        if not isinstance(raw, (list, tuple, set, frozenset)):
            raise ValueError(f"Permissions payload must be a list, got {type(raw).__name__}")
        if not all(isinstance(token, str) for token in raw):
            raise ValueError("Permissions payload must only contain strings")
        return cls(frozenset(raw))

    def grants(self, capability: str) -> bool:
        return ALL in self.tokens or capability in self.tokens

    def to_list(self) -> list[str]:
        return sorted(self.tokens)

    def __contains__(self, capability: object) -> bool:
        return isinstance(capability, str) and self.grants(capability)

    def __iter__(self) -> Iterator[str]:
        return iter(self.to_list())
