from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from src.domain.value_objects.permissions import Permissions
from src.domain.value_objects.role import allowed_role_names


@dataclass(slots=True)
class Role:
    id: int
    name: str
    permissions: Permissions
    description: str | None = None
    is_active: bool = True
    is_deleted: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_usable(self) -> bool:
        return self.is_active and not self.is_deleted

    def grants(self, capability: str) -> bool:
        return self.permissions.grants(capability)

    def can_assign(self, target: Role) -> bool:
        return target.name in allowed_role_names(self.name)
