from __future__ import annotations

from enum import Enum

from src.domain.value_objects.permissions import (
    ALL,
    MANAGE_FEEDING,
    MANAGE_ROLES,
    VIEW_RABBITS,
    VIEW_REPORTS,
    Permissions,
)


class RoleName(str, Enum):
    USER = "User"
    PREMIUM = "Premium"
    ADVANCED = "Advanced"
    ADMIN = "Admin"
    SUPER_ADMIN = "SuperAdmin"

    def assignable_roles(self) -> frozenset[RoleName]:
        return ROLE_HIERARCHY.get(self, frozenset({RoleName.USER}))


# Roles missing here (Advanced) may only assign the base role
ROLE_HIERARCHY: dict[RoleName, frozenset[RoleName]] = {
    RoleName.SUPER_ADMIN: frozenset(RoleName),
    RoleName.ADMIN: frozenset(
        {RoleName.USER, RoleName.PREMIUM, RoleName.ADVANCED, RoleName.ADMIN}
    ),
    RoleName.PREMIUM: frozenset({RoleName.USER, RoleName.PREMIUM}),
    RoleName.USER: frozenset({RoleName.USER}),
}


def allowed_role_names(requester: str) -> frozenset[str]:
    """Names of the roles a requester holding role ``requester`` may assign."""
    try:
        role = RoleName(requester)
    except ValueError:
        return frozenset({RoleName.USER.value})
    return frozenset(r.value for r in role.assignable_roles())


DEFAULT_ROLES: tuple[tuple[RoleName, str, Permissions], ...] = (
    (RoleName.USER, "Unpaid user with basic access", Permissions.of(VIEW_RABBITS)),
    (
        RoleName.PREMIUM,
        "Paid user with enhanced access",
        Permissions.of(VIEW_RABBITS, MANAGE_FEEDING),
    ),
    (
        RoleName.ADVANCED,
        "Higher paid user with reporting",
        Permissions.of(VIEW_RABBITS, MANAGE_FEEDING, VIEW_REPORTS),
    ),
    (RoleName.ADMIN, "Full farm management", Permissions.of(ALL)),
    (RoleName.SUPER_ADMIN, "System-wide control", Permissions.of(ALL, MANAGE_ROLES)),
)
