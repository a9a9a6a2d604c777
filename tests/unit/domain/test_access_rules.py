from __future__ import annotations

import pytest

from src.domain.models.role import Role
from src.domain.value_objects.permissions import (
    ALL,
    MANAGE_BREEDING,
    MANAGE_FEEDING,
    VIEW_RABBITS,
    Permissions,
)
from src.domain.value_objects.role import RoleName, allowed_role_names


def make_role(role_id: int, name: str, *tokens: str) -> Role:
    return Role(id=role_id, name=name, permissions=Permissions.of(*tokens))


def test_wildcard_grants_everything():
    perms = Permissions.of(ALL)
    assert perms.grants(MANAGE_BREEDING)
    assert VIEW_RABBITS in perms


def test_plain_tokens_grant_only_themselves():
    perms = Permissions.of(VIEW_RABBITS, MANAGE_FEEDING)
    assert perms.grants(VIEW_RABBITS)
    assert not perms.grants(MANAGE_BREEDING)
    assert list(perms) == [MANAGE_FEEDING, VIEW_RABBITS]


def test_parse_accepts_list_and_json_string():
    assert Permissions.parse(["view_rabbits"]).grants(VIEW_RABBITS)
    assert Permissions.parse('["all"]').grants(MANAGE_BREEDING)


@pytest.mark.parametrize("raw", ["not json", '{"all": true}', 42, None, ["ok", 3]])
def test_parse_rejects_corrupted_payloads(raw):
    with pytest.raises(ValueError):
        Permissions.parse(raw)


def test_role_hierarchy():
    assert allowed_role_names("SuperAdmin") == {r.value for r in RoleName}
    assert allowed_role_names("Admin") == {"User", "Premium", "Advanced", "Admin"}
    assert allowed_role_names("Premium") == {"User", "Premium"}
    assert allowed_role_names("User") == {"User"}
    assert allowed_role_names("Advanced") == {"User"}
    assert allowed_role_names("Unknown") == {"User"}


def test_role_can_assign_by_name():
    admin = make_role(4, "Admin", ALL)
    premium = make_role(2, "Premium", VIEW_RABBITS, MANAGE_FEEDING)
    superadmin = make_role(5, "SuperAdmin", ALL)
    assert admin.can_assign(premium)
    assert not admin.can_assign(superadmin)
    assert not premium.can_assign(admin)
    assert premium.can_assign(premium)
