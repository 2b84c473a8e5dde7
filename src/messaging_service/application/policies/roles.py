"""Capabilities per portal role.

Role checks elsewhere go through :func:`capabilities_for`; adding a role
means adding one entry to ``ROLE_CAPABILITIES``.
"""
from __future__ import annotations

from dataclasses import dataclass

from messaging_service.domain.value_objects.enums import UserRole

_EVERYONE = frozenset(UserRole)
_STAFF = frozenset({UserRole.ADMIN, UserRole.TEACHER})


@dataclass(frozen=True, slots=True)
class RoleCapabilities:
    can_broadcast: bool
    contactable_roles: frozenset[UserRole]


ROLE_CAPABILITIES: dict[UserRole, RoleCapabilities] = {
    UserRole.ADMIN: RoleCapabilities(can_broadcast=True, contactable_roles=_EVERYONE),
    UserRole.TEACHER: RoleCapabilities(can_broadcast=True, contactable_roles=_EVERYONE),
    UserRole.PARENT: RoleCapabilities(can_broadcast=False, contactable_roles=_STAFF),
    UserRole.STUDENT: RoleCapabilities(can_broadcast=False, contactable_roles=_STAFF),
}


def capabilities_for(role: UserRole) -> RoleCapabilities:
    return ROLE_CAPABILITIES[role]
