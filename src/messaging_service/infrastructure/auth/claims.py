from __future__ import annotations

from typing import Any

from messaging_service.application.dto.principal import Principal
from messaging_service.domain.value_objects.enums import UserRole


class InvalidClaimsError(ValueError):
    pass


def principal_from_claims(payload: dict[str, Any]) -> Principal:
    """Build a Principal from verified token claims ``sub`` and ``role``."""
    try:
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidClaimsError("Token has no usable 'sub' claim") from exc

    role_raw = str(payload.get("role", "")).upper()
    if role_raw not in UserRole.__members__.values():
        raise InvalidClaimsError(f"Unknown role claim: {role_raw or '<missing>'}")
    return Principal(user_id=user_id, role=UserRole(role_raw))
