from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UserRef:
    """Read-only projection of a portal user, as exposed by the user directory."""

    id: int
    name: str
    email: str
    role: str
