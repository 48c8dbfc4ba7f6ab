"""
Identity lookup used by the lifecycle services.

The services only need to know who an actor is and which role they hold,
so they receive a frozen ``Identity`` instead of the full ``User`` row.
"""
from dataclasses import dataclass

from apps.cores.exceptions import ActionForbidden

from .models import Role, User


@dataclass(frozen=True)
class Identity:
    id: int
    role: Role


def get_user(user_id) -> Identity:
    row = (
        User.objects
        .filter(pk=user_id, is_active=True)
        .values("id", "role")
        .first()
    )
    if row is None:
        raise ActionForbidden("Unknown or inactive user.")
    return Identity(id=row["id"], role=Role(row["role"]))


def require_role(user_id, role: Role) -> Identity:
    identity = get_user(user_id)
    if identity.role != role:
        raise ActionForbidden(f"Only {role.label.lower()}s can perform this action.")
    return identity
