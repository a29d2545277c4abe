# backend/utils/permissions.py
import enum

from utils.errors import PermissionDenied


class Role(str, enum.Enum):
    CUSTOMER = "customer"
    EMPLOYEE = "employee"
    MANAGER = "manager"

    @classmethod
    def parse(cls, value):
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return None


class Capability(str, enum.Enum):
    PLACE_ORDER = "place_order"
    UPDATE_TRACKING = "update_tracking"
    UPDATE_CATALOG = "update_catalog"
    UPDATE_USERS = "update_users"
    EDIT_OWN_ACCOUNT = "edit_own_account"


ROLE_CAPABILITIES = {
    Role.CUSTOMER: {Capability.PLACE_ORDER},
    Role.EMPLOYEE: {Capability.PLACE_ORDER, Capability.UPDATE_TRACKING},
    Role.MANAGER: set(Capability),
}


def has_capability(role, capability: Capability) -> bool:
    if not isinstance(role, Role):
        role = Role.parse(role)
    if role is None:
        return False
    return capability in ROLE_CAPABILITIES[role]


def require_capability(session, capability: Capability):
    if not has_capability(session.role, capability):
        raise PermissionDenied(f"You are not authorized to {capability.value.replace('_', ' ')}.")
    return session
