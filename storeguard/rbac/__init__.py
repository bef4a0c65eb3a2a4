from .permissions import (
    CATEGORY_LABELS,
    PERMISSION_CATALOG,
    Permission,
    PermissionCategory,
    PermissionInfo,
    parse_category,
    parse_permission,
)
from .roles import (
    ROLE_DESCRIPTIONS,
    ROLE_LABELS,
    ROLE_LEVELS,
    ROLE_PERMISSIONS,
    Role,
    has_role,
    has_role_level,
    parse_role,
)
from .routes import PROTECTED_ROUTES, ROUTE_PERMISSIONS, resolve_route
from .policy import (
    AccessPolicy,
    build_access_policy,
    can_access_route,
    get_default_policy,
    has_permission,
    permissions_of,
)

__all__ = [
    "CATEGORY_LABELS",
    "PERMISSION_CATALOG",
    "Permission",
    "PermissionCategory",
    "PermissionInfo",
    "parse_category",
    "parse_permission",
    "ROLE_DESCRIPTIONS",
    "ROLE_LABELS",
    "ROLE_LEVELS",
    "ROLE_PERMISSIONS",
    "Role",
    "has_role",
    "has_role_level",
    "parse_role",
    "PROTECTED_ROUTES",
    "ROUTE_PERMISSIONS",
    "resolve_route",
    "AccessPolicy",
    "build_access_policy",
    "can_access_route",
    "get_default_policy",
    "has_permission",
    "permissions_of",
]
