"""
Access policy: the decision engine.

An AccessPolicy is built once at startup from the role matrix, the
permission catalog and the route guard table, validated, and then shared
read-only by every consumer (stored on ``app.state`` by the app factory).

Decision rules:
  - has_permission     unknown role / unknown permission → False (fail-closed)
  - can_access_route   route not in the guard table     → True  (fail-open)
                       route in the table                → has_permission(role, required)

None of the decision methods raise for bad input. The only error this
module raises is PolicyConfigurationError, from build_access_policy().
"""

from functools import lru_cache
from types import MappingProxyType
from typing import Mapping, Optional

from pydantic import ValidationError

from storeguard.utils import Logger, PolicyConfigurationError, enum_value

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
    ROLE_PERMISSIONS,
    Role,
    parse_role,
)
from .routes import ROUTE_PERMISSIONS

logger = Logger("storeguard.rbac")


class AccessPolicy:
    """Immutable role → permission → route decision tables."""

    def __init__(
        self,
        role_permissions: Mapping[Role, tuple[Permission, ...]],
        route_permissions: Mapping[str, Permission],
        catalog: Mapping[Permission, PermissionInfo],
        category_labels: Mapping[PermissionCategory, str],
        role_labels: Mapping[Role, str],
        role_descriptions: Mapping[Role, str],
    ):
        self._role_permissions = MappingProxyType(
            {role: tuple(dict.fromkeys(perms)) for role, perms in role_permissions.items()}
        )
        self._grants = MappingProxyType(
            {role: frozenset(perms) for role, perms in self._role_permissions.items()}
        )
        self._routes = MappingProxyType(dict(route_permissions))
        self._catalog = MappingProxyType(dict(catalog))
        self._category_labels = MappingProxyType(dict(category_labels))
        self._role_labels = MappingProxyType(dict(role_labels))
        self._role_descriptions = MappingProxyType(dict(role_descriptions))

        # Display groupings are derived once here, never per request.
        self._catalog_grouped = self._group(tuple(self._catalog))
        self._role_grouped = MappingProxyType(
            {
                role: self._group(perms)
                for role, perms in self._role_permissions.items()
            }
        )

    # ── Decisions ────────────────────────────────────────────────
    def permissions_of(self, role) -> tuple[Permission, ...]:
        """Ordered, duplicate-free permissions of `role`; () for an unknown role."""
        parsed = parse_role(role)
        if parsed is None:
            return ()
        return self._role_permissions.get(parsed, ())

    def has_permission(self, role, permission) -> bool:
        parsed_role = parse_role(role)
        parsed_permission = parse_permission(permission)
        if parsed_role is None or parsed_permission is None:
            return False
        return parsed_permission in self._grants.get(parsed_role, frozenset())

    def required_permission(self, route: str) -> Optional[Permission]:
        """Permission guarding `route`, or None when the route is not guarded."""
        if not isinstance(route, str):
            return None
        return self._routes.get(route)

    def can_access_route(self, role, route: str) -> bool:
        required = self.required_permission(route)
        if required is None:
            # Unguarded route: access control, if any, lives elsewhere.
            return True
        return self.has_permission(role, required)

    def accessible_routes(self, role) -> tuple[str, ...]:
        """Guarded routes `role` may open, in guard-table order."""
        return tuple(
            route
            for route, required in self._routes.items()
            if self.has_permission(role, required)
        )

    # ── Catalog lookups ──────────────────────────────────────────
    @property
    def roles(self) -> tuple[Role, ...]:
        return tuple(Role)

    @property
    def routes(self) -> Mapping[str, Permission]:
        return self._routes

    def permission_info(self, permission) -> Optional[PermissionInfo]:
        parsed = parse_permission(permission)
        if parsed is None:
            return None
        return self._catalog.get(parsed)

    def permission_category(self, permission) -> Optional[PermissionCategory]:
        info = self.permission_info(permission)
        return info.category if info else None

    def permission_description(self, permission) -> str:
        info = self.permission_info(permission)
        return info.description if info else str(enum_value(permission))

    def category_label(self, category) -> str:
        parsed = parse_category(category)
        label = self._category_labels.get(parsed) if parsed else None
        return label or str(enum_value(category))

    def role_label(self, role) -> str:
        parsed = parse_role(role)
        label = self._role_labels.get(parsed) if parsed else None
        return label or str(enum_value(role))

    def role_description(self, role) -> str:
        parsed = parse_role(role)
        description = self._role_descriptions.get(parsed) if parsed else None
        return description or str(enum_value(role))

    # ── Grouped views ────────────────────────────────────────────
    def permissions_by_category(self, role) -> dict[PermissionCategory, tuple[Permission, ...]]:
        parsed = parse_role(role)
        if parsed is None or parsed not in self._role_grouped:
            return {}
        return dict(self._role_grouped[parsed])

    def catalog_by_category(self) -> dict[PermissionCategory, tuple[Permission, ...]]:
        return dict(self._catalog_grouped)

    def _group(self, permissions) -> Mapping[PermissionCategory, tuple[Permission, ...]]:
        buckets: dict[PermissionCategory, list[Permission]] = {}
        for permission in permissions:
            info = self._catalog.get(permission)
            if info is None:
                continue
            buckets.setdefault(info.category, []).append(permission)
        # Category declaration order, not first-seen order
        return MappingProxyType(
            {
                category: tuple(buckets[category])
                for category in PermissionCategory
                if category in buckets
            }
        )

    def __repr__(self) -> str:
        return (
            f"AccessPolicy(roles={len(self._role_permissions)}, "
            f"permissions={len(self._catalog)}, routes={len(self._routes)})"
        )


def build_access_policy(
    role_permissions: Optional[Mapping] = None,
    route_permissions: Optional[Mapping] = None,
    catalog: Optional[Mapping] = None,
    category_labels: Optional[Mapping] = None,
    role_labels: Optional[Mapping] = None,
    role_descriptions: Optional[Mapping] = None,
    *,
    validate: bool = True,
) -> AccessPolicy:
    """
    Parse raw (str- or Enum-keyed) tables into an AccessPolicy.

    Every cross-reference is checked once here. With ``validate=True`` any
    problem raises PolicyConfigurationError listing all of them; with
    ``validate=False`` offending entries are logged and dropped.
    """
    role_permissions = ROLE_PERMISSIONS if role_permissions is None else role_permissions
    route_permissions = ROUTE_PERMISSIONS if route_permissions is None else route_permissions
    catalog = PERMISSION_CATALOG if catalog is None else catalog
    category_labels = CATEGORY_LABELS if category_labels is None else category_labels
    role_labels = ROLE_LABELS if role_labels is None else role_labels
    role_descriptions = ROLE_DESCRIPTIONS if role_descriptions is None else role_descriptions

    problems: list[str] = []

    # ── Category labels ──────────────────────────────────────────
    labels: dict[PermissionCategory, str] = {}
    for key, label in category_labels.items():
        category = parse_category(key)
        if category is not None:
            labels[category] = label
        else:
            problems.append(f"category label for unknown category '{enum_value(key)}'")

    # ── Catalog ──────────────────────────────────────────────────
    parsed_catalog: dict[Permission, PermissionInfo] = {}
    for key, raw_info in catalog.items():
        permission = parse_permission(key)
        if permission is None:
            problems.append(f"catalog entry '{enum_value(key)}' is not a known permission")
            continue
        try:
            info = (
                raw_info
                if isinstance(raw_info, PermissionInfo)
                else PermissionInfo.model_validate(raw_info)
            )
        except ValidationError as exc:
            problems.append(f"catalog entry '{permission.value}' is malformed: {exc.errors()[0]['msg']}")
            continue
        if info.category not in labels:
            problems.append(
                f"permission '{permission.value}' uses category "
                f"'{info.category.value}' which has no label"
            )
        parsed_catalog[permission] = info

    for permission in Permission:
        if permission not in parsed_catalog:
            problems.append(f"permission '{permission.value}' has no catalog entry")

    # ── Role matrix ──────────────────────────────────────────────
    parsed_roles: dict[Role, tuple[Permission, ...]] = {}
    for key, raw_permissions in role_permissions.items():
        role = parse_role(key)
        if role is None:
            problems.append(f"role matrix entry for unknown role '{enum_value(key)}'")
            continue
        granted: list[Permission] = []
        for raw in raw_permissions:
            permission = parse_permission(raw)
            if permission is None or permission not in parsed_catalog:
                problems.append(
                    f"role '{role.value}' references unknown permission '{enum_value(raw)}'"
                )
                continue
            if permission in granted:
                problems.append(
                    f"role '{role.value}' lists permission '{permission.value}' more than once"
                )
                continue
            granted.append(permission)
        parsed_roles[role] = tuple(granted)

    for role in Role:
        if role not in parsed_roles:
            logger.warning(f"Role '{role.value}' has no permission entry; it is granted nothing")
            parsed_roles[role] = ()

    # ── Route guard table ────────────────────────────────────────
    parsed_routes: dict[str, Permission] = {}
    for route, raw in route_permissions.items():
        if not isinstance(route, str) or not route.startswith("/"):
            problems.append(f"route guard key {route!r} is not a path")
            continue
        permission = parse_permission(raw)
        if permission is None or permission not in parsed_catalog:
            problems.append(
                f"route '{route}' requires unknown permission '{enum_value(raw)}'"
            )
            continue
        parsed_routes[route] = permission

    if problems:
        for problem in problems:
            if validate:
                logger.error(f"Access policy: {problem}")
            else:
                logger.warning(f"Access policy (ignored): {problem}")
        if validate:
            raise PolicyConfigurationError(problems)

    policy = AccessPolicy(
        role_permissions=parsed_roles,
        route_permissions=parsed_routes,
        catalog=parsed_catalog,
        category_labels=labels,
        role_labels={
            role: label
            for role, label in ((parse_role(k), v) for k, v in role_labels.items())
            if role is not None
        },
        role_descriptions={
            role: text
            for role, text in ((parse_role(k), v) for k, v in role_descriptions.items())
            if role is not None
        },
    )
    logger.info(f"Access policy ready: {policy!r}")
    return policy


@lru_cache(maxsize=None)
def get_default_policy() -> AccessPolicy:
    """Policy built from the bundled tables; built on first use, then shared."""
    return build_access_policy()


# ── Convenience wrappers over the default policy ─────────────────
def permissions_of(role) -> tuple[Permission, ...]:
    return get_default_policy().permissions_of(role)


def has_permission(role, permission) -> bool:
    return get_default_policy().has_permission(role, permission)


def can_access_route(role, route: str) -> bool:
    return get_default_policy().can_access_route(role, route)
