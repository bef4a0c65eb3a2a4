"""Access service — read-only views of the access policy for UI clients."""

from storeguard.rbac import AccessPolicy, ROLE_LEVELS, parse_permission, parse_role
from storeguard.utils import NotFoundError

from .schemas import (
    CategoryGroupOut,
    PermissionDecisionOut,
    PermissionOut,
    RolePermissionsOut,
    RoleSummaryOut,
    RouteDecisionOut,
)


class AccessService:
    def __init__(self, policy: AccessPolicy):
        self.policy = policy

    def list_roles(self) -> list[dict]:
        return [
            RoleSummaryOut(
                role=role.value,
                label=self.policy.role_label(role),
                description=self.policy.role_description(role),
                level=ROLE_LEVELS.get(role),
                permission_count=len(self.policy.permissions_of(role)),
            ).model_dump()
            for role in self.policy.roles
        ]

    def role_permissions(self, raw_role: str) -> dict:
        """Permissions of one role, grouped by category. 404 for an unknown role."""
        role = parse_role(raw_role)
        if role is None:
            raise NotFoundError(detail=f"Unknown role: {raw_role}")

        return RolePermissionsOut(
            role=role.value,
            label=self.policy.role_label(role),
            description=self.policy.role_description(role),
            permissions=[p.value for p in self.policy.permissions_of(role)],
            categories=self._groups(self.policy.permissions_by_category(role)),
            routes=list(self.policy.accessible_routes(role)),
        ).model_dump()

    def catalog(self) -> list[dict]:
        return [g.model_dump() for g in self._groups(self.policy.catalog_by_category())]

    def check_route(self, role: str, route: str) -> dict:
        required = self.policy.required_permission(route)
        return RouteDecisionOut(
            role=role,
            route=route,
            required_permission=required.value if required else None,
            guarded=required is not None,
            allowed=self.policy.can_access_route(role, route),
        ).model_dump()

    def check_permission(self, role: str, permission: str) -> dict:
        return PermissionDecisionOut(
            role=role,
            permission=permission,
            known_permission=parse_permission(permission) is not None,
            allowed=self.policy.has_permission(role, permission),
        ).model_dump()

    def _groups(self, grouped) -> list[CategoryGroupOut]:
        return [
            CategoryGroupOut(
                category=category.value,
                label=self.policy.category_label(category),
                permissions=[
                    PermissionOut(
                        name=permission.value,
                        description=self.policy.permission_description(permission),
                        category=category.value,
                    )
                    for permission in permissions
                ],
            )
            for category, permissions in grouped.items()
        ]
