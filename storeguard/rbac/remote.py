"""
Role → permission listings fetched from the remote user service.

The payload has the shape returned by ``GET /users/role-permissions``:

    {
        "admin":   [{"id": "...", "name": "view_dashboard",
                     "description": "...", "category": "dashboard"}, ...],
        "cashier": [...],
    }

Fetching is the caller's job; this module only parses and groups what was
already received.
"""

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ValidationError

from storeguard.utils import Logger

from .policy import AccessPolicy
from .roles import Role, parse_role

logger = Logger("storeguard.rbac.remote")


class RemotePermission(BaseModel):
    id: Optional[str] = None
    name: str
    description: Optional[str] = None
    category: str = "other"


def parse_remote_catalog(payload: Mapping[str, Any]) -> dict[Role, list[RemotePermission]]:
    """Parse a fetched listing. Unknown roles and malformed entries are skipped."""
    catalog: dict[Role, list[RemotePermission]] = {}
    if not isinstance(payload, Mapping):
        logger.warning(f"Ignoring remote permission catalog of type {type(payload).__name__}")
        return catalog

    for raw_role, entries in payload.items():
        role = parse_role(raw_role)
        if role is None:
            logger.warning(f"Remote catalog lists unknown role '{raw_role}'; skipped")
            continue

        if not isinstance(entries, list):
            logger.warning(f"Remote catalog entry for role '{role.value}' is not a list; skipped")
            continue

        parsed: list[RemotePermission] = []
        for entry in entries:
            try:
                parsed.append(RemotePermission.model_validate(entry))
            except ValidationError as exc:
                logger.warning(f"Skipping malformed permission for role '{role.value}': {exc.errors()[0]['msg']}")
        catalog[role] = parsed

    return catalog


def group_remote_permissions(
    permissions: list[RemotePermission],
) -> dict[str, list[RemotePermission]]:
    """Group by category, keeping first-seen category order and entry order."""
    grouped: dict[str, list[RemotePermission]] = {}
    for permission in permissions:
        grouped.setdefault(permission.category, []).append(permission)
    return grouped


def describe_remote_permission(policy: AccessPolicy, permission: RemotePermission) -> str:
    """Remote description, else the local catalog text, else the raw name."""
    if permission.description:
        return permission.description
    return policy.permission_description(permission.name)
