from pydantic import BaseModel
from typing import List, Optional


class PermissionOut(BaseModel):
    name: str
    description: str
    category: Optional[str] = None


class CategoryGroupOut(BaseModel):
    category: str
    label: str
    permissions: List[PermissionOut]


class RoleSummaryOut(BaseModel):
    role: str
    label: str
    description: str
    level: Optional[int] = None
    permission_count: int


class RolePermissionsOut(BaseModel):
    role: str
    label: str
    description: str
    permissions: List[str]
    categories: List[CategoryGroupOut]
    routes: List[str]


class RouteDecisionOut(BaseModel):
    role: str
    route: str
    required_permission: Optional[str] = None
    guarded: bool
    allowed: bool


class PermissionDecisionOut(BaseModel):
    role: str
    permission: str
    known_permission: bool
    allowed: bool
