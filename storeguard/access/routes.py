"""
Access Routes — read-only views over the access policy.

Endpoints:
    GET  /roles                     Roles with label, description, level
    GET  /roles/{role}/permissions  One role's permissions grouped by category
    GET  /permissions               Full permission catalog grouped by category
    GET  /check/route               Decision for (role, route)
    GET  /check/permission          Decision for (role, permission)
"""

from fastapi import APIRouter, Depends, Query

from storeguard.rbac import AccessPolicy
from storeguard.rbac.decorators import get_access_policy
from storeguard.utils import success_response
from .service import AccessService

access_router = APIRouter()


def _get_service(policy: AccessPolicy = Depends(get_access_policy)) -> AccessService:
    return AccessService(policy)


@access_router.get("/roles")
async def list_roles(svc: AccessService = Depends(_get_service)):
    return success_response(data={"roles": svc.list_roles()})


@access_router.get("/roles/{role}/permissions")
async def get_role_permissions(role: str, svc: AccessService = Depends(_get_service)):
    return success_response(data=svc.role_permissions(role))


@access_router.get("/permissions")
async def list_permissions(svc: AccessService = Depends(_get_service)):
    return success_response(data={"categories": svc.catalog()})


@access_router.get("/check/route")
async def check_route(
    role: str = Query(...),
    route: str = Query(...),
    svc: AccessService = Depends(_get_service),
):
    return success_response(data=svc.check_route(role, route))


@access_router.get("/check/permission")
async def check_permission(
    role: str = Query(...),
    permission: str = Query(...),
    svc: AccessService = Depends(_get_service),
):
    return success_response(data=svc.check_permission(role, permission))
