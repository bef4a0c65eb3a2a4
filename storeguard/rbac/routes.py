"""
Route guard table.

Maps a navigational route to the single permission required to open it.
Routes missing from the table are NOT guarded here: `can_access_route`
allows them (fail-open). Keep PROTECTED_ROUTES and the table in sync.
"""

from typing import Optional

from .permissions import Permission


ROUTE_PERMISSIONS: dict[str, Permission] = {
    "/": Permission.VIEW_DASHBOARD,
    "/pos": Permission.VIEW_POS,
    "/products": Permission.VIEW_PRODUCTS,
    "/stock": Permission.VIEW_STOCK,
    "/categories": Permission.VIEW_CATEGORIES,
    "/customers": Permission.VIEW_CUSTOMERS,
    "/invoices": Permission.VIEW_INVOICES,
    "/expenses": Permission.VIEW_EXPENSES,
    "/reports": Permission.VIEW_REPORTS,
    "/users": Permission.VIEW_USERS,
    "/settings": Permission.VIEW_SETTINGS,
    "/subscriptions": Permission.VIEW_SUBSCRIPTIONS,
}

# Every screen that shows business data. Anything not listed here
# (login, password reset, profile, unauthorized page) is public.
PROTECTED_ROUTES: frozenset[str] = frozenset(
    {
        "/",
        "/pos",
        "/products",
        "/stock",
        "/categories",
        "/customers",
        "/invoices",
        "/expenses",
        "/reports",
        "/users",
        "/settings",
        "/subscriptions",
    }
)


def resolve_route(path: str, route_table, prefix: str = "") -> Optional[str]:
    """
    Map a concrete request path onto a key of `route_table`.

    /pos            → "/pos"
    /customers/42/  → "/customers"
    /api/v1/stock   → "/stock"   (prefix="/api/v1")

    Returns None when neither the full path nor its first segment is guarded.
    """
    if prefix and path.startswith(prefix):
        path = path[len(prefix):]

    path = "/" + path.strip("/")
    if path in route_table:
        return path

    # /customers/42 → /customers
    first_segment = path.split("/")[1] if path != "/" else ""
    top_level = f"/{first_segment}"
    if first_segment and top_level in route_table:
        return top_level

    return None
