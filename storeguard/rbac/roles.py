"""
Role definitions and permission matrix.

Roles are assigned by the identity collaborator once per session; this
module only declares what each of them is granted.
"""

from enum import Enum
from typing import Iterable, Optional, Union

from .permissions import Permission as P


class Role(str, Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    CASHIER = "cashier"
    ACCOUNTANT = "accountant"


ROLE_PERMISSIONS: dict[Role, list[P]] = {
    Role.ADMIN: [
        P.VIEW_DASHBOARD,
        P.VIEW_POS,
        P.CREATE_SALE,
        P.VIEW_SALES,
        P.CANCEL_SALE,
        P.VIEW_PRODUCTS,
        P.CREATE_PRODUCT,
        P.EDIT_PRODUCT,
        P.DELETE_PRODUCT,
        P.VIEW_STOCK,
        P.MANAGE_STOCK,
        P.VIEW_CATEGORIES,
        P.MANAGE_CATEGORIES,
        P.VIEW_CUSTOMERS,
        P.CREATE_CUSTOMER,
        P.EDIT_CUSTOMER,
        P.DELETE_CUSTOMER,
        P.VIEW_INVOICES,
        P.CREATE_INVOICE,
        P.EDIT_INVOICE,
        P.DELETE_INVOICE,
        P.VIEW_EXPENSES,
        P.CREATE_EXPENSE,
        P.APPROVE_EXPENSE,
        P.VIEW_REPORTS,
        P.EXPORT_REPORTS,
        P.VIEW_USERS,
        P.CREATE_USER,
        P.EDIT_USER,
        P.DELETE_USER,
        P.RESET_USER_PASSWORD,
        P.VIEW_SETTINGS,
        P.EDIT_SETTINGS,
        P.VIEW_SUBSCRIPTIONS,
        P.MANAGE_SUBSCRIPTIONS,
    ],
    Role.MANAGER: [
        P.VIEW_DASHBOARD,
        P.VIEW_POS,
        P.CREATE_SALE,
        P.VIEW_SALES,
        P.VIEW_PRODUCTS,
        P.CREATE_PRODUCT,
        P.EDIT_PRODUCT,
        P.VIEW_STOCK,
        P.MANAGE_STOCK,
        P.VIEW_CATEGORIES,
        P.MANAGE_CATEGORIES,
        P.VIEW_CUSTOMERS,
        P.CREATE_CUSTOMER,
        P.EDIT_CUSTOMER,
        P.VIEW_INVOICES,
        P.CREATE_INVOICE,
        P.EDIT_INVOICE,
        P.VIEW_EXPENSES,
        P.CREATE_EXPENSE,
        P.VIEW_REPORTS,
        P.EXPORT_REPORTS,
        P.VIEW_SETTINGS,
    ],
    Role.CASHIER: [
        P.VIEW_DASHBOARD,
        P.VIEW_POS,
        P.CREATE_SALE,
        P.VIEW_SALES,
        P.VIEW_PRODUCTS,
        P.VIEW_CUSTOMERS,
        P.CREATE_CUSTOMER,
        P.VIEW_INVOICES,
        P.CREATE_INVOICE,
    ],
    Role.ACCOUNTANT: [
        P.VIEW_DASHBOARD,
        P.VIEW_SALES,
        P.VIEW_PRODUCTS,
        P.VIEW_STOCK,
        P.VIEW_CUSTOMERS,
        P.VIEW_INVOICES,
        P.VIEW_EXPENSES,
        P.APPROVE_EXPENSE,
        P.VIEW_REPORTS,
        P.EXPORT_REPORTS,
        P.VIEW_SUBSCRIPTIONS,
    ],
}

ROLE_LABELS: dict[Role, str] = {
    Role.ADMIN: "Administrator",
    Role.MANAGER: "Manager",
    Role.CASHIER: "Cashier",
    Role.ACCOUNTANT: "Accountant",
}

ROLE_DESCRIPTIONS: dict[Role, str] = {
    Role.ADMIN: "Full access to all features including user management and system settings",
    Role.MANAGER: "Manage products, stock, sales, customers, and view reports",
    Role.CASHIER: "Access to point of sale, create sales, and manage customers",
    Role.ACCOUNTANT: "View financial data, approve expenses, and generate reports",
}

# Seniority ordering for role comparisons. Independent of the permission
# sets above: a higher level does not imply a superset of permissions.
ROLE_LEVELS: dict[Role, int] = {
    Role.ADMIN: 100,
    Role.MANAGER: 80,
    Role.ACCOUNTANT: 60,
    Role.CASHIER: 50,
}


def parse_role(value) -> Optional[Role]:
    """Return the Role for a raw role name, or None for anything outside the closed set."""
    if isinstance(value, Role):
        return value
    try:
        return Role(value)
    except ValueError:
        return None


def has_role_level(role, required) -> bool:
    """True if `role` ranks at or above `required`. Unknown roles never qualify."""
    user_role = parse_role(role)
    required_role = parse_role(required)
    if user_role is None or required_role is None:
        return False
    return ROLE_LEVELS[user_role] >= ROLE_LEVELS[required_role]


def has_role(role, required: Union[Role, str, Iterable]) -> bool:
    """
    True if `role` is `required`, or one of them when a collection is given.

        has_role("manager", Role.ADMIN)                  → False
        has_role("manager", [Role.ADMIN, Role.MANAGER])  → True

    Unknown roles never match, on either side.
    """
    user_role = parse_role(role)
    if user_role is None:
        return False
    if isinstance(required, (Role, str)):
        return parse_role(required) is user_role
    return any(parse_role(r) is user_role for r in required)
