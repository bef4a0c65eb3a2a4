"""
Permission catalog.

Every permission belongs to exactly one category and carries a
human-readable description. Categories are presentation-only groupings.

Permission format:  "{action}_{module}"   e.g. "view_stock", "create_sale"
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class PermissionCategory(str, Enum):
    DASHBOARD = "dashboard"
    SALES = "sales"
    PRODUCTS = "products"
    STOCK = "stock"
    CATEGORIES = "categories"
    CUSTOMERS = "customers"
    INVOICES = "invoices"
    EXPENSES = "expenses"
    REPORTS = "reports"
    USERS = "users"
    SETTINGS = "settings"
    SUBSCRIPTIONS = "subscriptions"


class Permission(str, Enum):
    # ── Dashboard ────────────────────────────────────────────────
    VIEW_DASHBOARD = "view_dashboard"

    # ── Sales & POS ──────────────────────────────────────────────
    VIEW_POS = "view_pos"
    CREATE_SALE = "create_sale"
    VIEW_SALES = "view_sales"
    CANCEL_SALE = "cancel_sale"

    # ── Products ─────────────────────────────────────────────────
    VIEW_PRODUCTS = "view_products"
    CREATE_PRODUCT = "create_product"
    EDIT_PRODUCT = "edit_product"
    DELETE_PRODUCT = "delete_product"

    # ── Stock ────────────────────────────────────────────────────
    VIEW_STOCK = "view_stock"
    MANAGE_STOCK = "manage_stock"

    # ── Categories ───────────────────────────────────────────────
    VIEW_CATEGORIES = "view_categories"
    MANAGE_CATEGORIES = "manage_categories"

    # ── Customers ────────────────────────────────────────────────
    VIEW_CUSTOMERS = "view_customers"
    CREATE_CUSTOMER = "create_customer"
    EDIT_CUSTOMER = "edit_customer"
    DELETE_CUSTOMER = "delete_customer"

    # ── Invoices ─────────────────────────────────────────────────
    VIEW_INVOICES = "view_invoices"
    CREATE_INVOICE = "create_invoice"
    EDIT_INVOICE = "edit_invoice"
    DELETE_INVOICE = "delete_invoice"

    # ── Expenses ─────────────────────────────────────────────────
    VIEW_EXPENSES = "view_expenses"
    CREATE_EXPENSE = "create_expense"
    APPROVE_EXPENSE = "approve_expense"

    # ── Reports ──────────────────────────────────────────────────
    VIEW_REPORTS = "view_reports"
    EXPORT_REPORTS = "export_reports"

    # ── Users ────────────────────────────────────────────────────
    VIEW_USERS = "view_users"
    CREATE_USER = "create_user"
    EDIT_USER = "edit_user"
    DELETE_USER = "delete_user"
    RESET_USER_PASSWORD = "reset_user_password"

    # ── Settings ─────────────────────────────────────────────────
    VIEW_SETTINGS = "view_settings"
    EDIT_SETTINGS = "edit_settings"

    # ── Subscriptions ────────────────────────────────────────────
    VIEW_SUBSCRIPTIONS = "view_subscriptions"
    MANAGE_SUBSCRIPTIONS = "manage_subscriptions"


class PermissionInfo(BaseModel):
    """Catalog entry: the category a permission is listed under and its text."""

    model_config = ConfigDict(frozen=True)

    category: PermissionCategory
    description: str


CATEGORY_LABELS: dict[PermissionCategory, str] = {
    PermissionCategory.DASHBOARD: "Dashboard",
    PermissionCategory.SALES: "Sales & POS",
    PermissionCategory.PRODUCTS: "Products",
    PermissionCategory.STOCK: "Stock Management",
    PermissionCategory.CATEGORIES: "Categories",
    PermissionCategory.CUSTOMERS: "Customers",
    PermissionCategory.INVOICES: "Invoices",
    PermissionCategory.EXPENSES: "Expenses",
    PermissionCategory.REPORTS: "Reports",
    PermissionCategory.USERS: "User Management",
    PermissionCategory.SETTINGS: "Settings",
    PermissionCategory.SUBSCRIPTIONS: "Subscriptions",
}


def _entry(category: PermissionCategory, description: str) -> PermissionInfo:
    return PermissionInfo(category=category, description=description)


_C = PermissionCategory

PERMISSION_CATALOG: dict[Permission, PermissionInfo] = {
    Permission.VIEW_DASHBOARD: _entry(_C.DASHBOARD, "Access dashboard with statistics and overview"),
    Permission.VIEW_POS: _entry(_C.SALES, "Access the point of sale interface"),
    Permission.CREATE_SALE: _entry(_C.SALES, "Create new sales transactions"),
    Permission.VIEW_SALES: _entry(_C.SALES, "View sales history and details"),
    Permission.CANCEL_SALE: _entry(_C.SALES, "Cancel or void existing sales"),
    Permission.VIEW_PRODUCTS: _entry(_C.PRODUCTS, "View product catalog"),
    Permission.CREATE_PRODUCT: _entry(_C.PRODUCTS, "Add new products to inventory"),
    Permission.EDIT_PRODUCT: _entry(_C.PRODUCTS, "Modify existing product information"),
    Permission.DELETE_PRODUCT: _entry(_C.PRODUCTS, "Remove products from inventory"),
    Permission.VIEW_STOCK: _entry(_C.STOCK, "View stock levels and movements"),
    Permission.MANAGE_STOCK: _entry(_C.STOCK, "Add, remove, or adjust stock quantities"),
    Permission.VIEW_CATEGORIES: _entry(_C.CATEGORIES, "View product categories"),
    Permission.MANAGE_CATEGORIES: _entry(_C.CATEGORIES, "Create, edit, or delete categories"),
    Permission.VIEW_CUSTOMERS: _entry(_C.CUSTOMERS, "View customer database"),
    Permission.CREATE_CUSTOMER: _entry(_C.CUSTOMERS, "Add new customers"),
    Permission.EDIT_CUSTOMER: _entry(_C.CUSTOMERS, "Modify customer information"),
    Permission.DELETE_CUSTOMER: _entry(_C.CUSTOMERS, "Remove customers from database"),
    Permission.VIEW_INVOICES: _entry(_C.INVOICES, "View invoices and billing"),
    Permission.CREATE_INVOICE: _entry(_C.INVOICES, "Generate new invoices"),
    Permission.EDIT_INVOICE: _entry(_C.INVOICES, "Modify existing invoices"),
    Permission.DELETE_INVOICE: _entry(_C.INVOICES, "Delete invoices"),
    Permission.VIEW_EXPENSES: _entry(_C.EXPENSES, "View expense records"),
    Permission.CREATE_EXPENSE: _entry(_C.EXPENSES, "Record new expenses"),
    Permission.APPROVE_EXPENSE: _entry(_C.EXPENSES, "Approve or reject expense requests"),
    Permission.VIEW_REPORTS: _entry(_C.REPORTS, "Access reports and analytics"),
    Permission.EXPORT_REPORTS: _entry(_C.REPORTS, "Export reports to various formats"),
    Permission.VIEW_USERS: _entry(_C.USERS, "View user accounts"),
    Permission.CREATE_USER: _entry(_C.USERS, "Create new user accounts"),
    Permission.EDIT_USER: _entry(_C.USERS, "Modify user information and roles"),
    Permission.DELETE_USER: _entry(_C.USERS, "Remove user accounts"),
    Permission.RESET_USER_PASSWORD: _entry(_C.USERS, "Reset passwords for users"),
    Permission.VIEW_SETTINGS: _entry(_C.SETTINGS, "View system configuration"),
    Permission.EDIT_SETTINGS: _entry(_C.SETTINGS, "Modify system settings"),
    Permission.VIEW_SUBSCRIPTIONS: _entry(_C.SUBSCRIPTIONS, "View subscription status"),
    Permission.MANAGE_SUBSCRIPTIONS: _entry(_C.SUBSCRIPTIONS, "Manage subscription plans"),
}


def parse_permission(value) -> Optional[Permission]:
    """Return the Permission for a raw identifier, or None if it is not in the catalog."""
    if isinstance(value, Permission):
        return value
    try:
        return Permission(value)
    except ValueError:
        return None


def parse_category(value) -> Optional[PermissionCategory]:
    if isinstance(value, PermissionCategory):
        return value
    try:
        return PermissionCategory(value)
    except ValueError:
        return None
