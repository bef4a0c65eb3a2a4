# tests/unit/test_policy.py
"""Tests for the access decision engine."""
import pytest

from storeguard.rbac import (
    PERMISSION_CATALOG,
    PROTECTED_ROUTES,
    ROUTE_PERMISSIONS,
    AccessPolicy,
    Permission,
    PermissionCategory,
    Role,
    can_access_route,
    has_permission,
    permissions_of,
)

UNMAPPED_ROUTES = ["/unknown-path", "/login", "/profile", "/reset-password", "/unauthorized", ""]


class TestConcreteScenarios:
    """Decisions against the bundled tables."""

    def test_accountant_may_approve_expenses(self, policy):
        assert policy.has_permission("accountant", "approve_expense") is True

    def test_cashier_may_not_delete_products(self, policy):
        assert policy.has_permission("cashier", "delete_product") is False

    def test_cashier_cannot_open_users(self, policy):
        assert policy.can_access_route("cashier", "/users") is False

    def test_admin_can_open_subscriptions(self, policy):
        assert policy.can_access_route("admin", "/subscriptions") is True

    def test_unmapped_route_is_open(self, policy):
        assert policy.can_access_route("manager", "/unknown-path") is True

    def test_unknown_role_has_nothing(self, policy):
        assert policy.permissions_of("unknown-role") == ()
        for permission in Permission:
            assert policy.has_permission("unknown-role", permission) is False


class TestPermissionsOf:
    def test_accepts_enum_and_string(self, policy):
        assert policy.permissions_of(Role.CASHIER) == policy.permissions_of("cashier")

    def test_preserves_declared_order(self, policy):
        assert policy.permissions_of(Role.CASHIER)[:3] == (
            Permission.VIEW_DASHBOARD,
            Permission.VIEW_POS,
            Permission.CREATE_SALE,
        )

    def test_sizes_match_matrix(self, policy):
        assert len(policy.permissions_of(Role.ADMIN)) == 35
        assert len(policy.permissions_of(Role.MANAGER)) == 22
        assert len(policy.permissions_of(Role.CASHIER)) == 9
        assert len(policy.permissions_of(Role.ACCOUNTANT)) == 11

    def test_admin_holds_whole_catalog(self, policy):
        assert set(policy.permissions_of(Role.ADMIN)) == set(Permission)

    def test_result_is_immutable(self, policy):
        perms = policy.permissions_of(Role.MANAGER)
        assert isinstance(perms, tuple)
        with pytest.raises(AttributeError):
            perms.append(Permission.DELETE_USER)  # type: ignore[attr-defined]
        assert Permission.DELETE_USER not in policy.permissions_of(Role.MANAGER)

    @pytest.mark.parametrize("role", [None, "", "ADMIN", " admin", 42, ["admin"]])
    def test_unusual_role_values_yield_empty(self, policy, role):
        assert policy.permissions_of(role) == ()

    def test_role_without_entry_is_granted_nothing(self):
        empty = AccessPolicy(
            role_permissions={Role.ADMIN: (Permission.VIEW_DASHBOARD,)},
            route_permissions={"/": Permission.VIEW_DASHBOARD},
            catalog=PERMISSION_CATALOG,
            category_labels={},
            role_labels={},
            role_descriptions={},
        )
        assert empty.permissions_of(Role.CASHIER) == ()
        assert empty.has_permission(Role.CASHIER, Permission.VIEW_DASHBOARD) is False
        assert empty.can_access_route(Role.CASHIER, "/") is False

    def test_direct_construction_drops_duplicates(self):
        direct = AccessPolicy(
            role_permissions={
                Role.CASHIER: (
                    Permission.VIEW_POS,
                    Permission.CREATE_SALE,
                    Permission.VIEW_POS,
                    Permission.CREATE_SALE,
                ),
            },
            route_permissions={},
            catalog=PERMISSION_CATALOG,
            category_labels={},
            role_labels={},
            role_descriptions={},
        )
        assert direct.permissions_of(Role.CASHIER) == (Permission.VIEW_POS, Permission.CREATE_SALE)
        grouped = direct.permissions_by_category(Role.CASHIER)
        assert grouped[PermissionCategory.SALES] == (Permission.VIEW_POS, Permission.CREATE_SALE)


class TestHasPermission:
    def test_matches_membership_for_every_pair(self, policy):
        for role in Role:
            granted = policy.permissions_of(role)
            for permission in Permission:
                assert policy.has_permission(role, permission) == (permission in granted)

    @pytest.mark.parametrize("permission", ["delete_everything", "", None, "VIEW_DASHBOARD", 7])
    def test_unknown_permission_is_denied(self, policy, permission):
        for role in Role:
            assert policy.has_permission(role, permission) is False

    def test_never_raises_on_garbage(self, policy):
        assert policy.has_permission({"role": "admin"}, object()) is False


class TestCanAccessRoute:
    def test_guarded_routes_follow_required_permission(self, policy):
        for role in Role:
            for route, required in ROUTE_PERMISSIONS.items():
                assert policy.can_access_route(role, route) == policy.has_permission(role, required)

    @pytest.mark.parametrize("route", UNMAPPED_ROUTES)
    def test_unmapped_routes_are_open_to_every_role(self, policy, route):
        for role in list(Role) + ["unknown-role", None]:
            assert policy.can_access_route(role, route) is True

    def test_guarded_route_refuses_unknown_role(self, policy):
        for route in ROUTE_PERMISSIONS:
            assert policy.can_access_route("ghost", route) is False

    def test_lookup_is_exact(self, policy):
        # Trailing slashes and sub-paths are not keys of the table.
        assert policy.required_permission("/users/") is None
        assert policy.required_permission("/users") is Permission.VIEW_USERS

    def test_non_string_route_is_unguarded(self, policy):
        assert policy.required_permission(None) is None

    def test_accessible_routes(self, policy):
        assert policy.accessible_routes(Role.CASHIER) == (
            "/",
            "/pos",
            "/products",
            "/customers",
            "/invoices",
        )
        assert set(policy.accessible_routes(Role.ADMIN)) == set(ROUTE_PERMISSIONS)
        assert policy.accessible_routes("nobody") == ()


class TestMonotonicity:
    """Declared subset relations carry over to route access."""

    @pytest.mark.parametrize(
        "smaller,larger",
        [
            (Role.CASHIER, Role.MANAGER),
            (Role.MANAGER, Role.ADMIN),
            (Role.CASHIER, Role.ADMIN),
            (Role.ACCOUNTANT, Role.ADMIN),
        ],
    )
    def test_subset_roles_reach_no_more_routes(self, policy, smaller, larger):
        assert set(policy.permissions_of(smaller)) <= set(policy.permissions_of(larger))
        for route in list(ROUTE_PERMISSIONS) + UNMAPPED_ROUTES:
            if policy.can_access_route(smaller, route):
                assert policy.can_access_route(larger, route)

    def test_accountant_is_not_a_subset_of_manager(self, policy):
        extra = set(policy.permissions_of(Role.ACCOUNTANT)) - set(policy.permissions_of(Role.MANAGER))
        assert extra == {Permission.APPROVE_EXPENSE, Permission.VIEW_SUBSCRIPTIONS}


class TestIdempotence:
    def test_repeated_calls_agree(self, policy):
        first = [
            (policy.permissions_of(r), policy.has_permission(r, p), policy.can_access_route(r, u))
            for r in Role
            for p in Permission
            for u in ROUTE_PERMISSIONS
        ]
        second = [
            (policy.permissions_of(r), policy.has_permission(r, p), policy.can_access_route(r, u))
            for r in Role
            for p in Permission
            for u in ROUTE_PERMISSIONS
        ]
        assert first == second


class TestDisplayLookups:
    def test_role_label_and_description(self, policy):
        assert policy.role_label(Role.ACCOUNTANT) == "Accountant"
        assert policy.role_description("admin").startswith("Full access")

    def test_role_fallback_is_raw_key(self, policy):
        assert policy.role_label("supervisor") == "supervisor"
        assert policy.role_description("supervisor") == "supervisor"

    def test_permission_description(self, policy):
        assert policy.permission_description(Permission.MANAGE_STOCK) == "Add, remove, or adjust stock quantities"
        assert policy.permission_description("view_pos") == "Access the point of sale interface"
        assert policy.permission_description("teleport") == "teleport"

    def test_permission_category(self, policy):
        assert policy.permission_category("create_sale") is PermissionCategory.SALES
        assert policy.permission_category("teleport") is None
        assert policy.permission_info("teleport") is None

    def test_category_label(self, policy):
        assert policy.category_label(PermissionCategory.STOCK) == "Stock Management"
        assert policy.category_label("sales") == "Sales & POS"
        assert policy.category_label("marketing") == "marketing"


class TestGroupedViews:
    def test_role_grouping_follows_category_order(self, policy):
        grouped = policy.permissions_by_category(Role.ACCOUNTANT)
        assert list(grouped) == [
            PermissionCategory.DASHBOARD,
            PermissionCategory.SALES,
            PermissionCategory.PRODUCTS,
            PermissionCategory.STOCK,
            PermissionCategory.CUSTOMERS,
            PermissionCategory.INVOICES,
            PermissionCategory.EXPENSES,
            PermissionCategory.REPORTS,
            PermissionCategory.SUBSCRIPTIONS,
        ]
        assert grouped[PermissionCategory.EXPENSES] == (
            Permission.VIEW_EXPENSES,
            Permission.APPROVE_EXPENSE,
        )

    def test_grouping_covers_every_permission_once(self, policy):
        for role in Role:
            flattened = [p for perms in policy.permissions_by_category(role).values() for p in perms]
            assert sorted(flattened) == sorted(policy.permissions_of(role))

    def test_grouping_returns_copy(self, policy):
        grouped = policy.permissions_by_category(Role.CASHIER)
        grouped.clear()
        assert policy.permissions_by_category(Role.CASHIER)

    def test_unknown_role_grouping_is_empty(self, policy):
        assert policy.permissions_by_category("ghost") == {}

    def test_catalog_grouping(self, policy):
        grouped = policy.catalog_by_category()
        assert list(grouped) == list(PermissionCategory)
        assert sum(len(v) for v in grouped.values()) == len(Permission)


class TestDefaultPolicyWrappers:
    def test_module_functions_use_bundled_tables(self):
        assert has_permission("accountant", "approve_expense") is True
        assert can_access_route("cashier", "/users") is False
        assert can_access_route("manager", "/unknown-path") is True
        assert permissions_of("unknown-role") == ()

    def test_default_policy_is_shared(self, default_policy):
        from storeguard.rbac import get_default_policy

        assert get_default_policy() is default_policy


def test_guard_table_covers_every_protected_route():
    assert set(ROUTE_PERMISSIONS) == PROTECTED_ROUTES


def test_policy_tables_are_read_only(policy):
    with pytest.raises(TypeError):
        policy.routes["/backdoor"] = Permission.VIEW_DASHBOARD  # type: ignore[index]
