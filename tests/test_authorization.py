"""Tests for app.services.authorization: exact-name gate, live permission state, policy table."""

import unittest

from app.models import Permission
from app.services.authorization import (
    Action,
    authorize,
    authorize_any,
    permission_names,
    require_scoped_permission,
    scoped_permission,
    scoped_permissions,
    visible_user_types,
)
from app.services.errors import AuthenticationError, AuthorizationError, ErrorKind
from tests.support import DatabaseTestCase, claims_for


class TestPolicyTable(unittest.TestCase):
    """(action, account type) pairs map to fixed permission names."""

    def test_scoped_permission_names(self) -> None:
        self.assertEqual(scoped_permission(Action.EDIT, "user"), "EDIT_users")
        self.assertEqual(scoped_permission(Action.DELETE, "admin"), "DELETE_admins")
        self.assertEqual(scoped_permission(Action.READ, "owner"), "READ_owners")

    def test_unknown_type_raises(self) -> None:
        with self.assertRaises(ValueError):
            scoped_permission(Action.EDIT, "guest")

    def test_scoped_permissions_for_action(self) -> None:
        self.assertEqual(
            sorted(scoped_permissions(Action.READ)),
            ["READ_admins", "READ_owners", "READ_users"],
        )

    def test_visible_user_types(self) -> None:
        self.assertEqual(visible_user_types({"READ_users"}), {"user"})
        self.assertEqual(
            visible_user_types({"READ_admins", "READ_owners", "EDIT_users"}),
            {"admin", "owner"},
        )
        self.assertEqual(visible_user_types({"READ_user", "EDIT_users"}), set())


class TestAuthorize(DatabaseTestCase):
    def test_allows_exact_permission(self) -> None:
        actor = self.make_actor("READ_users")
        user = authorize(self.db, claims_for(actor), "READ_users")
        self.assertEqual(user.id, actor.id)

    def test_denies_similar_name(self) -> None:
        actor = self.make_actor("READ_user", "read_users", "READ_users_extra")
        with self.assertRaises(AuthorizationError) as ctx:
            authorize(self.db, claims_for(actor), "READ_users")
        self.assertIs(ctx.exception.kind, ErrorKind.AUTHORIZATION)

    def test_union_across_roles(self) -> None:
        read = self.make_permission("READ_users")
        delete = self.make_permission("DELETE_users")
        user_role = self.make_role("user", [read])
        owner_role = self.make_role("owner", [delete])
        actor = self.make_user("multi@example.com", roles=[user_role, owner_role])
        self.assertEqual(permission_names(actor), frozenset({"READ_users", "DELETE_users"}))
        authorize(self.db, claims_for(actor), "DELETE_users")

    def test_revoked_permission_takes_effect_immediately(self) -> None:
        actor = self.make_actor("READ_admins")
        claims = claims_for(actor)
        authorize(self.db, claims, "READ_admins")

        role = actor.roles[0]
        role.permissions = []
        self.db.commit()
        self.db.expire_all()

        with self.assertRaises(AuthorizationError):
            authorize(self.db, claims, "READ_admins")

    def test_deleted_user_is_unauthenticated(self) -> None:
        actor = self.make_actor("READ_admins")
        claims = claims_for(actor)
        self.db.delete(actor)
        self.db.commit()
        with self.assertRaises(AuthenticationError):
            authorize(self.db, claims, "READ_admins")

    def test_no_roles_denied(self) -> None:
        self.make_permission("READ_users")
        user = self.make_user("plain@example.com")
        with self.assertRaises(AuthorizationError):
            authorize(self.db, claims_for(user), "READ_users")


class TestAuthorizeAny(DatabaseTestCase):
    def test_one_of_is_enough(self) -> None:
        actor = self.make_actor("READ_owners")
        user = authorize_any(self.db, claims_for(actor), scoped_permissions(Action.READ))
        self.assertEqual(user.id, actor.id)

    def test_none_held(self) -> None:
        actor = self.make_actor("CREATE_admins")
        with self.assertRaises(AuthorizationError):
            authorize_any(self.db, claims_for(actor), ["READ_users", "READ_admins"])


class TestScopedPermission(DatabaseTestCase):
    def test_requires_permission_for_target_type(self) -> None:
        actor = self.make_actor("EDIT_users")
        require_scoped_permission(actor, Action.EDIT, "user")
        with self.assertRaises(AuthorizationError) as ctx:
            require_scoped_permission(actor, Action.EDIT, "admin")
        self.assertIn("edit admin", ctx.exception.message)

    def test_singular_name_does_not_satisfy(self) -> None:
        actor = self.make_actor("EDIT_user")
        with self.assertRaises(AuthorizationError):
            require_scoped_permission(actor, Action.EDIT, "user")

    def test_permission_rows_unchanged_by_checks(self) -> None:
        actor = self.make_actor("EDIT_users")
        require_scoped_permission(actor, Action.EDIT, "user")
        self.assertEqual(self.db.query(Permission).count(), 1)


if __name__ == "__main__":
    unittest.main()
