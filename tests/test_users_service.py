"""Tests for app.services.users: type-filtered listing, scoped role assignment/deletion, profile edits."""

import unittest
import uuid
from datetime import datetime, timedelta, timezone

from app.models import Profile, Role, User
from app.services.errors import (
    AuthorizationError,
    ConflictError,
    InvalidInputError,
    NotFoundError,
)
from app.services.users import (
    ALREADY_HAS_ROLE,
    delete_user,
    edit_user,
    get_user,
    get_users,
    update_user_profile,
)
from tests.support import DatabaseTestCase

BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


class TestGetUsers(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        for i in range(5):
            self.make_user(f"user{i}@x.com", "user", created_at=BASE_TIME + timedelta(minutes=i))
        for i in range(3):
            self.make_user(f"admin{i}@x.com", "admin", created_at=BASE_TIME + timedelta(minutes=10 + i))
        self.make_user("owner0@x.com", "owner", created_at=BASE_TIME + timedelta(minutes=20))

    def test_read_users_only_sees_user_rows(self) -> None:
        actor = self.make_actor("READ_users", user_type="owner", email="reader@x.com")
        page = get_users(self.db, 1, 50, actor)
        self.assertEqual(page.total, 5)
        self.assertTrue(all(u.type == "user" for u in page.users))
        self.assertEqual(page.page_size, 5)

    def test_multiple_read_permissions(self) -> None:
        actor = self.make_actor("READ_admins", "READ_users", email="boss@x.com")
        page = get_users(self.db, 1, 50, actor)
        # 5 users + 3 admins + the acting admin
        self.assertEqual(page.total, 9)
        self.assertEqual({u.type for u in page.users}, {"admin", "user"})

    def test_oldest_first_with_offset(self) -> None:
        actor = self.make_actor("READ_users", user_type="owner", email="reader@x.com")
        page = get_users(self.db, 2, 2, actor)
        self.assertEqual(page.page, 2)
        self.assertEqual([u.email for u in page.users], ["user2@x.com", "user3@x.com"])
        self.assertEqual(page.total, 5)

    def test_last_partial_page_size(self) -> None:
        actor = self.make_actor("READ_users", user_type="owner", email="reader@x.com")
        page = get_users(self.db, 3, 2, actor)
        self.assertEqual([u.email for u in page.users], ["user4@x.com"])
        self.assertEqual(page.page_size, 1)

    def test_no_read_permission_is_empty(self) -> None:
        actor = self.make_actor("EDIT_users", email="editor@x.com")
        page = get_users(self.db, 1, 10, actor)
        self.assertEqual((page.total, page.users), (0, []))

    def test_invalid_page(self) -> None:
        actor = self.make_actor("READ_users", email="reader@x.com")
        with self.assertRaises(InvalidInputError):
            get_users(self.db, 0, 10, actor)


class TestGetUser(DatabaseTestCase):
    def test_loads_roles_permissions_and_profile(self) -> None:
        perm = self.make_permission("READ_users")
        role = self.make_role("user", [perm])
        user = self.make_user("jane@x.com", roles=[role], name="Jane Roe")
        self.db.expire_all()
        found = get_user(self.db, user.id)
        self.assertEqual([r.name for r in found.roles], ["user"])
        self.assertEqual([p.name for p in found.roles[0].permissions], ["READ_users"])
        self.assertEqual(found.profile.first_name, "Jane")

    def test_missing(self) -> None:
        with self.assertRaises(NotFoundError):
            get_user(self.db, uuid.uuid4())


class TestEditUser(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.user_role = self.make_role("user")
        self.owner_role = self.make_role("owner")
        self.target = self.make_user("target@x.com", "user", roles=[self.user_role])

    def test_assigns_role_with_edit_permission(self) -> None:
        actor = self.make_actor("EDIT_users")
        result = edit_user(self.db, self.owner_role.id, self.target.id, actor)
        self.assertTrue(result.assigned)
        self.db.expire_all()
        self.assertEqual(
            {r.name for r in self.db.get(User, self.target.id).roles},
            {"user", "owner"},
        )

    def test_existing_role_is_noop(self) -> None:
        actor = self.make_actor("EDIT_users")
        result = edit_user(self.db, self.user_role.id, self.target.id, actor)
        self.assertFalse(result.assigned)
        self.assertEqual(result.message, ALREADY_HAS_ROLE)
        self.assertEqual(len(self.db.get(User, self.target.id).roles), 1)

    def test_requires_edit_for_target_type(self) -> None:
        actor = self.make_actor("EDIT_admins", "READ_users")
        with self.assertRaises(AuthorizationError):
            edit_user(self.db, self.owner_role.id, self.target.id, actor)
        self.db.expire_all()
        self.assertEqual(len(self.db.get(User, self.target.id).roles), 1)

    def test_missing_target_or_role(self) -> None:
        actor = self.make_actor("EDIT_users")
        with self.assertRaises(NotFoundError):
            edit_user(self.db, self.owner_role.id, uuid.uuid4(), actor)
        with self.assertRaises(NotFoundError):
            edit_user(self.db, uuid.uuid4(), self.target.id, actor)


class TestDeleteUser(DatabaseTestCase):
    def test_deletes_with_scoped_permission(self) -> None:
        role = self.make_role("user")
        target = self.make_user("target@x.com", "user", roles=[role])
        actor = self.make_actor("DELETE_users")

        delete_user(self.db, target.id, actor)

        self.assertIsNone(self.db.get(User, target.id))
        self.assertEqual(self.db.query(Profile).filter(Profile.user_id == target.id).count(), 0)
        self.db.expire_all()
        self.assertEqual(self.db.get(Role, role.id).users, [])

    def test_requires_delete_for_target_type(self) -> None:
        target = self.make_user("other-admin@x.com", "admin")
        actor = self.make_actor("DELETE_users")
        with self.assertRaises(AuthorizationError):
            delete_user(self.db, target.id, actor)
        self.assertIsNotNone(self.db.get(User, target.id))

    def test_missing(self) -> None:
        actor = self.make_actor("DELETE_users")
        with self.assertRaises(NotFoundError):
            delete_user(self.db, uuid.uuid4(), actor)


class TestUpdateUserProfile(DatabaseTestCase):
    def test_partial_name_update(self) -> None:
        user = self.make_user("jane@x.com", name="Jane Roe")
        updated = update_user_profile(self.db, user.id, name="Janet Q Roe")
        self.assertEqual(updated.name, "Janet Q Roe")
        self.assertEqual(updated.email, "jane@x.com")
        self.assertEqual((updated.profile.first_name, updated.profile.last_name), ("Janet", "Q Roe"))

    def test_email_update(self) -> None:
        user = self.make_user("jane@x.com", name="Jane Roe")
        updated = update_user_profile(self.db, user.id, email="jane.roe@x.com")
        self.assertEqual(updated.email, "jane.roe@x.com")
        self.assertEqual(updated.name, "Jane Roe")

    def test_email_taken_by_another_user(self) -> None:
        self.make_user("taken@x.com")
        user = self.make_user("jane@x.com")
        with self.assertRaises(ConflictError):
            update_user_profile(self.db, user.id, email="taken@x.com")
        self.db.expire_all()
        self.assertEqual(self.db.get(User, user.id).email, "jane@x.com")

    def test_own_email_is_not_a_conflict(self) -> None:
        user = self.make_user("jane@x.com")
        update_user_profile(self.db, user.id, email="jane@x.com", name="Jane Roe")

    def test_missing(self) -> None:
        with self.assertRaises(NotFoundError):
            update_user_profile(self.db, uuid.uuid4(), name="Nobody")


if __name__ == "__main__":
    unittest.main()
