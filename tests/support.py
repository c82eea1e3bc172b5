"""Shared fixtures: in-memory SQLite database, model builders, and an API client with auth."""

import unittest
from collections.abc import Generator, Iterable
from datetime import datetime
from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings
from app.core.database import get_db
from app.core.security import create_access_token, hash_password
from app.main import app
from app.models import Base, Permission, Profile, Role, User
from app.schemas.auth import TokenClaims

DEFAULT_PASSWORD = "correct-horse-battery"


def claims_for(user: User) -> TokenClaims:
    return TokenClaims(id=user.id, email=user.email, name=user.name, type=user.type)


class DatabaseTestCase(unittest.TestCase):
    """Fresh schema per test on a single shared in-memory SQLite connection."""

    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)
        self.db: Session = self.Session()
        # Cheap bcrypt cost keeps password hashing fast in tests.
        rounds = patch("app.core.security.BCRYPT_ROUNDS", 4)
        rounds.start()
        self.addCleanup(rounds.stop)

    def tearDown(self) -> None:
        self.db.close()
        Base.metadata.drop_all(self.engine)
        self.engine.dispose()

    def make_permission(self, name: str, created_at: datetime | None = None) -> Permission:
        permission = Permission(name=name)
        if created_at is not None:
            permission.created_at = created_at
        self.db.add(permission)
        self.db.commit()
        return permission

    def make_role(
        self,
        name: str,
        permissions: Iterable[Permission] = (),
        created_at: datetime | None = None,
    ) -> Role:
        role = Role(name=name)
        role.permissions = list(permissions)
        if created_at is not None:
            role.created_at = created_at
        self.db.add(role)
        self.db.commit()
        return role

    def make_user(
        self,
        email: str,
        user_type: str = "user",
        roles: Iterable[Role] = (),
        name: str = "Test User",
        password: str = DEFAULT_PASSWORD,
        created_at: datetime | None = None,
    ) -> User:
        user = User(email=email, name=name, password=hash_password(password), type=user_type)
        first, _, last = name.partition(" ")
        user.profile = Profile(first_name=first, last_name=last)
        user.roles = list(roles)
        if created_at is not None:
            user.created_at = created_at
        self.db.add(user)
        self.db.commit()
        return user

    def make_actor(self, *permission_names: str, user_type: str = "admin", email: str = "actor@example.com") -> User:
        """A user whose single role holds exactly the given permissions."""
        permissions = [
            self.db.query(Permission).filter(Permission.name == n).first() or self.make_permission(n)
            for n in permission_names
        ]
        role = self.db.query(Role).filter(Role.name == user_type).first()
        if role is None:
            role = self.make_role(user_type, permissions)
        else:
            role.permissions = permissions
            self.db.commit()
        return self.make_user(email, user_type=user_type, roles=[role], name="Acting User")


class ApiTestCase(DatabaseTestCase):
    """DatabaseTestCase plus a TestClient whose requests use the test database."""

    prefix = settings.API_V1_PREFIX

    def setUp(self) -> None:
        super().setUp()

        def override_get_db() -> Generator[Session, None, None]:
            db = self.Session()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.addCleanup(app.dependency_overrides.clear)
        self.client = TestClient(app)

    def url(self, path: str) -> str:
        return f"{self.prefix}{path}"

    def auth_headers(self, user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user)}"}
