"""Tests for identity.services.role_assigner: resolving, creating and assigning roles."""

import unittest

from identity.core.database import SessionLocal, engine
from identity.models import Base, Role
from identity.services import credential_store, role_assigner
from identity.services.errors import AuthErrorCode, AuthServiceError


class TestHasRole(unittest.TestCase):
    def test_case_insensitive(self) -> None:
        self.assertTrue(role_assigner.has_role(["User", "Admin"], "admin"))
        self.assertFalse(role_assigner.has_role(["User"], "Admin"))
        self.assertFalse(role_assigner.has_role([], "Admin"))


class TestRoles(unittest.TestCase):
    def setUp(self) -> None:
        Base.metadata.create_all(engine)
        self.db = SessionLocal()
        role_assigner.ensure_roles(self.db, ["Admin", "User"])

    def tearDown(self) -> None:
        self.db.close()
        Base.metadata.drop_all(engine)

    def test_ensure_roles_is_idempotent(self) -> None:
        roles = role_assigner.ensure_roles(self.db, ["admin", "Auditor", "Auditor"])
        self.assertEqual([r.name for r in roles], ["Admin", "Auditor"])
        self.assertEqual(self.db.query(Role).count(), 3)

    def test_resolve_dedupes_and_ignores_blanks(self) -> None:
        roles = role_assigner.resolve_roles(self.db, ["admin", "ADMIN", " ", "User"])
        self.assertEqual([r.name for r in roles], ["Admin", "User"])

    def test_resolve_empty(self) -> None:
        self.assertEqual(role_assigner.resolve_roles(self.db, []), [])

    def test_resolve_unknown_role(self) -> None:
        with self.assertRaises(AuthServiceError) as ctx:
            role_assigner.resolve_roles(self.db, ["Admin", "Ghost"])
        self.assertEqual(ctx.exception.code, AuthErrorCode.UNKNOWN_ROLE)
        self.assertIn("Ghost", ctx.exception.message)

    def test_assign_roles_skips_held(self) -> None:
        user = credential_store.create_user(
            self.db,
            full_name="Alice",
            username="alice",
            email="a@x.com",
            age=30,
            password="Secret1!",
            roles=role_assigner.resolve_roles(self.db, ["User"]),
        )
        role_assigner.assign_roles(user, role_assigner.resolve_roles(self.db, ["User", "Admin"]))
        self.db.commit()
        self.db.refresh(user)
        self.assertEqual(user.role_names, ["Admin", "User"])


if __name__ == "__main__":
    unittest.main()
