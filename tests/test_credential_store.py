"""Tests for identity.services.credential_store: policy checks, normalized uniqueness, password checks."""

import unittest
from unittest.mock import MagicMock, patch

from identity.core.database import SessionLocal, engine
from identity.models import Base, User
from identity.services import credential_store, role_assigner
from identity.services.errors import AuthErrorCode, AuthServiceError


class TestNormalize(unittest.TestCase):
    def test_trims_and_lowercases(self) -> None:
        self.assertEqual(credential_store.normalize("  Alice@Example.COM "), "alice@example.com")


class TestValidateUsername(unittest.TestCase):
    """Usernames are 1-255 chars of letters, digits and -._@+."""

    def test_allowed_characters(self) -> None:
        for name in ("alice", "a.b-c_d", "bob+tag@host", "X9"):
            credential_store.validate_username(name)

    def test_rejects_whitespace_and_symbols(self) -> None:
        for name in ("al ice", "bob!", "carol#1"):
            with self.assertRaises(AuthServiceError) as ctx:
                credential_store.validate_username(name)
            self.assertEqual(ctx.exception.code, AuthErrorCode.VALIDATION_FAILED)

    def test_rejects_too_long(self) -> None:
        with self.assertRaises(AuthServiceError):
            credential_store.validate_username("a" * 256)


class TestValidatePassword(unittest.TestCase):
    """Length 8-128 plus digit, lowercase, uppercase and symbol unless complexity is disabled."""

    def test_complex_password_accepted(self) -> None:
        credential_store.validate_password("Secret1!")

    def test_too_short(self) -> None:
        with self.assertRaises(AuthServiceError) as ctx:
            credential_store.validate_password("Se1!")
        self.assertIn("8-128", ctx.exception.message)

    def test_reports_missing_classes(self) -> None:
        with self.assertRaises(AuthServiceError) as ctx:
            credential_store.validate_password("alllowercase")
        message = ctx.exception.message
        self.assertIn("a digit", message)
        self.assertIn("an uppercase letter", message)
        self.assertIn("a non-alphanumeric character", message)
        self.assertNotIn("a lowercase letter", message)

    @patch("identity.services.credential_store.get_settings")
    def test_complexity_can_be_disabled(self, mock_settings: MagicMock) -> None:
        mock_settings.return_value.PASSWORD_REQUIRE_COMPLEXITY = False
        credential_store.validate_password("alllowercase")


class StoreTestCase(unittest.TestCase):
    """Fresh schema in the shared in-memory database for each test."""

    def setUp(self) -> None:
        Base.metadata.create_all(engine)
        self.db = SessionLocal()

    def tearDown(self) -> None:
        self.db.close()
        Base.metadata.drop_all(engine)

    def _create(self, username: str = "alice", email: str = "a@x.com") -> User:
        return credential_store.create_user(
            self.db,
            full_name="Alice Example",
            username=username,
            email=email,
            age=30,
            password="Secret1!",
        )


class TestCreateUser(StoreTestCase):
    def test_stores_hash_and_normalized_fields(self) -> None:
        user = self._create(username="Alice", email="Alice@X.com")
        self.assertEqual(len(user.id), 36)
        self.assertEqual(user.username, "Alice")
        self.assertEqual(user.normalized_username, "alice")
        self.assertEqual(user.normalized_email, "alice@x.com")
        self.assertNotEqual(user.password_hash, "Secret1!")
        self.assertIsNotNone(user.created_at)

    def test_lookups_are_case_insensitive(self) -> None:
        user = self._create()
        self.assertEqual(credential_store.find_by_email(self.db, " A@X.COM ").id, user.id)
        self.assertEqual(credential_store.find_by_username(self.db, "ALICE").id, user.id)
        self.assertEqual(credential_store.find_by_id(self.db, user.id).id, user.id)
        self.assertIsNone(credential_store.find_by_id(self.db, "missing"))

    def test_duplicate_email_rejected_by_unique_index(self) -> None:
        self._create(username="alice", email="a@x.com")
        with self.assertRaises(AuthServiceError) as ctx:
            self._create(username="alice2", email="A@x.com")
        self.assertEqual(ctx.exception.code, AuthErrorCode.ALREADY_REGISTERED)
        self.assertEqual(self.db.query(User).count(), 1)

    def test_duplicate_username_rejected_by_unique_index(self) -> None:
        self._create(username="alice", email="a@x.com")
        with self.assertRaises(AuthServiceError) as ctx:
            self._create(username="ALICE", email="b@x.com")
        self.assertEqual(ctx.exception.code, AuthErrorCode.ALREADY_REGISTERED)
        self.assertIn("Username", ctx.exception.message)
        self.assertEqual(self.db.query(User).count(), 1)

    def test_links_roles_through_role_assigner(self) -> None:
        roles = role_assigner.ensure_roles(self.db, ["User", "Admin"])
        with patch(
            "identity.services.credential_store.role_assigner.assign_roles",
            wraps=role_assigner.assign_roles,
        ) as mock_assign:
            user = credential_store.create_user(
                self.db,
                full_name="Alice Example",
                username="alice",
                email="a@x.com",
                age=30,
                password="Secret1!",
                roles=roles + roles,
            )
        mock_assign.assert_called_once()
        self.assertEqual(user.role_names, ["Admin", "User"])

    def test_list_all_returns_every_user(self) -> None:
        self._create(username="alice", email="a@x.com")
        self._create(username="bob", email="b@x.com")
        names = {u.username for u in credential_store.list_all(self.db)}
        self.assertEqual(names, {"alice", "bob"})


class TestCheckPassword(StoreTestCase):
    def test_correct_and_wrong_password(self) -> None:
        user = self._create()
        self.assertTrue(credential_store.check_password(user, "Secret1!"))
        self.assertFalse(credential_store.check_password(user, "wrong"))

    @patch("identity.services.credential_store.verify_password")
    def test_missing_user_still_runs_hash_check(self, mock_verify: MagicMock) -> None:
        mock_verify.return_value = True
        self.assertFalse(credential_store.check_password(None, "Secret1!"))
        mock_verify.assert_called_once_with("Secret1!", credential_store._DUMMY_HASH)

    @patch("identity.services.credential_store.hash_password")
    def test_missing_user_does_not_hash_on_demand(self, mock_hash: MagicMock) -> None:
        self.assertTrue(credential_store._DUMMY_HASH.startswith("$2"))
        self.assertFalse(credential_store.check_password(None, "Secret1!"))
        mock_hash.assert_not_called()


if __name__ == "__main__":
    unittest.main()
