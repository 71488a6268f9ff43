"""Unit tests for app.services.users: access gate, error mapping and partial updates."""

import unittest
from unittest.mock import MagicMock

from app.core.security import TokenCodec, verify_password
from app.models import User
from app.schemas.users import UserCreateRequest, UserUpdateRequest
from app.services.user_store import ConflictError, NotFoundError, UserStore
from app.services.users import (
    EmailConflictError,
    IdentityMismatchError,
    InvalidCredentialError,
    MissingCredentialError,
    UserNotFoundError,
    UserService,
)

USER_ID = 7


def _stored_user(**overrides: object) -> User:
    fields = {"id": USER_ID, "name": "NAME", "email": "test@test.com", "password_hash": "hash"}
    fields.update(overrides)
    return User(**fields)


class UserServiceTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.store = MagicMock(spec=UserStore)
        self.codec = TokenCodec("service-test-secret")
        self.service = UserService(self.store, self.codec)
        self.token = self.codec.issue(USER_ID)


class TestCreate(UserServiceTestCase):
    def test_create_hashes_password_and_returns_public_view(self) -> None:
        def insert(user: User) -> User:
            user.id = USER_ID
            return user

        self.store.insert.side_effect = insert
        view = self.service.create(
            UserCreateRequest(name="NAME", email="test@test.com", password="12345asbcd")
        )
        self.assertEqual(view.model_dump(), {"id": USER_ID, "name": "NAME", "email": "test@test.com"})
        inserted = self.store.insert.call_args.args[0]
        self.assertNotEqual(inserted.password_hash, "12345asbcd")
        self.assertTrue(verify_password("12345asbcd", inserted.password_hash))

    def test_create_conflict(self) -> None:
        self.store.insert.side_effect = ConflictError("test@test.com")
        with self.assertRaises(EmailConflictError) as ctx:
            self.service.create(
                UserCreateRequest(name="NAME", email="test@test.com", password="12345asbcd")
            )
        self.assertEqual(ctx.exception.status_code, 409)


class TestAccessGate(UserServiceTestCase):
    """Denied requests never reach the store, for every owner-only operation."""

    def _operations(self):
        return {
            "read": lambda token, uid: self.service.read(uid, token),
            "update": lambda token, uid: self.service.update(uid, token, UserUpdateRequest(name="X")),
            "delete": lambda token, uid: self.service.delete(uid, token),
        }

    def test_missing_credential(self) -> None:
        for name, op in self._operations().items():
            with self.subTest(operation=name):
                with self.assertRaises(MissingCredentialError) as ctx:
                    op(None, USER_ID)
                self.assertEqual(ctx.exception.status_code, 400)
        self.assertEqual(self.store.method_calls, [])

    def test_invalid_credential(self) -> None:
        for name, op in self._operations().items():
            with self.subTest(operation=name):
                with self.assertRaises(InvalidCredentialError) as ctx:
                    op("asdfasdf", USER_ID)
                self.assertEqual(ctx.exception.status_code, 401)
        self.assertEqual(self.store.method_calls, [])

    def test_identity_mismatch(self) -> None:
        other_token = self.codec.issue(-1)
        for name, op in self._operations().items():
            with self.subTest(operation=name):
                with self.assertRaises(IdentityMismatchError) as ctx:
                    op(other_token, USER_ID)
                self.assertEqual(ctx.exception.status_code, 403)
        self.assertEqual(self.store.method_calls, [])


class TestStoreOutcomes(UserServiceTestCase):
    def test_read_returns_public_view(self) -> None:
        self.store.find_by_id.return_value = _stored_user()
        view = self.service.read(USER_ID, self.token)
        self.assertNotIn("password", view.model_dump())
        self.assertNotIn("password_hash", view.model_dump())
        self.store.find_by_id.assert_called_once_with(USER_ID)

    def test_not_found_for_every_operation(self) -> None:
        self.store.find_by_id.side_effect = NotFoundError(USER_ID)
        self.store.update.side_effect = NotFoundError(USER_ID)
        self.store.remove.side_effect = NotFoundError(USER_ID)
        with self.assertRaises(UserNotFoundError):
            self.service.read(USER_ID, self.token)
        with self.assertRaises(UserNotFoundError):
            self.service.update(USER_ID, self.token, UserUpdateRequest(name="X"))
        with self.assertRaises(UserNotFoundError) as ctx:
            self.service.delete(USER_ID, self.token)
        self.assertEqual(ctx.exception.status_code, 404)

    def test_update_passes_only_supplied_fields(self) -> None:
        self.store.update.return_value = _stored_user(name="NEW_NAME")
        view = self.service.update(USER_ID, self.token, UserUpdateRequest(name="NEW_NAME"))
        self.store.update.assert_called_once_with(USER_ID, {"name": "NEW_NAME"})
        self.assertEqual(view.name, "NEW_NAME")

    def test_update_hashes_new_password(self) -> None:
        self.store.update.return_value = _stored_user()
        self.service.update(USER_ID, self.token, UserUpdateRequest(password="NEW_PASSWORD"))
        user_id, values = self.store.update.call_args.args
        self.assertEqual(user_id, USER_ID)
        self.assertEqual(set(values), {"password_hash"})
        self.assertTrue(verify_password("NEW_PASSWORD", values["password_hash"]))

    def test_update_without_body_reads_through_store(self) -> None:
        self.store.update.return_value = _stored_user()
        self.service.update(USER_ID, self.token, None)
        self.store.update.assert_called_once_with(USER_ID, {})

    def test_delete_success(self) -> None:
        self.assertIsNone(self.service.delete(USER_ID, self.token))
        self.store.remove.assert_called_once_with(USER_ID)


if __name__ == "__main__":
    unittest.main()
