"""Unit tests for auth_service — register and login flows."""

import unittest
from datetime import timedelta
from unittest.mock import MagicMock

from adapter.fake.password_hasher import FakePasswordHasher
from adapter.fake.user_repository import FakeUserRepository
from adapter.security.bcrypt_hasher import BcryptPasswordHasher
from adapter.security.jose_signer import JoseTokenSigner
from domain.model.errors import EmailTakenError, InvalidCredentialsError, StoreError, UsernameTakenError
from domain.model.user import PhoneInput
from services.auth_service import login, register
from services.token_service import TokenIssuer


class AuthServiceTestCase(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()
        self.hasher = FakePasswordHasher()
        self.issuer = TokenIssuer(JoseTokenSigner('test-secret'), ttl=timedelta(minutes=30))

    def register(self, username='u', email='e@x.com', password='right123', phones=None):
        return register(self.repo, self.hasher, self.issuer, username, email, password, phones)


class TestRegister(AuthServiceTestCase):

    def test_returns_user_and_token_for_new_identity(self):
        session = self.register(phones=[PhoneInput('5551234', '1', '57')])

        self.assertIsNotNone(session.user.id)
        self.assertEqual(len(session.user.phones), 1)
        self.assertEqual(self.issuer.verify(session.token).user_id, session.user.id)

    def test_second_registration_with_same_username_fails(self):
        first = self.register()
        with self.assertRaises(UsernameTakenError):
            self.register(email='other@x.com')

        self.assertEqual(self.repo.get_by_id(first.user.id).email, 'e@x.com')

    def test_registration_with_email_on_file_fails(self):
        self.register(username='first', email='new@example.com')
        with self.assertRaises(EmailTakenError):
            self.register(username='second', email='new@example.com')


class TestLogin(AuthServiceTestCase):

    def test_login_returns_token_and_touches_last_login(self):
        created = self.register().user

        session = login(self.repo, self.hasher, self.issuer, 'u', 'right123')

        self.assertEqual(self.issuer.verify(session.token).username, 'u')
        self.assertGreaterEqual(session.user.last_login, created.created_at)
        self.assertGreaterEqual(self.repo.get_by_id(created.id).last_login, created.last_login)

    def test_wrong_password_and_unknown_user_are_indistinguishable(self):
        self.register()

        with self.assertRaises(InvalidCredentialsError) as wrong_password:
            login(self.repo, self.hasher, self.issuer, 'u', 'wrong1234')
        with self.assertRaises(InvalidCredentialsError) as unknown_user:
            login(self.repo, self.hasher, self.issuer, 'ghost', 'right123')

        self.assertEqual(str(wrong_password.exception), str(unknown_user.exception))
        self.assertIs(type(wrong_password.exception), type(unknown_user.exception))

    def test_unexpected_hasher_error_is_reported_as_invalid_credentials(self):
        hasher = MagicMock()
        hasher.hash.side_effect = ValueError('password cannot be longer than 72 bytes')

        with self.assertRaises(InvalidCredentialsError):
            login(self.repo, hasher, self.issuer, 'ghost', 'a1' * 50)

    def test_failed_login_does_not_touch_last_login(self):
        created = self.register().user
        with self.assertRaises(InvalidCredentialsError):
            login(self.repo, self.hasher, self.issuer, 'u', 'wrong1234')
        self.assertEqual(self.repo.get_by_id(created.id).last_login, created.last_login)

    def test_store_failure_is_reported_as_invalid_credentials(self):
        repo = MagicMock()
        repo.get_by_username.side_effect = StoreError()

        with self.assertRaises(InvalidCredentialsError) as ctx:
            login(repo, self.hasher, self.issuer, 'u', 'right123')
        self.assertEqual(str(ctx.exception), 'Invalid username or password')

    def test_failure_while_recording_login_is_reported_as_invalid_credentials(self):
        user = self.register().user
        repo = MagicMock()
        repo.get_by_username.return_value = user
        repo.save.side_effect = StoreError()

        with self.assertRaises(InvalidCredentialsError):
            login(repo, self.hasher, self.issuer, 'u', 'right123')


class TestLongPasswordWithBcrypt(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()
        self.hasher = BcryptPasswordHasher(rounds=4)
        self.issuer = TokenIssuer(JoseTokenSigner('test-secret'), ttl=timedelta(minutes=30))
        self.password = 'a1' * 50
        self.session = register(
            self.repo, self.hasher, self.issuer, 'alice', 'alice@example.com', self.password,
        )

    def test_register_and_login_with_password_over_72_bytes(self):
        session = login(self.repo, self.hasher, self.issuer, 'alice', self.password)
        self.assertEqual(session.user.id, self.session.user.id)

    def test_long_password_failures_are_identical_for_known_and_unknown_users(self):
        with self.assertRaises(InvalidCredentialsError) as known:
            login(self.repo, self.hasher, self.issuer, 'alice', 'b2' * 50)
        with self.assertRaises(InvalidCredentialsError) as unknown:
            login(self.repo, self.hasher, self.issuer, 'ghost', 'b2' * 50)

        self.assertEqual(str(known.exception), str(unknown.exception))
        self.assertIs(type(known.exception), type(unknown.exception))


if __name__ == '__main__':
    unittest.main()
