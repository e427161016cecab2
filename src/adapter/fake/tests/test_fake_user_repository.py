"""Unit tests for FakeUserRepository — verifies Port contract compliance."""

import threading
import unittest

from adapter.fake.user_repository import FakeUserRepository
from domain.model.errors import EmailTakenError, NotFoundError, UsernameTakenError
from domain.model.user import PhoneInput, User


def _user(username='alice', email='alice@example.com') -> User:
    return User(username=username, email=email, password_hash='hash')


class TestFakeUserRepository(unittest.TestCase):
    """Tests that FakeUserRepository correctly implements UserRepository Protocol."""

    def setUp(self):
        self.repo = FakeUserRepository()

    # ── save ─────────────────────────────────────────────────

    def test_first_save_assigns_id_and_timestamps(self):
        saved = self.repo.save(_user())

        self.assertIsNotNone(saved.id)
        self.assertIsNotNone(saved.created_at)
        self.assertEqual(saved.created_at, saved.updated_at)

    def test_resave_keeps_created_at_and_refreshes_updated_at(self):
        saved = self.repo.save(_user())
        saved.active = False
        again = self.repo.save(saved)

        self.assertEqual(again.created_at, saved.created_at)
        self.assertGreaterEqual(again.updated_at, saved.updated_at)
        self.assertFalse(self.repo.get_by_id(saved.id).active)

    def test_save_rejects_duplicate_username(self):
        self.repo.save(_user())
        with self.assertRaises(UsernameTakenError):
            self.repo.save(_user(email='other@example.com'))

    def test_save_rejects_duplicate_email(self):
        self.repo.save(_user())
        with self.assertRaises(EmailTakenError):
            self.repo.save(_user(username='bob'))

    def test_save_of_deleted_user_raises_not_found(self):
        saved = self.repo.save(_user())
        self.repo.delete_by_id(saved.id)
        with self.assertRaises(NotFoundError):
            self.repo.save(saved)

    def test_concurrent_saves_with_same_username_admit_one(self):
        errors = []
        barrier = threading.Barrier(8)

        def worker(i):
            barrier.wait()
            try:
                self.repo.save(_user(email=f'alice{i}@example.com'))
            except UsernameTakenError as e:
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(len(self.repo.list_all()), 1)
        self.assertEqual(len(errors), 7)

    # ── reads ────────────────────────────────────────────────

    def test_reads_return_detached_copies(self):
        saved = self.repo.save(_user())
        fetched = self.repo.get_by_id(saved.id)
        fetched.username = 'mallory'

        self.assertEqual(self.repo.get_by_id(saved.id).username, 'alice')

    def test_lookups(self):
        saved = self.repo.save(_user())

        self.assertEqual(self.repo.get_by_username('alice').id, saved.id)
        self.assertEqual(self.repo.get_by_email('alice@example.com').id, saved.id)
        self.assertIsNone(self.repo.get_by_username('Alice'))
        self.assertTrue(self.repo.exists_by_id(saved.id))
        self.assertTrue(self.repo.exists_by_email('alice@example.com'))
        self.assertFalse(self.repo.exists_by_email('nobody@example.com'))

    def test_get_by_phone_id_finds_owner(self):
        user = _user()
        user.replace_phones([PhoneInput('5551234', '1', '57')])
        saved = self.repo.save(user)

        owner = self.repo.get_by_phone_id(saved.phones[0].id)
        self.assertEqual(owner.id, saved.id)
        self.assertIsNone(self.repo.get_by_phone_id('missing'))

    # ── delete ───────────────────────────────────────────────

    def test_delete_by_id(self):
        saved = self.repo.save(_user())

        self.assertTrue(self.repo.delete_by_id(saved.id))
        self.assertIsNone(self.repo.get_by_id(saved.id))
        self.assertFalse(self.repo.delete_by_id(saved.id))


if __name__ == '__main__':
    unittest.main()
