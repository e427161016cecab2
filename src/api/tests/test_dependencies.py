"""Unit tests for API dependencies: repository, hasher and token issuer wiring."""

import os
import unittest
from unittest.mock import patch, MagicMock

from fastapi import HTTPException

from adapter.mongodb.user_repository import MongoUserRepository
from api import dependencies
from api.dependencies import get_password_hasher, get_token_issuer, get_user_repo, reset_token_issuer
from services.token_service import TokenIssuer


class TestGetUserRepo(unittest.TestCase):

    @patch('api.dependencies.get_mongodb_client')
    def test_returns_mongo_repository_when_connected(self, mock_get_client):
        mock_client = MagicMock()
        mock_client.__getitem__.return_value = MagicMock()
        mock_get_client.return_value = mock_client

        repo = get_user_repo()

        self.assertIsInstance(repo, MongoUserRepository)
        mock_client.__getitem__.assert_called_with(dependencies.DATABASE_NAME)

    @patch('api.dependencies.get_mongodb_client')
    def test_raises_503_when_mongodb_unavailable(self, mock_get_client):
        mock_get_client.return_value = None

        with self.assertRaises(HTTPException) as context:
            get_user_repo()

        self.assertEqual(context.exception.status_code, 503)
        self.assertEqual(context.exception.detail, "Database unavailable")


class TestGetTokenIssuer(unittest.TestCase):

    def setUp(self):
        reset_token_issuer()

    def tearDown(self):
        reset_token_issuer()

    def test_missing_secret_raises(self):
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ValueError):
                get_token_issuer()

    def test_builds_issuer_once(self):
        with patch.dict(os.environ, {'JWT_SECRET_KEY': 'test-secret'}):
            issuer = get_token_issuer()
            self.assertIsInstance(issuer, TokenIssuer)
            self.assertIs(get_token_issuer(), issuer)


class TestGetPasswordHasher(unittest.TestCase):

    def test_hasher_is_shared(self):
        self.assertIs(get_password_hasher(), get_password_hasher())


if __name__ == '__main__':
    unittest.main()
