"""MongoDB implementation of UserRepository.

Phones are embedded in the user document, so deleting a user or
replacing its phone list removes the old phones with it.
"""

import uuid
from datetime import datetime, timezone
from logging import getLogger

from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb.connection import USERS_COLLECTION_NAME
from domain.model.errors import EmailTakenError, NotFoundError, StoreError, UsernameTakenError
from domain.model.user import Phone, User

logger = getLogger(__name__)


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection.

        The unique indexes are what reject a conflicting write that slipped
        past the service-level uniqueness checks.
        """
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('username', 1)], 'idx_users_username', unique=True)
            create_index_safe(self.collection, [('email', 1)], 'idx_users_email', unique=True)
            create_index_safe(self.collection, [('phones.id', 1)], 'idx_users_phone_id')
            create_index_safe(self.collection, [('created_at', -1)], 'idx_users_created_at')
            return True
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    # ── mapping ──────────────────────────────────────────────

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=doc['_id'],
            username=doc['username'],
            email=doc['email'],
            password_hash=doc['password_hash'],
            role=doc.get('role', 'USER'),
            active=doc.get('active', True),
            created_at=doc.get('created_at'),
            updated_at=doc.get('updated_at'),
            last_login=doc.get('last_login'),
            phones=[
                Phone(
                    id=p['id'],
                    number=p['number'],
                    city_code=p['city_code'],
                    country_code=p['country_code'],
                )
                for p in doc.get('phones', [])
            ],
        )

    def _to_document(self, user: User) -> dict:
        return {
            '_id': user.id,
            'username': user.username,
            'email': user.email,
            'password_hash': user.password_hash,
            'role': user.role,
            'active': user.active,
            'created_at': user.created_at,
            'updated_at': user.updated_at,
            'last_login': user.last_login,
            'phones': [
                {
                    'id': p.id,
                    'number': p.number,
                    'city_code': p.city_code,
                    'country_code': p.country_code,
                }
                for p in user.phones
            ],
        }

    @staticmethod
    def _conflict_from(e: DuplicateKeyError):
        """Map a duplicate key error to the violated uniqueness rule."""
        key_pattern = (e.details or {}).get('keyPattern') or {}
        if 'username' in key_pattern or 'idx_users_username' in str(e):
            return UsernameTakenError()
        return EmailTakenError()

    # ── write operations ─────────────────────────────────────

    def save(self, user: User) -> User:
        """Insert a new user or replace an existing one."""
        now = datetime.now(timezone.utc)
        is_new = user.id is None
        doc = self._to_document(user)
        doc['updated_at'] = now
        if is_new:
            doc['_id'] = uuid.uuid4().hex
            doc['created_at'] = now

        try:
            if is_new:
                self.collection.insert_one(doc)
            else:
                result = self.collection.replace_one({'_id': doc['_id']}, doc)
                if result.matched_count == 0:
                    raise NotFoundError()
        except DuplicateKeyError as e:
            conflict = self._conflict_from(e)
            logger.warning("User save rejected: duplicate key", extra={
                "userId": doc['_id'], "reason": conflict.message,
            })
            raise conflict from e
        except PyMongoError as e:
            logger.error("Failed to save user", extra={"userId": doc['_id'], "error": str(e)})
            raise StoreError() from e

        if is_new:
            logger.info("User created", extra={"userId": doc['_id'], "username": doc['username']})
        return self._to_domain(doc)

    def delete_by_id(self, user_id: str) -> bool:
        try:
            result = self.collection.delete_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to delete user", extra={"userId": user_id, "error": str(e)})
            raise StoreError() from e
        return result.deleted_count > 0

    # ── read operations ──────────────────────────────────────

    def _find_one(self, query: dict, description: str) -> User | None:
        try:
            doc = self.collection.find_one(query)
        except PyMongoError as e:
            logger.error(f"Failed to get user by {description}", extra={"error": str(e)})
            raise StoreError() from e
        return self._to_domain(doc) if doc else None

    def get_by_id(self, user_id: str) -> User | None:
        return self._find_one({'_id': user_id}, 'ID')

    def get_by_username(self, username: str) -> User | None:
        return self._find_one({'username': username}, 'username')

    def get_by_email(self, email: str) -> User | None:
        return self._find_one({'email': email}, 'email')

    def get_by_phone_id(self, phone_id: str) -> User | None:
        return self._find_one({'phones.id': phone_id}, 'phone ID')

    def _count(self, query: dict) -> int:
        try:
            return self.collection.count_documents(query, limit=1)
        except PyMongoError as e:
            logger.error("Failed to count users", extra={"error": str(e)})
            raise StoreError() from e

    def exists_by_id(self, user_id: str) -> bool:
        return self._count({'_id': user_id}) > 0

    def exists_by_email(self, email: str) -> bool:
        return self._count({'email': email}) > 0

    def list_all(self) -> list[User]:
        try:
            docs = list(self.collection.find().sort('created_at', 1))
        except PyMongoError as e:
            logger.error("Failed to list users", extra={"error": str(e)})
            raise StoreError() from e
        return [self._to_domain(doc) for doc in docs]
