from __future__ import annotations
from typing import Any, Optional

import bcrypt

from ..docstore import CollectionPort, InMemoryCollection
from .contracts import UserRecord


class PasswordHasher:
    """
    bcrypt hasher: a fresh salt per hash, fixed cost factor.
    bcrypt only reads the first 72 bytes, so longer input is refused upstream.
    """
    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, encoded: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), encoded.encode("utf-8"))
        except ValueError:
            # malformed hash or over-long password
            return False


class InMemoryUserRepo:
    """
    Credential store backed by a document collection with unique
    `username` and `email` indexes.
    """
    def __init__(self, collection: Optional[CollectionPort] = None):
        self._users = collection or InMemoryCollection("users", unique=("username", "email"))

    def find_by_id(self, user_id: str) -> Optional[UserRecord]:
        return self._load(self._users.get(user_id))

    def find_by_email(self, email: str) -> Optional[UserRecord]:
        return self._load(self._users.find_one(email=email))

    def find_by_username(self, username: str) -> Optional[UserRecord]:
        return self._load(self._users.find_one(username=username))

    def find_by_email_or_username(self, *, email: str, username: str) -> Optional[UserRecord]:
        return self.find_by_email(email) or self.find_by_username(username)

    def create(self, *, username: str, email: str, password_hash: str) -> UserRecord:
        doc = self._users.insert({
            "username": username,
            "email": email,
            "password_hash": password_hash,
            "is_verified": False,
            "mfa_enabled": False,
            "mfa_secret": None,
        })
        return UserRecord(**doc)

    def update(self, user_id: str, **changes: Any) -> Optional[UserRecord]:
        return self._load(self._users.update(user_id, changes))

    @staticmethod
    def _load(doc: Optional[dict]) -> Optional[UserRecord]:
        return UserRecord(**doc) if doc is not None else None
