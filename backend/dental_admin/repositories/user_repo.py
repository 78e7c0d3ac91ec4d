import logging
from typing import List, Optional

from dental_admin.core.exceptions import NotFoundError, StorageParseError
from dental_admin.domain.entities import User
from dental_admin.domain.interfaces import IKeyValueStore, IUserRepository

from .json_collection import (
    JsonCollection,
    decode_document,
    encode_document,
    find_entry_index,
)
from .kv_store import AUTH_USER_KEY, USERS_KEY

logger = logging.getLogger(__name__)


class UserRepository(IUserRepository):
    """Repository for dashboard users and the "authUser" session entry.

    Users are stored as a JSON array under "users"; the logged-in user is a
    copy of its record stored under "authUser".
    """

    def __init__(self, store: IKeyValueStore) -> None:
        self.store = store
        self.collection = JsonCollection(store, USERS_KEY)

    def get_all(self) -> List[User]:
        return [User.from_dict(record) for record in self.collection.load()]

    def get_by_id(self, user_id: str) -> Optional[User]:
        return next((u for u in self.get_all() if u.id == user_id), None)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.get_all() if u.email == email), None)

    def authenticate(self, email: str, password: str) -> Optional[User]:
        """Exact match of email and plaintext password."""
        return next(
            (u for u in self.get_all() if u.email == email and u.password == password),
            None,
        )

    def update(self, user: User) -> User:
        entries = self.collection.load_entries()
        index = find_entry_index(entries, user.id)
        if index is None:
            raise NotFoundError("User", user.id)
        entries[index] = {**entries[index], **user.to_dict()}
        self.collection.save(entries)
        logger.debug("User updated", extra={"context": {"user_id": user.id}})
        return user

    def get_auth_user(self) -> Optional[User]:
        raw = self.store.get(AUTH_USER_KEY)
        if raw is None:
            return None
        try:
            document = decode_document(AUTH_USER_KEY, raw)
        except StorageParseError as e:
            logger.warning(
                "Failed to parse authUser; treating session as logged out",
                extra={"context": {"error": e.message}},
            )
            return None
        if not isinstance(document, dict):
            return None
        return User.from_dict(document)

    def set_auth_user(self, user: User) -> None:
        self.store.set(AUTH_USER_KEY, encode_document(user.to_dict()))

    def clear_auth_user(self) -> None:
        self.store.remove(AUTH_USER_KEY)
