"""User records and password hashing."""

import logging
from typing import Optional
from fastapi.concurrency import run_in_threadpool
from passlib.context import CryptContext

from ..db.store import Store
from ..errors import DuplicateKey, DuplicateUsername
from ..models import User

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 10


class CredentialStore:
    """Creates and looks up users; passwords are kept as salted bcrypt hashes.

    Hashing runs in the threadpool so it does not stall the event loop.
    """

    def __init__(self, store: Store, rounds: int = DEFAULT_ROUNDS):
        self.store = store
        self.pwd_context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds
        )

    async def find_by_username(self, username: str) -> Optional[User]:
        return await self.store.find_one(User, username=username)

    async def create(self, username: str, password: str) -> User:
        """Register a user.

        The existence check gives the common case a clean error; the store's
        unique constraint decides concurrent registrations of the same name.

        Raises:
            DuplicateUsername: If the username is already taken
        """
        if await self.find_by_username(username) is not None:
            raise DuplicateUsername(username)
        hashed = await run_in_threadpool(self.pwd_context.hash, password)
        try:
            return await self.store.create(
                User, {"username": username, "hashed_password": hashed}
            )
        except DuplicateKey as e:
            logger.info(f"Concurrent registration lost for {username!r}")
            raise DuplicateUsername(username) from e

    async def verify(self, user: User, password: str) -> bool:
        return await run_in_threadpool(self.pwd_context.verify, password, user.hashed_password)

    async def dummy_verify(self) -> None:
        """Spend the same time as a real check, for unknown usernames."""
        await run_in_threadpool(self.pwd_context.dummy_verify)
