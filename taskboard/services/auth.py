import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError

from ..errors import InvalidCredentials, InvalidToken
from .credentials import CredentialStore

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60


class AuthService:
    """Registration, login and bearer token handling.

    Attributes:
        credentials: User lookup and password hashing
        secret_key: Secret used to sign tokens (HS256)
        expire_minutes: Lifetime of issued tokens
    """

    def __init__(
        self,
        credentials: CredentialStore,
        secret_key: str,
        expire_minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES,
    ):
        if not secret_key:
            raise ValueError("A token signing secret is required")
        self.credentials = credentials
        self.secret_key = secret_key
        self.expire_minutes = expire_minutes

    async def register(self, username: str, password: str) -> str:
        """Create a user and return a token for it.

        Raises:
            DuplicateUsername: If the username is already taken
        """
        user = await self.credentials.create(username, password)
        logger.info(f"Registered user {user.oid}")
        return self.create_access_token(user.oid)

    async def login(self, username: str, password: str) -> str:
        """Check credentials and return a fresh token.

        Raises:
            InvalidCredentials: Unknown username or wrong password
        """
        user = await self.credentials.find_by_username(username)
        if user is None:
            await self.credentials.dummy_verify()
            raise InvalidCredentials()
        if not await self.credentials.verify(user, password):
            raise InvalidCredentials()
        return self.create_access_token(user.oid)

    def create_access_token(self, user_id: str, expires_delta: Optional[timedelta] = None) -> str:
        expire = datetime.now(timezone.utc) + (
            expires_delta or timedelta(minutes=self.expire_minutes)
        )
        return jwt.encode({"sub": user_id, "exp": expire}, self.secret_key, algorithm=ALGORITHM)

    def verify_token(self, token: str) -> str:
        """Return the user id a token was issued for.

        Raises:
            InvalidToken: Expired, tampered with, or missing a subject
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[ALGORITHM])
        except ExpiredSignatureError as e:
            raise InvalidToken("Token has expired") from e
        except JWTError as e:
            raise InvalidToken("Invalid token") from e
        user_id = payload.get("sub")
        if not user_id:
            raise InvalidToken("Invalid token")
        return user_id
