from datetime import datetime
from sqlmodel import Column, Field, SQLModel

from .common import UTCDateTime, new_oid, utcnow


class User(SQLModel, table=True):
    """A registered account.

    Attributes:
        oid: Store key, exposed to clients as ``id``
        username: Unique login name
        hashed_password: Salted bcrypt hash, never the plaintext
        created_at: Timestamp when the user registered
    """
    __tablename__ = "users"

    oid: str = Field(default_factory=new_oid, primary_key=True)
    username: str = Field(unique=True, index=True)
    hashed_password: str
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(UTCDateTime(), nullable=False))
