"""Error taxonomy shared by the store, the services and the HTTP layer."""


class TaskboardError(Exception):
    """Base class for every error raised by this package."""


class NotFound(TaskboardError):
    """The requested entity does not exist."""


class ConstraintViolation(TaskboardError):
    """A store constraint (foreign key, not-null, ...) rejected a write."""

    def __init__(self, kind: str, detail: str = "", message: str = ""):
        self.kind = kind
        self.detail = detail
        super().__init__(message or f"Constraint violated on {kind}: {detail}".rstrip(": "))


class DuplicateKey(ConstraintViolation):
    """A unique constraint in the store rejected a write."""

    def __init__(self, kind: str, field: str = ""):
        self.field = field
        super().__init__(kind, field, f"Duplicate {kind}{'.' + field if field else ''}")


class DuplicateUsername(TaskboardError):
    """Registration attempted with a username that is already taken."""

    def __init__(self, username: str):
        self.username = username
        super().__init__("Username already exists")


class InvalidCredentials(TaskboardError):
    """Unknown username or wrong password. Both cases look the same."""

    def __init__(self):
        super().__init__("Invalid username or password")


class InvalidToken(TaskboardError):
    """Bearer token is malformed, expired or signed with another secret."""


class StoreUnavailable(TaskboardError):
    """The backing store cannot be reached or initialised."""
