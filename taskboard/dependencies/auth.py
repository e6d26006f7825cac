from typing import Optional
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..errors import InvalidToken
from ..services.auth import AuthService
from ..services.tasks import TaskService

bearer_scheme = HTTPBearer(auto_error=False)


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_task_service(request: Request) -> TaskService:
    return request.app.state.task_service


async def get_token_user_id(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: AuthService = Depends(get_auth_service),
) -> Optional[str]:
    """User id from the bearer token, None when no token was sent.

    A missing token is only an error when REQUIRE_AUTH is on.
    """
    if credentials is None:
        if request.app.state.settings.require_auth:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Not authenticated",
                headers={"WWW-Authenticate": "Bearer"},
            )
        return None
    try:
        return auth.verify_token(credentials.credentials)
    except InvalidToken as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )


def resolve_owner(token_user_id: Optional[str], user_id: Optional[str]) -> str:
    """Pick the owning user for a list/create request.

    The token wins; a ``userId`` query naming someone else is refused.
    """
    if token_user_id is not None:
        if user_id is not None and user_id != token_user_id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not authorized to access this resource",
            )
        return token_user_id
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="userId is required",
        )
    return user_id
