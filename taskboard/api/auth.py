import logging
from fastapi import APIRouter, Depends, HTTPException, status

from ..dependencies.auth import get_auth_service
from ..errors import DuplicateUsername, InvalidCredentials
from ..schemas.user import Token, UserCreate
from ..services.auth import AuthService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
async def register(payload: UserCreate, auth: AuthService = Depends(get_auth_service)):
    try:
        token = await auth.register(payload.username, payload.password)
    except DuplicateUsername as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return Token(access_token=token)


@router.post("/login", response_model=Token)
async def login(payload: UserCreate, auth: AuthService = Depends(get_auth_service)):
    try:
        token = await auth.login(payload.username, payload.password)
    except InvalidCredentials as e:
        logger.info(f"Failed login for {payload.username!r}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return Token(access_token=token)
