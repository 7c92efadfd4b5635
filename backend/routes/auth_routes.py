import logging

from fastapi import APIRouter, Body, Depends, HTTPException, status
from pydantic import BaseModel

from backend.auth import jwt_handler
from backend.auth.dependencies import get_store, require_auth
from backend.core.errors import ValidationError
from backend.models.user import Identity, Role
from backend.store import CatalogStore

router = APIRouter(tags=['auth'])

logger = logging.getLogger(__name__)


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class LoginResponse(BaseModel):
    token: str
    role: Role
    email: str


@router.post('/login', response_model=LoginResponse)
def login(data: LoginRequest | None = Body(default=None), store: CatalogStore = Depends(get_store)):
    email = (data.email or '').strip() if data else ''
    password = (data.password or '') if data else ''
    if not email or not password:
        raise ValidationError('Email and password are required')

    user = store.users.authenticate(email, password)
    if user is None:
        logger.warning('Failed login attempt')
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail='Invalid email or password',
        )

    logger.info('User %s logged in as %s', user.id, user.role.value)
    token = jwt_handler.create_access_token(user)
    return LoginResponse(token=token, role=user.role, email=user.email)


@router.get('/me', response_model=Identity)
def me(current_user: Identity = Depends(require_auth)):
    return current_user
