import logging

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader

from backend.auth import jwt_handler
from backend.core.errors import Forbidden, Unauthenticated
from backend.models.user import Identity
from backend.store import CatalogStore

logger = logging.getLogger(__name__)

BEARER_SCHEME = "Bearer"

# Raw header value; the exact "Bearer <token>" form is checked below.
authorization_header = APIKeyHeader(name="Authorization", scheme_name="BearerToken", auto_error=False)


def get_store(request: Request) -> CatalogStore:
    return request.app.state.store


def extract_bearer_token(authorization: str | None) -> str:
    if not authorization:
        raise Unauthenticated("Missing or malformed Authorization header")

    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != BEARER_SCHEME or not parts[1]:
        raise Unauthenticated("Missing or malformed Authorization header")
    return parts[1]


def require_auth(
    request: Request,
    authorization: str | None = Depends(authorization_header),
) -> Identity:
    token = extract_bearer_token(authorization)
    try:
        identity = jwt_handler.decode_access_token(token)
    except jwt_handler.InvalidToken as exc:
        logger.debug("Rejected access token: %s", exc)
        raise Unauthenticated("Invalid or expired token") from exc

    request.state.identity = identity
    return identity


def require_teacher(identity: Identity | None = Depends(require_auth)) -> Identity:
    if identity is None:
        raise Unauthenticated()
    if not identity.is_teacher:
        raise Forbidden("Teacher role required")
    return identity
