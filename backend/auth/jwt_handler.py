from datetime import datetime, timedelta, timezone

import jwt

from backend.core import config
from backend.models.user import Identity, Role, User


class InvalidToken(Exception):
    """Raised when an access token cannot be trusted."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def create_access_token(
    user: User,
    expires_minutes: int | None = None,
    now: datetime | None = None,
) -> str:
    issued_at = now or _utcnow()
    expire_minutes = expires_minutes or config.JWT_EXPIRES_MINUTES
    expire = issued_at + timedelta(minutes=expire_minutes)
    payload = {
        "sub": str(user.id),
        "role": user.role.value,
        "email": user.email,
        "iat": issued_at,
        "exp": expire,
    }
    return jwt.encode(payload, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: str, now: datetime | None = None) -> Identity:
    # Expiry is checked against ``now`` below instead of PyJWT's own clock.
    try:
        payload = jwt.decode(
            token,
            config.JWT_SECRET_KEY,
            algorithms=[config.JWT_ALGORITHM],
            options={"require": ["sub", "exp"], "verify_exp": False, "verify_iat": False},
        )
    except jwt.PyJWTError as exc:
        raise InvalidToken(str(exc)) from exc

    current_time = now or _utcnow()
    expires_at = payload.get("exp")
    if not isinstance(expires_at, (int, float)) or expires_at <= current_time.timestamp():
        raise InvalidToken("Token has expired")

    subject = payload.get("sub")
    role = payload.get("role")
    email = payload.get("email")
    if not isinstance(subject, str) or not subject.isdigit():
        raise InvalidToken("Invalid token subject")
    if role not in {member.value for member in Role}:
        raise InvalidToken("Invalid token role")
    if not isinstance(email, str) or not email:
        raise InvalidToken("Invalid token email")

    return Identity(id=int(subject), role=Role(role), email=email)
