# edumarket/utils/auth_utils.py
from dataclasses import dataclass
from datetime import datetime, timedelta

import jwt

from edumarket.core.config import Settings


class InvalidToken(Exception):
    pass


@dataclass(frozen=True)
class TokenPayload:
    id: str
    role: str


def create_access_token(
    principal_id,
    role: str,
    settings: Settings,
    expires_delta: timedelta = None,
) -> str:
    if expires_delta is None:
        expires_delta = timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)
    now = datetime.utcnow()
    to_encode = {
        "id": str(principal_id),
        "role": role,
        "type": "access",
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str, settings: Settings, expected_type: str = "access") -> TokenPayload:
    try:
        decoded = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise InvalidToken("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise InvalidToken("Invalid token") from e

    if decoded.get("type") != expected_type:
        raise InvalidToken(f"Invalid token type: expected {expected_type}")
    if not decoded.get("id"):
        raise InvalidToken("Token has no subject")

    return TokenPayload(id=decoded["id"], role=decoded.get("role") or "user")
