import jwt
import datetime
from typing import Any, Dict

from config.settings import settings
from api.user.user_model import User

def create_access_token(
    payload: Dict[str, Any],
    expires_minutes: int = settings.ACCESS_TOKEN_EXPIRE_MINUTES,
) -> str:
    """
    Generate a JWT access token with the given payload and expiration.
    """
    expire = datetime.datetime.now(datetime.timezone.utc) + datetime.timedelta(minutes=expires_minutes)
    to_encode = payload.copy()
    to_encode.update({"exp": expire})

    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_user_token(user: User, expires_minutes: int = settings.ACCESS_TOKEN_EXPIRE_MINUTES) -> str:
    """
    Generate a JWT for a User instance, embedding id, name and role.
    Token issuing belongs to the identity service; this is what it signs.
    """
    token_payload: Dict[str, Any] = {
        "id":   user.id,
        "name": user.name,
        "role": user.role.value if user.role else "User",
    }
    return create_access_token(token_payload, expires_minutes)
