# marketplace/services/auth_service.py
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from marketplace.data.models.user import UserModel
from marketplace.domain.errors import InvalidCredential, Unauthenticated
from marketplace.domain.schemas import Identity
from marketplace.utils.settings import ACCESS_TOKEN_EXPIRE_MINUTES, JWT_ALGORITHM, SECRET_KEY
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # stored value is not a bcrypt hash
        return False


def create_access_token(user: UserModel) -> str:
    expires = datetime.now(timezone.utc) + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {
        "sub": str(user.id),
        "username": user.username,
        "is_admin": bool(user.is_admin),
        "exp": expires,
    }
    return jwt.encode(claims, SECRET_KEY, algorithm=JWT_ALGORITHM)


def resolve_identity(credential: str | None) -> Identity:
    """
    Bearer credential -> verified caller.

    Unauthenticated when nothing was sent, InvalidCredential when the token
    is malformed, expired, badly signed or missing claims.
    """
    if credential is None or not credential.strip():
        raise Unauthenticated("Authentication required")

    try:
        claims = jwt.decode(
            credential.strip(),
            SECRET_KEY,
            algorithms=[JWT_ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
        return Identity(
            id=int(claims["sub"]),
            username=claims.get("username", ""),
            is_admin=bool(claims.get("is_admin", False)),
        )
    except jwt.PyJWTError as e:
        logger.info(f"Rejected bearer token: {e}")
        raise InvalidCredential("Invalid or expired token") from e
    except ValueError as e:
        logger.info(f"Rejected bearer token with bad subject: {e}")
        raise InvalidCredential("Invalid or expired token") from e


def owner_or_admin(identity: Identity, owner_id: int) -> bool:
    return identity.is_admin or identity.id == owner_id
