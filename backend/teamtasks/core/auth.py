# backend/teamtasks/core/auth.py

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from uuid import UUID

import bcrypt
import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from teamtasks.core.config import settings
from teamtasks.core.database import get_db
from teamtasks.core.errors import Forbidden, Unauthenticated
from teamtasks.models.user import Role, User

# auto_error disabled so a missing header surfaces as our own 401 envelope
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Caller:
    """The authenticated identity making a request."""

    id: UUID
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.admin


# ------------------------------------------------
# PASSWORD HASHING
# ------------------------------------------------
def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # malformed stored hash
        return False


# ------------------------------------------------
# BACKEND JWT
# ------------------------------------------------
def create_access_token(user: User, expires_delta: timedelta | None = None) -> str:
    expires_delta = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = {
        "sub": str(user.id),
        "role": Role(user.role).value,
        "exp": datetime.now(timezone.utc) + expires_delta,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
        )
    except jwt.ExpiredSignatureError:
        raise Unauthenticated("Token expired")
    except jwt.InvalidTokenError:
        raise Unauthenticated("Invalid token")


# ------------------------------------------------
# REQUEST DEPENDENCIES
# ------------------------------------------------
async def get_caller(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> Caller:
    """
    Resolve the bearer token into a Caller.

    The role is read from the stored user rather than trusted from the token,
    so a role change or deletion takes effect on the next request.
    """
    if credentials is None:
        raise Unauthenticated("JWT token not found")

    payload = decode_access_token(credentials.credentials)

    try:
        user_id = UUID(str(payload.get("sub")))
    except ValueError:
        raise Unauthenticated("Invalid token")

    user = await db.get(User, user_id)
    if not user:
        raise Unauthenticated("User no longer exists")

    request.state.user_id = str(user.id)
    return Caller(id=user.id, role=Role(user.role))


def require_roles(*roles: Role):
    """
    Dependency enforcing the coarse role gate.
    Unauthenticated callers get 401, callers with another role get 403.
    """

    async def wrapper(caller: Caller = Depends(get_caller)) -> Caller:
        if caller.role not in roles:
            raise Forbidden("Unauthorized")
        return caller

    return wrapper


require_admin = require_roles(Role.admin)
require_any_role = require_roles(Role.admin, Role.member)
