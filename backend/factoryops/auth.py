"""
Auth module: password hashing, JWT creation/validation and the request principal.

Tokens are OPTIONAL. The dashboard client historically keeps the user returned by
/auth/login in local storage and never sends a token, so a request without an
Authorization header (or with an invalid token) resolves to ANONYMOUS. Routes that
manage users or machines go through require_manager, which lets ANONYMOUS through
unless REQUIRE_AUTH is set, and always checks the role of an authenticated caller.
"""

import time
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional
import bcrypt
from jose import jwt, JWTError
from fastapi import Depends, Request
from factoryops.config import get_settings
from factoryops.exceptions import ForbiddenError, UnauthorizedError
from factoryops.models.enums import UserRole

ALGORITHM = "HS256"
MANAGER_ROLES = (UserRole.ADMIN, UserRole.ENGINEER)


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=get_settings().bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


@lru_cache()
def dummy_password_hash() -> str:
    """Hash compared against when the username does not exist, so both login failures cost the same."""
    return hash_password("factoryops-no-such-user")


@dataclass
class UserPrincipal:
    """Resolved identity attached to each request."""
    user_id: Optional[str]
    username: str
    name: str
    role: UserRole
    is_anonymous: bool = False

    @property
    def can_manage(self) -> bool:
        return self.role in MANAGER_ROLES


ANONYMOUS = UserPrincipal(
    user_id=None,
    username="anonymous",
    name="Anonymous",
    role=UserRole.OPERATOR,
    is_anonymous=True,
)


def create_token(user) -> str:
    """Create a signed JWT for the given User model instance."""
    settings = get_settings()
    role = user.role.value if isinstance(user.role, UserRole) else user.role
    payload = {
        "sub": user.id,
        "username": user.username,
        "name": user.name,
        "role": role,
        "exp": int(time.time()) + settings.token_expire_seconds,
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=ALGORITHM)


def decode_token(token: str) -> Optional[UserPrincipal]:
    """Decode and validate a JWT. Returns None if invalid/expired."""
    try:
        settings = get_settings()
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[ALGORITHM])
        return UserPrincipal(
            user_id=payload["sub"],
            username=payload.get("username", payload["sub"]),
            name=payload.get("name", payload["sub"]),
            role=UserRole(payload.get("role", UserRole.OPERATOR.value)),
        )
    except (JWTError, KeyError, ValueError):
        return None


async def get_current_user(request: Request) -> UserPrincipal:
    """
    FastAPI dependency. Extracts JWT from Authorization header.
    Returns ANONYMOUS if the header is absent or the token is invalid.
    """
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        return ANONYMOUS
    principal = decode_token(auth_header[7:])
    return principal if principal else ANONYMOUS


async def require_manager(current_user: UserPrincipal = Depends(get_current_user)) -> UserPrincipal:
    """Gate for user management and machine creation/removal (ADMIN and ENGINEER only)."""
    if current_user.is_anonymous:
        if get_settings().require_auth:
            raise UnauthorizedError("Authentication required")
        return current_user
    if not current_user.can_manage:
        raise ForbiddenError("Your role does not permit this action")
    return current_user
