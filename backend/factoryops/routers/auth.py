import logging
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from factoryops.database import get_db
from factoryops.auth import create_token, dummy_password_hash, verify_password
from factoryops.exceptions import UnauthorizedError
from factoryops.schemas.auth import LoginRequest, LoginResponse
from factoryops.schemas.user import UserResponse
from factoryops.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(body: LoginRequest, db: AsyncSession = Depends(get_db)):
    """
    Check a username/password pair and return the user plus a bearer token.
    Unknown usernames and wrong passwords fail identically.
    """
    user = await user_service.get_by_username(body.username, db)
    if not user:
        # Same bcrypt cost as a real check
        verify_password(body.password, dummy_password_hash())
        logger.warning("Failed login for %r", body.username)
        raise UnauthorizedError("Invalid credentials")

    if not verify_password(body.password, user.password_hash):
        logger.warning("Failed login for %r", body.username)
        raise UnauthorizedError("Invalid credentials")

    logger.info("User %s logged in", user.username)
    return LoginResponse(
        user=UserResponse.model_validate(user),
        access_token=create_token(user),
    )
