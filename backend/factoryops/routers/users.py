from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from factoryops.database import get_db
from factoryops.auth import require_manager, UserPrincipal
from factoryops.schemas.user import UserCreate, UserUpdate, UserResponse
from factoryops.services.user_service import user_service

router = APIRouter()


@router.get("", response_model=list[UserResponse])
async def list_users(
    db: AsyncSession = Depends(get_db),
    current_user: UserPrincipal = Depends(require_manager),
):
    return await user_service.list_all(db)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: UserPrincipal = Depends(require_manager),
):
    return await user_service.get(user_id, db)


@router.post("", response_model=UserResponse, status_code=201)
async def create_user(
    body: UserCreate,
    db: AsyncSession = Depends(get_db),
    current_user: UserPrincipal = Depends(require_manager),
):
    return await user_service.create(body, db)


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    body: UserUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: UserPrincipal = Depends(require_manager),
):
    return await user_service.update(user_id, body, db)


@router.delete("/{user_id}", response_model=UserResponse)
async def delete_user(
    user_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: UserPrincipal = Depends(require_manager),
):
    """Removes the user together with their annotations, messages and downtimes."""
    return await user_service.delete(user_id, db)
