from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from factoryops.auth import hash_password
from factoryops.exceptions import ConflictError, NotFoundError
from factoryops.models.user import User
from factoryops.schemas.user import UserCreate, UserUpdate


class UserService:
    async def list_all(self, db: AsyncSession) -> list[User]:
        result = await db.execute(select(User).order_by(User.name))
        return list(result.scalars().all())

    async def get(self, user_id: str, db: AsyncSession) -> User:
        user = await db.get(User, user_id)
        if not user:
            raise NotFoundError(f"User {user_id} not found")
        return user

    async def get_by_username(self, username: str, db: AsyncSession) -> Optional[User]:
        return await db.scalar(select(User).where(User.username == username))

    async def ensure_exists(self, user_id: str, db: AsyncSession) -> None:
        if not await db.scalar(select(User.id).where(User.id == user_id)):
            raise NotFoundError(f"User {user_id} not found")

    async def create(self, data: UserCreate, db: AsyncSession) -> User:
        if await self.get_by_username(data.username, db):
            raise ConflictError(f"Username {data.username} already exists")
        user = User(
            username=data.username,
            name=data.name,
            password_hash=hash_password(data.password),
            role=data.role,
        )
        db.add(user)
        await db.flush()
        return user

    async def update(self, user_id: str, data: UserUpdate, db: AsyncSession) -> User:
        """Username is immutable; name, role and password can change."""
        user = await self.get(user_id, db)
        if data.name:
            user.name = data.name
        if data.role:
            user.role = data.role
        if data.password:
            user.password_hash = hash_password(data.password)
        await db.flush()
        return user

    async def delete(self, user_id: str, db: AsyncSession) -> User:
        user = await self.get(user_id, db)
        await db.delete(user)
        await db.flush()
        return user


user_service = UserService()
