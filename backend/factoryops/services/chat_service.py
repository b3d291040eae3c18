from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from factoryops.config import get_settings
from factoryops.models.chat_message import ChatMessage
from factoryops.models.enums import EventType
from factoryops.schemas.chat import MessageCreate
from factoryops.services.event_log_service import event_log_service
from factoryops.services.machine_service import machine_service
from factoryops.services.user_service import user_service


class ChatService:
    async def list_by_machine(
        self, machine_id: str, db: AsyncSession, limit: Optional[int] = None
    ) -> list[ChatMessage]:
        """Newest first; callers reverse for chronological display."""
        limit = limit or get_settings().chat_history_limit
        result = await db.execute(
            select(ChatMessage)
            .where(ChatMessage.machine_id == machine_id)
            .options(selectinload(ChatMessage.user))
            .order_by(ChatMessage.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def history(self, machine_id: str, db: AsyncSession, limit: Optional[int] = None) -> list[ChatMessage]:
        messages = await self.list_by_machine(machine_id, db, limit)
        messages.reverse()
        return messages

    async def create(self, data: MessageCreate, db: AsyncSession) -> ChatMessage:
        await machine_service.ensure_exists(data.machine_id, db)
        await user_service.ensure_exists(data.user_id, db)

        message = ChatMessage(content=data.content, machine_id=data.machine_id, user_id=data.user_id)
        db.add(message)
        await db.flush()

        await event_log_service.record(
            EventType.MESSAGE_SENT,
            "Message sent in machine chat",
            db,
            machine_id=data.machine_id,
            user_id=data.user_id,
        )
        result = await db.execute(
            select(ChatMessage)
            .where(ChatMessage.id == message.id)
            .options(selectinload(ChatMessage.user))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()


chat_service = ChatService()
