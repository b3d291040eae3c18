from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from factoryops.database import get_db
from factoryops.schemas.chat import ChatMessageResponse
from factoryops.services.chat_service import chat_service

router = APIRouter()


@router.get("/machine/{machine_id}", response_model=list[ChatMessageResponse])
async def list_machine_messages(
    machine_id: str,
    limit: Optional[int] = Query(None, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
):
    """The latest messages (CHAT_HISTORY_LIMIT when limit is omitted) in chronological order."""
    return await chat_service.history(machine_id, db, limit)
