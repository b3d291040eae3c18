from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from factoryops.models.enums import EventType
from factoryops.models.event_log import EventLog


class EventLogService:
    """Write-only audit trail. Rows are kept for reporting and never read back here."""

    async def record(
        self,
        event_type: EventType,
        description: str,
        db: AsyncSession,
        machine_id: Optional[str] = None,
        user_id: Optional[str] = None,
        metadata: Optional[dict] = None,
    ) -> EventLog:
        entry = EventLog(
            event_type=event_type,
            description=description,
            machine_id=machine_id,
            user_id=user_id,
            event_metadata=metadata,
        )
        db.add(entry)
        await db.flush()
        return entry


event_log_service = EventLogService()
