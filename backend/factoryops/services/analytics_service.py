from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from factoryops.models.downtime import Downtime
from factoryops.models.enums import MachineStatus
from factoryops.models.machine import Machine


class AnalyticsService:
    async def get_status_distribution(self, db: AsyncSession) -> dict:
        result = await db.execute(select(Machine.status, func.count(Machine.id)).group_by(Machine.status))
        counts = {status: count for status, count in result.all()}
        total = sum(counts.values())

        return {
            "total": total,
            "statuses": [
                {
                    "status": status,
                    "count": counts.get(status, 0),
                    "percentage": round(counts.get(status, 0) / total * 100, 2) if total else 0.0,
                }
                for status in MachineStatus
            ],
        }

    async def get_downtime_summary(self, db: AsyncSession, machine_id: Optional[str] = None) -> dict:
        """
        Per-machine downtime figures. Only closed downtimes contribute minutes;
        MTTR is total closed minutes over the number of closed downtimes.
        """
        query = select(Downtime, Machine).join(Machine, Downtime.machine_id == Machine.id)
        if machine_id:
            query = query.where(Downtime.machine_id == machine_id)
        result = await db.execute(query)

        per_machine: dict[str, dict] = {}
        for downtime, machine in result.all():
            entry = per_machine.setdefault(machine.id, {
                "machine_id": machine.id,
                "machine_name": machine.name,
                "machine_code": machine.code,
                "downtime_count": 0,
                "closed_count": 0,
                "open_count": 0,
                "total_minutes": 0,
            })
            entry["downtime_count"] += 1
            if downtime.end_time is None:
                entry["open_count"] += 1
            else:
                entry["closed_count"] += 1
                entry["total_minutes"] += downtime.duration or 0

        machines = []
        for entry in sorted(per_machine.values(), key=lambda x: x["total_minutes"], reverse=True):
            closed = entry["closed_count"]
            entry["mttr_minutes"] = round(entry["total_minutes"] / closed, 2) if closed else 0.0
            machines.append(entry)

        return {
            "machine_id": machine_id,
            "downtime_count": sum(m["downtime_count"] for m in machines),
            "total_minutes": sum(m["total_minutes"] for m in machines),
            "machines": machines,
        }


analytics_service = AnalyticsService()
