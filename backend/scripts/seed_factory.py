"""
Load a full-size car plant: 8 production lines, ~375 machines, shift users,
a week of chat history and downtime records.
Run with: python -m scripts.seed_factory
Run with: python -m scripts.seed_factory --reset  (wipe existing data first)
"""

import argparse
import asyncio
import random
from datetime import timedelta
from sqlalchemy import delete, select, func
from factoryops.auth import hash_password
from factoryops.database import engine, async_session, Base, utcnow
from factoryops.models import ChatMessage, Downtime, EventLog, Annotation, Machine, ProductionLine, User
from factoryops.models.enums import MachineStatus, UserRole
from factoryops.seed import DEMO_PASSWORD
from factoryops.services.downtime_service import compute_duration

PRODUCTION_LINES = [
    ("Body Shop", "Welding and assembly of the base structure"),
    ("Paint Shop", "Surface treatment and painting"),
    ("Final Assembly", "Component fitting and finishing"),
    ("Chassis", "Chassis and suspension assembly"),
    ("Powertrain", "Engine assembly and testing"),
    ("Press Shop", "Stamping of metal panels"),
    ("Quality Control", "Final inspection and testing"),
    ("Components", "Sub-component preparation"),
]

# (prefix, name, count, line indexes); multi-line types are spread round-robin
MACHINE_TYPES = [
    ("RW", "Welding Robot", 120, [0]),
    ("RG", "Gluing Robot", 45, [0]),
    ("RA", "Assembly Robot", 60, [2]),
    ("RP", "Painting Robot", 30, [1]),
    ("PH", "Hydraulic Press", 20, [5]),
    ("PS", "Stamping Press", 12, [5]),
    ("CM", "CNC Milling Machine", 15, [7]),
    ("CD", "CNC Drilling Machine", 10, [7]),
    ("CV", "Main Conveyor", 35, [0, 1, 2, 3, 4]),
    ("CT", "Transfer Conveyor", 13, [0, 1, 2, 3, 4]),
    ("QS", "Quality Scanner", 8, [6]),
    ("QC", "3D Camera System", 7, [6]),
]

USERS = [
    ("op.silva.t1", "Joao Silva", UserRole.OPERATOR),
    ("op.costa.t1", "Maria Costa", UserRole.OPERATOR),
    ("op.santos.t1", "Pedro Santos", UserRole.OPERATOR),
    ("op.pereira.t2", "Carlos Pereira", UserRole.OPERATOR),
    ("op.rodrigues.t2", "Sofia Rodrigues", UserRole.OPERATOR),
    ("op.gomes.t3", "Tiago Gomes", UserRole.OPERATOR),
    ("mnt.sousa", "Rui Sousa", UserRole.MAINTENANCE),
    ("mnt.lopes", "Andre Lopes", UserRole.MAINTENANCE),
    ("mnt.ferreira", "Paulo Ferreira", UserRole.MAINTENANCE),
    ("eng.ribeiro", "Luis Ribeiro", UserRole.ENGINEER),
    ("eng.correia", "Joana Correia", UserRole.ENGINEER),
    ("admin", "System Administrator", UserRole.ADMIN),
]

CHAT_TEMPLATES = [
    "Abnormal noise detected during operation",
    "Motor temperature above normal",
    "Check system calibration",
    "Component replacement required",
    "Preventive maintenance scheduled",
    "System running within parameters",
    "Adjustment completed successfully",
    "Check hydraulic fluid level",
    "Proximity sensor giving inconsistent readings",
    "Production cycle finished without issues",
]

DOWNTIME_REASONS = ["Mechanical failure", "Electrical fault", "Planned maintenance", "Material shortage", "Tool change"]


def random_status() -> MachineStatus:
    """75% NORMAL, 15% WARNING, 6% FAILURE, 4% MAINTENANCE."""
    r = random.random()
    if r < 0.75:
        return MachineStatus.NORMAL
    if r < 0.90:
        return MachineStatus.WARNING
    if r < 0.96:
        return MachineStatus.FAILURE
    return MachineStatus.MAINTENANCE


def random_recent(days: int = 7):
    return utcnow() - timedelta(seconds=random.randint(0, days * 24 * 3600))


async def seed(reset: bool = False, messages: int = 150, downtimes: int = 60):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        if reset:
            print("Removing existing data...")
            for model in (EventLog, ChatMessage, Annotation, Downtime, Machine, ProductionLine, User):
                await db.execute(delete(model))
            await db.commit()

        count = await db.scalar(select(func.count(Machine.id)))
        if count:
            print(f"Database already has {count} machines. Use --reset to reseed.")
            return

        print("Creating users...")
        password_hash = hash_password(DEMO_PASSWORD)
        users = []
        for username, name, role in USERS:
            user = await db.scalar(select(User).where(User.username == username))
            if not user:
                user = User(username=username, name=name, role=role, password_hash=password_hash)
                db.add(user)
            users.append(user)

        print("Creating production lines...")
        lines = [ProductionLine(name=name, description=description) for name, description in PRODUCTION_LINES]
        db.add_all(lines)
        await db.flush()

        print("Creating machines...")
        machines = []
        for prefix, name, total, line_indexes in MACHINE_TYPES:
            for i in range(1, total + 1):
                machines.append(Machine(
                    name=f"{name} {i}",
                    code=f"{prefix}-{str(i).zfill(3)}",
                    status=random_status(),
                    production_line_id=lines[line_indexes[i % len(line_indexes)]].id,
                ))
        db.add_all(machines)
        await db.flush()
        print(f"Created {len(machines)} machines across {len(lines)} lines.")

        print(f"Creating {messages} chat messages...")
        for _ in range(messages):
            db.add(ChatMessage(
                content=random.choice(CHAT_TEMPLATES),
                machine_id=random.choice(machines).id,
                user_id=random.choice(users).id,
                created_at=random_recent(),
            ))

        print(f"Creating {downtimes} downtimes...")
        for _ in range(downtimes):
            start = random_recent()
            # Roughly one in five is still open
            end = None if random.random() < 0.2 else start + timedelta(minutes=random.randint(5, 480))
            db.add(Downtime(
                machine_id=random.choice(machines).id,
                reason=random.choice(DOWNTIME_REASONS),
                start_time=start,
                end_time=end,
                duration=compute_duration(start, end) if end else None,
                user_id=random.choice(users).id,
            ))

        await db.commit()
    print("Factory seed complete.")
    await engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed a full-size factory")
    parser.add_argument("--reset", action="store_true", help="Delete existing data before seeding")
    parser.add_argument("--messages", type=int, default=150)
    parser.add_argument("--downtimes", type=int, default=60)
    args = parser.parse_args()
    asyncio.run(seed(reset=args.reset, messages=args.messages, downtimes=args.downtimes))
