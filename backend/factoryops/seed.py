"""
Demo data loaded at startup when SEED_DEMO_DATA is on. Idempotent: users are matched
by username and machines by code, so restarting never duplicates rows.
"""

import logging
from sqlalchemy import select
from factoryops.auth import hash_password
from factoryops.database import session_scope
from factoryops.models.enums import MachineStatus, UserRole
from factoryops.models.machine import Machine
from factoryops.models.production_line import ProductionLine
from factoryops.models.user import User

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "factory123"

DEMO_USERS = [
    {"username": "admin",        "name": "System Administrator", "role": UserRole.ADMIN},
    {"username": "eng.ribeiro",  "name": "Luis Ribeiro",         "role": UserRole.ENGINEER},
    {"username": "mnt.sousa",    "name": "Rui Sousa",            "role": UserRole.MAINTENANCE},
    {"username": "op.silva",     "name": "Joao Silva",           "role": UserRole.OPERATOR},
    {"username": "op.costa",     "name": "Maria Costa",          "role": UserRole.OPERATOR},
]

DEMO_LINES = [
    {
        "name": "Body Shop",
        "description": "Welding and assembly of the base structure",
        "machines": [
            ("Welding Robot 01", "RW-001"),
            ("Welding Robot 02", "RW-002"),
            ("Gluing Robot 01", "RG-001"),
            ("Main Conveyor 01", "CV-001"),
        ],
    },
    {
        "name": "Paint Shop",
        "description": "Surface treatment and painting",
        "machines": [
            ("Painting Robot 01", "RP-001"),
            ("Painting Robot 02", "RP-002"),
            ("Transfer Conveyor 01", "CT-001"),
        ],
    },
    {
        "name": "Press Shop",
        "description": "Stamping of metal panels",
        "machines": [
            ("Hydraulic Press 01", "PH-001"),
            ("Stamping Press 01", "PS-001"),
        ],
    },
    {
        "name": "Quality Control",
        "description": "Final inspection and testing",
        "machines": [
            ("Quality Scanner 01", "QS-001"),
            ("3D Camera System 01", "QC-001"),
        ],
    },
]


async def seed_demo_data() -> dict:
    """Create missing demo users, lines and machines. Returns how many rows were added."""
    created = {"users": 0, "production_lines": 0, "machines": 0}

    async with session_scope() as db:
        password_hash = None
        for u in DEMO_USERS:
            existing = await db.scalar(select(User.id).where(User.username == u["username"]))
            if existing:
                continue
            if password_hash is None:
                password_hash = hash_password(DEMO_PASSWORD)
            db.add(User(password_hash=password_hash, **u))
            created["users"] += 1

        for line_data in DEMO_LINES:
            line = await db.scalar(select(ProductionLine).where(ProductionLine.name == line_data["name"]))
            if not line:
                line = ProductionLine(name=line_data["name"], description=line_data["description"])
                db.add(line)
                await db.flush()
                created["production_lines"] += 1

            for name, code in line_data["machines"]:
                if await db.scalar(select(Machine.id).where(Machine.code == code)):
                    continue
                db.add(Machine(name=name, code=code, status=MachineStatus.NORMAL, production_line_id=line.id))
                created["machines"] += 1

    logger.info(
        "Seeded %d users, %d production lines, %d machines",
        created["users"], created["production_lines"], created["machines"],
    )
    return created
