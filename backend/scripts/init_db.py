"""
Initialize the database: create all tables.
Run with: python -m scripts.init_db
"""

import asyncio
from factoryops.database import engine, Base
from factoryops.models import User, ProductionLine, Machine, Annotation, ChatMessage, Downtime, EventLog  # noqa: F401


async def init():
    print("Creating database tables...")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    print(f"Created {len(Base.metadata.tables)} tables: {', '.join(sorted(Base.metadata.tables))}")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(init())
