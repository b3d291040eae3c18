import os
import tempfile

# Settings are read once at import time, so the environment has to be in place first
_db_dir = tempfile.mkdtemp(prefix="factoryops-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_db_dir}/test.db"
os.environ["SIMULATION_ENABLED"] = "false"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["AUDIT_WRITE_MODE"] = "atomic"
os.environ["REQUIRE_AUTH"] = "false"

from types import SimpleNamespace
from unittest.mock import AsyncMock
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy import select
from factoryops.auth import create_token, hash_password
from factoryops.config import get_settings
from factoryops.database import engine, Base, async_session
from factoryops.main import app
from factoryops.models import EventLog, Machine, ProductionLine, User
from factoryops.models.enums import MachineStatus, UserRole
from factoryops.realtime.server import sio


@pytest.fixture(autouse=True)
async def reset_db():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


@pytest.fixture(autouse=True)
def socket_io(monkeypatch):
    """Replace every Socket.IO side effect with mocks; sessions live in a plain dict."""
    sessions = {}

    async def get_session(sid, namespace=None):
        return sessions.setdefault((sid, namespace), {})

    async def save_session(sid, session, namespace=None):
        sessions[(sid, namespace)] = session

    mocks = SimpleNamespace(
        emit=AsyncMock(),
        enter_room=AsyncMock(),
        leave_room=AsyncMock(),
        sessions=sessions,
    )
    monkeypatch.setattr(sio, "emit", mocks.emit)
    monkeypatch.setattr(sio, "enter_room", mocks.enter_room)
    monkeypatch.setattr(sio, "leave_room", mocks.leave_room)
    monkeypatch.setattr(sio, "get_session", get_session)
    monkeypatch.setattr(sio, "save_session", save_session)
    return mocks


@pytest.fixture
def settings():
    """The cached Settings object; tests flip fields with monkeypatch.setattr."""
    return get_settings()


@pytest.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def make_user():
    async def _make(user_id="U1", username="op.silva", name="Joao Silva",
                    role=UserRole.OPERATOR, password="secret123"):
        async with async_session() as db:
            user = User(id=user_id, username=username, name=name, role=role,
                        password_hash=hash_password(password))
            db.add(user)
            await db.commit()
            return user
    return _make


@pytest.fixture
def make_machine():
    async def _make(machine_id="M1", code="PH-001", name="Hydraulic Press 1",
                    status=MachineStatus.NORMAL, line_id="L1"):
        async with async_session() as db:
            if not await db.get(ProductionLine, line_id):
                db.add(ProductionLine(id=line_id, name=f"Line {line_id}", description="Test line"))
                await db.flush()
            machine = Machine(id=machine_id, code=code, name=name, status=status, production_line_id=line_id)
            db.add(machine)
            await db.commit()
            return machine
    return _make


@pytest.fixture
async def user(make_user):
    return await make_user()


@pytest.fixture
async def machine(make_machine):
    return await make_machine()


def bearer(user) -> dict:
    return {"Authorization": f"Bearer {create_token(user)}"}


async def fetch_events(event_type=None) -> list[EventLog]:
    async with async_session() as db:
        query = select(EventLog).order_by(EventLog.timestamp)
        if event_type:
            query = query.where(EventLog.event_type == event_type)
        return list((await db.execute(query)).scalars().all())


async def fetch_machine(machine_id: str) -> Machine:
    async with async_session() as db:
        return await db.get(Machine, machine_id)
