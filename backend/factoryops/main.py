import logging
from contextlib import asynccontextmanager
import socketio
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from factoryops.config import get_settings
from factoryops.database import engine, Base
from factoryops.exceptions import FactoryOpsError
from factoryops.routers import analytics, annotations, chat, downtimes, machines, production_lines, users
from factoryops.routers import auth as auth_router
from factoryops.realtime.server import sio, broadcast_machine_status
from factoryops.services.status_simulator import StatusSimulator
from factoryops.seed import seed_demo_data

# Socket.IO namespace handlers register themselves on import
import factoryops.realtime.machines  # noqa: F401
import factoryops.realtime.annotations  # noqa: F401
import factoryops.realtime.chat  # noqa: F401

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: create tables, seed, start the simulator
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    if settings.seed_demo_data:
        await seed_demo_data()

    simulator = None
    if settings.simulation_enabled:
        simulator = StatusSimulator(settings.simulation_interval_seconds, on_change=broadcast_machine_status)
        simulator.start()
    app.state.simulator = simulator

    yield

    # Shutdown: the simulator must stop before the engine goes away
    if simulator:
        await simulator.stop()
    await engine.dispose()


app = FastAPI(
    title="FactoryOps",
    description="Factory-floor machine monitoring, annotations, chat and downtime tracking",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(FactoryOpsError)
async def factoryops_error_handler(request: Request, exc: FactoryOpsError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


app.include_router(auth_router.router, prefix="/auth", tags=["Auth"])
app.include_router(users.router, prefix="/users", tags=["Users"])
app.include_router(production_lines.router, prefix="/production-lines", tags=["Production Lines"])
app.include_router(machines.router, prefix="/machines", tags=["Machines"])
app.include_router(annotations.router, prefix="/annotations", tags=["Annotations"])
app.include_router(chat.router, prefix="/chat", tags=["Chat"])
app.include_router(downtimes.router, prefix="/downtimes", tags=["Downtimes"])
app.include_router(analytics.router, prefix="/analytics", tags=["Analytics"])


@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": "factoryops"}


# ASGI entrypoint serving both the REST API and /socket.io/
asgi_app = socketio.ASGIApp(sio, other_asgi_app=app)
