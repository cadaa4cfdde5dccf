import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from agentoffice.agent.team import create_agent_team
from agentoffice.config import settings
from agentoffice.db import init_db
from agentoffice.routers import agents, events, tasks
from agentoffice.services.office import OfficeSession

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    settings.DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    await init_db()
    app.state.office = OfficeSession(create_agent_team())
    yield
    # Shutdown
    await app.state.office.shutdown()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL, "http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(agents.router)
app.include_router(tasks.router)
app.include_router(events.router)


@app.get("/health")
async def health_check():
    return {"status": "ok", "service": settings.APP_NAME}
