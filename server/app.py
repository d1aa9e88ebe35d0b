"""FastAPI server for the sight words practice game."""

import logging
import os
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from core.engine import SessionEngine
from core.interfaces import Storage
from core.models import Difficulty, Result, SessionState, Sport
from core.progress import build_dashboard
from core.settings import SettingsStore

from server.file_storage import FileStorage
from server.postgres_storage import PostgresStorage
from server.timers import AsyncioScheduler

logger = logging.getLogger(__name__)


# Pydantic models for API
class StartRequest(BaseModel):
    sport: str
    user_id: str = "default"


class SessionRequest(BaseModel):
    user_id: str = "default"


class PickRequest(BaseModel):
    option: str
    user_id: str = "default"


class SpellRequest(BaseModel):
    text: str
    user_id: str = "default"


class SettingsRequest(BaseModel):
    difficulty: str


class CommandResponse(BaseModel):
    ok: bool
    message: str
    correct: Optional[bool] = None
    state: dict


class SettingsResponse(BaseModel):
    difficulty: str
    display_name: str
    seconds_visible: float
    options: list[str]


class SportInfo(BaseModel):
    sport: str
    display_name: str
    round_count: int


# Global state (in production, use proper DI)
storage: Storage = None
settings: SettingsStore = None
engines: dict[str, SessionEngine] = {}


def log_event(event: str, user_id: str, **data) -> None:
    """Log an event to the database."""
    if storage and hasattr(storage, 'log_event'):
        engine = engines.get(user_id)
        sport = engine.state.sport if engine else None
        storage.log_event(event, user_id, sport, **data)


def get_engine(user_id: str = "default") -> SessionEngine | None:
    """Session engine of a user, or None if they never started a session."""
    return engines.get(user_id)


def create_engine(user_id: str = "default") -> SessionEngine:
    """Get or create the session engine for a user. Only starting a session creates one."""
    if user_id not in engines:
        engine = SessionEngine(storage, settings, storage, AsyncioScheduler())
        engine.on_complete(lambda stats: log_event('session.complete', user_id, **stats.to_dict()))
        engines[user_id] = engine
    return engines[user_id]


def idle_snapshot() -> dict:
    return SessionState().to_dict()


def command_response(engine: SessionEngine | None, result: Result) -> CommandResponse:
    return CommandResponse(
        ok=result.ok,
        message=result.message,
        correct=result.correct,
        state=engine.snapshot() if engine else idle_snapshot()
    )


def run_command(user_id: str, command) -> CommandResponse:
    """Apply command(engine) for a user with a session; reject users without one."""
    engine = get_engine(user_id)
    if engine is None:
        return command_response(None, Result.rejected("No active session"))
    return command_response(engine, command(engine))


def require_sport(value: str) -> Sport:
    sport = Sport.parse(value)
    if sport is None:
        raise HTTPException(status_code=404, detail=f"Unknown sport: {value}")
    return sport


def init_storage() -> None:
    """Pick the storage backend from SIGHTWORDS_STORAGE."""
    global storage, settings

    # Use PostgreSQL by default, set SIGHTWORDS_STORAGE=file to use file storage
    storage_type = os.environ.get('SIGHTWORDS_STORAGE', 'postgres')
    if storage_type == 'file':
        storage = FileStorage()
        logger.info("Using file storage")
    else:
        storage = PostgresStorage()
        logger.info("Using PostgreSQL storage")
    settings = SettingsStore(storage)


app = FastAPI(title="Sight Words API", description="Sports sight word practice API")


@app.on_event("startup")
async def startup():
    """Initialize storage on startup unless it was injected already."""
    if storage is None:
        init_storage()


@app.on_event("shutdown")
async def shutdown():
    """End running sessions so their timers are cancelled."""
    for engine in engines.values():
        if engine.is_active:
            engine.end_session()


@app.get("/")
async def root():
    """Health check."""
    return {"service": "sightwords", "status": "ok"}


@app.get("/api/sports", response_model=list[SportInfo])
async def list_sports():
    """List sports with their word counts."""
    return [
        SportInfo(sport=s.value, display_name=s.display_name, round_count=storage.count_rounds(s.value))
        for s in Sport
    ]


@app.get("/api/settings", response_model=SettingsResponse)
async def get_settings():
    difficulty = settings.current()
    return SettingsResponse(
        difficulty=difficulty.value,
        display_name=difficulty.display_name,
        seconds_visible=difficulty.seconds_visible,
        options=[d.value for d in Difficulty]
    )


@app.post("/api/settings", response_model=SettingsResponse)
async def update_settings(request: SettingsRequest):
    """Change difficulty. Takes effect from the next session."""
    try:
        settings.set(request.difficulty)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown difficulty: {request.difficulty}")
    return await get_settings()


# Session Endpoints
@app.post("/api/session/start", response_model=CommandResponse)
async def start_session(request: StartRequest):
    sport = require_sport(request.sport)
    engine = create_engine(request.user_id)
    result = engine.start(sport)
    log_event('session.start', request.user_id,
              pick_total=engine.state.pick_total,
              spell_total=engine.state.spell_total,
              difficulty=engine.state.difficulty.value)
    return command_response(engine, result)


@app.post("/api/session/restart", response_model=CommandResponse)
async def restart_session(request: SessionRequest):
    response = run_command(request.user_id, lambda engine: engine.restart())
    if response.ok:
        log_event('session.restart', request.user_id)
    return response


@app.post("/api/session/end", response_model=CommandResponse)
async def end_session(request: SessionRequest):
    return run_command(request.user_id, lambda engine: engine.end_session())


@app.post("/api/session/pick", response_model=CommandResponse)
async def submit_pick(request: PickRequest):
    return run_command(request.user_id, lambda engine: engine.submit_pick_answer(request.option))


@app.post("/api/session/spell", response_model=CommandResponse)
async def submit_spelling(request: SpellRequest):
    return run_command(request.user_id, lambda engine: engine.submit_spelling(request.text))


@app.get("/api/session")
async def get_session(user_id: str = "default"):
    """Current session snapshot. Users without a session get an idle snapshot."""
    engine = get_engine(user_id)
    return engine.snapshot() if engine else idle_snapshot()


# History Endpoints
@app.get("/api/history")
async def get_history(sport: Optional[str] = None, limit: int = 50):
    """Session summaries, newest first."""
    if sport:
        require_sport(sport)
    sessions = storage.list_session_summaries(sport, limit)
    return {"total": len(sessions), "sessions": sessions}


@app.delete("/api/history")
async def clear_history():
    storage.clear_history()
    return {"success": True}


@app.get("/api/progress")
async def get_progress():
    """Per-sport accuracy and most missed words."""
    attempts = storage.list_attempts()
    summaries = storage.list_session_summaries(limit=10000)
    return build_dashboard(attempts, summaries)


@app.get("/api/events/recent")
async def get_recent_events(user_id: str, event_type: str = None, limit: int = 50):
    """Get recent events for a user."""
    if not hasattr(storage, 'get_user_events'):
        return {"error": "Event logging not available with current storage"}
    return {"events": storage.get_user_events(user_id, event_type, limit)}


def create_app():
    """Factory function for creating the app (useful for testing)."""
    return app
