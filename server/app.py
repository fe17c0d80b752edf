"""FastAPI server for monstruo application."""

import asyncio
import logging
import os
import random

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from typing import Optional

logger = logging.getLogger(__name__)

from core.combat import CombatOutcome, HIT, MISS
from core.config import LANGUAGE
from core.interfaces import LevelSource
from core.levels import BundledLevelSource
from core.models import Level
from core.session import GameSession

from server.file_storage import FileLevelSource


# Pydantic models for API
class SessionRequest(BaseModel):
    user_id: str = "default"
    practice: Optional[bool] = None
    seed: Optional[int] = None


class RecognitionRequest(BaseModel):
    user_id: str = "default"
    transcript: str = ""
    confidence: float = 0.0
    is_final: bool = True


class RecognitionErrorRequest(BaseModel):
    user_id: str = "default"
    error: str = "recognition_error"


class MeterRequest(BaseModel):
    user_id: str = "default"
    rms: float = 0.0
    pitch_hz: float = 0.0


class LevelSummary(BaseModel):
    id: int
    name: str
    word_count: int
    correct_needed: int


class StatusResponse(BaseModel):
    language: str
    state: str
    practice: bool
    hp: int
    max_hp: int
    hearts: str
    level: int
    level_name: str
    level_label: str
    level_index: int
    level_count: int
    word: Optional[str]
    translation: str
    hint: str
    progress_display: str
    combo_streak: int
    best_combo: int
    total_attempts: int
    total_hits: int
    accuracy: int
    tuning: dict
    base_tuning: dict
    monster_x: float
    speech_available: bool
    listening: bool
    meter: Optional[dict]


class OutcomeResponse(BaseModel):
    kind: str
    said: str
    word: Optional[dict]
    grade: Optional[dict]
    event: Optional[str]
    next_word: Optional[dict]
    level_changed: bool
    game_over: bool
    run_complete: bool
    reason: Optional[str]
    hp: int
    combo_streak: int
    tuning: dict
    monster_x: float
    accuracy: int
    progress_display: str


class MeterResponse(BaseModel):
    rms: float
    pitch_hz: float
    volume: int


# Global state (in production, use proper DI)
level_source: LevelSource = None
levels: list[Level] = []
default_practice: bool = False
sessions: dict[str, GameSession] = {}

# One in-flight resolution per user
session_locks: dict[str, asyncio.Lock] = {}


def log_event(event: str, user_id: str, **data) -> None:
    """Log a gameplay event."""
    details = ' '.join(f"{k}={v}" for k, v in data.items())
    logger.info(f"[{event}] user={user_id} {details}".rstrip())


def get_lock(user_id: str) -> asyncio.Lock:
    if user_id not in session_locks:
        session_locks[user_id] = asyncio.Lock()
    return session_locks[user_id]


def new_session(user_id: str, practice: bool = None, seed: int = None) -> GameSession:
    """Create a fresh session for a user, replacing any previous one."""
    if not levels:
        raise HTTPException(status_code=503, detail="No levels loaded")
    if practice is None:
        practice = default_practice
    rng = random.Random(seed) if seed is not None else random.Random()
    sessions[user_id] = GameSession(levels, practice=practice, rng=rng)
    log_event('session.create', user_id, practice=practice, seed=seed)
    return sessions[user_id]


def get_session(user_id: str = "default") -> GameSession:
    """Get or create the session for a user."""
    if user_id not in sessions:
        return new_session(user_id)
    return sessions[user_id]


def build_status(session: GameSession) -> StatusResponse:
    status = session.get_status()
    return StatusResponse(language=LANGUAGE, max_hp=session.initial_hp, **status)


def build_outcome(session: GameSession, outcome: CombatOutcome) -> OutcomeResponse:
    data = outcome.to_dict()
    return OutcomeResponse(
        accuracy=session.resolver.stats.get_accuracy_percent(),
        progress_display=session.resolver.progression.get_progress_display(),
        **data
    )


def load_level_source() -> LevelSource:
    """Pick the level source from MONSTRUO_LEVELS_FILE, else the bundled levels."""
    levels_file = os.environ.get('MONSTRUO_LEVELS_FILE')
    if levels_file:
        return FileLevelSource(levels_file)
    return BundledLevelSource()


app = FastAPI(title="Monstruo API", description="Spanish word battle game API")


@app.on_event("startup")
async def startup():
    """Load levels on startup."""
    global level_source, levels, default_practice

    level_source = load_level_source()
    try:
        levels = level_source.load_levels()
    except (FileNotFoundError, ValueError) as e:
        raise RuntimeError(f"Could not load levels: {e}") from e
    if not levels:
        raise RuntimeError("Level source returned no levels")

    default_practice = os.environ.get('MONSTRUO_PRACTICE', '0') == '1'
    logger.info(f"Loaded {len(levels)} levels, practice mode default: {default_practice}")


@app.get("/")
async def root():
    """Health check."""
    return {"service": "monstruo", "status": "ok", "levels": len(levels)}


@app.get("/api/levels", response_model=list[LevelSummary])
async def list_levels():
    """List available levels in play order."""
    return [
        LevelSummary(id=level.id, name=level.name, word_count=len(level.words),
                     correct_needed=level.correct_needed)
        for level in levels
    ]


@app.post("/api/session", response_model=StatusResponse)
async def create_session(request: SessionRequest):
    """Start (or restart) an encounter from the first level."""
    async with get_lock(request.user_id):
        session = new_session(request.user_id, request.practice, request.seed)
        return build_status(session)


@app.get("/api/status", response_model=StatusResponse)
async def get_status(user_id: str = "default"):
    """Get the HUD state for a user."""
    return build_status(get_session(user_id))


@app.post("/api/recognition", response_model=OutcomeResponse)
async def submit_recognition(request: RecognitionRequest):
    """Resolve a recognition event delivered by the browser's speech capture."""
    async with get_lock(request.user_id):
        session = get_session(request.user_id)
        outcome = session.handle_event({
            'transcript': request.transcript,
            'confidence': request.confidence,
            'is_final': request.is_final
        })

        if outcome.kind in (HIT, MISS):
            log_event('attempt.' + outcome.kind, request.user_id,
                      word=outcome.word.text, said=outcome.said,
                      score=outcome.grade.score100, label=outcome.grade.label,
                      combo=outcome.combo_streak, hp=outcome.hp)
        if outcome.level_changed:
            log_event('level.advance', request.user_id, level=session.resolver.progression.level.id)
        if outcome.run_complete and outcome.kind == HIT:
            log_event('run.complete', request.user_id,
                      accuracy=session.resolver.stats.get_accuracy_percent())
        if outcome.game_over and outcome.kind == MISS:
            log_event('game.over', request.user_id,
                      best_combo=session.resolver.stats.best_combo)

        return build_outcome(session, outcome)


@app.post("/api/recognition-error", response_model=OutcomeResponse)
async def submit_recognition_error(request: RecognitionErrorRequest):
    """Report a capture failure; it counts as a missed attempt."""
    async with get_lock(request.user_id):
        session = get_session(request.user_id)
        outcome = session.handle_capture_error(request.error)
        log_event('attempt.error', request.user_id, error=request.error, hp=outcome.hp)
        return build_outcome(session, outcome)


@app.post("/api/meter", response_model=MeterResponse)
async def submit_meter(request: MeterRequest):
    """Store the latest microphone level for display."""
    session = get_session(request.user_id)
    return MeterResponse(**session.record_meter({'rms': request.rms, 'pitch_hz': request.pitch_hz}))
