"""API routes: JSON for sessions, questions, guesses, stats."""
from typing import Annotated

from fastapi import APIRouter, Depends, Header, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.errors import AuthorizationError
from app.core.security import parse_bearer, user_id_from_token
from app.db.session import get_db
from app.schemas.guess import GuessResultSchema, GuessSubmitSchema
from app.schemas.question import QuestionOutSchema
from app.schemas.session import (
    SessionHistoryOutSchema,
    SessionRefSchema,
    SessionStatsOutSchema,
    StartSessionOutSchema,
    StartSessionSchema,
)
from app.schemas.stats import UserStatsOutSchema
from app.services.lifecycle import SessionLifecycleService

router = APIRouter(prefix="/api", tags=["api"])


def get_current_user_id(
    authorization: Annotated[str | None, Header()] = None,
) -> str | None:
    """Opaque user id from the bearer token; None for anonymous callers.

    A token that is present but does not verify is rejected rather than
    silently downgraded to anonymous play.
    """
    if not authorization:
        return None
    token = parse_bearer(authorization)
    user_id = user_id_from_token(token) if token else None
    if user_id is None:
        raise AuthorizationError("Invalid or expired token.")
    return user_id


def get_lifecycle(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SessionLifecycleService:
    settings = get_settings()
    return SessionLifecycleService(
        db,
        auth_policy=settings.auth_policy,
        exclusion_scope=settings.exclusion_scope,
    )


UserId = Annotated[str | None, Depends(get_current_user_id)]
Lifecycle = Annotated[SessionLifecycleService, Depends(get_lifecycle)]


@router.post("/start-session", response_model=StartSessionOutSchema)
async def start_session(body: StartSessionSchema, user_id: UserId, lifecycle: Lifecycle):
    """Start a new game session, optionally restricted to some categories."""
    session_id = await lifecycle.start_session(user_id, body.category_filter)
    return StartSessionOutSchema(session_id=session_id)


@router.get("/next-question", response_model=QuestionOutSchema | None)
async def next_question(
    session_id: Annotated[str, Query(min_length=1)],
    user_id: UserId,
    lifecycle: Lifecycle,
):
    """Next unanswered passage for the session, or null when none is left."""
    return await lifecycle.next_question(session_id, user_id)


@router.post("/submit-guess", response_model=GuessResultSchema)
async def submit_guess(body: GuessSubmitSchema, user_id: UserId, lifecycle: Lifecycle):
    """Score a guess; reveals the true source only after it is recorded."""
    return await lifecycle.submit_guess(
        body.session_id,
        user_id,
        body.passage_id,
        body.guess_source,
        body.time_ms,
    )


@router.post("/end-session", response_model=SessionStatsOutSchema)
async def end_session(body: SessionRefSchema, user_id: UserId, lifecycle: Lifecycle):
    return await lifecycle.end_session(body.session_id, user_id)


@router.get("/session-stats", response_model=SessionStatsOutSchema)
async def session_stats(
    session_id: Annotated[str, Query(min_length=1)],
    user_id: UserId,
    lifecycle: Lifecycle,
):
    return await lifecycle.session_stats(session_id, user_id)


@router.get("/me/stats", response_model=UserStatsOutSchema)
async def my_stats(user_id: UserId, lifecycle: Lifecycle):
    """Lifetime stats for the signed-in user."""
    return await lifecycle.user_stats(user_id)


@router.get("/me/sessions", response_model=SessionHistoryOutSchema)
async def my_sessions(
    user_id: UserId,
    lifecycle: Lifecycle,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1)] = 20,
):
    """The signed-in user's sessions, newest first; `limit` is capped at 100."""
    return await lifecycle.session_history(user_id, page, limit)
