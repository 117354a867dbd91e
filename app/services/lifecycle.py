"""
Session lifecycle: start a session, serve unseen passages, score guesses.

All state lives in the database. A service instance wraps one request's
AsyncSession and is configured with an explicit AuthPolicy and
ExclusionScope rather than deciding per request.

Ownership rule: a session started by an identified user belongs to that user
and is invisible (404) to everyone else. An anonymous session belongs to
whoever holds its id; guesses on it carry no user id and touch no user stats.
"""
import logging
import math
import random
import uuid
from datetime import datetime, timezone

from sqlalchemy import Select, case, func, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import AuthPolicy, ExclusionScope
from app.core.errors import AlreadyAnsweredError, AuthorizationError, NotFoundError, ValidationError
from app.db.retry import store_operation
from app.models.game_session import GameSession, SessionStatus
from app.models.guess import Guess
from app.models.passage import Passage, SourceType
from app.models.user_stats import UserStats
from app.schemas.guess import GuessResultSchema
from app.schemas.question import QuestionOutSchema
from app.schemas.session import (
    PaginationSchema,
    SessionHistoryItemSchema,
    SessionHistoryOutSchema,
    SessionHistorySummarySchema,
    SessionStatsOutSchema,
)
from app.schemas.stats import UserStatsOutSchema
from app.services.sampling import draw_cut_point, pick_passage
from app.services.scoring import accuracy, is_correct, next_streak, performance_rating, score_delta

logger = logging.getLogger(__name__)

SESSION_NOT_FOUND = "Session not found or no longer open. Start a new one."
MAX_HISTORY_LIMIT = 100


def _duration_seconds(started_at, ended_at) -> int | None:
    if started_at is None or ended_at is None:
        return None
    if started_at.tzinfo is None or ended_at.tzinfo is None:
        # SQLite drops the offset; both values are UTC
        started_at, ended_at = started_at.replace(tzinfo=None), ended_at.replace(tzinfo=None)
    return max(0, int((ended_at - started_at).total_seconds()))


class SessionLifecycleService:
    def __init__(
        self,
        db: AsyncSession,
        auth_policy: AuthPolicy = AuthPolicy.ANONYMOUS,
        exclusion_scope: ExclusionScope = ExclusionScope.SESSION,
        rng: random.Random | None = None,
    ):
        self.db = db
        self.auth_policy = auth_policy
        self.exclusion_scope = exclusion_scope
        self.rng = rng

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _require_identity(self, user_id: str | None) -> None:
        if self.auth_policy is AuthPolicy.REQUIRED and not user_id:
            raise AuthorizationError("Sign in to play.")

    async def _get_visible_session(
        self,
        session_id: str,
        user_id: str | None,
        open_only: bool = True,
    ) -> GameSession:
        if not session_id:
            raise ValidationError("session_id is required")

        # counters are updated in SQL, so always reload them into the identity map
        stmt = select(GameSession).where(GameSession.id == session_id).execution_options(populate_existing=True)
        if open_only:
            stmt = stmt.where(GameSession.status == SessionStatus.OPEN)
        session = (await self.db.execute(stmt)).scalar_one_or_none()

        # Owned sessions are hidden from other callers rather than refused
        if session is None or (session.user_id is not None and session.user_id != user_id):
            raise NotFoundError(SESSION_NOT_FOUND)
        return session

    def _answered_passages(self, session: GameSession) -> Select:
        if self.exclusion_scope is ExclusionScope.USER and session.user_id:
            return select(Guess.passage_id).where(Guess.user_id == session.user_id)
        return select(Guess.passage_id).where(Guess.session_id == session.id)

    def _insert(self):
        if self.db.get_bind().dialect.name == "postgresql":
            return postgresql.insert
        return sqlite.insert

    async def _bump_user_stats(
        self,
        user_id: str,
        games_played: int = 0,
        questions: int = 0,
        correct: int = 0,
        streak: int = 0,
    ) -> None:
        """Create-or-increment the user's aggregate row in one statement."""
        now = datetime.now(timezone.utc)
        stmt = self._insert()(UserStats).values(
            user_id=user_id,
            games_played=games_played,
            total_questions=questions,
            correct=correct,
            streak_best=streak,
            last_played_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id"],
            set_={
                "games_played": UserStats.games_played + games_played,
                "total_questions": UserStats.total_questions + questions,
                "correct": UserStats.correct + correct,
                "streak_best": case((UserStats.streak_best < streak, streak), else_=UserStats.streak_best),
                "last_played_at": now,
            },
        )
        await self.db.execute(stmt)

    async def _avg_time_ms(self, session_id: str) -> float:
        avg = (
            await self.db.execute(select(func.avg(Guess.time_ms)).where(Guess.session_id == session_id))
        ).scalar_one_or_none()
        return float(avg or 0)

    async def _already_answered(self, session_id: str, passage_id: int) -> bool:
        found = (
            await self.db.execute(
                select(Guess.id).where(Guess.session_id == session_id, Guess.passage_id == passage_id)
            )
        ).first()
        return found is not None

    @staticmethod
    def _stats_for(session, avg_time_ms: float = 0) -> SessionStatsOutSchema:
        """Build stats from a GameSession or a row carrying the same columns."""
        status = session.status.value if isinstance(session.status, SessionStatus) else session.status
        return SessionStatsOutSchema(
            session_id=session.id,
            status=status,
            score=session.score,
            streak=session.streak,
            questions_answered=session.questions_answered,
            accuracy=accuracy(session.score, session.questions_answered),
            avg_time_ms=round(avg_time_ms or 0),
            rating=performance_rating(session.score, session.questions_answered, avg_time_ms),
        )

    async def _history_summary(self, user_id: str) -> SessionHistorySummarySchema:
        owned = GameSession.user_id == user_id
        row = (
            await self.db.execute(
                select(
                    func.count(),
                    func.coalesce(func.sum(case((GameSession.status == SessionStatus.CLOSED, 1), else_=0)), 0),
                    func.avg(GameSession.score),
                    func.max(GameSession.score),
                    func.max(GameSession.streak),
                    func.avg(
                        case(
                            (
                                GameSession.questions_answered > 0,
                                GameSession.score * 100.0 / GameSession.questions_answered,
                            ),
                            else_=None,
                        )
                    ),
                ).where(owned)
            )
        ).one()
        total, completed, avg_score, best_score, best_streak, avg_accuracy = row

        spans = (
            await self.db.execute(
                select(GameSession.started_at, GameSession.ended_at).where(owned, GameSession.ended_at.is_not(None))
            )
        ).all()
        durations = [_duration_seconds(started, ended) for started, ended in spans]
        durations = [d for d in durations if d is not None]

        return SessionHistorySummarySchema(
            total_sessions=total,
            completed_sessions=completed,
            average_score=round(float(avg_score or 0), 2),
            best_score=best_score or 0,
            best_streak=best_streak or 0,
            average_accuracy=round(float(avg_accuracy or 0), 2),
            average_duration_seconds=round(sum(durations) / len(durations)) if durations else 0,
        )

    # ------------------------------------------------------------------
    # operations
    # ------------------------------------------------------------------

    @store_operation
    async def start_session(self, user_id: str | None, category_filter: list[int] | None = None) -> str:
        """Open a new session and return its id."""
        self._require_identity(user_id)

        session_id = str(uuid.uuid4())
        self.db.add(
            GameSession(
                id=session_id,
                user_id=user_id,
                status=SessionStatus.OPEN,
                score=0,
                streak=0,
                questions_answered=0,
                category_filter=sorted(set(category_filter or [])),
                started_at=datetime.now(timezone.utc),
            )
        )
        if user_id:
            await self._bump_user_stats(user_id, games_played=1)
        await self.db.commit()

        logger.info(
            f"Session started: session_id={session_id}, user_id={user_id or 'anonymous'}, "
            f"category_filter={category_filter or []}"
        )
        return session_id

    @store_operation
    async def next_question(self, session_id: str, user_id: str | None = None) -> QuestionOutSchema | None:
        """Pick a passage this session (or user) has not answered yet; None when the pool is exhausted."""
        self._require_identity(user_id)
        session = await self._get_visible_session(session_id, user_id)

        k = draw_cut_point(self.rng)
        row = await pick_passage(
            self.db,
            k,
            category_filter=session.category_filter or [],
            exclude=self._answered_passages(session),
        )
        if row is None:
            logger.info(f"No eligible passage left: session_id={session_id}")
            return None
        return QuestionOutSchema.model_validate(row)

    @store_operation
    async def submit_guess(
        self,
        session_id: str,
        user_id: str | None,
        passage_id: int,
        guess_source: SourceType | str,
        time_ms: int = 0,
    ) -> GuessResultSchema:
        """Record a guess and return the verdict with the session's updated score and streak.

        The guess row, the session counters and the user's stats are written in
        one transaction. Counters are incremented in SQL, never read back and
        rewritten, so concurrent guesses cannot lose updates. The true source is
        only returned once the guess is committed.
        """
        self._require_identity(user_id)
        try:
            guess_source = SourceType(guess_source)
        except ValueError:
            raise ValidationError("guess_source must be 'human' or 'ai'")
        if time_ms is None:
            time_ms = 0
        if time_ms < 0:
            raise ValidationError("time_ms must be >= 0")

        session = await self._get_visible_session(session_id, user_id)

        truth = (
            await self.db.execute(select(Passage.source_type).where(Passage.id == passage_id))
        ).scalar_one_or_none()
        if truth is None:
            raise NotFoundError("Passage not found.")

        if await self._already_answered(session.id, passage_id):
            raise AlreadyAnsweredError("This passage was already answered in this session.")

        correct = is_correct(guess_source, truth)
        self.db.add(
            Guess(
                session_id=session.id,
                user_id=session.user_id,
                passage_id=passage_id,
                guess_source=guess_source,
                is_correct=correct,
                time_ms=time_ms,
            )
        )
        try:
            await self.db.flush()
        except IntegrityError as exc:
            # lost a race with a duplicate submission
            await self.db.rollback()
            raise AlreadyAnsweredError("This passage was already answered in this session.") from exc

        result = await self.db.execute(
            update(GameSession)
            .where(GameSession.id == session.id, GameSession.status == SessionStatus.OPEN)
            .values(
                questions_answered=GameSession.questions_answered + 1,
                score=GameSession.score + score_delta(correct),
                streak=next_streak(GameSession.streak, correct),
            )
            .returning(GameSession.score, GameSession.streak)
            .execution_options(synchronize_session=False)
        )
        updated = result.one_or_none()
        if updated is None:
            # closed between the visibility check and the update
            await self.db.rollback()
            raise NotFoundError(SESSION_NOT_FOUND)

        if session.user_id:
            await self._bump_user_stats(
                session.user_id,
                questions=1,
                correct=1 if correct else 0,
                streak=updated.streak,
            )
        await self.db.commit()

        logger.info(
            f"Guess recorded: session_id={session.id}, passage_id={passage_id}, "
            f"guess={guess_source.value}, correct={correct}, score={updated.score}, streak={updated.streak}"
        )
        return GuessResultSchema(
            correct=correct,
            truth=SourceType(truth),
            score=updated.score,
            streak=updated.streak,
        )

    @store_operation
    async def end_session(self, session_id: str, user_id: str | None = None) -> SessionStatsOutSchema:
        """Close an open session. Closed sessions serve no questions and accept no guesses.

        The close is a single UPDATE guarded by `status = 'open'`, so of two
        concurrent calls only one succeeds and the counters returned are the
        ones current at the moment of closing.
        """
        self._require_identity(user_id)
        await self._get_visible_session(session_id, user_id)

        result = await self.db.execute(
            update(GameSession)
            .where(GameSession.id == session_id, GameSession.status == SessionStatus.OPEN)
            .values(status=SessionStatus.CLOSED, ended_at=datetime.now(timezone.utc))
            .returning(
                GameSession.id,
                GameSession.status,
                GameSession.score,
                GameSession.streak,
                GameSession.questions_answered,
            )
            .execution_options(synchronize_session=False)
        )
        closed = result.one_or_none()
        if closed is None:
            await self.db.rollback()
            raise NotFoundError(SESSION_NOT_FOUND)

        stats = self._stats_for(closed, await self._avg_time_ms(session_id))
        await self.db.commit()

        logger.info(f"Session closed: session_id={session_id}, score={closed.score}, rating={stats.rating}")
        return stats

    @store_operation
    async def session_stats(self, session_id: str, user_id: str | None = None) -> SessionStatsOutSchema:
        session = await self._get_visible_session(session_id, user_id, open_only=False)
        return self._stats_for(session, await self._avg_time_ms(session.id))

    @store_operation
    async def session_history(self, user_id: str | None, page: int = 1, limit: int = 20) -> SessionHistoryOutSchema:
        """One page of the user's sessions, newest first, plus totals over all of them."""
        if not user_id:
            raise AuthorizationError("Sign in to see your session history.")
        if page < 1 or limit < 1:
            raise ValidationError("page and limit must be >= 1")
        limit = min(limit, MAX_HISTORY_LIMIT)

        owned = GameSession.user_id == user_id
        total = (await self.db.execute(select(func.count()).select_from(GameSession).where(owned))).scalar_one()

        timing = (
            select(
                Guess.session_id.label("session_id"),
                func.avg(Guess.time_ms).label("avg_time_ms"),
                func.min(Guess.time_ms).label("fastest_ms"),
                func.max(Guess.time_ms).label("slowest_ms"),
            )
            .group_by(Guess.session_id)
            .subquery()
        )
        rows = (
            await self.db.execute(
                select(GameSession, timing.c.avg_time_ms, timing.c.fastest_ms, timing.c.slowest_ms)
                .outerjoin(timing, timing.c.session_id == GameSession.id)
                .where(owned)
                .order_by(GameSession.started_at.desc(), GameSession.id.desc())
                .limit(limit)
                .offset((page - 1) * limit)
                .execution_options(populate_existing=True)
            )
        ).all()

        sessions = []
        for session, avg_time_ms, fastest_ms, slowest_ms in rows:
            stats = self._stats_for(session, float(avg_time_ms or 0))
            sessions.append(
                SessionHistoryItemSchema(
                    **stats.model_dump(),
                    category_filter=session.category_filter or [],
                    started_at=session.started_at,
                    ended_at=session.ended_at,
                    duration_seconds=_duration_seconds(session.started_at, session.ended_at),
                    fastest_ms=fastest_ms,
                    slowest_ms=slowest_ms,
                )
            )

        total_pages = math.ceil(total / limit)
        return SessionHistoryOutSchema(
            sessions=sessions,
            pagination=PaginationSchema(
                total=total,
                page=page,
                limit=limit,
                total_pages=total_pages,
                has_next=page < total_pages,
                has_prev=page > 1,
            ),
            summary=await self._history_summary(user_id),
        )

    @store_operation
    async def user_stats(self, user_id: str | None) -> UserStatsOutSchema:
        """Lifetime totals for an identified user; zeros if they have never played."""
        if not user_id:
            raise AuthorizationError("Sign in to see your stats.")

        stats = await self.db.get(UserStats, user_id)
        if stats is None:
            return UserStatsOutSchema(user_id=user_id)
        return UserStatsOutSchema(
            user_id=stats.user_id,
            games_played=stats.games_played,
            total_questions=stats.total_questions,
            correct=stats.correct,
            streak_best=stats.streak_best,
            last_played_at=stats.last_played_at,
            accuracy=accuracy(stats.correct, stats.total_questions),
        )
