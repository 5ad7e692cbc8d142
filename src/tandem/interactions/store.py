"""Per-file interaction counters driven by editor focus and keystrokes."""

import math
from collections import deque
from collections.abc import Callable
from datetime import datetime

import structlog

from tandem.config import settings
from tandem.utils.datetime import utc_now

from .exceptions import SessionActiveError
from .models import FileInteraction, InteractionFeatures, InteractionSession, Position

logger = structlog.get_logger(__name__)


class InteractionStore:
    """Tracks visits, keystrokes and dwell time per file.

    At most one session is open at a time, matching the single focused
    editor. Counters for a path accumulate across sessions until
    ``delete(path)`` is called. The store performs no I/O.

    Dwell time accrues between consecutive activity events (session start,
    strokes, session end); gaps longer than the inactivity threshold are
    treated as idle and not counted.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = utc_now,
        recent_stroke_limit: int | None = None,
        inactivity_threshold: float | None = None,
    ) -> None:
        """Initialize an empty store.

        Args:
            clock: Source of aware UTC timestamps
            recent_stroke_limit: Stroke positions kept per file
            inactivity_threshold: Idle gap in seconds that stops dwell time
        """
        cfg = settings.interactions
        self._clock = clock
        self._recent_limit = (
            cfg.recent_stroke_limit
            if recent_stroke_limit is None
            else recent_stroke_limit
        )
        self._inactivity_threshold = (
            cfg.inactivity_threshold
            if inactivity_threshold is None
            else inactivity_threshold
        )
        self._interactions: dict[str, FileInteraction] = {}
        self._session: InteractionSession | None = None

    # === Sessions ===

    @property
    def current_session(self) -> InteractionSession | None:
        return self._session

    def start_session(self, path: str) -> InteractionSession:
        """Open a session for ``path``.

        Raises:
            SessionActiveError: If a session is already open; the caller must
                end it first.
        """
        if self._session is not None:
            logger.warning(
                "session_already_active",
                current_path=self._session.path,
                requested_path=path,
            )
            raise SessionActiveError(
                f"Session for {self._session.path} is still open"
            )

        now = self._clock()
        self._session = InteractionSession(
            path=path, started_at=now, last_activity_at=now
        )
        interaction = self._get_or_create(path)
        interaction.sessions += 1
        interaction.last_active_at = now

        logger.debug("session_started", path=path)
        return self._session

    def end_session(self) -> InteractionSession | None:
        """Close the open session, if any, and return it."""
        session = self._session
        if session is None:
            return None

        now = self._clock()
        self._accrue(session, now)
        session.ended_at = now
        self._session = None

        logger.debug(
            "session_ended",
            path=session.path,
            strokes=session.strokes,
            active_seconds=round(session.active_seconds, 3),
        )
        return session

    # === Counters ===

    def increment_visits(self) -> None:
        """Count a visit to the file of the open session."""
        session = self._session
        if session is None:
            logger.debug("visit_without_session")
            return

        session.visits += 1
        interaction = self._get_or_create(session.path)
        interaction.visits += 1
        interaction.last_active_at = self._clock()

    def increment_strokes(self, line: int, character: int) -> None:
        """Count a keystroke at (line, character) in the open session's file."""
        session = self._session
        if session is None:
            logger.debug("stroke_without_session", line=line, character=character)
            return

        now = self._clock()
        self._accrue(session, now)
        session.strokes += 1

        position = Position(line=line, character=character)
        interaction = self._get_or_create(session.path)
        interaction.strokes += 1
        interaction.last_stroke_position = position
        interaction.recent_strokes.append(position)
        interaction.last_active_at = now

    def delete(self, path: str) -> None:
        """Forget everything recorded for ``path``."""
        if self._interactions.pop(path, None) is not None:
            logger.debug("interaction_deleted", path=path)

    # === Queries ===

    def get(self, path: str) -> FileInteraction | None:
        return self._interactions.get(path)

    def paths(self) -> list[str]:
        return list(self._interactions)

    def __len__(self) -> int:
        return len(self._interactions)

    def __contains__(self, path: object) -> bool:
        return path in self._interactions

    def features(self, path: str) -> InteractionFeatures | None:
        """Build the ranker feature set for ``path``."""
        interaction = self._interactions.get(path)
        if interaction is None:
            return None

        now = self._clock()
        since_active = (
            (now - interaction.last_active_at).total_seconds()
            if interaction.last_active_at is not None
            else None
        )
        return InteractionFeatures(
            path=path,
            visits=interaction.visits,
            strokes=interaction.strokes,
            sessions=interaction.sessions,
            session_seconds=self._session_seconds(interaction, now),
            seconds_since_active=since_active,
            active_lines=tuple(
                sorted({p.line for p in interaction.recent_strokes})
            ),
            relevance=self._relevance(interaction, now),
        )

    def ranked(self, limit: int | None = None) -> list[InteractionFeatures]:
        """Return features for all tracked paths, most relevant first."""
        ranked = sorted(
            (self.features(path) for path in self._interactions),
            key=lambda f: f.relevance if f is not None else 0.0,
            reverse=True,
        )
        result = [f for f in ranked if f is not None]
        return result[:limit] if limit is not None else result

    # === Internals ===

    def _get_or_create(self, path: str) -> FileInteraction:
        interaction = self._interactions.get(path)
        if interaction is None:
            interaction = FileInteraction(
                path=path, recent_strokes=deque(maxlen=self._recent_limit)
            )
            self._interactions[path] = interaction
        return interaction

    def _accrue(self, session: InteractionSession, now: datetime) -> None:
        gap = (now - session.last_activity_at).total_seconds()
        session.last_activity_at = now
        if gap <= 0 or gap > self._inactivity_threshold:
            return

        session.active_seconds += gap
        interaction = self._interactions.get(session.path)
        if interaction is not None:
            interaction.session_seconds += gap

    def _session_seconds(self, interaction: FileInteraction, now: datetime) -> float:
        # Include the not-yet-accrued tail of the open session.
        seconds = interaction.session_seconds
        session = self._session
        if session is not None and session.path == interaction.path:
            gap = (now - session.last_activity_at).total_seconds()
            if 0 < gap <= self._inactivity_threshold:
                seconds += gap
        return seconds

    def _relevance(self, interaction: FileInteraction, now: datetime) -> float:
        cfg = settings.interactions
        minutes = self._session_seconds(interaction, now) / 60.0
        base = (
            cfg.stroke_weight * math.log1p(interaction.strokes)
            + cfg.visit_weight * math.log1p(interaction.visits)
            + cfg.session_time_weight * math.log1p(minutes)
        )
        if interaction.last_active_at is None or cfg.recency_half_life <= 0:
            return base

        age = max((now - interaction.last_active_at).total_seconds(), 0.0)
        return base * 0.5 ** (age / cfg.recency_half_life)
