import logging
import uuid
from datetime import UTC, datetime, timedelta

from ..config import SESSION_TTL_MINUTES
from ..errors import SessionNotFound
from ..generation.prompts import WELCOME_MESSAGE
from ..render.host import RenderHost
from .state import SessionState

logger = logging.getLogger(__name__)


def _uuid() -> str:
    return str(uuid.uuid4())


class SessionRegistry:
    """In-memory sessions keyed by id. Nothing outlives the process."""

    def __init__(self, ttl_minutes: int = SESSION_TTL_MINUTES) -> None:
        self._ttl = timedelta(minutes=ttl_minutes)
        self._sessions: dict[str, SessionState] = {}
        self._hosts: dict[str, RenderHost] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self) -> SessionState:
        self.prune()
        session = SessionState(session_id=_uuid(), greeting=WELCOME_MESSAGE)
        self._sessions[session.id] = session
        logger.info("Created session %s", session.id)
        return session

    def get(self, session_id: str) -> SessionState:
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        return session

    def render_host(self, session: SessionState) -> RenderHost:
        return self._hosts.setdefault(session.id, RenderHost())

    def prune(self, now: datetime | None = None) -> int:
        """Drop idle sessions past the TTL. Busy sessions are kept."""
        now = now or datetime.now(UTC)
        expired = [
            sid
            for sid, session in self._sessions.items()
            if not session.busy and now - session.last_active > self._ttl
        ]
        for sid in expired:
            del self._sessions[sid]
            self._hosts.pop(sid, None)
        if expired:
            logger.info("Pruned %d idle sessions", len(expired))
        return len(expired)
