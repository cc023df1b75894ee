import enum
from dataclasses import dataclass, field
from datetime import UTC, datetime

from ..errors import SessionBusy


def _now() -> datetime:
    return datetime.now(UTC)


class Role(str, enum.Enum):
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Artifact:
    """A sanitized game document. A new one is made for every generation."""

    source: str
    version: int
    created_at: datetime = field(default_factory=_now)


@dataclass(frozen=True)
class ConversationEntry:
    role: Role
    content: str
    timestamp: datetime = field(default_factory=_now)
    artifact: Artifact | None = None


class SessionState:
    """Conversation log, current artifact and version token for one user.

    Entries are only ever appended. ``version`` is the key the render host
    reloads on: it moves on every successful generation and every restart.
    """

    def __init__(self, session_id: str = "", greeting: str | None = None) -> None:
        self.id = session_id
        self._entries: list[ConversationEntry] = []
        self._artifact: Artifact | None = None
        self._version = 0
        self._busy = False
        self.created_at = _now()
        self.last_active = self.created_at
        if greeting:
            self._append(ConversationEntry(role=Role.ASSISTANT, content=greeting))

    @property
    def entries(self) -> tuple[ConversationEntry, ...]:
        return tuple(self._entries)

    @property
    def artifact(self) -> Artifact | None:
        return self._artifact

    @property
    def version(self) -> int:
        return self._version

    @property
    def busy(self) -> bool:
        return self._busy

    def _append(self, entry: ConversationEntry) -> ConversationEntry:
        self._entries.append(entry)
        self.last_active = entry.timestamp
        return entry

    # --- Conversation ---

    def append_user(self, text: str) -> ConversationEntry:
        return self._append(ConversationEntry(role=Role.USER, content=text))

    def record_success(self, content: str, source: str) -> ConversationEntry:
        self._version += 1
        self._artifact = Artifact(source=source, version=self._version)
        return self._append(
            ConversationEntry(role=Role.ASSISTANT, content=content, artifact=self._artifact)
        )

    def record_failure(self, content: str) -> ConversationEntry:
        return self._append(ConversationEntry(role=Role.ASSISTANT, content=content))

    def last_user_entry(self) -> ConversationEntry | None:
        for entry in reversed(self._entries):
            if entry.role is Role.USER:
                return entry
        return None

    # --- Display ---

    def force_redisplay(self) -> int:
        """Bump the version so the current game is reloaded from scratch."""
        if self._artifact is not None:
            self._version += 1
        return self._version

    # --- Generation gate ---

    def acquire(self) -> None:
        if self._busy:
            raise SessionBusy()
        self._busy = True
        self.last_active = _now()

    def release(self) -> None:
        self._busy = False
