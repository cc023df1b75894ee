from pydantic import BaseModel

from ..session.state import ConversationEntry, SessionState


class MessageRequest(BaseModel):
    message: str


class EntryOut(BaseModel):
    role: str
    content: str
    timestamp: str
    artifact_version: int | None = None

    @classmethod
    def from_entry(cls, entry: ConversationEntry) -> "EntryOut":
        return cls(
            role=entry.role.value,
            content=entry.content,
            timestamp=entry.timestamp.isoformat(),
            artifact_version=entry.artifact.version if entry.artifact else None,
        )


class SessionOut(BaseModel):
    id: str
    version: int
    busy: bool
    has_artifact: bool
    entries: list[EntryOut]

    @classmethod
    def from_session(cls, session: SessionState) -> "SessionOut":
        return cls(
            id=session.id,
            version=session.version,
            busy=session.busy,
            has_artifact=session.artifact is not None,
            entries=[EntryOut.from_entry(e) for e in session.entries],
        )


class RestartOut(BaseModel):
    version: int
