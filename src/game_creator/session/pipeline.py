import asyncio
import logging

from ..errors import EmptySubmission, NothingToRegenerate
from ..generation.client import GenerationClient
from ..generation.prompts import build_prompt, failure_message, success_message
from ..generation.sanitizer import sanitize
from .state import ConversationEntry, SessionState

logger = logging.getLogger(__name__)


class GamePipeline:
    """Runs prompt -> generation -> sanitize -> session for one session at a time.

    ``submit`` and ``regenerate`` take the session's busy flag synchronously and
    schedule the generation as a task that always releases it. Each accepted
    call ends with exactly one assistant entry, success or failure.
    """

    def __init__(self, client: GenerationClient) -> None:
        self._client = client
        self._tasks: set[asyncio.Task] = set()

    def submit(self, session: SessionState, text: str) -> "asyncio.Task[ConversationEntry]":
        if not text or not text.strip():
            raise EmptySubmission()
        session.acquire()
        session.append_user(text)
        logger.info("Session %s: accepted submission (%d chars)", session.id, len(text))
        return self._spawn(session, text)

    def regenerate(self, session: SessionState) -> "asyncio.Task[ConversationEntry]":
        session.acquire()
        target = session.last_user_entry()
        if target is None:
            session.release()
            raise NothingToRegenerate()
        logger.info("Session %s: regenerating from last description", session.id)
        return self._spawn(session, target.content)

    def _spawn(self, session: SessionState, description: str) -> "asyncio.Task[ConversationEntry]":
        task = asyncio.create_task(self._generate(session, description))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _generate(self, session: SessionState, description: str) -> ConversationEntry:
        try:
            result = await self._client.generate(build_prompt(description))
            if not result.ok:
                return session.record_failure(failure_message(result.error))
            entry = session.record_success(success_message(description), sanitize(result.text))
            logger.info("Session %s: game ready at version %d", session.id, session.version)
            return entry
        except Exception as e:
            logger.exception("Session %s: generation pipeline failed", session.id)
            return session.record_failure(failure_message(str(e) or type(e).__name__))
        finally:
            session.release()

    async def drain(self) -> None:
        """Wait for every in-flight generation to finish."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
