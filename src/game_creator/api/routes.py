import asyncio
import logging

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse, Response
from sse_starlette.sse import EventSourceResponse

from ..config import DOWNLOAD_PREFIX
from ..errors import (
    EmptySubmission,
    GameCreatorError,
    NothingToRegenerate,
    SessionBusy,
    SessionNotFound,
)
from ..generation.prompts import STATUS_MESSAGE
from ..render.host import CONTENT_SECURITY_POLICY, render_page
from ..session.state import Artifact, SessionState
from .models import EntryOut, MessageRequest, RestartOut, SessionOut
from .sse import sse_artifact, sse_done, sse_entry, sse_init, sse_status

logger = logging.getLogger(__name__)
router = APIRouter()

STATUS_CODES = {
    SessionNotFound: 404,
    EmptySubmission: 422,
    SessionBusy: 409,
    NothingToRegenerate: 409,
}


def _http_error(e: GameCreatorError) -> HTTPException:
    return HTTPException(status_code=STATUS_CODES.get(type(e), 400), detail=str(e))


def _get_session(request: Request, session_id: str) -> SessionState:
    try:
        return request.app.state.registry.get(session_id)
    except SessionNotFound as e:
        raise _http_error(e)


def _require_artifact(session: SessionState) -> Artifact:
    if session.artifact is None:
        raise HTTPException(status_code=404, detail="No game has been created yet")
    return session.artifact


def export_filename(artifact: Artifact) -> str:
    return f"{DOWNLOAD_PREFIX}{round(artifact.created_at.timestamp() * 1000)}.html"


async def stream_generation(session: SessionState, task: asyncio.Task):
    """Yield SSE events for one accepted generation.

    The task is shielded so a dropped connection never cancels it.
    """
    yield sse_init({"session_id": session.id})
    yield sse_status(STATUS_MESSAGE)

    entry = await asyncio.shield(task)

    yield sse_entry(EntryOut.from_entry(entry).model_dump_json())
    if entry.artifact is not None:
        yield sse_artifact({"version": session.version})
    yield sse_done({"version": session.version, "ok": entry.artifact is not None})


@router.post("/api/sessions")
async def create_session(request: Request) -> SessionOut:
    session = request.app.state.registry.create()
    return SessionOut.from_session(session)


@router.get("/api/sessions/{session_id}")
async def get_session(session_id: str, request: Request) -> SessionOut:
    return SessionOut.from_session(_get_session(request, session_id))


@router.post("/api/sessions/{session_id}/messages")
async def send_message(session_id: str, req: MessageRequest, request: Request):
    session = _get_session(request, session_id)
    try:
        task = request.app.state.pipeline.submit(session, req.message)
    except GameCreatorError as e:
        logger.info("Session %s: submission rejected: %s", session_id, e)
        raise _http_error(e)
    return EventSourceResponse(stream_generation(session, task), ping=15)


@router.post("/api/sessions/{session_id}/regenerate")
async def regenerate(session_id: str, request: Request):
    session = _get_session(request, session_id)
    try:
        task = request.app.state.pipeline.regenerate(session)
    except GameCreatorError as e:
        logger.info("Session %s: regeneration rejected: %s", session_id, e)
        raise _http_error(e)
    return EventSourceResponse(stream_generation(session, task), ping=15)


@router.post("/api/sessions/{session_id}/restart")
async def restart(session_id: str, request: Request) -> RestartOut:
    session = _get_session(request, session_id)
    _require_artifact(session)
    return RestartOut(version=session.force_redisplay())


@router.get("/api/sessions/{session_id}/game")
async def game_document(session_id: str, request: Request):
    artifact = _require_artifact(_get_session(request, session_id))
    return HTMLResponse(
        artifact.source,
        headers={
            "Content-Security-Policy": CONTENT_SECURITY_POLICY,
            "Cache-Control": "no-store",
        },
    )


@router.get("/api/sessions/{session_id}/preview")
async def preview(session_id: str, request: Request):
    session = _get_session(request, session_id)
    artifact = _require_artifact(session)
    host = request.app.state.registry.render_host(session)
    host.load(artifact.source, session.version)
    return HTMLResponse(render_page(host.markup()), headers={"Cache-Control": "no-store"})


@router.get("/api/sessions/{session_id}/download")
async def download(session_id: str, request: Request):
    artifact = _require_artifact(_get_session(request, session_id))
    return Response(
        content=artifact.source,
        media_type="text/html",
        headers={"Content-Disposition": f'attachment; filename="{export_filename(artifact)}"'},
    )
