"""Session REST API. Thin mapping of HTTP requests onto SessionStore calls."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from services.errors import (
    CapacityExceededError,
    DuplicateSessionError,
    ScrumPokerError,
    SessionNotFoundError,
)
from services.store import SessionStore

router = APIRouter(tags=["sessions"])
logger = logging.getLogger(__name__)


class SessionCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, examples=["session1"])


class VoteRequest(BaseModel):
    name: str = Field(..., min_length=1, examples=["me"])
    value: int = Field(..., ge=0, examples=[8])


class TopicRequest(BaseModel):
    topic: str = Field(..., examples=["login page redesign"])


class TopicResponse(BaseModel):
    topic: str


def get_store(request: Request) -> SessionStore:
    return request.app.state.store


def _to_http_error(exc: ScrumPokerError) -> HTTPException:
    # Only logical errors are passed here; LockAcquisitionError propagates as a 500.
    if isinstance(exc, SessionNotFoundError):
        return HTTPException(status_code=404, detail="Session not found")
    if isinstance(exc, DuplicateSessionError):
        return HTTPException(status_code=409, detail="Session with that name already exists")
    if isinstance(exc, CapacityExceededError):
        return HTTPException(status_code=503, detail="Too many sessions")
    return HTTPException(status_code=500, detail=str(exc))


@router.get("/sessions", response_class=PlainTextResponse)
def list_sessions(store: SessionStore = Depends(get_store)) -> str:
    """Comma-joined session names."""
    return ",".join(store.list_sessions())


@router.post("/sessions", status_code=201)
def create_session(
    body: SessionCreateRequest, store: SessionStore = Depends(get_store)
) -> Response:
    logger.info("[sessions] POST /sessions name=%r", body.name)
    try:
        store.add_session(body.name)
    except (CapacityExceededError, DuplicateSessionError) as exc:
        raise _to_http_error(exc) from exc
    return Response(status_code=201)


@router.get("/sessions/{session_name}")
def get_results(
    session_name: str, store: SessionStore = Depends(get_store)
) -> list[tuple[str, int]]:
    """Votes for the current topic as [[voter, value], ...]."""
    try:
        return store.get_results(session_name)
    except SessionNotFoundError as exc:
        raise _to_http_error(exc) from exc


@router.put("/sessions/{session_name}")
def vote(
    session_name: str, body: VoteRequest, store: SessionStore = Depends(get_store)
) -> Response:
    try:
        store.vote(session_name, body.name, body.value)
    except SessionNotFoundError as exc:
        raise _to_http_error(exc) from exc
    return Response(status_code=200)


@router.get("/sessions/{session_name}/topic", response_model=TopicResponse)
def get_topic(session_name: str, store: SessionStore = Depends(get_store)) -> TopicResponse:
    try:
        return TopicResponse(topic=store.get_topic(session_name))
    except SessionNotFoundError as exc:
        raise _to_http_error(exc) from exc


@router.put("/sessions/{session_name}/topic")
def new_topic(
    session_name: str, body: TopicRequest, store: SessionStore = Depends(get_store)
) -> Response:
    """Start a new topic. All votes of the session are discarded."""
    logger.info("[sessions] PUT /sessions/%s/topic topic=%r", session_name, body.topic)
    try:
        store.new_topic(session_name, body.topic)
    except SessionNotFoundError as exc:
        raise _to_http_error(exc) from exc
    return Response(status_code=200)
