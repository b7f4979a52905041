"""Real-time WebSocket feeds for the dashboards."""
import logging
import asyncio
import contextlib
from typing import Annotated, Any, AsyncIterator, Callable, Dict, List, Optional
from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import sessionmaker

from swachhsnap.core.database import get_session_factory
from swachhsnap.models.user import User
from swachhsnap.services.complaint_service import ComplaintService
from swachhsnap.services.event_service import EventService
from swachhsnap.services.realtime import COMPLAINTS, EVENTS, hub
from swachhsnap.schemas.complaint import ComplaintResponse
from swachhsnap.schemas.event import EventResponse
from swachhsnap.api.dependencies import resolve_user_from_token

router = APIRouter(prefix="/ws", tags=["Real-time"])

logger = logging.getLogger(__name__)


async def _send_snapshots(websocket: WebSocket, snapshots: AsyncIterator[List[Dict[str, Any]]]) -> None:
    async for snapshot in snapshots:
        await websocket.send_json(snapshot)


async def _stream(websocket: WebSocket, collection: str,
                  loader: Callable[[], List[Dict[str, Any]]]) -> None:
    await websocket.accept()
    async with hub.subscribe(collection, loader) as snapshots:
        sender = asyncio.create_task(_send_snapshots(websocket, snapshots))
        try:
            # Clients only listen; reading detects the disconnect.
            while True:
                await websocket.receive_text()
        except WebSocketDisconnect:
            logger.debug("realtime.disconnect collection=%s", collection)
        finally:
            sender.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await sender


def _authenticate(sessions: sessionmaker, token: str) -> Optional[User]:
    with sessions() as db:
        return resolve_user_from_token(token, db)


@router.websocket("/complaints")
async def complaints_feed(
    websocket: WebSocket,
    sessions: Annotated[sessionmaker, Depends(get_session_factory)],
    token: str = Query(...),
):
    """
    Push the caller's complaint list on connect and after every change.

    Citizens see their own reports, sweepers their open tasks, admins
    everything. Each message is the complete list.
    """
    user = await run_in_threadpool(_authenticate, sessions, token)
    if user is None:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    def load() -> List[Dict[str, Any]]:
        with sessions() as db:
            return [
                ComplaintResponse.model_validate(c).model_dump(mode="json")
                for c in ComplaintService(db).complaints_visible_to(user)
            ]

    await _stream(websocket, COMPLAINTS, load)


@router.websocket("/events")
async def events_feed(
    websocket: WebSocket,
    sessions: Annotated[sessionmaker, Depends(get_session_factory)],
    token: str = Query(...),
):
    """
    Push the volunteer event list on connect and after every change.
    """
    user = await run_in_threadpool(_authenticate, sessions, token)
    if user is None:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    def load() -> List[Dict[str, Any]]:
        with sessions() as db:
            return [
                EventResponse.model_validate(e).model_dump(mode="json")
                for e in EventService(db).get_events()
            ]

    await _stream(websocket, EVENTS, load)
