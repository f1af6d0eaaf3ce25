"""
Notification endpoints: in-app inbox and the live WebSocket channel.
"""

from typing import Callable, List

from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from app.api import deps
from app.core.exceptions import BaseAppException
from app.core.logging import get_logger
from app.models.user import User
from app.schemas.notification import NotificationResponse, ReadAllResponse
from app.services.auth import AuthService
from app.services.notification import NotificationService, notification_hub

logger = get_logger(__name__)

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("", response_model=List[NotificationResponse])
def list_notifications(
    limit: int = Query(default=50, ge=1, le=200),
    current_user: User = Depends(deps.get_current_user),
    service: NotificationService = Depends(deps.get_notification_service),
):
    """Own notifications, newest first."""
    return service.list_for_user(current_user.id, limit)


@router.post("/read-all", response_model=ReadAllResponse)
def mark_all_read(
    current_user: User = Depends(deps.get_current_user),
    service: NotificationService = Depends(deps.get_notification_service),
):
    """Mark every unread notification of the caller as read."""
    return ReadAllResponse(updated=service.mark_all_read(current_user.id))


@router.post("/{notification_id}/read", response_model=NotificationResponse)
def mark_read(
    notification_id: str,
    current_user: User = Depends(deps.get_current_user),
    service: NotificationService = Depends(deps.get_notification_service),
):
    return service.mark_read(notification_id, current_user.id)


def _resolve_user_id(session_factory: Callable[[], Session], token: str) -> str:
    with session_factory() as db:
        return AuthService(db).user_from_token(token).id


@router.websocket("/ws")
async def notifications_ws(
    websocket: WebSocket,
    token: str = Query(default=""),
    session_factory: Callable[[], Session] = Depends(deps.get_session_factory),
):
    """
    Live push channel. Authenticates with ``?token=<jwt>``.

    The database session is only open while the token is resolved, so a
    long-lived socket holds no pooled connection. The server only sends;
    anything the client sends is read and ignored so that disconnects are
    noticed.
    """
    try:
        user_id = await run_in_threadpool(_resolve_user_id, session_factory, token)
    except BaseAppException as e:
        logger.info("WebSocket rejected", extra={"reason": e.error_code.value})
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    # Pushes only go to accepted sockets
    channel = notification_hub.register(user_id, websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        notification_hub.unregister(channel)
