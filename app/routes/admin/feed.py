import asyncio

from fastapi import APIRouter, Depends, HTTPException, Query, WebSocket, WebSocketDisconnect, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.auth.dependencies import resolve_admin
from app.helpers.change_feed import ChangeFeed, INSERT, get_change_feed
from app.helpers.logger import get_logger

logger = get_logger()

router = APIRouter(
    prefix="/admin",
    tags=["Admin Realtime Feed"]
)


# ---------------------------
# New submissions, pushed as they arrive
# ---------------------------
@router.websocket("/feed")
async def submissions_feed(
    websocket: WebSocket,
    token: str = Query(""),
    db: AsyncSession = Depends(get_db),
    feed: ChangeFeed = Depends(get_change_feed),
):
    # browsers cannot set headers on websockets, so the token comes as a query param
    try:
        admin = await resolve_admin(token, db)
    except HTTPException:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return
    finally:
        await db.close()

    queue: asyncio.Queue = asyncio.Queue()
    subscription = feed.subscribe("submissions", INSERT, queue.put_nowait)
    await websocket.accept()
    logger.info(f"Feed opened for {admin.email}")

    async def forward():
        while True:
            record = await queue.get()
            await websocket.send_json({"event": INSERT, "record": record})

    sender = asyncio.create_task(forward())
    try:
        while True:
            # only used to notice the client going away
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        subscription.cancel()
        sender.cancel()
        await asyncio.gather(sender, return_exceptions=True)
        logger.info(f"Feed closed for {admin.email}")
