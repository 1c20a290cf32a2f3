import asyncio
import logging

from fastapi import APIRouter, HTTPException, Query, WebSocket, WebSocketDisconnect, status

from shared.core.auth import verify_token
from shared.core.change_feed import change_feed
from shared.core.database import Base

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/realtime", tags=["realtime"])


@router.websocket("/{table}")
async def table_changes(websocket: WebSocket, table: str, token: str = Query(...)):
    """Push a message every time a commit touches ``table``.

    Messages carry no row data; clients refetch the list they are showing.
    """
    try:
        user = verify_token(token)
    except HTTPException:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    if table not in Base.metadata.tables:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    loop = asyncio.get_running_loop()
    queue: asyncio.Queue = asyncio.Queue()

    # commits happen on worker threads
    def on_change(table_name: str, event_name: str):
        loop.call_soon_threadsafe(
            queue.put_nowait, {"table": table_name, "event": event_name})

    async def forward_changes():
        while True:
            message = await queue.get()
            await websocket.send_json(message)

    async def wait_for_disconnect():
        # inbound frames are ignored; this only notices an idle client leaving
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                return

    # subscribe before accepting so no commit after the handshake is missed
    unsubscribe = change_feed.subscribe(table, on_change)
    tasks = []
    try:
        await websocket.accept()
        logger.info("User %s subscribed to %s changes", user.user_id, table)
        tasks = [asyncio.create_task(forward_changes()),
                 asyncio.create_task(wait_for_disconnect())]
        done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        for task in done:
            task.result()
        logger.info("User %s unsubscribed from %s changes", user.user_id, table)
    except WebSocketDisconnect:
        logger.info("User %s unsubscribed from %s changes", user.user_id, table)
    finally:
        for task in tasks:
            task.cancel()
        unsubscribe()
