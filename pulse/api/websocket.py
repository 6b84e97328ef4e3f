"""WebSocket handler for the live feedback feed."""

import asyncio
import contextlib
import json
import logging

from litestar import WebSocket, websocket
from litestar.exceptions import WebSocketDisconnect

from pulse.services import FeedbackBroadcaster

logger = logging.getLogger("Pulse.WebSocket")


async def forward_messages(socket: WebSocket, queue: asyncio.Queue) -> None:
    """Send queued broadcast messages to one viewer until it goes away."""
    while True:
        message = await queue.get()
        try:
            await socket.send_json(message)
        except Exception as e:
            logger.warning(f"Failed to send to live viewer: {e}")
            return


async def serve_viewer(socket: WebSocket, broadcaster: FeedbackBroadcaster) -> None:
    """
    Stream newly created feedback to one viewer until it disconnects.
    
    Message types (server -> client):
    - {"type": "new_feedback", "feedback": {...}}
    - {"type": "pong"}
    - {"type": "error", "message": "..."}
    
    Message types (client -> server):
    - {"type": "ping"}
    """
    # Subscribe before accepting so nothing published after the handshake is missed
    queue = broadcaster.subscribe()
    sender = None
    try:
        await socket.accept()
        logger.info("Live viewer connected")
        sender = asyncio.create_task(forward_messages(socket, queue))
        
        while True:
            raw = await socket.receive_text()
            try:
                data = json.loads(raw)
            except json.JSONDecodeError:
                await socket.send_json({"type": "error", "message": "Invalid JSON"})
                continue
            
            msg_type = data.get("type") if isinstance(data, dict) else None
            if msg_type == "ping":
                await socket.send_json({"type": "pong"})
            else:
                await socket.send_json({"type": "error", "message": f"Unknown message type: {msg_type}"})
    
    except WebSocketDisconnect:
        logger.info("Live viewer disconnected")
    
    except Exception as e:
        logger.exception(f"Live feed WebSocket error: {e}")
    
    finally:
        if sender:
            sender.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await sender
        broadcaster.unsubscribe(queue)


@websocket("/ws/feedback")
async def feedback_websocket(socket: WebSocket, broadcaster: FeedbackBroadcaster) -> None:
    """WebSocket endpoint for the live feedback feed."""
    await serve_viewer(socket, broadcaster)
