import asyncio

import pytest
from litestar.exceptions import WebSocketDisconnect
from litestar.testing import TestClient

from pulse.api.websocket import serve_viewer
from pulse.services import FeedbackBroadcaster, NEW_FEEDBACK


def test_live_feed_delivers_new_feedback_once(app, feedback_payload):
    with TestClient(app=app) as client:
        with client.websocket_connect("/ws/feedback") as viewer:
            ada = client.post("/attendees", json={"name": "Ada", "email": "ada@x.com"}).json()
            resp = client.post("/feedback", json=feedback_payload(ada["id"]))
            assert resp.status_code == 201

            event = viewer.receive_json()
            assert event["type"] == NEW_FEEDBACK
            assert event["feedback"]["id"] == resp.json()["id"]
            assert event["feedback"]["attendeeId"] == ada["id"]

            # Nothing else is queued for this viewer
            viewer.send_json({"type": "ping"})
            assert viewer.receive_json() == {"type": "pong"}

            with client.websocket_connect("/ws/feedback") as late_viewer:
                late_viewer.send_json({"type": "ping"})
                assert late_viewer.receive_json() == {"type": "pong"}


def test_live_feed_rejects_unknown_messages(app):
    with TestClient(app=app) as client:
        with client.websocket_connect("/ws/feedback") as viewer:
            viewer.send_text("not json")
            assert viewer.receive_json() == {"type": "error", "message": "Invalid JSON"}

            viewer.send_json({"type": "subscribe"})
            assert viewer.receive_json()["type"] == "error"


def test_disconnect_unsubscribes_viewer(app):
    broadcaster = app.state.broadcaster
    with TestClient(app=app) as client:
        with client.websocket_connect("/ws/feedback") as viewer:
            viewer.send_json({"type": "ping"})
            viewer.receive_json()
            assert broadcaster.subscriber_count == 1
        # Give the handler a round trip to run its cleanup
        client.get("/feedback")
    assert broadcaster.subscriber_count == 0


class ClosingSocket:
    """Accepts, answers one ping, then reports the viewer as gone."""

    def __init__(self):
        self.sent = []
        self.incoming = ['{"type": "ping"}']

    async def accept(self):
        pass

    async def receive_text(self):
        # Let the sender task start before the viewer leaves
        await asyncio.sleep(0)
        if self.incoming:
            return self.incoming.pop(0)
        raise WebSocketDisconnect(detail="closed")

    async def send_json(self, data):
        self.sent.append(data)


@pytest.mark.asyncio
async def test_disconnect_leaves_no_sender_task_behind():
    broadcaster = FeedbackBroadcaster()
    before = asyncio.all_tasks()

    socket = ClosingSocket()
    await serve_viewer(socket, broadcaster)

    leftover = [t for t in asyncio.all_tasks() - before if not t.done()]
    assert leftover == []
    assert broadcaster.subscriber_count == 0
    assert socket.sent == [{"type": "pong"}]
