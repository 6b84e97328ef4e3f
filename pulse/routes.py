from pulse.api import AttendeesController, ScanController, FeedbackController, feedback_websocket

ROUTES = [
    AttendeesController,
    ScanController,
    FeedbackController,
    feedback_websocket,
]
