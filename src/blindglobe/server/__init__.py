"""Server module - FastAPI WebSocket server."""

from blindglobe.server.app import app
from blindglobe.server.handlers import MessageHandler

__all__ = ["app", "MessageHandler"]
