"""
WebSocket connection hub and server runner shared by the auction app.
"""

import logging
from typing import List

from fastapi import FastAPI, WebSocket

logger = logging.getLogger(__name__)


class ConnectionHub:
    """Tracks live WebSocket connections and fans messages out to them."""

    def __init__(self):
        self.connections: List[WebSocket] = []

    async def connect(self, ws: WebSocket):
        """Accept and register a WebSocket connection."""
        await ws.accept()
        self.connections.append(ws)

    def disconnect(self, ws: WebSocket):
        """Remove a WebSocket connection."""
        if ws in self.connections:
            self.connections.remove(ws)

    async def broadcast(self, msg: dict):
        """Send a message to all connected clients, dropping dead ones."""
        for ws in list(self.connections):
            try:
                await ws.send_json(msg)
            except Exception as e:
                logger.debug("Dropping connection after failed send: %s", e)
                self.disconnect(ws)


def run_server(app: FastAPI, host: str = "0.0.0.0", port: int = 8000):
    """Run the FastAPI server."""
    import uvicorn
    uvicorn.run(app, host=host, port=port)
