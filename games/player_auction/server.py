"""
HTTP and WebSocket adapter for the auction engine.

The moderator drives the auction over the POST endpoints; spectators either
poll GET /state or hold a /ws connection that receives the session after every
committed command. Rule checks all live in the engine.
"""

import asyncio
import logging
from typing import List, Optional, Set

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, StrictInt

from shared.config import get_audience_capacity, get_initial_budget_cr
from shared.server_base import ConnectionHub, run_server
from games.player_auction.audience import AudienceGate
from games.player_auction.engine import AuctionEngine
from games.player_auction.currency import crores
from games.player_auction.errors import (
    AuctionError, AuthorizationError, CapacityError, CapacityExceeded,
    StateConflictError, ValidationError,
)
from games.player_auction.models import AuctionSession, Bid

logger = logging.getLogger(__name__)

# WebSocket close code for "try again later"
WS_TRY_AGAIN_LATER = 1013

STATUS_CODES = {
    ValidationError: 400,
    AuthorizationError: 403,
    StateConflictError: 409,
    CapacityError: 503,
}


def status_code_for(error: AuctionError) -> int:
    for category, code in STATUS_CODES.items():
        if isinstance(error, category):
            return code
    return 400


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class InitializeRequest(CamelModel):
    bidder1_name: str = Field(alias="bidder1Name")
    bidder2_name: str = Field(alias="bidder2Name")
    player_names: List[str] = Field(alias="playerNames")
    secret_key: str = Field(alias="secretKey")


class PlayerRequest(CamelModel):
    player_name: str = Field(alias="playerName")


class BidPayload(CamelModel):
    player_name: str = Field(alias="playerName")
    bidder_name: str = Field(alias="bidderName")
    amount: StrictInt


class PlaceBidRequest(CamelModel):
    bid: BidPayload
    provided_key: str = Field(alias="providedKey")


# ---------------------------------------------------------------------------
# Manager
# ---------------------------------------------------------------------------

class AuctionManager:
    """Owns the engine, the audience gate and the spectator connections."""

    def __init__(self, engine: AuctionEngine, gate: AudienceGate):
        self.engine = engine
        self.gate = gate
        self.hub = ConnectionHub()
        self._pending: Set[asyncio.Task] = set()
        self._last_version = -1
        engine.add_listener(self._on_state_change)

    @classmethod
    def from_config(cls, initial_budget: Optional[int] = None,
                    max_capacity: Optional[int] = None) -> "AuctionManager":
        if initial_budget is None:
            initial_budget = crores(get_initial_budget_cr())
        if max_capacity is None:
            max_capacity = get_audience_capacity()
        return cls(AuctionEngine(initial_budget=initial_budget), AudienceGate(max_capacity))

    def _on_state_change(self, session: AuctionSession):
        """Push the new session to spectators from the running event loop."""
        if not self.hub.connections:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop, state push skipped")
            return
        task = loop.create_task(self.broadcast_state(session))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def broadcast_state(self, session: AuctionSession):
        """Push a snapshot unless a newer one already went out."""
        if session.version <= self._last_version:
            logger.debug("Skipping stale state push (version %d)", session.version)
            return
        self._last_version = session.version
        await self.hub.broadcast({"type": "state", "state": session.to_dict()})

    async def serve_spectator(self, ws: WebSocket):
        """Hold an audience seat for as long as the socket stays open."""
        try:
            with self.gate.admission():
                await self.hub.connect(ws)
                logger.info("Spectator connected (%d/%d)",
                            self.gate.current_count, self.gate.max_capacity)
                try:
                    await ws.send_json({"type": "state", "state": self.engine.get_state().to_dict()})
                    while True:
                        data = await ws.receive_json()
                        if not isinstance(data, dict):
                            logger.debug("Ignoring non-object spectator message")
                        elif data.get("type") == "ping":
                            await ws.send_json({"type": "pong"})
                except WebSocketDisconnect:
                    logger.info("Spectator disconnected")
                finally:
                    self.hub.disconnect(ws)
        except CapacityExceeded:
            await ws.accept()
            await ws.send_json({"type": "capacity", **self.gate.check_capacity().to_dict()})
            await ws.close(code=WS_TRY_AGAIN_LATER)


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

def create_app(manager: Optional[AuctionManager] = None) -> FastAPI:
    if manager is None:
        manager = AuctionManager.from_config()

    app = FastAPI(title="Player Auction")
    app.state.manager = manager
    engine = manager.engine
    gate = manager.gate

    @app.exception_handler(AuctionError)
    async def auction_error_handler(request, exc: AuctionError):
        return JSONResponse(status_code=status_code_for(exc), content=exc.to_dict())

    @app.get("/")
    @app.get("/state")
    async def get_state():
        return engine.get_state().to_dict()

    @app.get("/results")
    async def get_results():
        return engine.get_state().results_to_dict()

    @app.post("/auction")
    async def initialize(req: InitializeRequest):
        session = engine.initialize(
            req.bidder1_name, req.bidder2_name, req.player_names, req.secret_key
        )
        return session.to_dict()

    @app.post("/auction/rounds")
    async def start_round(req: PlayerRequest):
        return engine.start_round(req.player_name).to_dict()

    @app.post("/auction/bids")
    async def place_bid(req: PlaceBidRequest):
        bid = Bid(
            player_name=req.bid.player_name,
            bidder_name=req.bid.bidder_name,
            amount=req.bid.amount,
        )
        return engine.place_bid(bid, req.provided_key).to_dict()

    @app.post("/auction/sales")
    async def finalize_sale(req: PlayerRequest):
        return engine.finalize_sale(req.player_name).to_dict()

    @app.post("/audience/join")
    async def join_audience() -> bool:
        return gate.join()

    @app.post("/audience/leave")
    async def leave_audience() -> bool:
        return gate.leave()

    @app.get("/audience/capacity")
    async def check_capacity():
        return gate.check_capacity().to_dict()

    @app.websocket("/ws")
    async def websocket_endpoint(ws: WebSocket):
        await manager.serve_spectator(ws)

    return app


# For debugging/running directly
def run(host: str = "0.0.0.0", port: int = 8000):
    run_server(create_app(), host=host, port=port)


if __name__ == "__main__":
    run()
