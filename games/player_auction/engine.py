"""
Auction Engine - the two-bidder player auction state machine.

Lifecycle:
- Uninitialized: no bidders, nothing to auction
- Idle: set up, no player on auction
- RoundActive: one player open for bidding
- Complete: Idle with every player sold

Each command validates against the current session and, on success, swaps in
a new immutable session under the engine lock. A rejected command raises an
AuctionError and leaves the session exactly as it was.

Budgets are only debited when a sale is finalized, so a bidder's remaining
amount always reflects committed purchases, not a leading bid.
"""

import logging
import threading
import time
from dataclasses import replace
from typing import Callable, List, Sequence

from .currency import Amount, DEFAULT_INITIAL_BUDGET, as_amount
from .errors import (
    AuctionNotInitialized, InvalidBid, InvalidSetup, NoActiveRound, NoBidsYet,
    PlayerAlreadySold, PlayerNotOnAuction, RoundAlreadyActive, Unauthorized,
    UnknownBidder, UnknownPlayer,
)
from .models import AuctionSession, Bid, Bidder, BidResult, Player
from .rules import normalize_name, validate_authorization, validate_bid, validate_setup

logger = logging.getLogger(__name__)

Listener = Callable[[AuctionSession], None]


class AuctionEngine:
    """Owns the single auction session and applies commands to it atomically."""

    def __init__(
        self,
        initial_budget: Amount = DEFAULT_INITIAL_BUDGET,
        clock: Callable[[], int] = time.time_ns
    ):
        self.initial_budget = as_amount(initial_budget)
        self._clock = clock
        self._lock = threading.Lock()
        self._session = AuctionSession()
        self._listeners: List[Listener] = []

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_state(self) -> AuctionSession:
        """Current snapshot. Sessions are immutable, so no copy is needed."""
        return self._session

    def add_listener(self, listener: Listener):
        """
        Call listener with the new session after every committed command.

        Listeners run outside the engine lock, so callers on different threads
        may deliver snapshots out of commit order; compare session.version to
        keep only the newest.
        """
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def initialize(
        self,
        bidder1: str,
        bidder2: str,
        players: Sequence[str],
        secret_key: str
    ) -> AuctionSession:
        """
        Set up a fresh auction, replacing any previous one.

        Resetting is allowed from Idle or Complete but never while a round is
        running, so an in-flight sale cannot be discarded.
        """
        with self._lock:
            current = self._session
            if current.is_round_active:
                self._reject("initialize", RoundAlreadyActive(current.current_auctioned_player))

            result = validate_setup(bidder1, bidder2, players, secret_key)
            if not result:
                self._reject("initialize", InvalidSetup(result.reason, result.message))

            session = AuctionSession(
                players=tuple(Player(name=normalize_name(p)) for p in players),
                bidders=(
                    Bidder(name=normalize_name(bidder1), remaining_amount=self.initial_budget),
                    Bidder(name=normalize_name(bidder2), remaining_amount=self.initial_budget),
                ),
                in_progress=True,
                secret_key=secret_key,
                version=current.version + 1,
            )
            self._session = session

        logger.info(
            "Auction initialized: %s vs %s, %d players, budget %d each",
            session.bidders[0].name, session.bidders[1].name,
            len(session.players), self.initial_budget
        )
        self._notify(session)
        return session

    def start_round(self, player_name: str) -> AuctionSession:
        """Open bidding on an unsold player."""
        with self._lock:
            current = self._require_initialized("start_round")
            if current.is_round_active:
                self._reject("start_round", RoundAlreadyActive(current.current_auctioned_player))

            player = current.find_player(player_name)
            if player is None:
                self._reject("start_round", UnknownPlayer(player_name))
            if player.is_sold:
                self._reject("start_round", PlayerAlreadySold(player.name, player.bought_by))

            session = replace(
                current,
                current_auctioned_player=player.name,
                highest_bid=0,
                highest_bidder=None,
                round_start_time=self._clock(),
                version=current.version + 1,
            )
            self._session = session

        logger.info("Round started for %s", player_name)
        self._notify(session)
        return session

    def place_bid(self, bid: Bid, provided_key: str) -> BidResult:
        """
        Record a bid on the player currently on auction.

        Checks run in order: secret key, active round, player, bidder, then the
        amount against the highest bid and the bidder's remaining budget.
        """
        with self._lock:
            current = self._require_initialized("place_bid")

            if not validate_authorization(provided_key, current.secret_key):
                self._reject("place_bid", Unauthorized())

            if not current.is_round_active:
                self._reject("place_bid", NoActiveRound())
            if bid.player_name != current.current_auctioned_player:
                self._reject(
                    "place_bid",
                    PlayerNotOnAuction(bid.player_name, current.current_auctioned_player)
                )

            bidder = current.find_bidder(bid.bidder_name)
            if bidder is None or not bidder.is_playing:
                self._reject("place_bid", UnknownBidder(bid.bidder_name))

            result = validate_bid(bid.amount, current.highest_bid, bidder.remaining_amount)
            if not result:
                self._reject(
                    "place_bid",
                    InvalidBid(result.reason, result.message, result.limit_exceeding_amount)
                )

            session = replace(
                current,
                highest_bid=bid.amount,
                highest_bidder=bidder.name,
                version=current.version + 1,
            )
            self._session = session

        logger.info("Bid accepted: %s bids %d for %s", bid.bidder_name, bid.amount, bid.player_name)
        self._notify(session)
        return BidResult(bid=replace(bid, limit_exceeding_amount=None), session=session)

    def finalize_sale(self, player_name: str) -> AuctionSession:
        """Sell the player on auction to the highest bidder and close the round."""
        with self._lock:
            current = self._require_initialized("finalize_sale")
            if not current.is_round_active:
                self._reject("finalize_sale", NoActiveRound())
            if player_name != current.current_auctioned_player:
                self._reject(
                    "finalize_sale",
                    PlayerNotOnAuction(player_name, current.current_auctioned_player)
                )
            if current.highest_bid <= 0 or current.highest_bidder is None:
                self._reject("finalize_sale", NoBidsYet(player_name))

            price = current.highest_bid
            buyer = current.highest_bidder
            sold = current.find_player(player_name).sold_to(buyer, price)

            players = tuple(sold if p.name == player_name else p for p in current.players)
            bidders = tuple(b.debit(price) if b.name == buyer else b for b in current.bidders)

            # Player, purse and sale log change together in one new session
            session = replace(
                current,
                players=players,
                bidders=bidders,
                winners=current.winners + (sold,),
                current_auctioned_player=None,
                highest_bid=0,
                highest_bidder=None,
                version=current.version + 1,
            )
            self._session = session

        logger.info("%s sold to %s for %d", player_name, buyer, price)
        if session.is_complete:
            logger.info("All %d players sold, auction complete", len(session.players))
        self._notify(session)
        return session

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require_initialized(self, command: str) -> AuctionSession:
        if not self._session.is_initialized:
            self._reject(command, AuctionNotInitialized())
        return self._session

    def _reject(self, command: str, error: Exception):
        logger.warning("%s rejected: %s", command, error)
        raise error

    def _notify(self, session: AuctionSession):
        for listener in list(self._listeners):
            try:
                listener(session)
            except Exception:
                logger.exception("State listener failed")
