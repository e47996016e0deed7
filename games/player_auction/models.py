"""
Domain entities for the two-bidder player auction.

All entities are frozen: the engine builds a new AuctionSession for every
committed command, so any session a reader holds is a consistent snapshot.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Tuple

from .currency import Amount

NUM_BIDDERS = 2
NUM_PLAYERS = 10


class AuctionPhase(Enum):
    UNINITIALIZED = "uninitialized"
    IDLE = "idle"
    ROUND_ACTIVE = "round_active"
    COMPLETE = "complete"


class PlayerStatus(Enum):
    SOLD = "sold"
    LIVE = "live"
    UNSOLD = "unsold"


@dataclass(frozen=True)
class Player:
    """A player on the roster. Sold players carry both bought_by and price."""
    name: str
    bought_by: Optional[str] = None
    price: Optional[Amount] = None

    def __post_init__(self):
        if (self.bought_by is None) != (self.price is None):
            raise ValueError(f"Player '{self.name}' needs both bought_by and price, or neither")

    @property
    def is_sold(self) -> bool:
        return self.bought_by is not None

    def sold_to(self, bidder_name: str, price: Amount) -> "Player":
        return replace(self, bought_by=bidder_name, price=price)

    def to_dict(self) -> dict:
        data = {"name": self.name}
        if self.is_sold:
            data["boughtBy"] = self.bought_by
            data["price"] = self.price
        return data


@dataclass(frozen=True)
class Bidder:
    name: str
    remaining_amount: Amount
    is_playing: bool = True

    def debit(self, amount: Amount) -> "Bidder":
        if amount > self.remaining_amount:
            raise ValueError(
                f"Cannot debit {amount} from {self.name}, only {self.remaining_amount} left"
            )
        return replace(self, remaining_amount=self.remaining_amount - amount)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "remainingAmount": self.remaining_amount,
            "isPlaying": self.is_playing,
        }


@dataclass(frozen=True)
class Bid:
    """A proposed bid. limit_exceeding_amount is only filled in on rejection."""
    player_name: str
    bidder_name: str
    amount: Amount
    limit_exceeding_amount: Optional[Amount] = None

    def to_dict(self) -> dict:
        data = {
            "playerName": self.player_name,
            "bidderName": self.bidder_name,
            "amount": self.amount,
        }
        if self.limit_exceeding_amount is not None:
            data["limitExceedingAmount"] = self.limit_exceeding_amount
        return data


@dataclass(frozen=True)
class AuctionSession:
    """
    The auction aggregate: roster, bidders, the live round and the sale log.

    An empty session (no bidders) stands for the uninitialized auction.
    """
    players: Tuple[Player, ...] = ()
    bidders: Tuple[Bidder, ...] = ()
    current_auctioned_player: Optional[str] = None
    highest_bid: Amount = 0
    highest_bidder: Optional[str] = None
    round_start_time: int = 0
    in_progress: bool = False
    winners: Tuple[Player, ...] = ()
    # Bumped on every committed command, so listeners can order snapshots
    version: int = 0
    # Never serialized
    secret_key: str = field(default="", repr=False)

    @property
    def is_initialized(self) -> bool:
        return len(self.bidders) == NUM_BIDDERS

    @property
    def is_round_active(self) -> bool:
        return self.current_auctioned_player is not None

    @property
    def unsold_players(self) -> Tuple[Player, ...]:
        return tuple(p for p in self.players if not p.is_sold)

    @property
    def sold_players(self) -> Tuple[Player, ...]:
        return tuple(p for p in self.players if p.is_sold)

    @property
    def is_complete(self) -> bool:
        return self.is_initialized and not self.unsold_players

    @property
    def phase(self) -> AuctionPhase:
        if not self.is_initialized:
            return AuctionPhase.UNINITIALIZED
        if self.is_round_active:
            return AuctionPhase.ROUND_ACTIVE
        if self.is_complete:
            return AuctionPhase.COMPLETE
        return AuctionPhase.IDLE

    def find_player(self, name: str) -> Optional[Player]:
        for player in self.players:
            if player.name == name:
                return player
        return None

    def find_bidder(self, name: str) -> Optional[Bidder]:
        for bidder in self.bidders:
            if bidder.name == name:
                return bidder
        return None

    def total_spent(self, bidder_name: str) -> Amount:
        return sum(p.price for p in self.winners if p.bought_by == bidder_name)

    def roster(self, bidder_name: str) -> Tuple[Player, ...]:
        """Players bought by a bidder, in roster order."""
        return tuple(p for p in self.players if p.bought_by == bidder_name)

    def player_status(self, name: str) -> Optional[PlayerStatus]:
        player = self.find_player(name)
        if player is None:
            return None
        if player.is_sold:
            return PlayerStatus.SOLD
        if player.name == self.current_auctioned_player:
            return PlayerStatus.LIVE
        return PlayerStatus.UNSOLD

    def to_dict(self) -> dict:
        """Wire shape shared by the moderator and audience views."""
        data = {
            "players": [p.to_dict() for p in self.players],
            "bidders": [b.to_dict() for b in self.bidders],
            "highestBid": self.highest_bid,
            "roundStartTime": self.round_start_time,
            "inProgress": self.in_progress,
            "winners": [p.to_dict() for p in self.winners],
            "version": self.version,
        }
        if self.current_auctioned_player is not None:
            data["currentAuctionedPlayer"] = self.current_auctioned_player
        if self.highest_bidder is not None:
            data["highestBidder"] = self.highest_bidder
        return data

    def results_to_dict(self) -> dict:
        """Per-bidder purchases and spend, plus each player's status."""
        return {
            "complete": self.is_complete,
            "bidders": [
                {
                    "name": b.name,
                    "remainingAmount": b.remaining_amount,
                    "totalSpent": self.total_spent(b.name),
                    "players": [p.to_dict() for p in self.roster(b.name)],
                }
                for b in self.bidders
            ],
            "players": [
                {**p.to_dict(), "status": self.player_status(p.name).value}
                for p in self.players
            ],
            "unsold": [p.name for p in self.unsold_players],
        }


@dataclass(frozen=True)
class BidResult:
    """An accepted bid together with the session it produced."""
    bid: Bid
    session: AuctionSession

    def to_dict(self) -> dict:
        return {"bid": self.bid.to_dict(), "state": self.session.to_dict()}
