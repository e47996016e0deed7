"""
Error taxonomy for the auction core.

Every error is recoverable and every rejected command leaves the session
unchanged. The category tells the caller what to do next: fix the input
(validation), re-enter the key (authorization), refresh state (state
conflict) or degrade gracefully (capacity).
"""

from typing import Optional

from .currency import Amount


class AuctionError(Exception):
    """Base class for auction errors."""
    code = "auction-error"
    category = "auction"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.code, "category": self.category, "message": self.message}


# Categories

class ValidationError(AuctionError):
    category = "validation"


class AuthorizationError(AuctionError):
    category = "authorization"


class StateConflictError(AuctionError):
    category = "state-conflict"


class CapacityError(AuctionError):
    category = "capacity"


# Validation

class InvalidSetup(ValidationError):
    code = "invalid-setup"

    def __init__(self, reason: str, message: str):
        super().__init__(message)
        self.reason = reason


class InvalidBid(ValidationError):
    code = "invalid-bid"

    def __init__(self, reason: str, message: str,
                 limit_exceeding_amount: Optional[Amount] = None):
        super().__init__(message)
        self.reason = reason
        self.limit_exceeding_amount = limit_exceeding_amount

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["reason"] = self.reason
        if self.limit_exceeding_amount is not None:
            data["limitExceedingAmount"] = self.limit_exceeding_amount
        return data


class UnknownPlayer(ValidationError):
    code = "unknown-player"

    def __init__(self, player_name: str):
        super().__init__(f"Player '{player_name}' is not part of this auction")
        self.player_name = player_name


class UnknownBidder(ValidationError):
    code = "unknown-bidder"

    def __init__(self, bidder_name: str):
        super().__init__(f"Only the 2 registered bidders can bid, '{bidder_name}' is not one of them")
        self.bidder_name = bidder_name


# Authorization

class Unauthorized(AuthorizationError):
    code = "unauthorized"

    def __init__(self):
        super().__init__("Invalid secret key")


# State conflicts

class AuctionNotInitialized(StateConflictError):
    code = "not-initialized"

    def __init__(self):
        super().__init__("No auction has been set up yet")


class RoundAlreadyActive(StateConflictError):
    code = "round-already-active"

    def __init__(self, player_name: str):
        super().__init__(f"Player '{player_name}' is already on auction")
        self.player_name = player_name


class PlayerAlreadySold(StateConflictError):
    code = "player-already-sold"

    def __init__(self, player_name: str, bought_by: str):
        super().__init__(f"Player '{player_name}' was already sold to {bought_by}")
        self.player_name = player_name
        self.bought_by = bought_by


class NoActiveRound(StateConflictError):
    code = "no-active-round"

    def __init__(self):
        super().__init__("No player is currently on auction")


class PlayerNotOnAuction(StateConflictError):
    code = "player-not-on-auction"

    def __init__(self, player_name: str, current_player: str):
        super().__init__(
            f"Player '{player_name}' is not on auction, '{current_player}' is"
        )
        self.player_name = player_name
        self.current_player = current_player


class NoBidsYet(StateConflictError):
    code = "no-bids-yet"

    def __init__(self, player_name: str):
        super().__init__(f"Cannot sell '{player_name}' before anyone has bid")
        self.player_name = player_name


# Capacity

class CapacityExceeded(CapacityError):
    code = "capacity-exceeded"

    def __init__(self, max_capacity: int):
        super().__init__(f"Audience capacity full ({max_capacity}). Please try again later.")
        self.max_capacity = max_capacity
