"""
Two-Bidder Player Auction

A live auction of a ten-player roster between two budgeted bidders, with a
moderator secret key for bids and a capacity-limited audience.
"""

from .currency import Amount, UNITS_PER_CRORE, DEFAULT_INITIAL_BUDGET, as_amount, crores
from .models import AuctionPhase, AuctionSession, Bid, Bidder, BidResult, Player, PlayerStatus
from .rules import ValidationResult, validate_authorization, validate_bid, validate_setup
from .engine import AuctionEngine
from .audience import AudienceGate, AudienceLimit
from .server import AuctionManager, create_app, run

__all__ = [
    "Amount", "UNITS_PER_CRORE", "DEFAULT_INITIAL_BUDGET", "as_amount", "crores",
    "AuctionPhase", "AuctionSession", "Bid", "Bidder", "BidResult", "Player", "PlayerStatus",
    "ValidationResult", "validate_authorization", "validate_bid", "validate_setup",
    "AuctionEngine", "AudienceGate", "AudienceLimit",
    "AuctionManager", "create_app", "run",
]
