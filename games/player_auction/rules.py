"""
Validation rules for the auction.

Pure predicates with no side effects. Each returns a ValidationResult so the
caller can render a precise message; the engine turns failures into errors.
"""

import hmac
from dataclasses import dataclass
from typing import Optional, Sequence

from .currency import Amount
from .models import NUM_PLAYERS

# Setup failure reasons, in check order
BIDDER1_REQUIRED = "bidder1-required"
BIDDER2_REQUIRED = "bidder2-required"
BIDDERS_NOT_DISTINCT = "bidders-not-distinct"
WRONG_PLAYER_COUNT = "wrong-player-count"
EMPTY_PLAYER_NAME = "empty-player-name"
DUPLICATE_PLAYER_NAME = "duplicate-player-name"
SECRET_KEY_REQUIRED = "secret-key-required"

# Bid failure reasons
NOT_INTEGER = "not-integer"
NON_POSITIVE = "non-positive"
NOT_HIGHER = "not-higher"
EXCEEDS_BUDGET = "exceeds-budget"


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    reason: Optional[str] = None
    message: str = ""
    limit_exceeding_amount: Optional[Amount] = None

    def __bool__(self) -> bool:
        return self.valid


VALID = ValidationResult(valid=True)


def _invalid(reason: str, message: str, **kwargs) -> ValidationResult:
    return ValidationResult(valid=False, reason=reason, message=message, **kwargs)


def normalize_name(name: str) -> str:
    return name.strip()


def validate_setup(
    bidder1: str,
    bidder2: str,
    players: Sequence[str],
    secret_key: str
) -> ValidationResult:
    """
    Check an auction setup. The first failing check wins.

    Args:
        bidder1: First bidder's name
        bidder2: Second bidder's name
        players: The roster, exactly NUM_PLAYERS names
        secret_key: Moderator key that will authorize bids

    Returns:
        VALID, or the first failure with its reason and message
    """
    if not bidder1.strip():
        return _invalid(BIDDER1_REQUIRED, "Bidder 1 name is required")
    if not bidder2.strip():
        return _invalid(BIDDER2_REQUIRED, "Bidder 2 name is required")
    if bidder1.strip() == bidder2.strip():
        return _invalid(BIDDERS_NOT_DISTINCT, "Bidder names must be different")

    if len(players) != NUM_PLAYERS:
        return _invalid(WRONG_PLAYER_COUNT, f"Must have exactly {NUM_PLAYERS} players")

    if any(not p.strip() for p in players):
        return _invalid(EMPTY_PLAYER_NAME, "All player names must be filled")

    unique_names = {p.strip().lower() for p in players}
    if len(unique_names) != len(players):
        return _invalid(DUPLICATE_PLAYER_NAME, "Player names must be unique")

    if not secret_key.strip():
        return _invalid(SECRET_KEY_REQUIRED, "Secret key is required")

    return VALID


def validate_bid(
    amount: Amount,
    current_highest_bid: Amount,
    remaining_budget: Amount
) -> ValidationResult:
    """Check a bid against the round's highest bid and the bidder's purse."""
    # bool is an int subclass but never an amount
    if isinstance(amount, bool) or not isinstance(amount, int):
        return _invalid(NOT_INTEGER, "Bid amount must be a whole number of units")

    if amount <= 0:
        return _invalid(NON_POSITIVE, "Bid amount must be greater than 0")

    if amount <= current_highest_bid:
        return _invalid(
            NOT_HIGHER,
            f"Bid must be higher than current highest bid ({current_highest_bid})"
        )

    if amount > remaining_budget:
        return _invalid(
            EXCEEDS_BUDGET,
            f"Bid exceeds remaining budget ({remaining_budget} available)",
            limit_exceeding_amount=amount - remaining_budget,
        )

    return VALID


def validate_authorization(provided_key: str, session_key: str) -> ValidationResult:
    """Exact, constant-time key match. A session without a key authorizes nothing."""
    if not session_key:
        return _invalid("unauthorized", "Invalid secret key")
    if not hmac.compare_digest(provided_key.encode("utf-8"), session_key.encode("utf-8")):
        return _invalid("unauthorized", "Invalid secret key")
    return VALID
