"""
Unit tests for the validation rules.

Tests:
- Setup validity and its check order
- Bid validity reasons and the budget overshoot
- Secret key authorization
"""

import pytest

from games.player_auction import rules
from games.player_auction.rules import validate_authorization, validate_bid, validate_setup
from tests.support import PLAYERS


class TestSetupValidity:
    """Setup checks, first failure wins"""

    def test_valid_setup(self):
        result = validate_setup("Alice", "Bob", PLAYERS, "k1")
        assert result.valid
        assert result.reason is None

    @pytest.mark.parametrize("bidder1,bidder2,players,key,reason", [
        ("  ", "", [], "", rules.BIDDER1_REQUIRED),
        ("Alice", " ", [], "", rules.BIDDER2_REQUIRED),
        ("Alice", " Alice ", [], "", rules.BIDDERS_NOT_DISTINCT),
        ("Alice", "Bob", PLAYERS[:9], "", rules.WRONG_PLAYER_COUNT),
        ("Alice", "Bob", PLAYERS[:9] + [" "], "", rules.EMPTY_PLAYER_NAME),
        ("Alice", "Bob", PLAYERS[:9] + ["player 1 "], "", rules.DUPLICATE_PLAYER_NAME),
        ("Alice", "Bob", PLAYERS, "   ", rules.SECRET_KEY_REQUIRED),
    ])
    def test_first_failing_check_wins(self, bidder1, bidder2, players, key, reason):
        result = validate_setup(bidder1, bidder2, players, key)
        assert not result.valid
        assert result.reason == reason
        assert result.message

    def test_messages(self):
        assert validate_setup("", "Bob", PLAYERS, "k").message == "Bidder 1 name is required"
        assert validate_setup("A", "B", PLAYERS[:3], "k").message == "Must have exactly 10 players"

    def test_bidder_names_are_case_sensitive(self):
        """Only players are compared case-insensitively"""
        assert validate_setup("alice", "Alice", PLAYERS, "k1").valid

    def test_eleven_players_rejected(self):
        result = validate_setup("Alice", "Bob", PLAYERS + ["Player 11"], "k1")
        assert result.reason == rules.WRONG_PLAYER_COUNT


class TestBidValidity:
    """Bid amount checks"""

    def test_valid_bid(self):
        assert validate_bid(100, 50, 1000).valid

    def test_bid_equal_to_budget_allowed(self):
        assert validate_bid(1000, 0, 1000).valid

    @pytest.mark.parametrize("amount", [0, -5])
    def test_non_positive(self, amount):
        result = validate_bid(amount, 0, 1000)
        assert result.reason == rules.NON_POSITIVE

    @pytest.mark.parametrize("amount", [50, 100])
    def test_not_higher(self, amount):
        result = validate_bid(amount, 100, 1000)
        assert result.reason == rules.NOT_HIGHER
        assert result.limit_exceeding_amount is None

    def test_exceeds_budget_reports_overshoot(self):
        result = validate_bid(1250, 100, 1000)
        assert result.reason == rules.EXCEEDS_BUDGET
        assert result.limit_exceeding_amount == 250

    def test_not_higher_checked_before_budget(self):
        result = validate_bid(2000, 3000, 1000)
        assert result.reason == rules.NOT_HIGHER

    @pytest.mark.parametrize("amount", [100.5, 100.0, True, "100", None])
    def test_non_integer_amounts(self, amount):
        result = validate_bid(amount, 0, 1000)
        assert not result.valid
        assert result.reason == rules.NOT_INTEGER


class TestAuthorization:
    """Secret key comparison"""

    def test_exact_match(self):
        assert validate_authorization("k1", "k1").valid

    @pytest.mark.parametrize("provided", ["K1", "k1 ", "", "k2"])
    def test_mismatch(self, provided):
        assert not validate_authorization(provided, "k1").valid

    def test_empty_session_key_never_authorizes(self):
        assert not validate_authorization("", "").valid
