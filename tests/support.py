"""Constants and builders shared by the auction tests."""
from games.player_auction.models import Bid

BUDGET = 1000
SECRET = "k1"
PLAYERS = [f"Player {i}" for i in range(1, 11)]

SETUP = {
    "bidder1Name": "Alice",
    "bidder2Name": "Bob",
    "playerNames": PLAYERS,
    "secretKey": SECRET,
}


def make_bid(bidder, amount, player="Player 1"):
    return Bid(player_name=player, bidder_name=bidder, amount=amount)
