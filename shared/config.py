"""
Configuration for the auction server, loaded from environment variables.
"""

import logging
import os

# Server settings - load from environment variables
SERVER = {
    "host": os.environ.get("AUCTION_HOST", "0.0.0.0"),
    "port": os.environ.get("AUCTION_PORT", "8000"),
}

# Auction settings: budgets are given in crores, capacity in spectators
AUCTION = {
    "initial_budget_cr": os.environ.get("AUCTION_INITIAL_BUDGET_CR", "10"),
    "audience_max_capacity": os.environ.get("AUDIENCE_MAX_CAPACITY", "100"),
}

LOG_LEVEL = os.environ.get("AUCTION_LOG_LEVEL", "INFO")


def _parse_int(name: str, raw: str, minimum: int = 0) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")
    if value < minimum:
        raise ValueError(f"{name} must be at least {minimum}, got {value}")
    return value


def get_host() -> str:
    return SERVER["host"]


def get_port() -> int:
    """Get the port to listen on."""
    return _parse_int("AUCTION_PORT", SERVER["port"], minimum=1)


def get_initial_budget_cr() -> str:
    """Get each bidder's starting purse in crores, as given."""
    return AUCTION["initial_budget_cr"]


def get_audience_capacity() -> int:
    """Get the maximum number of concurrent spectators."""
    return _parse_int("AUDIENCE_MAX_CAPACITY", AUCTION["audience_max_capacity"])


def get_log_level() -> int:
    """Get the log level as a logging constant."""
    level = logging.getLevelName(LOG_LEVEL.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {LOG_LEVEL}")
    return level
