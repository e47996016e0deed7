#!/usr/bin/env python3
"""
Player Auction - Main Launcher

Run the two-bidder player auction server.
"""

import argparse
import logging
import sys

from shared.config import (
    get_audience_capacity, get_host, get_initial_budget_cr, get_log_level, get_port,
)
from shared.logging_config import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Player Auction - run a live two-bidder player auction server"
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Host to bind to (default: AUCTION_HOST or 0.0.0.0)"
    )
    parser.add_argument(
        "--port", "-p",
        type=int,
        default=None,
        help="Port to run on (default: AUCTION_PORT or 8000)"
    )
    parser.add_argument(
        "--budget", "-b",
        default=None,
        help="Each bidder's starting budget in crores (default: AUCTION_INITIAL_BUDGET_CR or 10)"
    )
    parser.add_argument(
        "--capacity", "-c",
        type=int,
        default=None,
        help="Maximum concurrent audience members (default: AUDIENCE_MAX_CAPACITY or 100)"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level name (default: AUCTION_LOG_LEVEL or INFO)"
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        level = logging.getLevelName(args.log_level.upper()) if args.log_level else get_log_level()
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {args.log_level}")
        host = args.host or get_host()
        port = args.port or get_port()
        budget_cr = args.budget or get_initial_budget_cr()
        capacity = args.capacity if args.capacity is not None else get_audience_capacity()

        from games.player_auction.currency import crores
        from games.player_auction.server import AuctionManager, create_app
        manager = AuctionManager.from_config(initial_budget=crores(budget_cr), max_capacity=capacity)
    except (TypeError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    setup_logging(level)

    logger.info("Starting Player Auction (budget %s CR per bidder, audience cap %d)",
                budget_cr, capacity)
    print(f"Server running at http://localhost:{port}")
    print("Press Ctrl+C to stop\n")

    from shared.server_base import run_server
    run_server(create_app(manager), host=host, port=port)


if __name__ == "__main__":
    main()
