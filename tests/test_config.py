"""
Tests for configuration lookups and the launcher's argument handling.
"""

import io
import logging

import pytest

import main
from shared import config
from shared.logging_config import setup_logging


class TestConfig:

    def test_defaults(self):
        assert config.get_initial_budget_cr() == config.AUCTION["initial_budget_cr"]
        assert config.get_port() == int(config.SERVER["port"])

    def test_bad_port(self, monkeypatch):
        monkeypatch.setitem(config.SERVER, "port", "eighty")
        with pytest.raises(ValueError, match="AUCTION_PORT"):
            config.get_port()

    def test_negative_capacity(self, monkeypatch):
        monkeypatch.setitem(config.AUCTION, "audience_max_capacity", "-3")
        with pytest.raises(ValueError, match="at least 0"):
            config.get_audience_capacity()

    def test_log_level(self, monkeypatch):
        monkeypatch.setattr(config, "LOG_LEVEL", "debug")
        assert config.get_log_level() == logging.DEBUG
        monkeypatch.setattr(config, "LOG_LEVEL", "chatty")
        with pytest.raises(ValueError):
            config.get_log_level()


class TestLogging:

    def test_setup_logging_formats_auction_loggers(self):
        stream = io.StringIO()
        setup_logging(logging.INFO, stream=stream)
        try:
            logging.getLogger("games.player_auction.engine").info("Round started for %s", "Player 1")
            output = stream.getvalue()
            assert "INFO" in output
            assert "games.player_auction.engine" in output
            assert "Round started for Player 1" in output
        finally:
            for name in ("games", "shared", "__main__"):
                logger = logging.getLogger(name)
                logger.handlers.clear()
                logger.propagate = True
                logger.setLevel(logging.NOTSET)


class TestLauncher:

    def test_parser_overrides(self):
        args = main.build_parser().parse_args(["--port", "9000", "-b", "5", "-c", "10"])
        assert args.port == 9000
        assert args.budget == "5"
        assert args.capacity == 10

    def test_bad_budget_exits(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main.main(["--budget", "lots"])
        assert exc_info.value.code == 2
        assert "Error" in capsys.readouterr().err
