"""
Shared components for the player auction server.
"""

from .config import get_host, get_port, get_initial_budget_cr, get_audience_capacity, get_log_level
from .logging_config import setup_logging
from .server_base import ConnectionHub, run_server

__all__ = [
    'get_host', 'get_port', 'get_initial_budget_cr', 'get_audience_capacity', 'get_log_level',
    'setup_logging', 'ConnectionHub', 'run_server',
]
