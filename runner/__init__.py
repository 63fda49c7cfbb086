"""
Runner module for scrape-serp.

This module contains:
- Logging setup
"""

from runner.logging_setup import setup_logging, get_logger

__version__ = "0.1.0"

__all__ = [
    "setup_logging",
    "get_logger",
]
