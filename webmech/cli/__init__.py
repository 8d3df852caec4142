"""
Command-line interface module for webmech.

This package contains modules for parsing command-line arguments
and managing configuration for the webmech browser.
"""

from .argument_parser import create_parser, parse_args
from .config import BrowserConfig, load_config, load_config_from_args, save_config

__all__ = [
    "create_parser",
    "parse_args",
    "BrowserConfig",
    "load_config",
    "load_config_from_args",
    "save_config",
]
