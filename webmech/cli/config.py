#!/usr/bin/env python3
"""
Configuration management module.

This module provides functionality for loading and saving configuration
files, and for managing browser configuration.
"""

import json
import os
from dataclasses import dataclass, field, asdict
from typing import Dict, Optional


@dataclass
class BrowserConfig:
    """
    Configuration class for a webmech browser.

    This dataclass holds all configuration parameters for the browser,
    allowing for easy serialization and deserialization.
    """
    # Identity
    agent: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)

    # Behaviour
    quiet: bool = False
    autocheck: bool = False
    stack_depth: Optional[int] = None

    # Transport
    max_redirects: int = 30
    timeout: Optional[float] = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.max_redirects < 0:
            print(f"Warning: max_redirects ({self.max_redirects}) is negative. Setting max_redirects to 0.")
            self.max_redirects = 0

        if self.timeout is not None and self.timeout <= 0:
            print(f"Warning: timeout ({self.timeout}) is not positive. Disabling the timeout.")
            self.timeout = None

        if self.stack_depth is not None and self.stack_depth < 1:
            print(f"Warning: stack_depth ({self.stack_depth}) is less than 1. Keeping unlimited history.")
            self.stack_depth = None

    @classmethod
    def from_args(cls, args):
        """
        Create a BrowserConfig instance from parsed command-line arguments.

        Args:
            args: Parsed command-line arguments

        Returns:
            BrowserConfig: Configuration instance
        """
        return cls(
            agent=args.agent,
            headers=dict(args.headers or {}),
            quiet=args.quiet,
            max_redirects=args.max_redirects,
            timeout=args.timeout,
        )

    def to_dict(self):
        """
        Convert configuration to a dictionary.

        Returns:
            dict: Dictionary representation of the configuration
        """
        return asdict(self)

    @classmethod
    def from_dict(cls, config_dict):
        """
        Create a BrowserConfig instance from a dictionary.

        Unknown keys are ignored so that newer configuration files still
        load.

        Args:
            config_dict: Dictionary containing configuration parameters

        Returns:
            BrowserConfig: Configuration instance
        """
        known = {f for f in cls.__dataclass_fields__}
        config = {key: value for key, value in config_dict.items() if key in known}
        return cls(**config)


def load_config(config_file: str) -> BrowserConfig:
    """
    Load configuration from a JSON file.

    Args:
        config_file: Path to the configuration file

    Returns:
        BrowserConfig: Configuration instance

    Raises:
        FileNotFoundError: If the configuration file does not exist
        json.JSONDecodeError: If the configuration file is not valid JSON
        ValueError: If the file does not hold a JSON object
    """
    if not os.path.exists(config_file):
        raise FileNotFoundError(f"Configuration file not found: {config_file}")

    with open(config_file, 'r') as f:
        config_dict = json.load(f)

    if not isinstance(config_dict, dict):
        raise ValueError(f"Configuration file must contain a JSON object: {config_file}")

    return BrowserConfig.from_dict(config_dict)


def save_config(config: BrowserConfig, config_file: str) -> None:
    """
    Save configuration to a JSON file.

    Args:
        config: BrowserConfig instance
        config_file: Path to the configuration file

    Raises:
        IOError: If the configuration file cannot be written
    """
    try:
        # Create directory if it doesn't exist
        directory = os.path.dirname(os.path.abspath(config_file))
        if directory and not os.path.exists(directory):
            os.makedirs(directory)

        with open(config_file, 'w') as f:
            json.dump(config.to_dict(), f, indent=2)

    except IOError as e:
        raise IOError(f"Error saving configuration: {e}")


def load_config_from_args(args):
    """
    Load configuration from command-line arguments or a config file.

    Args:
        args: Parsed command-line arguments

    Returns:
        BrowserConfig: Configuration instance
    """
    # If config file specified, load from file
    if args.config:
        try:
            config = load_config(args.config)

            # Override with any explicitly specified command-line arguments
            return _override_config_from_args(config, args)

        except (OSError, ValueError) as e:
            print(f"Error loading configuration file: {e}")
            print("Falling back to command-line arguments")

    return BrowserConfig.from_args(args)


def _override_config_from_args(config, args):
    """
    Override configuration with explicitly specified command-line arguments.

    Args:
        config: Existing configuration
        args: Parsed command-line arguments

    Returns:
        BrowserConfig: Updated configuration
    """
    # Get default argument values
    parser = create_parser()
    defaults = vars(parser.parse_args([args.url]))

    for key, value in vars(args).items():
        # Skip if the value is the same as the default
        if value == defaults.get(key):
            continue

        if key == 'headers':
            config.headers.update(value)
        elif hasattr(config, key):
            setattr(config, key, value)

    return config


# Import here to avoid circular imports
from .argument_parser import create_parser
