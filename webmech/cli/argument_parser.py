#!/usr/bin/env python3
"""
Command-line argument parsing module.

This module provides functions for setting up and parsing command-line
arguments for the webmech page dump tool.
"""

import argparse
from urllib.parse import urlparse


def header_pair(value):
    """
    Parse a "Name: value" header argument.

    Args:
        value: Raw command-line value

    Returns:
        tuple: (name, value)

    Raises:
        argparse.ArgumentTypeError: If there is no colon or no name
    """
    name, sep, header_value = value.partition(':')
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"Header must look like 'Name: value', got {value!r}")
    return name.strip(), header_value.strip()


def create_parser():
    """
    Create the command-line argument parser.

    Returns:
        argparse.ArgumentParser: Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog='webmech',
        description='Fetch a web page and dump its links, forms, headers or text'
    )

    # Required arguments
    parser.add_argument('url', type=str,
                        help='URL of the page to fetch')

    # What to dump
    dump_group = parser.add_argument_group('Dump Options')
    dump_group.add_argument('--forms', action='store_true',
                        help='Dump the forms on the page (default if nothing else is chosen)')
    dump_group.add_argument('--links', action='store_true',
                        help='Dump the links on the page')
    dump_group.add_argument('--show-headers', action='store_true',
                        help='Dump the response headers')
    dump_group.add_argument('--text', action='store_true',
                        help='Dump the visible text of the page')
    dump_group.add_argument('--markdown', action='store_true',
                        help='Dump the page converted to Markdown')
    dump_group.add_argument('--all', action='store_true',
                        help='Dump forms, links and response headers')
    dump_group.add_argument('--absolute', action='store_true',
                        help='Print link URLs resolved against the page base')

    # Request options
    request_group = parser.add_argument_group('Request Options')
    request_group.add_argument('--agent', type=str, default=None,
                        help='User-Agent string to send')
    request_group.add_argument('--header', dest='headers', type=header_pair, action='append',
                        metavar='"NAME: VALUE"',
                        help='Extra request header (may be repeated)')
    request_group.add_argument('--timeout', type=float, default=None,
                        help='Request timeout in seconds (default: none)')
    request_group.add_argument('--max-redirects', type=int, default=30,
                        help='Maximum number of redirects to follow (default: 30)')
    request_group.add_argument('--quiet', action='store_true',
                        help='Suppress warnings')

    # Configuration file options
    config_group = parser.add_argument_group('Configuration Options')
    config_group.add_argument('--config', type=str, default=None,
                        help='Path to configuration file (JSON)')
    config_group.add_argument('--save-config', type=str, default=None,
                        help='Save current settings to configuration file')

    return parser


def parse_args(args=None):
    """
    Parse command-line arguments.

    Args:
        args: Command-line arguments to parse (uses sys.argv if None)

    Returns:
        argparse.Namespace: Parsed arguments

    Raises:
        SystemExit: If required arguments are missing or invalid
    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    # Validate URL
    parsed_url = urlparse(parsed_args.url)
    if not parsed_url.scheme or not parsed_url.netloc:
        parser.error("Invalid URL. Please provide a valid URL (e.g., https://example.com)")

    if parsed_args.all:
        parsed_args.forms = parsed_args.links = parsed_args.show_headers = True

    # Forms are dumped when nothing else was asked for
    if not any((parsed_args.forms, parsed_args.links, parsed_args.show_headers,
                parsed_args.text, parsed_args.markdown)):
        parsed_args.forms = True

    return parsed_args
