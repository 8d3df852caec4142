#!/usr/bin/env python3
"""
Main entry point for webmech.

This module provides the command-line page dump tool: fetch one page
and print its forms, links, response headers or text.
"""

import sys

from .cli.argument_parser import parse_args
from .cli.config import load_config_from_args, save_config
from .core.browser import Browser


def dump_forms(browser):
    forms = browser.forms
    if not forms:
        print("No forms on this page")
        return
    for number, form in enumerate(forms, 1):
        if number > 1:
            print()
        print(form.dump())


def dump_links(browser, absolute=False):
    links = browser.links
    if not links:
        print("No links on this page")
        return
    for link in links:
        url = link.url_abs if absolute else link.url
        text = "" if link.text is None else f"  {link.text}"
        print(f"{url}{text}")


def dump_headers(browser):
    response = browser.response
    print(f"{browser.status} {response.reason}")
    for name, value in response.headers.items():
        print(f"{name}: {value}")


def main(argv=None):
    """Main entry point for the webmech page dump tool."""
    args = parse_args(argv)
    config = load_config_from_args(args)

    if args.save_config:
        save_config(config, args.save_config)
        print(f"Configuration saved to {args.save_config}")

    with Browser.from_config(config) as browser:
        browser.get(args.url)

        sections = []
        if args.show_headers:
            sections.append(lambda: dump_headers(browser))
        if args.forms:
            sections.append(lambda: dump_forms(browser))
        if args.links:
            sections.append(lambda: dump_links(browser, args.absolute))
        if args.text:
            sections.append(lambda: print(browser.content_as("text")))
        if args.markdown:
            sections.append(lambda: print(browser.content_as("markdown")))

        for index, section in enumerate(sections):
            if index:
                print()
            section()

        if not browser.success():
            print(f"Error fetching {args.url}: {browser.status}", file=sys.stderr)
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
