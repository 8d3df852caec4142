#!/usr/bin/env python3
"""
HTML content parsing module.

This module contains the small helpers the browser uses to look inside
fetched markup: building a parse tree, reading the page title and the
declared base URL, and extracting the visible text.
"""

import re
from urllib.parse import urljoin

from bs4 import BeautifulSoup

# Parser backend for every tree built by webmech
PARSER = "html.parser"

# Elements whose contents are never visible text
INVISIBLE_TAGS = ["script", "style", "noscript", "template"]


def make_soup(markup):
    """
    Build a BeautifulSoup tree, passing through trees that are already built.

    Args:
        markup: HTML string, bytes, or an existing BeautifulSoup object

    Returns:
        BeautifulSoup: Parsed document
    """
    if isinstance(markup, BeautifulSoup):
        return markup
    return BeautifulSoup(markup or "", PARSER)


def trimmed_text(text):
    """Collapse runs of whitespace and strip the ends."""
    return re.sub(r"\s+", " ", text).strip()


def get_title(markup):
    """
    Read the contents of the document's <title> element.

    Args:
        markup: HTML string or BeautifulSoup object

    Returns:
        str: The trimmed title, or None if the document has no title
    """
    soup = make_soup(markup)
    if soup.title is None:
        return None
    return trimmed_text(soup.title.get_text())


def find_base_href(markup, default=None):
    """
    Find the base URL declared by a <base href="..."> element.

    Args:
        markup: HTML string or BeautifulSoup object
        default: URL returned when no base element is present; also used
            to resolve a relative base href

    Returns:
        str: The declared base URL, or default
    """
    soup = make_soup(markup)
    base = soup.find("base", href=True)
    if base is None:
        return default
    href = base["href"].strip()
    if default:
        return urljoin(default, href)
    return href


def page_text(markup):
    """
    Extract the visible text of a document.

    Args:
        markup: HTML string or BeautifulSoup object

    Returns:
        str: Text content with one line per block of text
    """
    # Work on a private tree so callers' trees are left intact
    soup = BeautifulSoup(str(make_soup(markup)), PARSER)
    for element in soup(INVISIBLE_TAGS):
        element.decompose()

    lines = (trimmed_text(line) for line in soup.get_text("\n").splitlines())
    return "\n".join(line for line in lines if line)
