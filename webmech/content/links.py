#!/usr/bin/env python3
"""
Link extraction module.

This module scans fetched markup for the tags that carry navigational
references and turns each of them into a Link.
"""

from bs4 import NavigableString, Tag
from bs4.element import Comment

from ..core.link import URL_TAGS, Link
from .parser import make_soup, trimmed_text


def _anchor_text(tag):
    """
    Text enclosed by an element, with images replaced by their alt text.

    Args:
        tag: bs4 Tag to read

    Returns:
        str: Trimmed text, empty string if the element has none
    """
    parts = []
    for node in tag.descendants:
        if isinstance(node, Comment):
            continue
        if isinstance(node, NavigableString):
            parts.append(str(node))
        elif isinstance(node, Tag) and node.name == "img":
            alt = node.get("alt")
            parts.append(f" {alt if alt is not None else '[IMG]'} ")
    return trimmed_text("".join(parts))


def extract_links(markup, base=None):
    """
    Extract every link from a page, in document order.

    <a> and <area> tags contribute their href, <frame> and <iframe> tags
    their src. Tags without that attribute (named anchors, <area nohref>)
    are skipped, as are empty ones. Duplicate URLs are kept as separate links.

    Args:
        markup: HTML string or BeautifulSoup object
        base: Base URL of the page, recorded on each link

    Returns:
        list: Link objects
    """
    soup = make_soup(markup)
    links = []

    for tag in soup.find_all(list(URL_TAGS)):
        url = tag.get(URL_TAGS[tag.name])
        if not url:
            continue

        text = None
        name = None
        if tag.name == "a":
            text = _anchor_text(tag)
        if tag.name != "area":
            name = tag.get("name")

        links.append(Link(url=url, text=text, name=name, tag=tag.name, base=base))

    return links
