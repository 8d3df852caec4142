#!/usr/bin/env python3
"""
Link model.

A Link is one navigational reference discovered in a page: the raw URL
attribute, the enclosed text (anchors only), the name attribute and the
kind of tag it came from.
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urljoin

# Tags that produce links, mapped to the attribute holding their URL
URL_TAGS = {
    "a": "href",
    "area": "href",
    "frame": "src",
    "iframe": "src",
}


@dataclass(frozen=True)
class Link:
    """
    An immutable reference to one link found on a page.

    Attributes:
        url: The URL exactly as written in the markup
        text: Trimmed text of an <a> element, None for other tags
        name: The name attribute, None if absent or for <area> tags
        tag: One of "a", "area", "frame" or "iframe"
        base: Base URL of the page the link was found on
    """

    url: str
    text: Optional[str] = None
    name: Optional[str] = None
    tag: str = "a"
    base: Optional[str] = None

    @property
    def url_abs(self):
        """The link URL resolved against the page base, if one is known."""
        if self.base:
            return urljoin(self.base, self.url)
        return self.url

    def __iter__(self):
        # Unpacks as (url, text, name, tag) like the classic link tuples
        return iter((self.url, self.text, self.name, self.tag))
