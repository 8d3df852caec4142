"""
Content processing module for parsing fetched pages.

This package contains components for extracting links and forms from
HTML, reading page metadata, and rendering page content as text or
Markdown.
"""

from .forms import Form, Input, parse_forms
from .links import extract_links
from .markdown import html_to_markdown, render_content, save_content
from .parser import find_base_href, get_title, make_soup, page_text

__all__ = [
    "Form",
    "Input",
    "parse_forms",
    "extract_links",
    "make_soup",
    "get_title",
    "find_base_href",
    "page_text",
    "html_to_markdown",
    "render_content",
    "save_content",
]
