#!/usr/bin/env python3
"""
Page content conversion module.

This module contains functions for rendering the current page in the
formats the browser offers (raw HTML, plain text, Markdown) and for
saving that content to a file.
"""

import os

import html2text

from .parser import page_text

CONTENT_FORMATS = ("html", "text", "markdown")


def html_to_markdown(html_content, base_url=""):
    """
    Convert HTML content to markdown format.

    Args:
        html_content: HTML content to convert
        base_url: URL relative links are resolved against

    Returns:
        str: Markdown formatted content
    """
    h = html2text.HTML2Text(baseurl=base_url or "")
    h.ignore_links = False
    h.ignore_images = False
    h.ignore_tables = False
    h.ignore_emphasis = False
    h.body_width = 0  # Don't wrap lines

    return h.handle(html_content)


def render_content(content, format="html", is_html=True, base_url=""):
    """
    Render page content in one of CONTENT_FORMATS.

    Non-HTML content is returned unchanged whatever the format.

    Args:
        content: Decoded response body
        format: "html", "text" or "markdown"
        is_html: Whether the content is HTML
        base_url: Base URL of the page

    Returns:
        str: Rendered content

    Raises:
        ValueError: If format is not one of CONTENT_FORMATS
    """
    if format not in CONTENT_FORMATS:
        raise ValueError(f"Unknown content format {format!r}; expected one of {CONTENT_FORMATS}")

    if format == "html" or not is_html:
        return content
    if format == "text":
        return page_text(content)
    return html_to_markdown(content, base_url)


def save_content(file_path, content):
    """
    Write rendered content to a file, creating parent directories.

    Args:
        file_path: Destination path
        content: Text to write

    Returns:
        str: Path to the saved file
    """
    directory = os.path.dirname(os.path.abspath(file_path))
    if directory and not os.path.exists(directory):
        os.makedirs(directory)

    with open(file_path, "w", encoding="utf-8") as f:
        f.write(content)

    return file_path
