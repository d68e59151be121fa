"""Shared text utilities for sources."""

import re
from typing import Optional

from bs4 import BeautifulSoup


def strip_html(html: Optional[str]) -> str:
    """
    Convert an HTML fragment to plain text.

    Args:
        html: Markup from a feed entry or API payload

    Returns:
        Text with tags removed, entities decoded and whitespace collapsed
    """
    if not html:
        return ""

    text = BeautifulSoup(html, "html.parser").get_text(" ")
    return re.sub(r"\s+", " ", text).strip()
