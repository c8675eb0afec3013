"""Fetch a web page and pick out the parts matching a regular expression."""

from __future__ import annotations

import json
import logging
import re
import sys

import requests

DEFAULT_URL = "https://finance.yahoo.com/quote/MSFT/"
DEFAULT_PATTERN = "(MSFT)"

logger = logging.getLogger(__name__)


def get_html(url: str) -> str:
    """Return the body of the page at url, or an empty string on failure."""
    try:
        return requests.get(url).text
    except requests.RequestException as exc:
        logger.error("[X] Error '%s' getting %s", exc, url)
        return ""


def find_matches(html: str, pattern: str) -> list[str]:
    """Every non-overlapping match of pattern in html, in order."""
    return [match.group(0) for match in re.finditer(pattern, html)]


def get_html_filtered_by_regex(url: str, pattern: str) -> list[str]:
    """Fetch url and return the matches of pattern in its body."""
    return find_matches(get_html(url), pattern)


def _debug_list(items: list[str]) -> str:
    return "[" + ", ".join(json.dumps(item, ensure_ascii=False) for item in items) + "]"


def main(argv: list[str] | None = None) -> int:
    """Print the matches found on a quote page; url and pattern may be given."""
    args = sys.argv[1:] if argv is None else list(argv)
    url = args[0] if args else DEFAULT_URL
    pattern = args[1] if len(args) > 1 else DEFAULT_PATTERN
    matches = get_html_filtered_by_regex(url, pattern)
    print(f"response:\n{_debug_list(matches)}")
    return 0