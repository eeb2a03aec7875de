"""Parse RFC 8288 ``Link`` headers as GitHub sends them for pagination.

Format: <https://api.github.com/...?page=2>; rel="next", <...?page=5>; rel="last"
"""

import re

PAGINATION_RELATIONS = ("first", "prev", "next", "last")

_LINK_RE = re.compile(r"<([^>]*)>\s*;([^<]*)")
_REL_RE = re.compile(r'\brel\s*=\s*(?:"([^"]*)"|([^\s;,]+))', re.IGNORECASE)
_PAGE_RE = re.compile(r"[?&]page=(\d+)")


def parse_link_header(header: str | None) -> dict[str, str]:
    """Return the pagination relations found in ``header``.

    Only first/prev/next/last are kept. Anything unparseable is skipped, so a
    missing or garbled header yields an empty dict.
    """
    if not header:
        return {}

    links: dict[str, str] = {}
    for match in _LINK_RE.finditer(header):
        url = match.group(1).strip()
        rel_match = _REL_RE.search(match.group(2))
        if not url or rel_match is None:
            continue
        rel_value = rel_match.group(1) if rel_match.group(1) is not None else rel_match.group(2)
        # rel may hold several space-separated relation types
        for rel in rel_value.lower().split():
            if rel in PAGINATION_RELATIONS and rel not in links:
                links[rel] = url
    return links


def page_from_url(url: str | None) -> int | None:
    """Extract the ``page`` query parameter from a pagination URL."""
    if not url:
        return None
    match = _PAGE_RE.search(url)
    return int(match.group(1)) if match else None
