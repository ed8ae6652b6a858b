"""Low-level GitHub request helpers.

Two failure policies live here and are meant to be chosen at the call site:

- ``fetch_json`` fails loud. Use it for data a snapshot cannot exist without.
- ``safe_search`` and ``fetch_starred_this_year`` fail soft. Use them for
  best-effort metrics that should degrade to zero or a partial count.
"""

import math
from typing import Any, Dict, Optional

import httpx

from shared.logger import get_logger

logger = get_logger(__name__)

STAR_PAGE_SIZE = 100
MAX_STAR_PAGES = 5


class RequestFailed(Exception):
    """A mandatory GitHub request returned a non-success status."""

    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status
        self.message = message

    def __str__(self) -> str:
        return f"GitHub {self.status}: {self.message}"


async def fetch_json(
    client: httpx.AsyncClient,
    url: str,
    headers: Dict[str, str],
    params: Optional[Dict[str, Any]] = None,
) -> Any:
    """
    Perform a single GET request and return the decoded JSON body.

    Args:
        client: HTTP client
        url: Absolute URL or path relative to the client's base URL
        headers: Request headers
        params: Query parameters

    Returns:
        Parsed JSON body

    Raises:
        RequestFailed: If the response status is not 2xx
    """
    logger.debug(f"GET {url} {params or ''}")

    response = await client.get(url, headers=headers, params=params)

    if not response.is_success:
        message = response.text or f"Request failed: {response.status_code}"
        raise RequestFailed(response.status_code, message)

    return response.json()


async def safe_search(
    client: httpx.AsyncClient,
    url: str,
    headers: Dict[str, str],
    params: Optional[Dict[str, Any]] = None,
) -> int:
    """
    Return ``total_count`` of a search endpoint, or 0 on any failure.

    Args:
        client: HTTP client
        url: Search endpoint
        headers: Request headers
        params: Query parameters (usually ``{"q": ...}``)

    Returns:
        Number of matching results
    """
    try:
        result = await fetch_json(client, url, headers, params)
    except (RequestFailed, httpx.HTTPError, ValueError) as e:
        logger.warning(f"Search failed for {url}: {e}")
        return 0

    total = result.get("total_count") if isinstance(result, dict) else None
    if isinstance(total, bool) or not isinstance(total, (int, float)) or not math.isfinite(total):
        return 0
    return int(total)


async def fetch_starred_this_year(
    client: httpx.AsyncClient,
    username: str,
    year: int,
    headers: Dict[str, str],
) -> int:
    """
    Count repositories a user starred during ``year``.

    ``headers`` must request the ``application/vnd.github.star+json`` media
    type, otherwise items carry no ``starred_at`` timestamp and nothing
    matches.

    The scan assumes GitHub returns stars newest first. A page that is only
    partly inside the year marks the year boundary, so scanning stops there.
    If that ordering ever changes, the result undercounts instead of failing.
    At most ``MAX_STAR_PAGES`` pages are requested.

    Returns:
        Number of stars in the year (partial if a page request failed)
    """
    prefix = str(year)
    url = f"/users/{username}/starred"
    total = 0

    for page in range(1, MAX_STAR_PAGES + 1):
        try:
            response = await client.get(
                url,
                headers=headers,
                params={"per_page": STAR_PAGE_SIZE, "page": page},
            )
        except httpx.HTTPError as e:
            logger.warning(f"Star scan stopped at page {page}: {e}")
            break

        if not response.is_success:
            logger.debug(f"Star scan stopped at page {page}: HTTP {response.status_code}")
            break

        try:
            items = response.json()
        except ValueError as e:
            logger.warning(f"Star scan stopped at page {page}: invalid JSON ({e})")
            break

        if not isinstance(items, list) or not items:
            break

        matches = sum(
            1
            for item in items
            if isinstance(item, dict)
            and isinstance(item.get("starred_at"), str)
            and item["starred_at"].startswith(prefix)
        )
        total += matches
        logger.debug(f"Star scan page {page}: {matches}/{len(items)} in {year}")

        if matches < len(items):
            break

    return total
