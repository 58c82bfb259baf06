"""Google Books search for filling board cells.

The search returns prompt-cell-shaped :class:`~bingoboard.api.models.BookResult`
records the client can drop straight into a cell: title, author(s), cover
URL and an edition id.  Responses are cached per normalized query in a
:class:`~bingoboard.core.response_cache.ResponseCache`.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

import aiohttp

from bingoboard.api.models import BookResult
from bingoboard.core.errors import LookupFetchError
from bingoboard.core.response_cache import ResponseCache

logger = logging.getLogger(__name__)

GOOGLE_BOOKS_URL = "https://www.googleapis.com/books/v1/volumes"
VOLUME_FIELDS = "items/volumeInfo(title,authors,industryIdentifiers,imageLinks)"

FetchJson = Callable[[str, dict[str, str]], Awaitable[dict[str, Any]]]


def cache_key(query: str) -> str:
    return f"book_search_{query.lower().strip()}"


async def fetch_json(url: str, params: dict[str, str], *, timeout: float = 10.0) -> dict[str, Any]:
    """GET ``url`` and decode the JSON body.

    Raises:
        LookupFetchError: On network failure, non-200 status or invalid JSON.
    """
    try:
        async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=timeout)) as session:
            async with session.get(url, params=params) as response:
                if response.status != 200:
                    raise LookupFetchError(f"Book search returned HTTP {response.status}")
                return await response.json(content_type=None)
    except aiohttp.ClientError as exc:
        raise LookupFetchError(f"Book search failed: {exc}") from exc
    except TimeoutError as exc:
        raise LookupFetchError("Book search timed out") from exc
    except ValueError as exc:
        raise LookupFetchError("Book search returned invalid JSON") from exc


def _edition_id(identifiers: list[dict[str, Any]]) -> str | None:
    for identifier in identifiers:
        if identifier.get("type") == "ISBN_13":
            return identifier.get("identifier")
    if identifiers:
        return identifiers[0].get("identifier")
    return None


def _cover_link(image_links: dict[str, Any]) -> str:
    link = image_links.get("thumbnail") or image_links.get("smallThumbnail") or ""
    if link.startswith("http://"):
        link = "https://" + link[len("http://") :]
    return link


def parse_volumes(payload: dict[str, Any]) -> list[BookResult]:
    """Map a Google Books ``volumes`` response to :class:`BookResult` records.

    Volumes without a title are skipped.
    """
    results: list[BookResult] = []
    for item in payload.get("items") or []:
        info = item.get("volumeInfo") or {}
        title = info.get("title")
        if not title:
            continue
        results.append(
            BookResult(
                title=title,
                author=", ".join(info.get("authors") or []),
                cover_image_link=_cover_link(info.get("imageLinks") or {}),
                edition_id=_edition_id(info.get("industryIdentifiers") or []),
            )
        )
    return results


async def search_books(
    query: str,
    cache: ResponseCache,
    *,
    api_key: str | None = None,
    max_results: int = 5,
    ttl_seconds: float | None = None,
    fetch: FetchJson | None = None,
) -> list[BookResult]:
    """Search Google Books for ``query``.

    Args:
        query: Free-text search.  Blank queries return no results.
        cache: Response cache shared by all requests.
        api_key: Optional Google Books API key.
        max_results: Number of volumes to request.
        ttl_seconds: Cache TTL for this response (cache default if ``None``).
        fetch: JSON fetcher, ``fetch(url, params)``.  Defaults to ``aiohttp``.

    Returns:
        Matching books, in the order Google returned them.

    Raises:
        LookupFetchError: If the upstream request fails.
    """
    normalized = query.strip()
    if not normalized:
        return []

    key = cache_key(normalized)
    cached = cache.get(key)
    if cached is not None:
        logger.debug(f"Book search cache hit for '{normalized}'")
        return cached

    params = {"q": normalized, "maxResults": str(max_results), "fields": VOLUME_FIELDS}
    if api_key:
        params["key"] = api_key

    payload = await (fetch or fetch_json)(GOOGLE_BOOKS_URL, params)
    results = parse_volumes(payload)
    cache.set(key, results, ttl_seconds)
    logger.info(f"Book search '{normalized}' returned {len(results)} results")
    return results
