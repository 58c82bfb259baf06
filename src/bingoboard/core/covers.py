"""Cover download and normalization.

Cover URLs come from several upstream catalogs (Goodreads, Google Books,
game and film databases).  They serve JPEG, WebP, PNG and the odd GIF, and
their ``Content-Type`` headers cannot be trusted to say which.  Every cover
is therefore re-encoded to one canonical format (PNG) before it is decoded
for drawing, so the renderer only ever sees one kind of image.

Pipeline
--------
1. **fetch**: download the raw bytes once.  No retries.
2. **normalize**: re-encode whatever arrived as PNG.
3. **decode**: open the PNG as an RGBA image ready for compositing.

Failures are reported as :class:`~bingoboard.core.errors.CoverFetchError`
(network, timeout, HTTP status) or
:class:`~bingoboard.core.errors.CoverDecodeError` (bytes that are not an
image).  The renderer treats both as fatal.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from io import BytesIO

import aiohttp
from PIL import Image, UnidentifiedImageError

from .errors import CoverDecodeError, CoverFetchError

logger = logging.getLogger(__name__)

CANONICAL_FORMAT = "PNG"

Fetcher = Callable[[str], Awaitable[bytes]]


def make_http_fetcher(timeout: float = 15.0) -> Fetcher:
    """Build the default ``aiohttp`` fetcher.

    Args:
        timeout: Total request timeout in seconds.

    Returns:
        An async callable mapping a URL to the response body.
    """

    async def fetch(url: str) -> bytes:
        client_timeout = aiohttp.ClientTimeout(total=timeout)
        try:
            async with aiohttp.ClientSession(timeout=client_timeout) as session:
                async with session.get(url) as response:
                    if response.status != 200:
                        raise CoverFetchError(
                            f"Cover request returned HTTP {response.status}", url=url
                        )
                    return await response.read()
        except aiohttp.ClientError as exc:
            raise CoverFetchError(f"Cover request failed: {exc}", url=url) from exc
        except TimeoutError as exc:
            raise CoverFetchError(f"Cover request timed out after {timeout}s", url=url) from exc

    return fetch


class CoverPipeline:
    """Fetch a cover and turn it into a drawable image.

    Args:
        fetcher: Async callable returning the raw bytes for a URL.  Defaults
            to an ``aiohttp`` fetcher.
        timeout: Timeout for the default fetcher.
    """

    def __init__(self, fetcher: Fetcher | None = None, *, timeout: float = 15.0) -> None:
        self._fetch = fetcher or make_http_fetcher(timeout)

    async def fetch(self, url: str) -> bytes:
        if not url:
            raise CoverFetchError("Filled cell has no cover link", url=url)
        try:
            data = await self._fetch(url)
        except CoverFetchError:
            raise
        except (aiohttp.ClientError, OSError) as exc:
            raise CoverFetchError(f"Cover request failed: {exc}", url=url) from exc

        if not data:
            raise CoverFetchError("Cover response was empty", url=url)
        return data

    @staticmethod
    def normalize(data: bytes, *, url: str | None = None) -> bytes:
        """Re-encode arbitrary image bytes as PNG.

        Raises:
            CoverDecodeError: If ``data`` is not a readable image.
        """
        try:
            with Image.open(BytesIO(data)) as source:
                source.load()
                image = source.convert("RGBA")
        except Image.DecompressionBombError as exc:
            raise CoverDecodeError(f"Cover is too large to decode: {exc}", url=url) from exc
        except (UnidentifiedImageError, OSError, ValueError) as exc:
            raise CoverDecodeError("Cover bytes are not a readable image", url=url) from exc

        buffer = BytesIO()
        image.save(buffer, format=CANONICAL_FORMAT)
        return buffer.getvalue()

    @staticmethod
    def decode(data: bytes, *, url: str | None = None) -> Image.Image:
        try:
            with Image.open(BytesIO(data)) as handle:
                handle.load()
                return handle.convert("RGBA")
        except (Image.DecompressionBombError, UnidentifiedImageError, OSError, ValueError) as exc:
            raise CoverDecodeError("Normalized cover could not be decoded", url=url) from exc

    async def fetch_and_normalize(self, url: str) -> Image.Image:
        """Download ``url`` and return it as an RGBA image."""
        data = await self.fetch(url)
        png = self.normalize(data, url=url)
        logger.debug(f"Normalized cover {url} ({len(data)} -> {len(png)} bytes)")
        return self.decode(png, url=url)
