"""Integration tests for bingoboard.api.main — FastAPI REST API endpoints.

All tests use the FastAPI TestClient.  The renderer created at startup is
replaced with one reading the temporary assets and fetching covers from a
fake fetcher, so no network access occurs.  Tests cover every endpoint:

- ``GET /api/boards`` — Board catalog.
- ``POST /api/boards/{board_id}/render`` — Board rendering and error mapping.
- ``GET /api/books`` — Book search with response caching.
"""

from __future__ import annotations

from io import BytesIO

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from bingoboard.api import book_search
from bingoboard.api.main import app
from bingoboard.core.assets import AssetCache
from bingoboard.core.covers import CoverPipeline
from bingoboard.core.errors import LookupFetchError
from bingoboard.core.renderer import BoardRenderer
from bingoboard.core.response_cache import ResponseCache


@pytest.fixture
def test_client(assets_dir, fetcher):
    """TestClient whose renderer uses the temporary assets and fake fetcher."""
    with TestClient(app) as client:
        app.state.renderer = BoardRenderer(AssetCache(assets_dir), CoverPipeline(fetcher))
        app.state.response_cache = ResponseCache(max_entries=10, default_ttl=60)
        yield client


def _cells(count: int = 25, covers: dict[int, str] | None = None) -> list[dict]:
    """Build a JSON cell array; ``covers`` maps filled indices to cover URLs."""
    cells = [{"isFilled": False} for _ in range(count)]
    for idx, url in (covers or {}).items():
        cells[idx] = {
            "isFilled": True,
            "title": "The Hobbit (Illustrated)",
            "author": "J.R.R. Tolkien",
            "imgLink": url,
            "starRating": 4,
            "hardMode": False,
        }
    return cells


# ---------------------------------------------------------------------------
# Catalog endpoint tests.
# ---------------------------------------------------------------------------


class TestListBoards:
    """Test GET /api/boards — board catalog."""

    def test_returns_all_boards(self, test_client):
        resp = test_client.get("/api/boards")
        assert resp.status_code == 200
        data = resp.json()
        assert "version" in data
        ids = [b["id"] for b in data["boards"]]
        assert ids == [
            "bingo_board",
            "fullybooked24",
            "fullybooked25",
            "fullybooked25_short_stories",
        ]

    def test_short_stories_advertises_extra_canvas(self, test_client):
        data = test_client.get("/api/boards").json()
        (info,) = [b for b in data["boards"] if b["id"] == "fullybooked25_short_stories"]
        assert info["features"]["extra_entries"] is True
        assert info["extra_canvas"] == {"width": 2000, "height": 2900}


# ---------------------------------------------------------------------------
# Render endpoint tests.
# ---------------------------------------------------------------------------


class TestRenderBoard:
    """Test POST /api/boards/{board_id}/render."""

    def test_render_returns_png(self, test_client, fetcher):
        resp = test_client.post(
            "/api/boards/fullybooked25/render", json=_cells(covers={12: "https://x/y.png"})
        )
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "image/png"

        image = Image.open(BytesIO(resp.content))
        assert image.format == "PNG"
        assert image.size == (2000, 2600)
        assert fetcher.calls == ["https://x/y.png"]

    def test_render_short_stories_with_extra_cells(self, test_client):
        resp = test_client.post("/api/boards/fullybooked25_short_stories/render", json=_cells(29))
        assert resp.status_code == 200
        assert Image.open(BytesIO(resp.content)).size == (2000, 2900)

    def test_unknown_board_404(self, test_client):
        resp = test_client.post("/api/boards/nope/render", json=_cells())
        assert resp.status_code == 404
        assert "nope" in resp.json()["detail"]

    def test_too_many_cells_400(self, test_client, fetcher):
        resp = test_client.post("/api/boards/fullybooked25/render", json=_cells(30))
        assert resp.status_code == 400
        assert fetcher.calls == []

    def test_invalid_rating_422(self, test_client):
        cells = _cells(covers={0: "https://x/y.png"})
        cells[0]["starRating"] = 9
        resp = test_client.post("/api/boards/fullybooked25/render", json=cells)
        assert resp.status_code == 422

    def test_cover_fetch_failure_502(self, test_client, assets_dir, make_fetcher):
        app.state.renderer = BoardRenderer(AssetCache(assets_dir), CoverPipeline(make_fetcher()))
        resp = test_client.post(
            "/api/boards/fullybooked25/render", json=_cells(covers={3: "https://x/missing.png"})
        )
        assert resp.status_code == 502
        assert "cell=3" in resp.json()["detail"]

    def test_cover_decode_failure_422(self, test_client, assets_dir, make_fetcher):
        fetcher = make_fetcher(default=b"<html>not an image</html>")
        app.state.renderer = BoardRenderer(AssetCache(assets_dir), CoverPipeline(fetcher))
        resp = test_client.post(
            "/api/boards/fullybooked25/render", json=_cells(covers={0: "https://x/y.png"})
        )
        assert resp.status_code == 422

    def test_missing_template_500(self, test_client, assets_dir):
        (assets_dir / "fullybooked24.png").unlink()
        resp = test_client.post("/api/boards/fullybooked24/render", json=_cells())
        assert resp.status_code == 500

    def test_camel_and_snake_case_accepted(self, test_client, fetcher):
        cells = _cells()
        cells[1] = {
            "is_filled": True,
            "title": "Dune",
            "cover_image_link": "https://x/dune.png",
            "star_rating": 2.5,
        }
        resp = test_client.post("/api/boards/fullybooked25/render", json=cells)
        assert resp.status_code == 200
        assert fetcher.calls == ["https://x/dune.png"]


# ---------------------------------------------------------------------------
# Book search endpoint tests.
# ---------------------------------------------------------------------------


VOLUMES = {
    "items": [
        {
            "volumeInfo": {
                "title": "The Hobbit",
                "authors": ["J.R.R. Tolkien"],
                "imageLinks": {"thumbnail": "http://books.example/hobbit.jpg"},
                "industryIdentifiers": [
                    {"type": "ISBN_10", "identifier": "0261102214"},
                    {"type": "ISBN_13", "identifier": "9780261102217"},
                ],
            }
        }
    ]
}


class TestBooks:
    """Test GET /api/books — Google Books search."""

    def test_search_results(self, test_client, monkeypatch):
        calls = []

        async def fake_fetch(url, params, **kwargs):
            calls.append(params)
            return VOLUMES

        monkeypatch.setattr(book_search, "fetch_json", fake_fetch)

        resp = test_client.get("/api/books", params={"search_q": "hobbit"})
        assert resp.status_code == 200
        assert resp.json() == [
            {
                "title": "The Hobbit",
                "author": "J.R.R. Tolkien",
                "cover_image_link": "https://books.example/hobbit.jpg",
                "edition_id": "9780261102217",
            }
        ]

        # Second request is answered from the response cache.
        test_client.get("/api/books", params={"search_q": "Hobbit "})
        assert len(calls) == 1

    def test_blank_query_returns_empty(self, test_client):
        resp = test_client.get("/api/books")
        assert resp.status_code == 200
        assert resp.json() == []

    def test_upstream_failure_502(self, test_client, monkeypatch):
        async def failing_fetch(url, params, **kwargs):
            raise LookupFetchError("Google Books returned HTTP 503")

        monkeypatch.setattr(book_search, "fetch_json", failing_fetch)

        resp = test_client.get("/api/books", params={"search_q": "dune"})
        assert resp.status_code == 502
