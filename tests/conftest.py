"""Shared pytest fixtures for bingoboard tests."""

import shutil
import tempfile
from io import BytesIO
from pathlib import Path
from typing import Generator

import pytest
from PIL import Image

from bingoboard.core.assets import AssetCache
from bingoboard.core.boards import board_registry
from bingoboard.core.config import BingoBoardConfig
from bingoboard.core.covers import CoverPipeline
from bingoboard.core.errors import CoverFetchError
from bingoboard.core.models import PromptCell
from bingoboard.core.renderer import BoardRenderer
from bingoboard.core.surface import RenderContext

COVER_COLOR = (200, 30, 30)
STAR_COLOR = (250, 200, 0)
BADGE_COLOR = (20, 20, 160)
BACKGROUND_COLOR = (230, 230, 230)

ICON_SIZES = {"star": (64, 64), "hard_mode": (96, 96)}


def image_bytes(color, size=(60, 90), fmt="JPEG") -> bytes:
    """Encode a solid-color image in ``fmt``."""
    buffer = BytesIO()
    Image.new("RGB", size, color).save(buffer, format=fmt)
    return buffer.getvalue()


class FakeFetcher:
    """Async cover fetcher serving canned bytes and recording every URL."""

    def __init__(self, responses: dict[str, bytes] | None = None, default: bytes | None = None):
        self.responses = responses or {}
        self.default = default
        self.calls: list[str] = []

    async def __call__(self, url: str) -> bytes:
        self.calls.append(url)
        if url in self.responses:
            return self.responses[url]
        if self.default is not None:
            return self.default
        raise CoverFetchError("HTTP 404", url=url)


class RecordingContext(RenderContext):
    """Render context that records every draw call before performing it."""

    instances: list["RecordingContext"] = []

    def __init__(self, size, **kwargs):
        super().__init__(size, **kwargs)
        self.images: list[dict] = []
        self.texts: list[dict] = []
        RecordingContext.instances.append(self)

    def draw_image(self, image, x, y, width=None, height=None, clip_width=None):
        self.images.append(
            {
                "source_size": image.size,
                "x": x,
                "y": y,
                "width": width,
                "height": height,
                "clip_width": clip_width,
            }
        )
        super().draw_image(image, x, y, width, height, clip_width)

    def fill_text(self, text, x, y):
        self.texts.append({"text": text, "x": x, "y": y, "font": self.font})
        super().fill_text(text, x, y)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def assets_dir(temp_dir: Path) -> Path:
    """Create an assets directory with every catalog template plus the icons.

    Templates are small solid images; the canvas size always comes from the
    board config, not from the template.
    """
    directory = temp_dir / "assets"
    directory.mkdir()

    templates = set()
    for board_id in board_registry.list_available():
        templates.add(board_registry.resolve(board_id, 25).template)
        templates.add(board_registry.resolve(board_id, 29).template)
    for name in templates:
        Image.new("RGBA", (100, 100), BACKGROUND_COLOR + (255,)).save(directory / f"{name}.png")

    Image.new("RGBA", ICON_SIZES["star"], STAR_COLOR + (255,)).save(directory / "star.png")
    Image.new("RGBA", ICON_SIZES["hard_mode"], BADGE_COLOR + (255,)).save(
        directory / "hard_mode.png"
    )
    return directory


@pytest.fixture
def test_config(temp_dir: Path, assets_dir: Path) -> BingoBoardConfig:
    """Create a test configuration pointing at the temporary assets."""
    return BingoBoardConfig(
        _env_file=None,
        assets_dir=str(assets_dir),
        cover_fetch_timeout=5,
        cache_max_entries=10,
        cache_ttl_seconds=60,
    )


@pytest.fixture
def cover_bytes() -> bytes:
    return image_bytes(COVER_COLOR)


@pytest.fixture
def fetcher(cover_bytes: bytes) -> FakeFetcher:
    return FakeFetcher(default=cover_bytes)


@pytest.fixture
def recording_renderer(assets_dir: Path, fetcher: FakeFetcher) -> BoardRenderer:
    """Renderer over the temporary assets, with a fake fetcher and recording contexts."""
    RecordingContext.instances = []
    return BoardRenderer(
        AssetCache(assets_dir),
        CoverPipeline(fetcher),
        context_factory=RecordingContext,
    )


@pytest.fixture
def empty_cells() -> list[PromptCell]:
    return [PromptCell(index=i) for i in range(25)]


@pytest.fixture
def hobbit_cells(empty_cells: list[PromptCell]) -> list[PromptCell]:
    """25 cells, all unfilled except the center square."""
    empty_cells[12] = PromptCell(
        index=12,
        is_filled=True,
        title="The Hobbit (Illustrated)",
        author="J.R.R. Tolkien",
        cover_image_link="https://x/y.png",
        star_rating=4,
        hard_mode=False,
    )
    return empty_cells


@pytest.fixture
def contexts(recording_renderer: BoardRenderer) -> list[RecordingContext]:
    """Render contexts created by ``recording_renderer``, in creation order."""
    return RecordingContext.instances


@pytest.fixture
def colors() -> dict[str, tuple[int, int, int]]:
    return {
        "cover": COVER_COLOR,
        "star": STAR_COLOR,
        "badge": BADGE_COLOR,
        "background": BACKGROUND_COLOR,
    }


@pytest.fixture
def make_fetcher():
    """Factory for :class:`FakeFetcher` instances with custom responses."""
    return FakeFetcher
