import pytest
from pathlib import Path
from PIL import Image


def _palette_png(path: Path, colors: int = 256) -> Path:
    img = Image.new("P", (16, 16))
    palette = []
    for i in range(colors):
        palette.extend([i % 256, (i * 7) % 256, (i * 13) % 256])
    img.putpalette(palette)
    img.putpixel((0, 0), colors - 1)
    img.save(path, "PNG")
    return path


@pytest.fixture
def make_palette_png():
    """Returns a factory writing an indexed PNG (8-bit by default)."""
    return _palette_png


@pytest.fixture
def make_jpeg():
    """Returns a factory writing a 24-bit RGB JPEG."""
    def _make(path: Path, color=(200, 30, 30)) -> Path:
        Image.new("RGB", (16, 16), color).save(path, "JPEG")
        return path
    return _make
