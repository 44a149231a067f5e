"""
Heuristic media classification.

Two separate questions are answered here:
  - What kind of file is this? Pure extension lookup, no content sniffing.
    A photo renamed to .txt is 'other', and that is accepted.
  - Is this image a logo/drawing rather than a photo? Decided from the
    bits per pixel of the decoded image: palette and 8-bit images are logos.
"""
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from PIL import Image, UnidentifiedImageError

from .. import config
from ..exceptions import ImageDecodeError


class MediaKind(str, Enum):
    IMAGE = "image"
    VIDEO = "video"
    OTHER = "other"


@dataclass(frozen=True)
class ImageInfo:
    width: int
    height: int
    color_depth: int  # bits per pixel, -1 when the layout is not recognized


# Stored (on-disk) layouts. Checked first because Pillow widens some of them
# when decoding, e.g. a 16-bit-per-channel PNG opens as plain 'RGB'.
RAW_MODE_DEPTHS = {
    'RGBA;16B': 64, 'RGBA;16L': 64,
    'RGB;16B': 48, 'RGB;16L': 48,
    # 2-bit layouts are reported as 4
    'P;1': 1, 'P;2': 4, 'P;4': 4,
    'L;1': 1, 'L;2': 4, 'L;4': 4,
    '1': 1,
    # BMP stores its layout only in the tile args; the image itself is 'RGB'
    'BGRX': 32, 'BGRA': 32,
    'BGR;24': 24,
    'BGR;15': 16, 'BGR;16': 16,
}

# Pillow image modes
MODE_DEPTHS = {
    'RGBA': 32, 'RGBa': 32, 'RGBX': 32, 'CMYK': 32, 'I': 32, 'F': 32,
    'RGB': 24, 'YCbCr': 24, 'LAB': 24, 'HSV': 24,
    'LA': 16, 'La': 16, 'PA': 16,
    'I;16': 16, 'I;16B': 16, 'I;16L': 16, 'I;16N': 16,
    'L': 8, 'P': 8,
    '1': 1,
}


def classify(filename: str) -> MediaKind:
    """Maps a filename to its MediaKind, looking only at the extension."""
    ext = Path(filename).suffix.lower()
    return MediaKind(config.EXT_TO_TYPE.get(ext, MediaKind.OTHER.value))


def _raw_mode(image: Image.Image) -> Optional[str]:
    """
    Returns the decoder raw mode of a freshly opened image, if it has one.
    Tiles are consumed by load(), so this must run before decoding.
    """
    tile = getattr(image, "tile", None)
    if not tile:
        return None
    args = tile[0][3]
    if isinstance(args, str):
        return args
    if isinstance(args, tuple) and args and isinstance(args[0], str):
        return args[0]
    return None


def color_depth(image: Image.Image, raw_mode: Optional[str] = None) -> int:
    """Bits per pixel for a decoded image, or -1 when unknown."""
    if raw_mode is None:
        raw_mode = _raw_mode(image)
    if raw_mode in RAW_MODE_DEPTHS:
        return RAW_MODE_DEPTHS[raw_mode]
    return MODE_DEPTHS.get(image.mode, config.UNKNOWN_COLOR_DEPTH)


def is_logo(kind: MediaKind, depth: Optional[int]) -> bool:
    if kind is not MediaKind.IMAGE or depth is None:
        return False
    return 0 < depth <= config.LOGO_MAX_COLOR_DEPTH


class ImageInspector:
    def inspect(self, path: Path) -> ImageInfo:
        """
        Opens and fully decodes the image.

        Raises:
            ImageDecodeError: the file is missing, truncated or not an image
                              Pillow understands.
        """
        try:
            with Image.open(path) as image:
                raw_mode = _raw_mode(image)
                image.load()
                return ImageInfo(
                    width=image.width,
                    height=image.height,
                    color_depth=color_depth(image, raw_mode),
                )
        except (UnidentifiedImageError, OSError, ValueError) as e:
            raise ImageDecodeError(f"Cannot decode image {path}: {e}") from e
