from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from PIL import Image, UnidentifiedImageError

from app.portfolio.layout.ratios import LayoutItem

logger = logging.getLogger(__name__)

IMAGE_EXTS = {".jpg", ".jpeg", ".png", ".gif", ".webp", ".bmp", ".tif", ".tiff"}


def probe_image_size(path: str | Path) -> Optional[Tuple[int, int]]:
    """Read an image's pixel size without decoding the whole file.

    Args:
        path: Path to the image.

    Returns:
        (width, height), or None if the file can't be read as an image.
    """
    try:
        with Image.open(path) as img:
            return int(img.width), int(img.height)
    except (OSError, UnidentifiedImageError) as e:
        logger.warning("could not read image size for %s: %s", path, e)
        return None


def scan_image_items(folder: str | Path) -> List[LayoutItem]:
    """LayoutItems for the images directly inside `folder`, sorted by name.

    Unreadable files still get an item; layout treats them as square.
    """
    root = Path(folder)
    paths = sorted(
        (p for p in root.iterdir() if p.is_file() and p.suffix.lower() in IMAGE_EXTS),
        key=lambda p: p.name.casefold(),
    )
    items: List[LayoutItem] = []
    for p in paths:
        size = probe_image_size(p)
        width, height = size if size else (None, None)
        items.append(LayoutItem(key=str(p), width=width, height=height, payload=p))
    return items
