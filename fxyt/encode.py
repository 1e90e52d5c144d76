"""
encode.py

Write a RenderResult to disk with Pillow.

    save(result, "out.png")   -> still image (single-frame results only)
    save(result, "out.gif")   -> looping GIF, one GIF frame per frame,
                                 each shown for frame.interval_ms
"""

import logging
from pathlib import Path

from PIL import Image

logger = logging.getLogger(__name__)


def to_image(frame) -> Image.Image:
    return Image.fromarray(frame.pixels)


def save(result, path) -> Path:
    path = Path(path)
    images = [to_image(f) for f in result]

    if path.suffix.lower() == ".gif":
        images[0].save(
            path,
            save_all=True,
            append_images=images[1:],
            duration=[f.interval_ms for f in result],
            loop=0,
        )
    elif len(images) == 1:
        images[0].save(path)
    else:
        raise ValueError(
            f"{len(images)} frames can only be saved as an animated .gif, not '{path.suffix}'"
        )

    logger.debug("wrote %d frame(s) to %s", len(images), path)
    return path
