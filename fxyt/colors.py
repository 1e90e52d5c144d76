"""
colors.py

Scalar field -> RGB (H x W x 3, uint8).

Markus & Hess style two-branch map with a fixed symmetric scale:

    v < 0 : black -> yellow   (r = g = |v|)
    v = 0 : black
    v > 0 : black -> blue     (b = v)

|v| is clipped to DEFAULT_CLIP before scaling, so every value outside
[-1, 1] saturates. The scale never depends on the data, so a pixel's color
is a function of its own value only.
"""

import numpy as np

DEFAULT_CLIP = 1.0

NEG_COLOR = (1.0, 1.0, 0.0)   # yellow
POS_COLOR = (0.0, 0.0, 1.0)   # blue


def field_to_rgb(
    field: np.ndarray,
    clip: float = DEFAULT_CLIP,
) -> np.ndarray:
    arr = np.asarray(field, dtype=np.float64)
    rgb = np.zeros(arr.shape + (3,), dtype=np.uint8)

    # ---- v < 0  ->  black -> yellow ----
    neg_mask = arr < 0.0
    if np.any(neg_mask):
        t = np.clip(-arr[neg_mask], 0.0, clip) / clip
        for c in range(3):
            rgb[neg_mask, c] = np.rint(t * NEG_COLOR[c] * 255.0).astype(np.uint8)

    # ---- v > 0  ->  black -> blue ----
    pos_mask = arr > 0.0
    if np.any(pos_mask):
        t = np.clip(arr[pos_mask], 0.0, clip) / clip
        for c in range(3):
            rgb[pos_mask, c] = np.rint(t * POS_COLOR[c] * 255.0).astype(np.uint8)

    # v == 0 stays black: rgb is already zero there
    return rgb


def scalar_to_rgb(value: float) -> tuple[int, int, int]:
    """Color of a single value; same mapping as field_to_rgb."""
    r, g, b = field_to_rgb(np.array([[value]]))[0, 0]
    return int(r), int(g), int(b)
