"""
render.py

Program text -> frames of pixels.

    render("X")            -> 1 frame   (no T anywhere in the program)
    render("sin(X*8+T)")   -> 256 frames, t sweeping -1 .. 1

Every frame is a 256 x 256 grid, row 0 at the top. Pixel (row j, column i)
is evaluated at

    x = -1 + 2 i / 255      (left -1, right +1)
    y =  1 - 2 j / 255      (top +1, bottom -1)
    t = -1 + 2 f / 255      (frame f of 256; t = 0 for a still image)

and its value is colored by colors.field_to_rgb. The first pixel that fails
to evaluate (in frame, row, column order) aborts the whole render.
"""

import logging
import time
from dataclasses import dataclass

import numpy as np

from .colors import field_to_rgb
from .evaluator import EvalContext, evaluate
from .kernel import compile_program, scalar_field
from .nodes import uses_time
from .parser import parse

logger = logging.getLogger(__name__)

SIZE = 256
FRAME_COUNT = 256
FRAME_INTERVAL_MS = 100

BACKENDS = ("jit", "python")
DEFAULT_BACKEND = "jit"


# ---------------------------------------------------------------------------
# Output types
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class Frame:
    """One image: (SIZE, SIZE, 3) uint8, row-major, plus its display time."""

    pixels: np.ndarray
    interval_ms: int = FRAME_INTERVAL_MS

    def pixel(self, row: int, col: int) -> tuple[int, int, int]:
        r, g, b = self.pixels[row, col]
        return int(r), int(g), int(b)


@dataclass(frozen=True)
class RenderResult:
    frames: tuple

    @property
    def animated(self) -> bool:
        return len(self.frames) > 1

    def __len__(self) -> int:
        return len(self.frames)

    def __iter__(self):
        return iter(self.frames)

    def __getitem__(self, index) -> Frame:
        return self.frames[index]

    def to_array(self) -> np.ndarray:
        """All frames stacked: (n_frames, SIZE, SIZE, 3) uint8."""
        return np.stack([f.pixels for f in self.frames])


# ---------------------------------------------------------------------------
# Coordinate mapping
# ---------------------------------------------------------------------------

def normalize(index: int, count: int) -> float:
    """Map 0 .. count-1 linearly onto -1 .. 1."""
    denom = 1.0 if count <= 1 else (count - 1.0)
    return -1.0 + 2.0 * (index / denom)


def frame_time(frame: int, frame_count: int) -> float:
    if frame_count == 1:
        return 0.0
    return normalize(frame, frame_count)


def _python_field(node, size: int, t: float) -> np.ndarray:
    out = np.empty((size, size), dtype=np.float64)
    denom = 1.0 if size <= 1 else (size - 1.0)
    for j in range(size):
        y = 1.0 - 2.0 * (j / denom)
        for i in range(size):
            x = -1.0 + 2.0 * (i / denom)
            out[j, i] = evaluate(node, EvalContext(x, y, t))
    return out


def _make_frame(field: np.ndarray) -> Frame:
    pixels = field_to_rgb(field)
    pixels.flags.writeable = False
    return Frame(pixels, FRAME_INTERVAL_MS)


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def render_ast(node, *, backend: str = DEFAULT_BACKEND) -> RenderResult:
    """
    Render an already parsed program.

    backend="jit" evaluates each frame with the parallel numba kernel;
    backend="python" walks the tree for every pixel. Both give identical
    results: any frame in which the kernel reports a failed pixel is
    re-evaluated pixel by pixel, which raises the first EvalError.
    """
    if backend not in BACKENDS:
        raise ValueError(f"Unknown backend '{backend}'; use one of {', '.join(BACKENDS)}")

    frame_count = FRAME_COUNT if uses_time(node) else 1
    logger.debug("rendering %d frame(s) with the %s backend", frame_count, backend)

    program = None
    if backend == "jit":
        t0 = time.perf_counter()
        program = compile_program(node)
        logger.debug("compile time: %.3fs", time.perf_counter() - t0)

    frames = []
    for f in range(frame_count):
        t = frame_time(f, frame_count)
        if program is None:
            field = _python_field(node, SIZE, t)
        else:
            field, failed = scalar_field(program, SIZE, t)
            if failed.any():
                logger.debug("frame %d: %d pixel(s) failed, re-evaluating",
                             f, int(failed.sum()))
                field = _python_field(node, SIZE, t)
        frames.append(_make_frame(field))

    return RenderResult(tuple(frames))


def render(program_text: str, *, backend: str = DEFAULT_BACKEND) -> RenderResult:
    """
    Render a program to 1 frame, or to FRAME_COUNT frames if it uses T.

    Raises LexError / ParseError before any pixel work, and EvalError for
    the first pixel that cannot be evaluated. All are FxytError.
    """
    return render_ast(parse(program_text), backend=backend)
