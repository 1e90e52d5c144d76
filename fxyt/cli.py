"""
cli.py

Command-line front end:

    fxyt "X"                              -> output.gif (one frame)
    fxyt "sin(X*8 + T*pi)" --out wave.gif -> 256-frame animation
    fxyt --file prog.fxyt --out still.png --show
"""

import argparse
import logging
import sys
import time

from .encode import save
from .errors import FxytError
from .parser import parse
from .render import BACKENDS, DEFAULT_BACKEND, render_ast
from .symbolic import to_text

USAGE_EXAMPLES = (
    'For example: `fxyt "X"` or `fxyt "sin(X*8 + T*pi)"`.\n'
    "Coordinates X, Y and T run from -1 to 1; T only exists in animations."
)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        "fxyt",
        description=(
            "Render an expression of X, Y (and T) to a 256x256 image.\n"
            "Programs that use T become 256-frame animated GIFs."
        ),
        epilog=USAGE_EXAMPLES,
    )

    p.add_argument(
        "program",
        nargs="?",
        default=None,
        help="Program text, e.g. 'X*Y' or 'sin(X*8 + T*pi)'.",
    )
    p.add_argument(
        "--file",
        type=str,
        default=None,
        help="Read the program from this file instead.",
    )
    p.add_argument(
        "--out",
        type=str,
        default="output.gif",
        help="Output path; .gif for animations, .png/.gif for still images.",
    )
    p.add_argument(
        "--backend",
        choices=BACKENDS,
        default=DEFAULT_BACKEND,
        help="Evaluate with the parallel numba kernel or the pure Python walker.",
    )
    p.add_argument(
        "--show",
        action="store_true",
        help="Preview the first frame with matplotlib.",
    )
    p.add_argument(
        "--show-expr",
        action="store_true",
        help="Print the parsed program in symbolic form before rendering.",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Debug logging.",
    )
    return p


def _read_program(args) -> str | None:
    if args.file is not None:
        with open(args.file, encoding="utf-8") as fh:
            return fh.read()
    return args.program


def show_frame(frame, title: str) -> None:
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(5, 5))
    ax.imshow(frame.pixels, origin="upper", extent=[-1, 1, -1, 1], interpolation="nearest")
    ax.set_title(title)
    ax.set_xlabel("X")
    ax.set_ylabel("Y")
    plt.tight_layout()
    plt.show()


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        program = _read_program(args)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if program is None:
        print("Error: please pass the program as a command line argument.", file=sys.stderr)
        print(USAGE_EXAMPLES, file=sys.stderr)
        return 2

    try:
        node = parse(program)
        if args.show_expr:
            print(f"expr: {to_text(node)}")

        print(f"Rendering {program.strip()}")
        t0 = time.perf_counter()
        result = render_ast(node, backend=args.backend)
        print(f"render time: {time.perf_counter() - t0:.3f}s ({len(result)} frame(s))")
    except FxytError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        out = save(result, args.out)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(f"saved: {out}")

    if args.show:
        show_frame(result[0], program.strip())

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
