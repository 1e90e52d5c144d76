"""
nodes.py

The parsed form of a program: a small closed set of immutable node types.

    "sin(X * 8) + T"  ->  BinaryOp("+",
                                   Call("sin", (BinaryOp("*", Variable(X), Literal(8.0)),)),
                                   Variable(T))

Nodes are frozen dataclasses holding their children directly (a tree, no
sharing), so one tree can be evaluated any number of times, from any number
of threads, without copying.
"""

from dataclasses import dataclass
from enum import Enum


class Coord(Enum):
    X = "X"
    Y = "Y"
    T = "T"


@dataclass(frozen=True)
class Literal:
    value: float


@dataclass(frozen=True)
class Variable:
    coord: Coord


@dataclass(frozen=True)
class UnaryOp:
    op: str
    operand: object


@dataclass(frozen=True)
class BinaryOp:
    op: str
    left: object
    right: object


@dataclass(frozen=True)
class Call:
    name: str
    args: tuple


@dataclass(frozen=True)
class Conditional:
    test: object
    consequent: object
    alternate: object


# ---------------------------------------------------------------------------
# Traversal helpers (iterative, so arbitrarily deep trees are fine)
# ---------------------------------------------------------------------------

def children(node) -> tuple:
    if isinstance(node, UnaryOp):
        return (node.operand,)
    if isinstance(node, BinaryOp):
        return (node.left, node.right)
    if isinstance(node, Call):
        return node.args
    if isinstance(node, Conditional):
        return (node.test, node.consequent, node.alternate)
    return ()


def walk(node):
    """Yield every node of the tree in pre-order."""
    stack = [node]
    while stack:
        cur = stack.pop()
        yield cur
        stack.extend(reversed(children(cur)))


def depth(node) -> int:
    best = 0
    stack = [(node, 1)]
    while stack:
        cur, d = stack.pop()
        if d > best:
            best = d
        for child in children(cur):
            stack.append((child, d + 1))
    return best


def uses_time(node) -> bool:
    """
    True if a T coordinate appears anywhere in the tree.

    This is a static property: a T inside a branch that is never taken
    still counts, which is what fixes the frame count of a render before
    any pixel is evaluated.
    """
    return any(isinstance(n, Variable) and n.coord is Coord.T for n in walk(node))
