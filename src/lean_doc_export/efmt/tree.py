"""Tree model for pretty-printed expressions.

An ``Efmt`` is built from exactly three kinds of node: concatenation of two
subtrees, a leaf holding a string fragment, and a nesting marker that tells the
documentation renderer to group its child. Trees are immutable; every rewrite
pass builds a new tree.
"""

import dataclasses
import typing
from collections.abc import Callable

T = typing.TypeVar("T")


@dataclasses.dataclass(frozen=True)
class Compose:
    """Concatenation of ``left`` followed by ``right``."""

    left: "Efmt"
    right: "Efmt"


@dataclasses.dataclass(frozen=True)
class Leaf:
    """An opaque string fragment."""

    text: str


@dataclasses.dataclass(frozen=True)
class Nest:
    """A display-grouping level around ``child``. Never changes the text."""

    child: "Efmt"


Efmt = Compose | Leaf | Nest


def compose(*parts: T, node: Callable[[T, T], T] = Compose) -> T:
    """Concatenate ``parts`` into a left-leaning chain of ``node`` pairs.

    ``node`` defaults to ``Compose``; the binder renderer passes the
    pretty-printer's own concatenation tag to build its trees the same way.

    Raises:
        ValueError: If no parts are given.
    """
    if not parts:
        raise ValueError("compose() needs at least one part")

    result = parts[0]
    for part in parts[1:]:
        result = node(result, part)
    return result
