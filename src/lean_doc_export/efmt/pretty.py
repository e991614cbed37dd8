"""Tagged pretty-printer trees and their conversion into ``Efmt``.

The host pretty-printer produces trees with grouping, highlighting, nesting and
composition tags around raw text. Only nesting and composition survive the
conversion; the other tags carry nothing the documentation site uses.
"""

import dataclasses
import typing

from lean_doc_export.efmt.tree import Compose, Efmt, Leaf, Nest


class MalformedTreeError(ValueError):
    """Raised when serialized pretty-printer output is outside the known grammar."""


@dataclasses.dataclass(frozen=True)
class Group:
    child: "PrettyTree"


@dataclasses.dataclass(frozen=True)
class Highlight:
    color: str
    child: "PrettyTree"


@dataclasses.dataclass(frozen=True)
class NestTag:
    indent: int
    child: "PrettyTree"


@dataclasses.dataclass(frozen=True)
class ComposeTag:
    left: "PrettyTree"
    right: "PrettyTree"


@dataclasses.dataclass(frozen=True)
class RawText:
    text: str


PrettyTree = Group | Highlight | NestTag | ComposeTag | RawText


def from_pretty_print_tree(tree: PrettyTree) -> Efmt:
    """Convert a tagged pretty-printer tree into an ``Efmt``.

    Args:
        tree: Pretty-printer output built from the five tagged node kinds.

    Returns:
        The equivalent ``Efmt`` tree.

    Raises:
        TypeError: If ``tree`` contains a node outside the tagged-tree grammar.
    """
    match tree:
        case Group(child) | Highlight(_, child):
            return from_pretty_print_tree(child)
        case NestTag(_, child):
            return Nest(from_pretty_print_tree(child))
        case ComposeTag(left, right):
            return Compose(
                from_pretty_print_tree(left), from_pretty_print_tree(right)
            )
        case RawText(text):
            return Leaf(text)
        case _:
            raise TypeError(f"Not a pretty-printer tree node: {tree!r}")


def load_pretty_tree(data: typing.Any) -> PrettyTree:
    """Parse the JSON form of a tagged pretty-printer tree.

    Strings are raw text. Every other node is a single-key object:
    ``{"group": t}``, ``{"highlight": [color, t]}``, ``{"nest": [indent, t]}``
    or ``{"compose": [a, b]}``.

    Raises:
        MalformedTreeError: If ``data`` does not follow that shape.
    """
    if isinstance(data, str):
        return RawText(data)

    if not isinstance(data, dict) or len(data) != 1:
        raise MalformedTreeError(f"Expected a string or single-key object: {data!r}")

    ((tag, payload),) = data.items()

    if tag == "group":
        return Group(load_pretty_tree(payload))

    if not isinstance(payload, list) or len(payload) != 2:
        raise MalformedTreeError(f"Tag '{tag}' expects a 2-element array: {payload!r}")

    first, second = payload
    if tag == "highlight":
        return Highlight(str(first), load_pretty_tree(second))
    if tag == "nest":
        if not isinstance(first, int):
            raise MalformedTreeError(f"Nest indent must be an integer: {first!r}")
        return NestTag(first, load_pretty_tree(second))
    if tag == "compose":
        return ComposeTag(load_pretty_tree(first), load_pretty_tree(second))

    raise MalformedTreeError(f"Unknown pretty-printer tag: {tag!r}")
