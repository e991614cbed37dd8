"""JSON and plain-text encodings of ``Efmt`` trees."""

import typing

from lean_doc_export.efmt.tree import Compose, Efmt, Leaf, Nest

EncodedEfmt = str | list[typing.Any]


def to_json(tree: Efmt) -> EncodedEfmt:
    """Encode a tree as nested JSON arrays.

    A leaf becomes its string, a nest becomes ``["n", child]`` and a
    concatenation becomes ``["c", left, right]``. Each array is created when its
    node is visited and filled in as its children are, so long chains need no
    deep recursion.
    """
    root: list[EncodedEfmt] = []
    stack: list[tuple[Efmt, list[EncodedEfmt]]] = [(tree, root)]
    while stack:
        node, parent = stack.pop()
        match node:
            case Leaf(text):
                parent.append(text)
            case Nest(child):
                encoded: list[EncodedEfmt] = ["n"]
                parent.append(encoded)
                stack.append((child, encoded))
            case Compose(left, right):
                encoded = ["c"]
                parent.append(encoded)
                stack.append((right, encoded))
                stack.append((left, encoded))
            case _:
                raise TypeError(f"Not an Efmt node: {node!r}")
    return root[0]


def to_text(tree: Efmt) -> str:
    """Flatten a tree to the text it represents."""
    fragments: list[str] = []
    stack = [tree]
    while stack:
        node = stack.pop()
        match node:
            case Leaf(text):
                fragments.append(text)
            case Nest(child):
                stack.append(child)
            case Compose(left, right):
                stack.append(right)
                stack.append(left)
            case _:
                raise TypeError(f"Not an Efmt node: {node!r}")
    return "".join(fragments)


def encode(tree: Efmt, plain_text: bool = False) -> EncodedEfmt:
    """Encode a tree for the export document.

    Args:
        tree: Normalized tree.
        plain_text: Use the legacy encoding, which flattens the tree to a string.
    """
    if plain_text:
        return to_text(tree)
    return to_json(tree)
