"""Normalization passes for ``Efmt`` trees.

Pretty-printer output arrives as a deep tree of single-token leaves. The passes
here reshape it into the smallest tree the documentation site needs:

1. ``sink_right`` glues closing brackets onto the leaf before them.
2. ``sink_left`` glues opening brackets onto the leaf after them.
3. ``simplify`` merges adjacent leaves and drops pointless nesting.

None of the passes changes the flattened text of a tree. Concatenation chains
are walked with an explicit stack, so long expressions do not hit the
interpreter's recursion limit; only ``Nest`` boundaries recurse.
"""

from collections.abc import Sequence

from lean_doc_export.config import Config
from lean_doc_export.efmt.tree import Compose, Efmt, Leaf, Nest


def has_whitespace(text: str) -> bool:
    """Return True if any character of ``text`` is whitespace."""
    return any(character.isspace() for character in text)


def is_whitespace(text: str) -> bool:
    """Return True if every character of ``text`` is whitespace.

    The empty string counts as whitespace.
    """
    return all(character.isspace() for character in text)


def _spine(tree: Efmt) -> list[Efmt]:
    """Flatten the concatenation chain of ``tree`` into its non-Compose items."""
    items: list[Efmt] = []
    stack = [tree]
    while stack:
        node = stack.pop()
        if isinstance(node, Compose):
            stack.append(node.right)
            stack.append(node.left)
        else:
            items.append(node)
    return items


def _sink_right_item(item: Efmt, pending: Sequence[str]) -> Efmt:
    match item:
        case Leaf(text):
            return Leaf(text + "".join(pending))
        case Nest(child):
            return Nest(sink_right(child, pending))
        case _:
            raise TypeError(f"Not an Efmt node: {item!r}")


def _sink_left_item(item: Efmt, pending: Sequence[str]) -> Efmt:
    match item:
        case Leaf(text):
            return Leaf("".join(pending) + text)
        case Nest(child):
            return Nest(sink_left(child, pending))
        case _:
            raise TypeError(f"Not an Efmt node: {item!r}")


def sink_right(tree: Efmt, pending: Sequence[str] = ()) -> Efmt:
    """Attach closing-bracket leaves to the plain leaf on their left.

    The concatenation chain is read from its right end. Closing brackets are
    collected into ``pending`` and appended, in their original order, to the
    next plain leaf. A ``Nest`` receives the pending brackets inside its child.
    Empty leaves are dropped. The result is a left-leaning chain.

    Args:
        tree: Tree to rewrite.
        pending: Closing brackets already collected to the right of ``tree``.

    Returns:
        A new tree with the same flattened text.
    """
    items = _spine(tree)
    collected = list(pending)
    rewritten: list[Efmt] = []

    for item in reversed(items[1:]):
        if isinstance(item, Leaf) and item.text == "":
            continue
        if isinstance(item, Leaf) and item.text in Config.CLOSING_BRACKETS:
            collected.insert(0, item.text)
            continue
        rewritten.append(_sink_right_item(item, collected))
        collected = []

    result = _sink_right_item(items[0], collected)
    for item in reversed(rewritten):
        result = Compose(result, item)
    return result


def sink_left(tree: Efmt, pending: Sequence[str] = ()) -> Efmt:
    """Attach opening-bracket leaves to the plain leaf on their right.

    Mirror image of ``sink_right``: the chain is read from its left end and
    opening brackets are prepended, in their original order, to the next plain
    leaf. The result is a right-leaning chain.

    Args:
        tree: Tree to rewrite.
        pending: Opening brackets already collected to the left of ``tree``.

    Returns:
        A new tree with the same flattened text.
    """
    items = _spine(tree)
    collected = list(pending)
    rewritten: list[Efmt] = []

    for item in items[:-1]:
        if isinstance(item, Leaf) and item.text == "":
            continue
        if isinstance(item, Leaf) and item.text in Config.OPENING_BRACKETS:
            collected.append(item.text)
            continue
        rewritten.append(_sink_left_item(item, collected))
        collected = []

    result = _sink_left_item(items[-1], collected)
    for item in reversed(rewritten):
        result = Compose(item, result)
    return result


def sink_parens(tree: Efmt) -> Efmt:
    """Run ``sink_right`` and then ``sink_left`` with nothing pending."""
    return sink_left(sink_right(tree))


def compose_merge(left: Efmt, right: Efmt) -> Efmt:
    """Concatenate two simplified trees, merging leaves that end up adjacent.

    Merging looks at most one level into a ``Compose`` on either side.
    """
    match left, right:
        case Leaf(a), Leaf(b):
            return Leaf(a + b)
        case Leaf(a), Compose(Leaf(b), rest):
            return Compose(Leaf(a + b), rest)
        case Compose(rest, Leaf(a)), Leaf(b):
            return Compose(rest, Leaf(a + b))
        case _:
            return Compose(left, right)


def _simplify_nest(child: Efmt) -> Efmt:
    match child:
        case Leaf(text) if not has_whitespace(text):
            return child
        case Nest():
            return child
        case _:
            return Nest(child)


def simplify(tree: Efmt) -> Efmt:
    """Merge adjacent leaves and collapse redundant nesting, bottom-up.

    ``Nest(Nest(a))`` simplifies like ``Nest(a)``. A ``Nest`` whose simplified
    child is a leaf without any whitespace is dropped. Any other ``Nest`` is
    kept.
    """
    stack: list[tuple[Efmt, bool]] = [(tree, False)]
    results: list[Efmt] = []

    while stack:
        node, children_done = stack.pop()
        match node:
            case Leaf():
                results.append(node)
            case Compose(left, right):
                if children_done:
                    simplified_right = results.pop()
                    simplified_left = results.pop()
                    results.append(compose_merge(simplified_left, simplified_right))
                else:
                    stack.append((node, True))
                    stack.append((right, False))
                    stack.append((left, False))
            case Nest(Nest() as inner):
                stack.append((inner, False))
            case Nest(child):
                if children_done:
                    results.append(_simplify_nest(results.pop()))
                else:
                    stack.append((node, True))
                    stack.append((child, False))
            case _:
                raise TypeError(f"Not an Efmt node: {node!r}")

    return results.pop()


def normalize(tree: Efmt) -> Efmt:
    """Sink brackets, then simplify."""
    return simplify(sink_parens(tree))
