"""Rendering of binders and pi-types into tagged pretty-printer trees."""

from collections.abc import Sequence

from lean_doc_export.efmt.pretty import ComposeTag, Group, NestTag, PrettyTree, RawText
from lean_doc_export.efmt.tree import compose
from lean_doc_export.extract.environment import Binder, BinderInfo


def _concat(*parts: PrettyTree) -> PrettyTree:
    return compose(*parts, node=ComposeTag)


BRACKETS: dict[BinderInfo, tuple[str, str]] = {
    BinderInfo.DEFAULT: ("(", ")"),
    BinderInfo.IMPLICIT: ("{", "}"),
    BinderInfo.STRICT_IMPLICIT: ("⦃", "⦄"),
    BinderInfo.INST_IMPLICIT: ("[", "]"),
}


def count_named_intros(binders: Sequence[Binder]) -> int:
    """Count the leading binders that are displayed as named arguments.

    An anonymous, non-dependent binder is an ordinary arrow and ends the count.
    Every other binder counts as one argument.
    """
    count = 0
    for binder in binders:
        if binder.is_anonymous and not binder.dependent:
            break
        count += 1
    return count


def render_binder(binder: Binder) -> PrettyTree:
    """Render a binder with its brackets, e.g. ``{α : Type u}``.

    Anonymous instance binders are rendered as just the class, ``[has_add α]``.
    """
    opening, closing = BRACKETS[binder.info]
    if binder.is_anonymous and binder.info is BinderInfo.INST_IMPLICIT:
        inner = binder.type
    else:
        inner = _concat(
            RawText(binder.name or "_"),
            RawText(" :"),
            NestTag(1, _concat(RawText(" "), binder.type)),
        )
    return Group(NestTag(1, _concat(RawText(opening), inner, RawText(closing))))


def render_pi(binders: Sequence[Binder], body: PrettyTree) -> PrettyTree:
    """Render binders in front of ``body`` as arrows or ``∀`` binders."""
    result = body
    for binder in reversed(binders):
        if binder.is_anonymous and not binder.dependent:
            head = _concat(binder.type, RawText(" →"))
        else:
            head = _concat(RawText("∀ "), render_binder(binder), RawText(","))
        result = Group(_concat(head, NestTag(2, _concat(RawText(" "), result))))
    return result
