"""Build documentation records for individual declarations.

``process_decl`` asks the host environment for everything the documentation
site shows about one declaration and turns each pretty-printed expression into
a normalized ``Efmt``. Failures are contained per declaration: a declaration
that cannot be processed is logged and left out of the export.
"""

import logging

from lean_doc_export.config import Config
from lean_doc_export.efmt import Efmt, from_pretty_print_tree, normalize
from lean_doc_export.efmt.pretty import PrettyTree
from lean_doc_export.extract.binders import count_named_intros, render_binder, render_pi
from lean_doc_export.extract.environment import BinderInfo, Environment
from lean_doc_export.extract.schemas import DeclInfo, DeclKind

logger = logging.getLogger(__name__)


def to_efmt(tree: PrettyTree) -> Efmt:
    """Convert and normalize one piece of pretty-printer output."""
    return normalize(from_pretty_print_tree(tree))


def kind_tag(host_kind: str) -> DeclKind:
    """Map a host declaration kind to its tag.

    Raises:
        ValueError: If the kind is not one of the known declaration kinds.
    """
    try:
        return Config.KIND_TAGS[host_kind]
    except KeyError:
        raise ValueError(f"Unknown declaration kind: {host_kind!r}") from None


def get_attributes(env: Environment, name: str) -> list[str]:
    """Return the allow-listed attributes present on ``name``, in allow-list order."""
    return [
        attribute
        for attribute in Config.ATTRIBUTE_ALLOW_LIST
        if env.has_attribute(name, attribute)
    ]


def get_equations(env: Environment, name: str, kind: DeclKind) -> list[Efmt]:
    """Return the rendered equation lemmas, or nothing for theorems."""
    if kind == "thm":
        return []
    return [to_efmt(equation) for equation in env.equations(name)]


def get_structure_fields(env: Environment, name: str) -> list[tuple[str, Efmt]]:
    if not env.is_structure(name):
        return []
    return [
        (field_name, to_efmt(field_type))
        for field_name, field_type in env.structure_fields(name)
    ]


def get_constructors(env: Environment, name: str) -> list[tuple[str, Efmt]]:
    if env.is_structure(name) or not env.is_inductive(name):
        return []
    return [
        (constructor_name, to_efmt(constructor_type))
        for constructor_name, constructor_type in env.constructors(name)
    ]


def _build_decl_info(env: Environment, name: str) -> DeclInfo:
    kind = kind_tag(env.kind(name))

    telescope = env.type_of(name)
    named_count = count_named_intros(telescope.binders)
    args = [
        (binder.info is not BinderInfo.DEFAULT, to_efmt(render_binder(binder)))
        for binder in telescope.binders[:named_count]
    ]
    return_type = to_efmt(
        render_pi(telescope.binders[named_count:], telescope.body)
    )

    position = env.position(name)
    if position is None:
        logger.debug(f"No source position for {name}")

    return DeclInfo(
        name=name,
        is_meta=env.is_meta(name),
        args=args,
        type=return_type,
        doc_string=env.doc_string(name),
        filename=position.filename if position else "",
        line=position.line if position else 0,
        attributes=get_attributes(env, name),
        equations=get_equations(env, name, kind),
        kind=kind,
        structure_fields=get_structure_fields(env, name),
        constructors=get_constructors(env, name),
    )


def process_decl(env: Environment, name: str) -> DeclInfo | None:
    """Build the documentation record for one declaration.

    Args:
        env: Host environment holding the declaration.
        name: Fully qualified declaration name.

    Returns:
        The record, or None if the declaration is internal, auto-generated, or
        could not be processed.
    """
    try:
        if env.is_internal(name) or env.is_auto_generated(name):
            logger.debug(f"Skipping internal declaration {name}")
            return None
        return _build_decl_info(env, name)
    except Exception as e:
        logger.warning(f"Skipping declaration {name}: {e}")
        return None
