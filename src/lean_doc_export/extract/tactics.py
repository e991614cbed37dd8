"""Tactic documentation entries and where they become available."""

import logging

from lean_doc_export.config import Config
from lean_doc_export.extract.environment import Environment
from lean_doc_export.extract.schemas import ExtTacticDocEntry, TacticDocEntry

logger = logging.getLogger(__name__)


def classify_import(env: Environment, entry: TacticDocEntry) -> str:
    """Label the base module that brings an entry into scope.

    The entry's first declaration name decides. Base modules are checked in
    ``Config.IMPORT_PRIORITY`` order and the first one that transitively
    imports the declaring module wins.

    Returns:
        The matching label, or '' if the entry has no declarations or none of
        the base modules provides it.
    """
    if not entry.decl_names:
        return ""

    module = env.module_of(entry.decl_names[0])
    if module is None:
        logger.debug(f"No module known for {entry.decl_names[0]} ({entry.name})")
        return ""

    for base_module, label in Config.IMPORT_PRIORITY:
        if env.imports_transitively(base_module, module):
            return label
    return ""


def extend_tactic_doc_entries(env: Environment) -> list[ExtTacticDocEntry]:
    """Return every tactic doc entry with its import classification."""
    return [
        ExtTacticDocEntry(**entry.model_dump(), imported=classify_import(env, entry))
        for entry in env.tactic_doc_entries()
    ]
