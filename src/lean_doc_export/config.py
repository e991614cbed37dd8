# src/lean_doc_export/config.py

"""Centralized configuration for lean_doc_export.

This module provides the input and output paths, which can be overridden from the
environment, and the static lookup tables used while exporting declarations.
"""

import os
import pathlib
import types


class Config:
    """Application-wide configuration settings."""

    ENVIRONMENT_PATH: pathlib.Path = pathlib.Path(
        os.getenv("LEAN_DOC_EXPORT_ENVIRONMENT", "environment.json")
    )
    """Environment dump read by the export command.

    Can be overridden with LEAN_DOC_EXPORT_ENVIRONMENT environment variable.
    Default: ./environment.json
    """

    OUTPUT_FILE: pathlib.Path = pathlib.Path(
        os.getenv("LEAN_DOC_EXPORT_OUTPUT_FILE", "json_export.txt")
    )
    """File written when exporting to a file instead of standard output.

    Can be overridden with LEAN_DOC_EXPORT_OUTPUT_FILE environment variable.
    Default: ./json_export.txt
    """

    ATTRIBUTE_ALLOW_LIST: tuple[str, ...] = (
        "simp",
        "norm_cast",
        "nolint",
        "ext",
        "instance",
        "class",
        "continuity",
        "to_additive",
        "reassoc",
        "refl",
        "symm",
        "trans",
        "congr",
        "elab_as_eliminator",
        "inline",
        "irreducible",
    )
    """Attributes reported for a declaration, in output order."""

    IMPORT_PRIORITY: tuple[tuple[str, str], ...] = (
        ("init", "always imported"),
        ("tactic.core", "tactic.core"),
        ("tactic.default", "tactic"),
    )
    """(base module, label) pairs used to classify where a tactic comes from.

    Checked in order; the first base module that transitively imports the
    tactic's declaration supplies the label.
    """

    OPENING_BRACKETS: tuple[str, ...] = ("(", "[", "{", "⦃")
    """Leaves glued onto the fragment that follows them."""

    CLOSING_BRACKETS: tuple[str, ...] = (")", "]", "}", "⦄")
    """Leaves glued onto the fragment that precedes them."""

    KIND_TAGS: types.MappingProxyType[str, str] = types.MappingProxyType(
        {
            "definition": "def",
            "theorem": "thm",
            "constant": "cnst",
            "axiom": "ax",
        }
    )
    """Host declaration kinds mapped to the tags used in the document."""
