"""Shared test fixtures and configuration for lean-doc-export test suite."""

import json
import tempfile
from pathlib import Path
from typing import Generator
from unittest.mock import MagicMock

import pytest

from lean_doc_export.efmt.pretty import RawText
from lean_doc_export.extract.environment import (
    Binder,
    BinderInfo,
    EnvironmentDump,
    JsonEnvironment,
    SourcePosition,
    TypeTelescope,
)


@pytest.fixture
def temp_directory() -> Generator[Path, None, None]:
    """Create a temporary directory for file operations.

    Yields:
        Path: Path object pointing to temporary directory.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_environment_dump() -> dict:
    """Create a sample environment dump as the host would write it.

    Returns:
        dict: Dump with exportable, internal, auto-generated and broken
        declarations, plus module docs, notes, tactic docs and imports.
    """
    return {
        "declarations": [
            {
                "name": "nat.add_comm",
                "kind": "theorem",
                "module": "init.data.nat.lemmas",
                "binders": [
                    {"name": "n", "type": "ℕ"},
                    {"name": "m", "type": "ℕ"},
                ],
                "type": {"compose": [{"compose": ["n + m", " = "]}, "m + n"]},
                "filename": "library/init/data/nat/lemmas.lean",
                "line": 42,
                "doc_string": "Addition is commutative.",
                "attributes": ["simp"],
                "equations": ["not exported for theorems"],
            },
            {
                "name": "nat.has_add",
                "kind": "definition",
                "module": "init.core",
                "type": "has_add ℕ",
                "filename": "library/init/core.lean",
                "line": 7,
                "attributes": ["instance"],
                "instance_class": "has_add",
            },
            {
                "name": "_private.3141.helper",
                "kind": "definition",
                "type": "ℕ",
                "filename": "library/init/core.lean",
                "line": 9,
            },
            {
                "name": "nat.rec_on",
                "kind": "definition",
                "auto_generated": True,
                "type": "ℕ",
            },
            {
                "name": "broken",
                "kind": "definition",
                "type": {"bogus": "tag"},
                "filename": "library/init/core.lean",
                "line": 11,
            },
            {
                "name": "prod",
                "kind": "definition",
                "module": "init.core",
                "binders": [
                    {"name": "α", "info": "implicit", "type": "Type u"},
                    {"name": "β", "info": "implicit", "type": "Type v"},
                ],
                "type": "Type (max u v)",
                "filename": "library/init/core.lean",
                "line": 20,
                "is_structure": True,
                "is_inductive": True,
                "structure_fields": [["fst", "α"], ["snd", "β"]],
                "constructors": [["prod.mk", "α → β → prod α β"]],
            },
            {
                "name": "tactic.interactive.ring",
                "kind": "definition",
                "module": "tactic.ring",
                "is_meta": True,
                "type": "tactic unit",
                "filename": "src/tactic/ring.lean",
                "line": 500,
            },
        ],
        "module_docs": [
            {"filename": "library/init/core.lean", "line": 1, "content": "# Core"},
            {"filename": "library/init/core.lean", "line": 30, "content": "More"},
        ],
        "notes": [["simp lemmas", "Use simp sparingly."]],
        "tactic_docs": [
            {
                "name": "ring",
                "category": "tactic",
                "decl_names": ["tactic.interactive.ring"],
                "tags": ["arithmetic"],
                "description": "Normalizes commutative ring expressions.",
            }
        ],
        "imports": {
            "init": ["init.core", "init.data.nat.lemmas"],
            "tactic.core": ["init", "tactic.basic"],
            "tactic.default": ["tactic.core", "tactic.ring"],
        },
    }


@pytest.fixture
def sample_environment(sample_environment_dump) -> JsonEnvironment:
    """Create a JsonEnvironment over the sample dump."""
    return JsonEnvironment(EnvironmentDump.model_validate(sample_environment_dump))


@pytest.fixture
def environment_file(temp_directory, sample_environment_dump) -> Path:
    """Write the sample dump to a file.

    Returns:
        Path: Location of the written dump.
    """
    path = temp_directory / "environment.json"
    path.write_text(json.dumps(sample_environment_dump), encoding="utf-8")
    return path


@pytest.fixture
def mock_environment() -> MagicMock:
    """Create a mock host environment holding one plain definition.

    The definition is ``nat.double (n : ℕ) : ℕ`` with a doc string, one
    equation lemma and the ``simp`` attribute.

    Returns:
        MagicMock: Mock implementing the Environment protocol.
    """
    env = MagicMock()
    env.declaration_names.return_value = ["nat.double"]
    env.is_internal.return_value = False
    env.is_auto_generated.return_value = False
    env.is_meta.return_value = False
    env.kind.return_value = "definition"
    env.type_of.return_value = TypeTelescope(
        binders=[Binder(name="n", info=BinderInfo.DEFAULT, type=RawText("ℕ"))],
        body=RawText("ℕ"),
    )
    env.position.return_value = SourcePosition(filename="src/data/nat.lean", line=12)
    env.has_attribute.side_effect = lambda name, attribute: attribute == "simp"
    env.equations.return_value = [RawText("nat.double n = n + n")]
    env.is_structure.return_value = False
    env.is_inductive.return_value = False
    env.doc_string.return_value = "Twice a number."
    env.instance_class.return_value = None
    env.module_docs.return_value = []
    env.library_notes.return_value = []
    env.tactic_doc_entries.return_value = []
    return env
