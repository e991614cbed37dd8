"""Records written to the export document.

Each record owns its JSON encoding through ``to_json``. The encoding is fixed by
what the documentation site reads, so it is spelled out key by key instead of
relying on ``model_dump`` or ``asdict``. Records that hold ``Efmt`` trees are
plain dataclasses; the rest are pydantic models so they can be validated
straight from an environment dump.
"""

import dataclasses
import typing

from pydantic import BaseModel, Field

from lean_doc_export.efmt import Efmt, encode

DeclKind = typing.Literal["def", "thm", "cnst", "ax"]


@dataclasses.dataclass(frozen=True)
class DeclInfo:
    """Documentation metadata for a single declaration."""

    name: str
    """Fully qualified name (e.g., 'nat.add_comm')."""

    is_meta: bool
    """Whether the declaration only exists inside the host (meta code)."""

    args: list[tuple[bool, Efmt]]
    """(is_implicit, rendered binder) for every binder shown as an argument."""

    type: Efmt
    """Type left after the displayed arguments."""

    doc_string: str | None
    """Doc comment attached to the declaration, if any."""

    filename: str
    """Source file path."""

    line: int
    """Source line of the declaration."""

    attributes: list[str]
    """Allow-listed attributes present on the declaration."""

    equations: list[Efmt]
    """Rendered equation lemmas."""

    kind: DeclKind
    """Declaration kind tag."""

    structure_fields: list[tuple[str, Efmt]] = dataclasses.field(default_factory=list)
    """(field name, field type) for structures."""

    constructors: list[tuple[str, Efmt]] = dataclasses.field(default_factory=list)
    """(constructor name, constructor type) for inductive types."""

    def __post_init__(self) -> None:
        if self.line < 0:
            raise ValueError(f"Line must be non-negative, got {self.line}")

    def to_json(self, plain_text: bool = False) -> dict[str, typing.Any]:
        """Encode as a flat JSON object.

        Args:
            plain_text: Flatten every expression to a string instead of the
                nested array encoding.
        """
        return {
            "name": self.name,
            "is_meta": self.is_meta,
            "args": [
                {"arg": encode(binder, plain_text), "implicit": implicit}
                for implicit, binder in self.args
            ],
            "type": encode(self.type, plain_text),
            "doc_string": self.doc_string or "",
            "filename": self.filename,
            "line": self.line,
            "attributes": list(self.attributes),
            "equations": [encode(equation, plain_text) for equation in self.equations],
            "kind": self.kind,
            "structure_fields": [
                [field_name, encode(field_type, plain_text)]
                for field_name, field_type in self.structure_fields
            ],
            "constructors": [
                [constructor_name, encode(constructor_type, plain_text)]
                for constructor_name, constructor_type in self.constructors
            ],
        }


class ModuleDocInfo(BaseModel):
    """A free-standing documentation comment in a source file."""

    filename: str
    line: int = Field(ge=0)
    content: str

    def to_json(self) -> dict[str, typing.Any]:
        return {"line": self.line, "doc": self.content}


class TacticDocEntry(BaseModel):
    """Documentation entry for a tactic, command, hole command or attribute."""

    name: str
    category: str
    decl_names: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    description: str = ""


class ExtTacticDocEntry(TacticDocEntry):
    """A tactic doc entry with the module that makes it available."""

    imported: str = ""
    """Import classification, e.g. 'always imported', or '' when unknown."""

    def to_json(self) -> dict[str, typing.Any]:
        return {
            "name": self.name,
            "category": self.category,
            "decl_names": list(self.decl_names),
            "tags": list(self.tags),
            "description": self.description,
            "import": self.imported,
        }


@dataclasses.dataclass
class ExportDocument:
    """Everything written in one export run."""

    decls: list[DeclInfo] = dataclasses.field(default_factory=list)
    mod_docs: list[ModuleDocInfo] = dataclasses.field(default_factory=list)
    notes: list[tuple[str, str]] = dataclasses.field(default_factory=list)
    tactic_docs: list[ExtTacticDocEntry] = dataclasses.field(default_factory=list)
    instances: dict[str, list[str]] = dataclasses.field(default_factory=dict)

    def to_json(self, plain_text: bool = False) -> dict[str, typing.Any]:
        """Encode the top-level document.

        Module docs are grouped by file, keeping the order in which files and
        comments were first seen.
        """
        module_docs: dict[str, list[dict[str, typing.Any]]] = {}
        for module_doc in self.mod_docs:
            module_docs.setdefault(module_doc.filename, []).append(
                module_doc.to_json()
            )

        return {
            "decls": [decl.to_json(plain_text) for decl in self.decls],
            "mod_docs": module_docs,
            "notes": [[label, text] for label, text in self.notes],
            "tactic_docs": [entry.to_json() for entry in self.tactic_docs],
            "instances": {
                class_name: list(instance_names)
                for class_name, instance_names in self.instances.items()
            },
        }
