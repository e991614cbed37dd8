"""Boundary to the host environment that owns the declaration table.

Everything the exporter knows about a declaration comes through the
``Environment`` protocol: its type, position, attributes, equation lemmas and so
on. ``JsonEnvironment`` implements the protocol over an environment dump, a JSON
file written by the host that lists every declaration with its pretty-printer
output already produced.
"""

import dataclasses
import json
import logging
import typing
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from lean_doc_export.efmt.pretty import PrettyTree, load_pretty_tree
from lean_doc_export.extract.schemas import ModuleDocInfo, TacticDocEntry

logger = logging.getLogger(__name__)


class EnvironmentLoadError(RuntimeError):
    """Raised when an environment dump cannot be read or validated."""


class BinderInfo(Enum):
    """How a binder is written in source."""

    DEFAULT = "default"
    """Explicit argument, written ``(x : A)``."""

    IMPLICIT = "implicit"
    """Implicit argument, written ``{x : A}``."""

    STRICT_IMPLICIT = "strict_implicit"
    """Strict implicit argument, written ``⦃x : A⦄``."""

    INST_IMPLICIT = "inst_implicit"
    """Instance argument, written ``[x : A]``."""


@dataclasses.dataclass(frozen=True)
class Binder:
    """One binder of a pi-type telescope."""

    name: str
    info: BinderInfo
    type: PrettyTree
    dependent: bool = False
    """Whether the rest of the type mentions the bound variable."""

    @property
    def is_anonymous(self) -> bool:
        return self.name in ("", "_")


@dataclasses.dataclass(frozen=True)
class TypeTelescope:
    """A declaration type split into its leading binders and the body."""

    binders: list[Binder]
    body: PrettyTree


@dataclasses.dataclass(frozen=True)
class SourcePosition:
    filename: str
    line: int


class Environment(typing.Protocol):
    """Read-only view of the host's declaration table."""

    def declaration_names(self) -> list[str]: ...

    def is_internal(self, name: str) -> bool: ...

    def is_auto_generated(self, name: str) -> bool: ...

    def is_meta(self, name: str) -> bool: ...

    def kind(self, name: str) -> str: ...

    def type_of(self, name: str) -> TypeTelescope: ...

    def position(self, name: str) -> SourcePosition | None: ...

    def has_attribute(self, name: str, attribute: str) -> bool: ...

    def equations(self, name: str) -> list[PrettyTree]: ...

    def is_structure(self, name: str) -> bool: ...

    def structure_fields(self, name: str) -> list[tuple[str, PrettyTree]]: ...

    def is_inductive(self, name: str) -> bool: ...

    def constructors(self, name: str) -> list[tuple[str, PrettyTree]]: ...

    def doc_string(self, name: str) -> str | None: ...

    def instance_class(self, name: str) -> str | None: ...

    def module_docs(self) -> list[ModuleDocInfo]: ...

    def library_notes(self) -> list[tuple[str, str]]: ...

    def tactic_doc_entries(self) -> list[TacticDocEntry]: ...

    def module_of(self, name: str) -> str | None: ...

    def imports_transitively(self, base_module: str, module: str) -> bool: ...


# =============================================================================
# Environment dump format
# =============================================================================


class BinderDump(BaseModel):
    name: str = ""
    info: BinderInfo = BinderInfo.DEFAULT
    type: typing.Any
    dependent: bool = False


class DeclarationDump(BaseModel):
    """A declaration as written by the host. Pretty trees stay raw JSON here."""

    name: str
    kind: str
    module: str | None = None
    is_meta: bool = False
    internal: bool = False
    auto_generated: bool = False
    binders: list[BinderDump] = Field(default_factory=list)
    type: typing.Any
    filename: str | None = None
    line: int | None = None
    doc_string: str | None = None
    attributes: list[str] = Field(default_factory=list)
    equations: list[typing.Any] = Field(default_factory=list)
    is_structure: bool = False
    structure_fields: list[tuple[str, typing.Any]] = Field(default_factory=list)
    is_inductive: bool = False
    constructors: list[tuple[str, typing.Any]] = Field(default_factory=list)
    instance_class: str | None = None


class EnvironmentDump(BaseModel):
    declarations: list[DeclarationDump] = Field(default_factory=list)
    module_docs: list[ModuleDocInfo] = Field(default_factory=list)
    notes: list[tuple[str, str]] = Field(default_factory=list)
    tactic_docs: list[TacticDocEntry] = Field(default_factory=list)
    imports: dict[str, list[str]] = Field(default_factory=dict)
    """Direct imports of each module."""


class JsonEnvironment:
    """``Environment`` backed by a validated environment dump.

    Pretty-printer trees are parsed when a declaration is queried, so a
    malformed tree only affects the declaration that carries it.
    """

    def __init__(self, dump: EnvironmentDump):
        self._dump = dump
        self._declarations = {
            declaration.name: declaration for declaration in dump.declarations
        }
        self._closures: dict[str, set[str]] = {}

    @classmethod
    def load(cls, path: str | Path) -> "JsonEnvironment":
        """Read and validate an environment dump.

        Raises:
            EnvironmentLoadError: If the file is missing, is not UTF-8 JSON, or does
                not match the dump format.
        """
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            dump = EnvironmentDump.model_validate(data)
        except (
            OSError,
            UnicodeDecodeError,
            json.JSONDecodeError,
            ValidationError,
        ) as e:
            raise EnvironmentLoadError(
                f"Could not load environment dump {path}: {e}"
            ) from e

        logger.info(
            f"Loaded {len(dump.declarations)} declarations from environment dump {path}"
        )
        return cls(dump)

    def _get(self, name: str) -> DeclarationDump:
        try:
            return self._declarations[name]
        except KeyError:
            raise KeyError(f"Unknown declaration: {name}") from None

    def declaration_names(self) -> list[str]:
        return [declaration.name for declaration in self._dump.declarations]

    def is_internal(self, name: str) -> bool:
        return self._get(name).internal or any(
            component.startswith("_") for component in name.split(".")
        )

    def is_auto_generated(self, name: str) -> bool:
        return self._get(name).auto_generated

    def is_meta(self, name: str) -> bool:
        return self._get(name).is_meta

    def kind(self, name: str) -> str:
        return self._get(name).kind

    def type_of(self, name: str) -> TypeTelescope:
        declaration = self._get(name)
        binders = [
            Binder(
                name=binder.name,
                info=binder.info,
                type=load_pretty_tree(binder.type),
                dependent=binder.dependent,
            )
            for binder in declaration.binders
        ]
        return TypeTelescope(binders=binders, body=load_pretty_tree(declaration.type))

    def position(self, name: str) -> SourcePosition | None:
        declaration = self._get(name)
        if declaration.filename is None or declaration.line is None:
            return None
        return SourcePosition(filename=declaration.filename, line=declaration.line)

    def has_attribute(self, name: str, attribute: str) -> bool:
        return attribute in self._get(name).attributes

    def equations(self, name: str) -> list[PrettyTree]:
        return [load_pretty_tree(equation) for equation in self._get(name).equations]

    def is_structure(self, name: str) -> bool:
        return self._get(name).is_structure

    def structure_fields(self, name: str) -> list[tuple[str, PrettyTree]]:
        return [
            (field_name, load_pretty_tree(field_type))
            for field_name, field_type in self._get(name).structure_fields
        ]

    def is_inductive(self, name: str) -> bool:
        return self._get(name).is_inductive

    def constructors(self, name: str) -> list[tuple[str, PrettyTree]]:
        return [
            (constructor_name, load_pretty_tree(constructor_type))
            for constructor_name, constructor_type in self._get(name).constructors
        ]

    def doc_string(self, name: str) -> str | None:
        return self._get(name).doc_string

    def instance_class(self, name: str) -> str | None:
        return self._get(name).instance_class

    def module_docs(self) -> list[ModuleDocInfo]:
        return list(self._dump.module_docs)

    def library_notes(self) -> list[tuple[str, str]]:
        return list(self._dump.notes)

    def tactic_doc_entries(self) -> list[TacticDocEntry]:
        return list(self._dump.tactic_docs)

    def module_of(self, name: str) -> str | None:
        declaration = self._declarations.get(name)
        return declaration.module if declaration else None

    def imports_transitively(self, base_module: str, module: str) -> bool:
        """Return True if importing ``base_module`` makes ``module`` available."""
        if base_module not in self._closures:
            self._closures[base_module] = self._import_closure(base_module)
        return module in self._closures[base_module]

    def _import_closure(self, base_module: str) -> set[str]:
        closure = {base_module}
        queue = [base_module]
        while queue:
            current = queue.pop()
            for imported in self._dump.imports.get(current, []):
                if imported not in closure:
                    closure.add(imported)
                    queue.append(imported)
        return closure
