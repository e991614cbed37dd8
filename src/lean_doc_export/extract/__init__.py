"""Declaration extraction from the host environment and document assembly."""

from lean_doc_export.extract.declarations import process_decl
from lean_doc_export.extract.environment import (
    Environment,
    EnvironmentLoadError,
    JsonEnvironment,
)
from lean_doc_export.extract.export import (
    ExportError,
    build_export_document,
    export_json,
)

__all__ = [
    "Environment",
    "EnvironmentLoadError",
    "ExportError",
    "JsonEnvironment",
    "build_export_document",
    "export_json",
    "process_decl",
]
