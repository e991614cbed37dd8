"""Assemble and write the export document.

The declaration table is enumerated once and every declaration is processed in
order. Module docs, library notes, tactic docs and the instance map are
collected alongside, and the whole document is written in one go at the end.
"""

import dataclasses
import json
import logging
import sys
import typing
from pathlib import Path

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeRemainingColumn,
)

from lean_doc_export.extract.declarations import process_decl
from lean_doc_export.extract.environment import Environment
from lean_doc_export.extract.schemas import DeclInfo, ExportDocument
from lean_doc_export.extract.tactics import extend_tactic_doc_entries

logger = logging.getLogger(__name__)


class ExportError(RuntimeError):
    """Raised when the export cannot run at all."""


def _process_declarations(env: Environment, names: list[str]) -> list[DeclInfo]:
    declarations = []

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeRemainingColumn(),
        console=Console(stderr=True),
    ) as progress:
        task = progress.add_task("[cyan]Processing declarations...", total=len(names))

        for name in names:
            declaration = process_decl(env, name)
            if declaration is not None:
                declarations.append(declaration)
            progress.update(task, advance=1)

    return declarations


def collect_instances(
    env: Environment, declarations: list[DeclInfo]
) -> dict[str, list[str]]:
    """Group instance declarations by the class they implement.

    Instances whose class cannot be determined are left out.
    """
    instances: dict[str, list[str]] = {}
    for declaration in declarations:
        if "instance" not in declaration.attributes:
            continue
        try:
            class_name = env.instance_class(declaration.name)
        except Exception as e:
            logger.warning(f"Could not find class of instance {declaration.name}: {e}")
            continue
        if class_name:
            instances.setdefault(class_name, []).append(declaration.name)
    return instances


def build_export_document(env: Environment) -> ExportDocument:
    """Collect everything the documentation site needs from ``env``.

    Raises:
        ExportError: If the declaration table cannot be enumerated.
    """
    try:
        names = env.declaration_names()
    except Exception as e:
        raise ExportError(f"Could not enumerate declarations: {e}") from e

    logger.info(f"Found {len(names)} declarations")
    declarations = _process_declarations(env, names)
    logger.info(
        f"Exported {len(declarations)} declarations "
        f"(skipped {len(names) - len(declarations)})"
    )

    return ExportDocument(
        decls=declarations,
        mod_docs=env.module_docs(),
        notes=env.library_notes(),
        tactic_docs=extend_tactic_doc_entries(env),
        instances=collect_instances(env, declarations),
    )


def _dumps(value: typing.Any) -> str:
    return json.dumps(value, ensure_ascii=False)


def _render_declarations(
    declarations: list[DeclInfo], plain_text: bool
) -> tuple[list[str], set[str]]:
    """Serialize each declaration on its own.

    Returns:
        The serialized declarations and the names of those left out because
        their expressions nest too deeply to serialize.
    """
    rendered = []
    dropped = set()
    for declaration in declarations:
        try:
            rendered.append(_dumps(declaration.to_json(plain_text)))
        except RecursionError as e:
            logger.warning(f"Skipping declaration {declaration.name}: {e}")
            dropped.add(declaration.name)
    return rendered, dropped


def render_document(document: ExportDocument, plain_text: bool = False) -> str:
    """Serialize the document as JSON text.

    A declaration that cannot be serialized is left out, along with its entry in
    the instance map, instead of failing the whole document.
    """
    declarations, dropped = _render_declarations(document.decls, plain_text)
    instances = {}
    for class_name, names in document.instances.items():
        kept = [name for name in names if name not in dropped]
        if kept:
            instances[class_name] = kept

    rest = dataclasses.replace(document, decls=[], instances=instances).to_json(
        plain_text
    )
    del rest["decls"]

    fields = [f'"decls": [{", ".join(declarations)}]']
    fields.extend(f"{_dumps(key)}: {_dumps(value)}" for key, value in rest.items())
    return "{" + ", ".join(fields) + "}"


def write_export(text: str, output_file: str | Path) -> None:
    """Write serialized document text to ``output_file``."""
    output_file = Path(output_file)
    with open(output_file, "w", encoding="utf-8") as f:
        f.write(text)
    logger.info(f"Wrote export to {output_file}")


def print_export(text: str) -> None:
    """Write serialized document text to standard output as UTF-8."""
    sys.stdout.flush()
    sys.stdout.buffer.write(text.encode("utf-8") + b"\n")
    sys.stdout.buffer.flush()


def export_json(
    env: Environment,
    output_file: str | Path | None = None,
    plain_text: bool = False,
) -> ExportDocument:
    """Export the documentation document for ``env``.

    Args:
        env: Host environment to export.
        output_file: Write the document here instead of standard output.
        plain_text: Flatten expressions to strings (legacy encoding).

    Returns:
        The exported document.

    Raises:
        ExportError: If the declaration table cannot be enumerated.
    """
    document = build_export_document(env)
    text = render_document(document, plain_text)

    if output_file is None:
        print_export(text)
    else:
        write_export(text, output_file)

    return document
