"""Pretty-printed expression trees and their normalization."""

from lean_doc_export.efmt.encode import encode, to_json, to_text
from lean_doc_export.efmt.normalize import normalize, simplify, sink_parens
from lean_doc_export.efmt.pretty import from_pretty_print_tree, load_pretty_tree
from lean_doc_export.efmt.tree import Compose, Efmt, Leaf, Nest

__all__ = [
    "Compose",
    "Efmt",
    "Leaf",
    "Nest",
    "encode",
    "from_pretty_print_tree",
    "load_pretty_tree",
    "normalize",
    "simplify",
    "sink_parens",
    "to_json",
    "to_text",
]
