"""Command-line interface for lean_doc_export."""
