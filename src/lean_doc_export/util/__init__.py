"""Shared utilities for lean_doc_export."""

from lean_doc_export.util.logging import setup_logging

__all__ = ["setup_logging"]
