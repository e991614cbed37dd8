"""Allow ``python -m lean_doc_export``."""

from lean_doc_export.cli.main import app

if __name__ == "__main__":
    app()
