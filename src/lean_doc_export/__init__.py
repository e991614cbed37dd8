"""Export Lean library declarations as JSON for the documentation site."""
