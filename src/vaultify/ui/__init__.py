"""User interfaces (CLI)."""
