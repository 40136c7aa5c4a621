"""Ingest feature: single-file, archive and URL uploads."""
