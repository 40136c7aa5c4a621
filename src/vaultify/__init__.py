"""Vaultify: music upload service with multi-source metadata reconciliation."""

__version__ = "0.1.0"
