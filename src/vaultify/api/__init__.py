"""HTTP surface for Vaultify."""

from .app import create_app

__all__ = ["create_app"]
