"""Where: src/vaultify/platform/catalog/__init__.py
What: External catalog adapters (JioSaavn, Spotify) and their HTTP plumbing.
Why: Give the matcher providers in priority order from one configuration.
"""

from __future__ import annotations

from vaultify.config import CatalogConfig
from vaultify.platform.logging import logger

from .http_client import CatalogHTTPClient, HTTPClient, HTTPResult
from .jiosaavn import JioSaavnProvider
from .rate_limit import RateLimiter
from .spotify import SpotifyProvider


def build_providers(config: CatalogConfig) -> list[JioSaavnProvider | SpotifyProvider]:
    """Instantiate enabled providers, regional first.

    Spotify is skipped when its credentials are missing.
    """
    providers: list[JioSaavnProvider | SpotifyProvider] = []
    jiosaavn = JioSaavnProvider(config)
    if jiosaavn.enabled:
        providers.append(jiosaavn)
    spotify = SpotifyProvider(config)
    if spotify.enabled:
        providers.append(spotify)
    else:
        logger.info("Spotify credentials not configured; Spotify lookups disabled")
    return providers


__all__ = [
    "CatalogHTTPClient",
    "HTTPClient",
    "HTTPResult",
    "JioSaavnProvider",
    "RateLimiter",
    "SpotifyProvider",
    "build_providers",
]
