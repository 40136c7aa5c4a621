"""Where: src/vaultify/platform/catalog/spotify.py
What: Spotify track search through spotipy's client-credentials auth manager.
Why: General-purpose catalog fallback when the regional provider has nothing.
"""

from __future__ import annotations

import threading
from typing import Any, Final

import requests
import spotipy
from spotipy.cache_handler import MemoryCacheHandler
from spotipy.exceptions import SpotifyException
from spotipy.oauth2 import SpotifyClientCredentials, SpotifyOauthError

from vaultify.config import CatalogConfig
from vaultify.features.metadata.domain.normalizer import TextNormalizer
from vaultify.platform.logging import logger
from vaultify.shared.errors import ExternalServiceError
from vaultify.shared.track_metadata import CandidateSource, MetadataCandidate

from .payload import payload_text
from .rate_limit import RateLimiter

PROVIDER_NAME: Final[str] = "Spotify"


class SpotifyProvider:
    """Search Spotify tracks and normalize them into catalog candidates.

    Token caching and renewal belong to spotipy's auth manager; the client is
    built on first use so a missing credential never reaches the network.
    """

    name: str = PROVIDER_NAME

    def __init__(
        self,
        config: CatalogConfig,
        client: spotipy.Spotify | None = None,
        rate_limiter: RateLimiter | None = None,
    ) -> None:
        self._config = config
        self._client = client
        self._client_lock = threading.Lock()
        self._rate_limiter = rate_limiter or RateLimiter(config.min_request_interval)

    @property
    def enabled(self) -> bool:
        return self._config.spotify_enabled

    def search(self, query: str, limit: int | None = None) -> list[MetadataCandidate]:
        """Search tracks for ``query``.

        Raises:
            ExternalServiceError: On missing credentials, auth failure or a failed search.
        """
        client = self._spotify()
        self._rate_limiter.respect()
        try:
            payload = client.search(q=query, type="track", limit=limit or self._config.search_limit)
        except SpotifyException as exc:
            raise ExternalServiceError(
                f"Spotify search failed for '{query}'", service=PROVIDER_NAME, status=exc.http_status
            ) from exc
        except SpotifyOauthError as exc:
            raise ExternalServiceError("Spotify token request failed", service=PROVIDER_NAME) from exc
        except requests.RequestException as exc:
            raise ExternalServiceError(f"Spotify search failed for '{query}'", service=PROVIDER_NAME) from exc
        return parse_search_response(payload)

    def _spotify(self) -> spotipy.Spotify:
        if not self.enabled:
            raise ExternalServiceError("Spotify credentials are not configured", service=PROVIDER_NAME)

        with self._client_lock:
            if self._client is None:
                auth_manager = SpotifyClientCredentials(
                    client_id=self._config.spotify_client_id,
                    client_secret=self._config.spotify_client_secret,
                    requests_timeout=self._config.timeout,
                    cache_handler=MemoryCacheHandler(),
                )
                self._client = spotipy.Spotify(
                    auth_manager=auth_manager,
                    requests_timeout=self._config.timeout,
                    retries=max(0, self._config.max_attempts - 1),
                    status_retries=max(0, self._config.max_attempts - 1),
                )
                logger.debug("Spotify client initialised")
            return self._client


def parse_search_response(payload: Any) -> list[MetadataCandidate]:
    """Map a ``/v1/search`` track payload onto catalog candidates.

    Raises:
        ExternalServiceError: If the payload does not have the expected shape.
    """
    tracks = payload.get("tracks") if isinstance(payload, dict) else None
    items = tracks.get("items") if isinstance(tracks, dict) else None
    if not isinstance(items, list):
        raise ExternalServiceError("Malformed Spotify search payload", service=PROVIDER_NAME)

    candidates: list[MetadataCandidate] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        album = item.get("album") if isinstance(item.get("album"), dict) else {}
        artists = [
            payload_text(artist.get("name"))
            for artist in item.get("artists") or []
            if isinstance(artist, dict) and payload_text(artist.get("name"))
        ]
        genres = album.get("genres") or []
        images = album.get("images") or []
        cover = images[0].get("url") if images and isinstance(images[0], dict) else ""
        candidates.append(
            MetadataCandidate(
                title=TextNormalizer.clean(payload_text(item.get("name"))),
                artist=TextNormalizer.clean(", ".join(artists)),
                album=TextNormalizer.clean(payload_text(album.get("name"))),
                genre=TextNormalizer.clean(payload_text(genres[0])) if genres else "",
                cover_url=payload_text(cover),
                source=CandidateSource.CATALOG,
                provider=PROVIDER_NAME,
            )
        )
    return candidates


__all__ = ["PROVIDER_NAME", "SpotifyProvider", "parse_search_response"]
