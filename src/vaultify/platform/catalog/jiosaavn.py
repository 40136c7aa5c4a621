"""Where: src/vaultify/platform/catalog/jiosaavn.py
What: JioSaavn song search against a saavn.dev compatible API.
Why: Regional catalog with the best coverage for Tamil film music.
"""

from __future__ import annotations

import re
from typing import Any, Final

from vaultify.config import CatalogConfig
from vaultify.features.metadata.domain.normalizer import TextNormalizer
from vaultify.shared.errors import ExternalServiceError
from vaultify.shared.track_metadata import CandidateSource, MetadataCandidate

from .http_client import CatalogHTTPClient, HTTPClient
from .payload import payload_text
from .rate_limit import RateLimiter

PROVIDER_NAME: Final[str] = "JioSaavn"

# Preferred cover size; the API also serves 50x50 and 150x150 renditions.
_COVER_SIZE: Final[str] = "500x500"
_SIZE_IN_URL: Final[re.Pattern[str]] = re.compile(r"\d{2,4}x\d{2,4}")
_PREFERRED_IMAGE_INDEX: Final[int] = 2


class JioSaavnProvider:
    """Search JioSaavn songs and normalize them into catalog candidates."""

    name: str = PROVIDER_NAME

    def __init__(self, config: CatalogConfig, http: HTTPClient | None = None) -> None:
        self._config = config
        self._http: HTTPClient = http or CatalogHTTPClient(
            service=PROVIDER_NAME,
            timeout=config.timeout,
            max_attempts=config.max_attempts,
            rate_limiter=RateLimiter(config.min_request_interval),
        )

    @property
    def enabled(self) -> bool:
        return self._config.jiosaavn_enabled and bool(self._config.jiosaavn_base_url)

    def search(self, query: str, limit: int | None = None) -> list[MetadataCandidate]:
        """Search songs for ``query``.

        Raises:
            ExternalServiceError: When the provider is disabled or the request fails.
        """
        if not self.enabled:
            raise ExternalServiceError("JioSaavn is disabled", service=PROVIDER_NAME)

        result = self._http.get_json(
            f"{self._config.jiosaavn_base_url.rstrip('/')}/search/songs",
            {"query": query, "limit": limit or self._config.search_limit},
        )
        if not result.ok:
            raise ExternalServiceError(
                f"JioSaavn search failed for '{query}'", service=PROVIDER_NAME, status=result.status
            )
        return parse_search_response(result.data)


def upgrade_cover_url(url: str) -> str:
    """Rewrite a sized image URL to the preferred rendition."""

    return _SIZE_IN_URL.sub(_COVER_SIZE, url, count=1) if url else ""


def _pick_cover(images: Any) -> str:
    if isinstance(images, str):
        return upgrade_cover_url(images)
    if not isinstance(images, list) or not images:
        return ""
    preferred = images[_PREFERRED_IMAGE_INDEX] if len(images) > _PREFERRED_IMAGE_INDEX else images[-1]
    if not isinstance(preferred, dict):
        return ""
    url = preferred.get("link") or preferred.get("url") or ""
    return upgrade_cover_url(str(url))


def _artist_names(song: dict[str, Any]) -> str:
    primary = song.get("primaryArtists")
    if isinstance(primary, str) and primary.strip():
        return primary
    artists = song.get("artists")
    if isinstance(artists, dict):
        names = [
            str(artist.get("name"))
            for artist in artists.get("primary") or []
            if isinstance(artist, dict) and artist.get("name")
        ]
        return ", ".join(names)
    return ""


def parse_search_response(payload: Any) -> list[MetadataCandidate]:
    """Map a ``/search/songs`` payload onto catalog candidates.

    Raises:
        ExternalServiceError: If the payload does not have the expected shape.
    """
    data = payload.get("data") if isinstance(payload, dict) else None
    results = data.get("results") if isinstance(data, dict) else None
    if not isinstance(results, list):
        raise ExternalServiceError("Malformed JioSaavn search payload", service=PROVIDER_NAME)

    candidates: list[MetadataCandidate] = []
    for song in results:
        if not isinstance(song, dict):
            continue
        album = song.get("album")
        album_name = album.get("name") if isinstance(album, dict) else album
        candidates.append(
            MetadataCandidate(
                title=TextNormalizer.clean(payload_text(song.get("name")) or payload_text(song.get("title"))),
                artist=TextNormalizer.clean(_artist_names(song)),
                album=TextNormalizer.clean(payload_text(album_name)),
                genre=TextNormalizer.clean(payload_text(song.get("genre"))),
                cover_url=_pick_cover(song.get("image")),
                source=CandidateSource.CATALOG,
                provider=PROVIDER_NAME,
            )
        )
    return candidates


__all__ = ["JioSaavnProvider", "PROVIDER_NAME", "parse_search_response", "upgrade_cover_url"]
