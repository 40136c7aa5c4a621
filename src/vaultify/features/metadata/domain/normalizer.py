"""Candidate text normalization.

Where: src/vaultify/features/metadata/domain/normalizer.py
What: Strip promotional, quality and source-site tokens and decode HTML entities.
Why: Tag, filename and catalog strings must agree textually before they can be compared.
"""

from __future__ import annotations

import html
import re
import unicodedata
from typing import ClassVar, final


@final
class TextNormalizer:
    """Normalize raw metadata strings.

    ``clean`` is the display normalization applied to every candidate field.
    ``search_term`` additionally folds case and punctuation for query building.
    """

    # Annotation tokens removed when they appear inside [] or ().
    ANNOTATION_TOKENS: ClassVar[tuple[str, ...]] = (
        r"official\s+(?:music\s+)?video",
        r"official\s+audio",
        r"official\s+lyric(?:al)?\s+video",
        r"lyric(?:al)?\s+video",
        r"full\s+video\s+song",
        r"video\s+song",
        r"audio\s+song",
        r"hd",
        r"hq",
        r"1080p",
        r"720p",
        r"4k",
        r"(?:tamil|tamizh)\s+(?:hd|hq|song|movie|audio|video)",
    )

    # Source-site names removed wherever they appear.
    SOURCE_SITES: ClassVar[tuple[str, ...]] = (
        r"masstamilan(?:\.(?:dev|io|com|in|fm))?",
        r"isaimini(?:\.(?:com|in|net))?",
        r"starmusiq(?:\.(?:com|fun|xyz))?",
    )

    ANNOTATION_PATTERN: ClassVar[re.Pattern[str]] = re.compile(
        r"\[\s*(?:{0})\s*\]|\(\s*(?:{0})\s*\)".format("|".join(ANNOTATION_TOKENS)),
        re.IGNORECASE,
    )
    # A site name takes one adjacent separator with it: "Song - MassTamilan.dev" -> "Song".
    SOURCE_SITE_PATTERN: ClassVar[re.Pattern[str]] = re.compile(
        r"(?P<before>\s*[-_|:]\s*)?\b(?:{0})\b(?P<after>\s*[-_|:]\s*)?".format("|".join(SOURCE_SITES)),
        re.IGNORECASE,
    )
    EMPTY_BRACKETS: ClassVar[re.Pattern[str]] = re.compile(r"\[\s*\]|\(\s*\)")
    BRACKETED_SEGMENT: ClassVar[re.Pattern[str]] = re.compile(r"\[[^\]]*\]|\([^)]*\)")
    MULTIPLE_SPACES: ClassVar[re.Pattern[str]] = re.compile(r"\s+")

    # Guard for the fixed-point loop; every pass strictly shortens the text.
    _MAX_PASSES: ClassVar[int] = 16

    @classmethod
    def decode_entities(cls, text: str | None) -> str:
        """Decode HTML entities such as ``&quot;`` and ``&amp;``."""

        if not text:
            return ""
        return html.unescape(text)

    @classmethod
    def _clean_once(cls, text: str) -> str:
        text = cls.decode_entities(text)
        text = cls.ANNOTATION_PATTERN.sub(" ", text)
        text = cls.SOURCE_SITE_PATTERN.sub(cls._site_replacement, text)
        text = cls.EMPTY_BRACKETS.sub(" ", text)
        text = cls.MULTIPLE_SPACES.sub(" ", text)
        return text.strip()

    @staticmethod
    def _site_replacement(match: re.Match[str]) -> str:
        # Between two separators one must survive: "A - site - B" -> "A - B".
        if match.group("before") and match.group("after"):
            return match.group("before")
        return " "

    @classmethod
    def clean(cls, text: str | None) -> str:
        """Remove annotation tokens and site names, decode entities, trim.

        The steps repeat until the text stops changing, so removing one token
        cannot expose another and ``clean(clean(x)) == clean(x)`` always holds.

        Args:
            text: Raw string; ``None`` is treated as empty.

        Returns:
            str: Normalized text, possibly empty.
        """
        if not text:
            return ""

        current = text
        for _ in range(cls._MAX_PASSES):
            cleaned = cls._clean_once(current)
            if cleaned == current:
                return cleaned
            current = cleaned
        return current

    @classmethod
    def search_term(cls, text: str | None) -> str:
        """Build a search-friendly term.

        Applies ``clean``, drops every bracketed segment, lowercases, and turns
        punctuation and symbols into spaces. Letters and combining marks of
        any script survive, so non-Latin titles stay searchable.
        """
        cleaned = cls.clean(text)
        if not cleaned:
            return ""

        cleaned = cls.BRACKETED_SEGMENT.sub(" ", cleaned).lower()
        folded = "".join(
            " " if unicodedata.category(char)[0] in {"P", "S"} else char
            for char in cleaned
        )
        return cls.MULTIPLE_SPACES.sub(" ", folded).strip()


__all__ = ["TextNormalizer"]
