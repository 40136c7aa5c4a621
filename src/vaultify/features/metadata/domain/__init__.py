"""Pure metadata rules: text normalization, filename heuristics and scoring."""

from .filename_parser import FilenameParser, FilenameRule, strip_extension
from .normalizer import TextNormalizer
from .scoring import ConfidenceScorer

__all__ = [
    "ConfidenceScorer",
    "FilenameParser",
    "FilenameRule",
    "TextNormalizer",
    "strip_extension",
]
