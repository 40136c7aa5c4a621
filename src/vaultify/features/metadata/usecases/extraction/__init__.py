"""
Summary: Public surface for tag extraction modules.
Why: Provide a stable import path for the reconciler and tests.
"""

from .format_extractors import (
    AacExtractor,
    FlacExtractor,
    M4aExtractor,
    Mp3Extractor,
    OggExtractor,
    WavExtractor,
)
from .tag_extractor import TagExtractor

__all__ = [
    "TagExtractor",
    "AacExtractor",
    "FlacExtractor",
    "M4aExtractor",
    "Mp3Extractor",
    "OggExtractor",
    "WavExtractor",
]
