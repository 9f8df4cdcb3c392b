"""Ecosystem-specific coordinate parsers.

Each parser turns one coordinate string into a ContentId (or None via
``parse_id`` when the text is not a coordinate of its kind).
"""

from .golang import GolangIdParser
from .maven import MAVEN_SCOPES, MavenIdParser
from .protocol import BaseIdParser
from .purl import PURL_TYPE_TO_CONTENT_TYPE, PurlIdParser

__all__ = [
    "BaseIdParser",
    "GolangIdParser",
    "MavenIdParser",
    "PurlIdParser",
    "MAVEN_SCOPES",
    "PURL_TYPE_TO_CONTENT_TYPE",
]
