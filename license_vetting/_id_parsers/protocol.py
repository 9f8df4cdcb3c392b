"""Shared behaviour for ecosystem-specific id parsers."""

from typing import Optional

from ..content_id import ContentId
from ..exceptions import ContentIdParseError
from ..logging_config import logger


class BaseIdParser:
    """Base class for parsers that turn one coordinate string into a ContentId.

    Subclasses implement ``parse`` and raise ContentIdParseError for input they
    cannot handle. ``parse_id`` is the lenient entry point used by readers: it
    answers None instead of raising.

    Example:
        class GolangIdParser(BaseIdParser):
            name = "golang"

            def parse(self, text: str) -> ContentId:
                ...
    """

    name = "base"

    def parse(self, text: str) -> ContentId:
        raise NotImplementedError

    def parse_id(self, text: str) -> Optional[ContentId]:
        """Parse text, answering None when it is not a coordinate of this kind."""
        try:
            return self.parse(text)
        except ContentIdParseError as e:
            logger.debug(f"{self.name} parser rejected '{text.strip()}': {e}")
            return None

    @staticmethod
    def _build(type: str, source: str, namespace: Optional[str], name: str, version: str) -> ContentId:
        content_id = ContentId.create(type, source, namespace, name, version)
        if not isinstance(content_id, ContentId):
            raise ContentIdParseError(f"'{content_id}' is not a valid content id")
        return content_id
