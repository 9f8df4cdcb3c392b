"""Reader for flat dependency lists (one coordinate per line)."""

from typing import List, TextIO

from ..content_id import AnyContentId, parse_content_id
from ..logging_config import logger


class FlatFileReader:
    """Reader for plain text lists of coordinates.

    Each non-blank, non-comment line holds one coordinate in any notation
    understood by parse_content_id, e.g.:

        # runtime dependencies
        org.apache.commons:commons-lang3:3.12.0
        npm/npmjs/-/left-pad/1.3.0
        pkg:pypi/requests@2.31.0
    """

    name = "flat"
    supported_files: tuple[str, ...] = ()

    def get_content_ids(self, stream: TextIO) -> List[AnyContentId]:
        content_ids: List[AnyContentId] = []
        for line in stream:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            content_id = parse_content_id(line)
            if not content_id.is_valid:
                logger.debug(f"Unrecognised coordinate in flat list: '{line}'")
            content_ids.append(content_id)
        return content_ids
