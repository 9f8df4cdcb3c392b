"""Reader for go.sum checksum files."""

from typing import List, TextIO

from .._id_parsers import GolangIdParser
from ..content_id import AnyContentId


class GoSumReader:
    """Reader for go.sum files.

    Each line has the shape ``modulePath version[/go.mod] hash``. A module
    usually appears twice (once for its go.mod file, once for the module
    content); both lines are returned and deduplicated during lookup.

    Lines the Go parser rejects are skipped rather than reported as invalid:
    checksum files routinely carry lines that only matter to module
    resolution.
    """

    name = "go-sum"
    supported_files = ("go.sum",)

    def __init__(self) -> None:
        self._parser = GolangIdParser()

    def get_content_ids(self, stream: TextIO) -> List[AnyContentId]:
        content_ids: List[AnyContentId] = []
        for line in stream:
            if not line.strip() or line.lstrip().startswith("#"):
                continue
            content_id = self._parser.parse_id(line)
            if content_id is not None:
                content_ids.append(content_id)
        return content_ids
