"""Reader for Maven dependency lists."""

import re
from typing import List, TextIO

from .._id_parsers import MavenIdParser
from ..content_id import AnyContentId, InvalidContentId

# Leading "[INFO]" style markers written by Maven's console logger
_LOG_PREFIX = re.compile(r"^\[[A-Z]+\]\s*")
# A coordinate tuple: 3 to 6 colon-separated segments with no whitespace
_TUPLE_PATTERN = re.compile(r"^[^\s:]+(?::[^\s:]+){2,5}$")


class MavenDependencyListReader:
    """Reader for the output of ``mvn dependency:list``.

    Entries look like ``groupId:artifactId:packaging:version:scope`` (or the
    shorter ``groupId:artifactId:version:scope``). Both a clean list written
    with ``-DoutputFile`` and the raw console output are accepted:

        [INFO] --- maven-dependency-plugin:3.6.0:list (default-cli) @ demo ---
        [INFO]    org.slf4j:slf4j-api:jar:2.0.9:compile -- module org.slf4j
        [INFO]    junit:junit:jar:4.13.2:test

    Log lines without a coordinate are noise and are skipped; unmarked lines
    that do not parse become InvalidContentId.
    """

    name = "maven-dependency-list"
    supported_files = ("dependencies.txt", "dependency-list.txt")

    def __init__(self) -> None:
        self._parser = MavenIdParser()

    def get_content_ids(self, stream: TextIO) -> List[AnyContentId]:
        content_ids: List[AnyContentId] = []
        for raw_line in stream:
            line = raw_line.strip()
            if not line or line.startswith("#"):
                continue

            is_log_line = bool(_LOG_PREFIX.match(line))
            line = _LOG_PREFIX.sub("", line)

            # The first token is the coordinate; annotations such as
            # "-- module x" or "(optional)" follow it
            tokens = line.split()
            coordinate = tokens[0] if tokens else ""

            if not _TUPLE_PATTERN.match(coordinate) or coordinate.count(":") < 3:
                if is_log_line or line.startswith("The following files have been resolved"):
                    continue
                content_ids.append(InvalidContentId(line))
                continue

            content_id = self._parser.parse_id(coordinate)
            content_ids.append(content_id if content_id is not None else InvalidContentId(coordinate))
        return content_ids
