"""Parser for Maven coordinates."""

from ..content_id import ContentId
from ..exceptions import ContentIdParseError
from .protocol import BaseIdParser

MAVEN_SCOPES = frozenset({"compile", "provided", "runtime", "test", "system", "import"})


class MavenIdParser(BaseIdParser):
    """Parser for colon-delimited Maven coordinates.

    Accepted shapes (scope is always dropped):
    - groupId:artifactId:version
    - groupId:artifactId:version:scope
    - groupId:artifactId:packaging:version (when the last token is not a scope)
    - groupId:artifactId:packaging:version:scope
    - groupId:artifactId:packaging:classifier:version:scope
    """

    name = "maven"

    def parse(self, text: str) -> ContentId:
        parts = text.strip().split(":")
        if any(not part or any(c.isspace() for c in part) for part in parts):
            raise ContentIdParseError("empty or whitespace-bearing coordinate segment")

        count = len(parts)
        if count == 3:
            group_id, artifact_id, version = parts
        elif count == 4:
            group_id, artifact_id = parts[0], parts[1]
            version = parts[2] if parts[3] in MAVEN_SCOPES else parts[3]
        elif count in (5, 6):
            group_id, artifact_id, version = parts[0], parts[1], parts[-2]
        else:
            raise ContentIdParseError(f"expected 3 to 6 coordinate segments, found {count}")

        return self._build("maven", "mavencentral", group_id, artifact_id, version)
