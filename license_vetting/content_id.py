"""Canonical content identifiers for dependencies.

A content id is the five-part coordinate used by the license data services:

    type/source/namespace/name/version

e.g. the npm package ``@babel/code-frame`` at 7.10.4 is
``npm/npmjs/babel/code-frame/7.10.4`` and a Go module such as
``github.com/spf13/cobra`` becomes ``go/golang/github.com%2Fspf13/cobra/v0.0.5``.
Slashes inside a field are percent-encoded in the string form only; the field
values themselves hold the decoded text.
"""

from dataclasses import dataclass
from typing import Optional, Union
from urllib.parse import unquote

from packageurl import PackageURL

NAMESPACE_PLACEHOLDER = "-"

# ContentId type -> PURL type, where they differ
_CONTENT_TYPE_TO_PURL_TYPE = {
    "go": "golang",
    "crate": "cargo",
}


def _encode_segment(value: str) -> str:
    return value.replace("%", "%25").replace("/", "%2F")


def _decode_segment(value: str) -> str:
    return unquote(value)


def _is_valid_field(value: Optional[str]) -> bool:
    return isinstance(value, str) and bool(value) and not any(c.isspace() for c in value)


@dataclass(frozen=True)
class ContentId:
    """A valid, immutable five-part dependency coordinate."""

    type: str
    source: str
    namespace: str
    name: str
    version: str

    @property
    def is_valid(self) -> bool:
        return True

    @classmethod
    def create(
        cls,
        type: Optional[str],
        source: Optional[str],
        namespace: Optional[str],
        name: Optional[str],
        version: Optional[str],
    ) -> "AnyContentId":
        """Build a content id, degrading to InvalidContentId instead of raising.

        An empty namespace is replaced with the ``-`` placeholder. Any other
        empty field, or a field containing whitespace, makes the id invalid.
        """
        if not namespace:
            namespace = NAMESPACE_PLACEHOLDER
        fields = (type, source, namespace, name, version)
        if not all(_is_valid_field(f) for f in fields):
            raw = "/".join(_encode_segment(str(f)) if f else "" for f in fields)
            return InvalidContentId(raw)
        return cls(type, source, namespace, name, version)  # type: ignore[arg-type]

    @classmethod
    def from_string(cls, value: str) -> "AnyContentId":
        """Parse the slash-delimited string form produced by ``str()``."""
        parts = value.strip().split("/")
        if len(parts) != 5:
            return InvalidContentId(value)
        return cls.create(*(_decode_segment(p) for p in parts))

    def to_purl(self) -> PackageURL:
        """Map this id to a Package URL (used for display)."""
        purl_type = _CONTENT_TYPE_TO_PURL_TYPE.get(self.type, self.type)
        namespace = None if self.namespace == NAMESPACE_PLACEHOLDER else self.namespace
        if purl_type == "npm" and namespace:
            namespace = f"@{namespace}"
        return PackageURL(type=purl_type, namespace=namespace, name=self.name, version=self.version)

    def __str__(self) -> str:
        return "/".join(_encode_segment(f) for f in (self.type, self.source, self.namespace, self.name, self.version))


@dataclass(frozen=True)
class InvalidContentId:
    """Sentinel for manifest entries that could not be turned into a ContentId."""

    value: str

    @property
    def is_valid(self) -> bool:
        return False

    def __str__(self) -> str:
        return self.value


AnyContentId = Union[ContentId, InvalidContentId]


def parse_content_id(raw: str) -> AnyContentId:
    """
    Parse a coordinate written in one of the flat notations.

    Supported notations:
    - five-part slash ids (``maven/mavencentral/org.example/lib/1.0``)
    - Package URLs (``pkg:npm/%40babel/core@7.12.0``)
    - Maven coordinates (``group:artifact:version`` and the
      ``dependency:list`` tuples with packaging, classifier and scope)

    Never raises; unrecognised input becomes an InvalidContentId.
    """
    from ._id_parsers import MavenIdParser, PurlIdParser

    value = raw.strip() if raw else ""
    if not value:
        return InvalidContentId(raw or "")

    if value.startswith("pkg:"):
        purl_id = PurlIdParser().parse_id(value)
        return purl_id if purl_id is not None else InvalidContentId(value)

    if value.count("/") == 4:
        return ContentId.from_string(value)

    maven_id = MavenIdParser().parse_id(value)
    if maven_id is not None:
        return maven_id

    return InvalidContentId(value)
