"""Parser for Package URLs."""

from typing import Dict, Tuple

from packageurl import PackageURL

from ..content_id import ContentId
from ..exceptions import ContentIdParseError
from .protocol import BaseIdParser

# Mapping from PURL type to ContentId (type, source)
# See: https://docs.clearlydefined.io/docs/curation/coordinates
PURL_TYPE_TO_CONTENT_TYPE: Dict[str, Tuple[str, str]] = {
    "npm": ("npm", "npmjs"),
    "maven": ("maven", "mavencentral"),
    "golang": ("go", "golang"),
    "pypi": ("pypi", "pypi"),
    "cargo": ("crate", "cratesio"),
    "gem": ("gem", "rubygems"),
    "nuget": ("nuget", "nuget"),
    "composer": ("composer", "packagist"),
    "pod": ("pod", "cocoapods"),
}


class PurlIdParser(BaseIdParser):
    """Parser for ``pkg:`` Package URLs of the ecosystems the services know."""

    name = "purl"

    def parse(self, text: str) -> ContentId:
        try:
            purl = PackageURL.from_string(text.strip())
        except ValueError as e:
            raise ContentIdParseError(str(e)) from e

        mapping = PURL_TYPE_TO_CONTENT_TYPE.get(purl.type)
        if mapping is None:
            raise ContentIdParseError(f"unsupported package type '{purl.type}'")
        if not purl.version:
            raise ContentIdParseError("package URL has no version")

        namespace = purl.namespace
        if namespace and purl.type == "npm":
            namespace = namespace.lstrip("@")

        content_type, source = mapping
        return self._build(content_type, source, namespace, purl.name, purl.version)
