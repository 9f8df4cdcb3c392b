"""Parser for Go module coordinates as they appear in go.sum files."""

import re
from typing import Tuple

from ..content_id import NAMESPACE_PLACEHOLDER, ContentId
from ..exceptions import ContentIdParseError
from ..logging_config import logger
from .protocol import BaseIdParser

GO_MOD_SUFFIX = "/go.mod"
INCOMPATIBLE_SUFFIX = "+incompatible"

_MODULE_PATH_PATTERN = re.compile(r"^[A-Za-z0-9._~\-]+(?:/[A-Za-z0-9._~+\-]+)*$")
_VERSION_PATTERN = re.compile(r"^v\d[^\s/]*$")


class GolangIdParser(BaseIdParser):
    """Parser for ``modulePath version[/go.mod] [hash]`` lines.

    Examples:
        github.com/spf13/cobra v0.0.5 h1:...
            -> go/golang/github.com%2Fspf13/cobra/v0.0.5
        go.uber.org/zap v1.10.0/go.mod h1:...
            -> go/golang/go.uber.org/zap/v1.10.0
        go.opencensus.io v0.21.0/go.mod h1:...
            -> go/golang/-/go.opencensus.io/v0.21.0
    """

    name = "golang"

    def parse(self, text: str) -> ContentId:
        tokens = text.split()
        if len(tokens) not in (2, 3):
            raise ContentIdParseError(f"expected 'module version [hash]', found {len(tokens)} token(s)")

        module_path, version = tokens[0], tokens[1]

        if version.endswith(GO_MOD_SUFFIX):
            version = version[: -len(GO_MOD_SUFFIX)]
        if version.endswith(INCOMPATIBLE_SUFFIX):
            version = version[: -len(INCOMPATIBLE_SUFFIX)]

        if not _MODULE_PATH_PATTERN.match(module_path):
            raise ContentIdParseError(f"'{module_path}' is not a module path")
        if not _VERSION_PATTERN.match(version):
            raise ContentIdParseError(f"'{version}' is not a module version")

        namespace, name = self.split_module_path(module_path)
        return self._build("go", "golang", namespace, name, version)

    @staticmethod
    def split_module_path(module_path: str) -> Tuple[str, str]:
        """
        Split a module path into (namespace, name).

        When the first path segment looks like a domain (contains a dot) the
        name is the last segment and the namespace everything before it. A
        single-segment path has no namespace. A path whose first segment is
        not a domain is kept whole as the name; such paths are unusual and
        are logged so the result can be checked by hand.
        """
        if "/" not in module_path:
            return NAMESPACE_PLACEHOLDER, module_path

        first_segment = module_path.split("/", 1)[0]
        if "." not in first_segment:
            logger.warning(f"Go module path '{module_path}' does not start with a domain; review its id manually")
            return NAMESPACE_PLACEHOLDER, module_path

        namespace, name = module_path.rsplit("/", 1)
        return namespace, name
