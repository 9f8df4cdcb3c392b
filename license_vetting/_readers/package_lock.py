"""Reader for package-lock.json files (npm)."""

import json
from typing import Any, Dict, List, Optional, TextIO, Tuple

from ..content_id import AnyContentId, ContentId, InvalidContentId
from ..exceptions import FileProcessingError
from ..logging_config import logger

NODE_MODULES = "node_modules/"


def split_npm_name(package_name: str) -> Tuple[Optional[str], str]:
    """Split ``@scope/name`` into ("scope", "name"); unscoped names have no namespace."""
    if package_name.startswith("@") and "/" in package_name:
        scope, name = package_name[1:].split("/", 1)
        return scope, name
    return None, package_name


class PackageLockReader:
    """Reader for package-lock.json files.

    package-lock.json v2/v3 is a JSON file with structure:
    {
        "packages": {
            "": {"name": "my-project", ...},
            "node_modules/package-name": {"version": "1.2.3", ...},
            "node_modules/a/node_modules/@scope/b": {"version": "2.0.0", ...}
        }
    }

    v1 uses a recursive "dependencies" object keyed by package name instead
    of "packages". Both layouts go through the same name/version extraction.
    """

    name = "npm-package-lock"
    supported_files = ("package-lock.json", "npm-shrinkwrap.json")

    def get_content_ids(self, stream: TextIO) -> List[AnyContentId]:
        text = stream.read()
        if not text.strip():
            return []

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise FileProcessingError(f"package-lock.json is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise FileProcessingError("package-lock.json does not contain a JSON object")

        # v2/v3 carry both layouts; "packages" is the complete one
        packages = data.get("packages")
        if isinstance(packages, dict) and packages:
            return self._read_packages(packages)

        dependencies = data.get("dependencies")
        if isinstance(dependencies, dict):
            return self._read_dependencies(dependencies)

        return []

    def _read_packages(self, packages: Dict[str, Any]) -> List[AnyContentId]:
        """Read the v2/v3 "packages" object."""
        content_ids: List[AnyContentId] = []
        for pkg_path, pkg_data in packages.items():
            # The root package ("") and workspace folders are the project itself
            if not pkg_path.startswith(NODE_MODULES) or not isinstance(pkg_data, dict):
                continue
            if pkg_data.get("link"):
                continue

            package_name = pkg_data.get("name") or self._extract_package_name(pkg_path)
            content_ids.append(self._to_content_id(package_name, pkg_data.get("version"), raw=pkg_path))
        return content_ids

    def _read_dependencies(self, dependencies: Dict[str, Any]) -> List[AnyContentId]:
        """Read the v1 "dependencies" object, depth first."""
        content_ids: List[AnyContentId] = []
        for package_name, pkg_data in dependencies.items():
            if not isinstance(pkg_data, dict):
                content_ids.append(InvalidContentId(package_name))
                continue

            content_ids.append(self._to_content_id(package_name, pkg_data.get("version"), raw=package_name))

            nested = pkg_data.get("dependencies")
            if isinstance(nested, dict):
                content_ids.extend(self._read_dependencies(nested))
        return content_ids

    @staticmethod
    def _extract_package_name(pkg_path: str) -> str:
        """Extract package name from node_modules path (the innermost one wins)."""
        return pkg_path.rsplit(NODE_MODULES, 1)[-1]

    @staticmethod
    def _to_content_id(package_name: str, version: Optional[str], raw: str) -> AnyContentId:
        namespace, name = split_npm_name(package_name)
        content_id = ContentId.create("npm", "npmjs", namespace, name, version)
        if not content_id.is_valid:
            logger.debug(f"Could not build a content id for package-lock entry '{raw}'")
            return InvalidContentId(raw)
        return content_id
