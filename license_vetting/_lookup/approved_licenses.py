"""Approved-license list and SPDX expression evaluation.

IMPORTANT: License approval is a legal matter decided elsewhere. This module
only answers whether an SPDX expression can be satisfied from a list of
licenses that some authority has already approved. It takes a CONSERVATIVE
approach: an expression that cannot be parsed, or that mentions a license
the list does not contain, is never approved.

Expressions are parsed with the `license-expression` library against the
official SPDX license list.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

import requests
from license_expression import ExpressionError, LicenseSymbol, LicenseWithExceptionSymbol, get_spdx_licensing

from ..exceptions import ConfigurationError
from ..logging_config import logger

# Get the SPDX licensing instance (contains all official SPDX license IDs)
_spdx_licensing = get_spdx_licensing()

# SPDX special values that never approve anything
SPDX_SPECIAL_VALUES = {"NOASSERTION", "NONE", "OTHER"}

DEFAULT_TIMEOUT = 30  # seconds

# Licenses approved for third-party content when no list is configured
DEFAULT_APPROVED_LICENSES = frozenset(
    {
        "0BSD",
        "Apache-1.1",
        "Apache-2.0",
        "Artistic-2.0",
        "BlueOak-1.0.0",
        "BSD-2-Clause",
        "BSD-3-Clause",
        "BSL-1.0",
        "CC-BY-3.0",
        "CC-BY-4.0",
        "CC0-1.0",
        "CDDL-1.0",
        "CDDL-1.1",
        "EPL-1.0",
        "EPL-2.0",
        "ISC",
        "LGPL-2.1-only",
        "LGPL-2.1-or-later",
        "LGPL-3.0-only",
        "LGPL-3.0-or-later",
        "MIT",
        "MIT-0",
        "MPL-1.1",
        "MPL-2.0",
        "NCSA",
        "OFL-1.1",
        "PostgreSQL",
        "PSF-2.0",
        "Python-2.0",
        "Unicode-DFS-2016",
        "Unlicense",
        "UPL-1.0",
        "W3C",
        "X11",
        "Zlib",
    }
)


def validate_spdx_expression(license_str: str) -> bool:
    """
    Validate a license string against the official SPDX license list.

    Args:
        license_str: License string to validate (ID or expression)

    Returns:
        True if it's a valid SPDX identifier or expression
    """
    if not license_str:
        return False

    if license_str in SPDX_SPECIAL_VALUES:
        return True

    try:
        parsed = _spdx_licensing.parse(license_str, validate=False)
        unknown = _spdx_licensing.unknown_license_keys(parsed)
        return len(unknown) == 0
    except ExpressionError:
        return False


class ApprovedLicenses:
    """
    A set of approved SPDX license ids (case-insensitive).

    Example:
        approved = ApprovedLicenses(["MIT", "Apache-2.0"])
        approved.is_approved("MIT OR GPL-2.0-only")   # True
        approved.is_approved("MIT AND GPL-2.0-only")  # False
    """

    def __init__(self, license_ids: Optional[Iterable[str]] = None) -> None:
        ids = DEFAULT_APPROVED_LICENSES if license_ids is None else license_ids
        self._approved = {license_id.strip().lower() for license_id in ids if license_id and license_id.strip()}

    def __len__(self) -> int:
        return len(self._approved)

    def __contains__(self, license_id: object) -> bool:
        return isinstance(license_id, str) and license_id.lower() in self._approved

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "ApprovedLicenses":
        """
        Build the list from a licenses document.

        The document maps license ids to names under "approved", e.g.
        ``{"approved": {"EPL-2.0": "Eclipse Public License 2.0"}}``; a plain
        list of ids under "approved" is accepted too.
        """
        approved = data.get("approved") if isinstance(data, dict) else None
        if isinstance(approved, dict):
            return cls(approved.keys())
        if isinstance(approved, list):
            return cls(str(each) for each in approved)
        raise ConfigurationError('Approved licenses document has no "approved" entry')

    @classmethod
    def load(cls, location: Optional[str], session: Optional[requests.Session] = None) -> "ApprovedLicenses":
        """
        Load the list from a URL or a local JSON file.

        Args:
            location: http(s) URL or file path; None gives the default list
            session: Session used for URLs

        Raises:
            ConfigurationError: If the list cannot be fetched or decoded
        """
        if not location:
            return cls()

        try:
            if location.startswith(("http://", "https://")):
                response = (session or requests.Session()).get(location, timeout=DEFAULT_TIMEOUT)
                if response.status_code != 200:
                    raise ConfigurationError(
                        f"Failed to fetch approved licenses from {location}: HTTP {response.status_code}"
                    )
                data = response.json()
            else:
                data = json.loads(Path(location).read_text(encoding="utf-8"))
        except requests.exceptions.RequestException as e:
            raise ConfigurationError(f"Failed to fetch approved licenses from {location}: {e}") from e
        except (OSError, ValueError) as e:
            raise ConfigurationError(f"Failed to read approved licenses from {location}: {e}") from e

        approved = cls.from_json(data)
        logger.info(f"Loaded {len(approved)} approved license(s) from {location}")
        return approved

    def is_approved(self, expression: Optional[str]) -> bool:
        """
        Answer whether an SPDX expression can be satisfied by approved licenses.

        ``A OR B`` needs one approved side, ``A AND B`` needs both, and
        ``A WITH exception`` is judged on ``A``.
        """
        if not expression or expression.strip() in SPDX_SPECIAL_VALUES:
            return False

        try:
            parsed = _spdx_licensing.parse(expression, validate=False)
        except ExpressionError as e:
            logger.debug(f"Cannot parse license expression '{expression}': {e}")
            return False

        if parsed is None:
            return False
        return self._evaluate(parsed)

    def _evaluate(self, node: Any) -> bool:
        if isinstance(node, _spdx_licensing.OR):
            return any(self._evaluate(arg) for arg in node.args)
        if isinstance(node, _spdx_licensing.AND):
            return all(self._evaluate(arg) for arg in node.args)
        if isinstance(node, LicenseWithExceptionSymbol):
            return node.license_symbol.key in self
        if isinstance(node, LicenseSymbol):
            return node.key in self
        return False
