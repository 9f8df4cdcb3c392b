"""ClearlyDefined data source for heuristic license approval."""

import json
from typing import Any, Dict, List, Optional

import requests

from license_vetting.logging_config import logger

from ...content_id import ContentId
from ...exceptions import TransportError
from ..approved_licenses import SPDX_SPECIAL_VALUES, ApprovedLicenses, validate_spdx_expression
from ..models import LicenseData, Provenance, Status

CLEARLYDEFINED_API_BASE = "https://api.clearlydefined.io"
DEFAULT_TIMEOUT = 60  # seconds - batch definitions can be slow
DEFAULT_CONFIDENCE_THRESHOLD = 60
AUTHORITY = "clearlydefined"


class ClearlyDefinedSource:
    """
    Data source for the ClearlyDefined definitions API.

    ClearlyDefined provides curated license data for open source packages
    across many ecosystems. Its coordinates use the same five-part form as
    content ids (type/provider/namespace/name/revision), so ids are sent as
    they are: a POST of a JSON list to ``/definitions`` answers with a JSON
    object keyed by coordinate.

    A definition approves its id when the declared license expression is
    satisfied by the approved-license list and the license score reaches the
    confidence threshold. Other definitions with a declared license are
    returned as needs-review hints.
    """

    def __init__(
        self,
        approved_licenses: Optional[ApprovedLicenses] = None,
        api_base: str = CLEARLYDEFINED_API_BASE,
        confidence_threshold: int = DEFAULT_CONFIDENCE_THRESHOLD,
        timeout: int = DEFAULT_TIMEOUT,
    ) -> None:
        self._approved_licenses = approved_licenses or ApprovedLicenses()
        self._api_base = api_base.rstrip("/")
        self._confidence_threshold = confidence_threshold
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "clearlydefined.io"

    @property
    def authoritative(self) -> bool:
        return False

    def query(self, content_ids: List[ContentId], session: requests.Session) -> Dict[ContentId, LicenseData]:
        """Fetch definitions for one batch of ids."""
        by_string = {str(each): each for each in content_ids}
        url = f"{self._api_base}/definitions"

        try:
            logger.debug(f"Fetching ClearlyDefined definitions for {len(content_ids)} content id(s)")
            response = session.post(url, json=list(by_string), timeout=self._timeout)
        except requests.exceptions.Timeout as e:
            raise TransportError("Timeout fetching ClearlyDefined definitions") from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Error fetching ClearlyDefined definitions: {e}") from e

        if response.status_code != 200:
            raise TransportError(f"ClearlyDefined answered HTTP {response.status_code}")

        try:
            data = response.json()
        except (json.JSONDecodeError, ValueError) as e:
            raise TransportError(f"JSON decode error for ClearlyDefined response: {e}") from e

        if not isinstance(data, dict):
            raise TransportError("Unexpected ClearlyDefined response shape")

        results: Dict[ContentId, LicenseData] = {}
        for key, definition in data.items():
            content_id = by_string.get(key)
            if content_id is None or not isinstance(definition, dict):
                continue
            license_data = self._normalize_definition(content_id, definition)
            if license_data is not None:
                results[content_id] = license_data

        return results

    def _normalize_definition(self, content_id: ContentId, definition: Dict[str, Any]) -> Optional[LicenseData]:
        """
        Normalize one ClearlyDefined definition to LicenseData.

        Returns:
            LicenseData, or None when the definition declares no license
            (ClearlyDefined answers unknown coordinates with empty definitions)
        """
        licensed = definition.get("licensed") or {}
        declared = licensed.get("declared")
        if not declared or declared in SPDX_SPECIAL_VALUES:
            return None

        if not validate_spdx_expression(declared):
            logger.debug(f"ClearlyDefined declares a non-SPDX license for {content_id}: {declared}")

        score = licensed.get("score") or {}
        try:
            confidence = int(score.get("total", 0))
        except (TypeError, ValueError):
            confidence = 0

        approved = confidence >= self._confidence_threshold and self._approved_licenses.is_approved(declared)
        return LicenseData(
            content_id=content_id,
            license=declared,
            status=Status.APPROVED if approved else Status.NEEDS_REVIEW,
            provenance=Provenance.HEURISTIC,
            authority=AUTHORITY,
            confidence=confidence,
        )
