"""Authoritative clearance data source (the foundation's license check service)."""

import json
from typing import Any, Dict, List, Optional

import requests

from license_vetting.logging_config import logger

from ...content_id import ContentId
from ...exceptions import TransportError
from ..models import LicenseData, Provenance, Status

FOUNDATION_API_URL = "https://www.eclipse.org/projects/services/license_check.php"
DEFAULT_TIMEOUT = 30  # seconds

# Response buckets and the status they map to
_BUCKETS: Dict[str, Status] = {
    "approved": Status.APPROVED,
    "restricted": Status.RESTRICTED,
}


def _to_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


class FoundationSource:
    """
    Data source for the foundation's license clearance service.

    The service takes a form field ``json`` holding a JSON list of content id
    strings and answers with the ids it has vetted, grouped by outcome:

        {
            "approved": {
                "npm/npmjs/-/left-pad/1.3.0": {
                    "authority": "#1234", "confidence": "100",
                    "license": "MIT", "status": "approved"
                }
            },
            "restricted": {...}
        }

    Ids missing from both groups have no clearance record.
    """

    def __init__(self, api_url: str = FOUNDATION_API_URL, timeout: int = DEFAULT_TIMEOUT) -> None:
        self._api_url = api_url
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "foundation"

    @property
    def authoritative(self) -> bool:
        return True

    def query(self, content_ids: List[ContentId], session: requests.Session) -> Dict[ContentId, LicenseData]:
        """Query the clearance service for one batch of ids."""
        by_string = {str(each): each for each in content_ids}

        try:
            logger.debug(f"Querying {self.name} for {len(content_ids)} content id(s)")
            response = session.post(
                self._api_url,
                data={"json": json.dumps(list(by_string))},
                timeout=self._timeout,
            )
        except requests.exceptions.Timeout as e:
            raise TransportError(f"Timeout querying {self.name}") from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Error querying {self.name}: {e}") from e

        if response.status_code != 200:
            raise TransportError(f"{self.name} answered HTTP {response.status_code}")

        try:
            data = response.json()
        except (json.JSONDecodeError, ValueError) as e:
            raise TransportError(f"JSON decode error for {self.name} response: {e}") from e

        if not isinstance(data, dict):
            raise TransportError(f"Unexpected {self.name} response shape")

        # Buckets are read in precedence order; an id listed twice keeps its approval
        results: Dict[ContentId, LicenseData] = {}
        for bucket, status in _BUCKETS.items():
            for key, record in (data.get(bucket) or {}).items():
                content_id = by_string.get(key)
                if content_id is None:
                    logger.debug(f"Ignoring {self.name} record for unrequested id {key}")
                    continue
                if content_id in results:
                    logger.debug(f"{self.name} lists {key} as both approved and {bucket}; keeping approved")
                    continue
                results[content_id] = self._normalize_record(content_id, record, status)

        logger.debug(f"{self.name} knows {len(results)} of {len(content_ids)} content id(s)")
        return results

    @staticmethod
    def _normalize_record(content_id: ContentId, record: Optional[Dict[str, Any]], status: Status) -> LicenseData:
        record = record if isinstance(record, dict) else {}
        return LicenseData(
            content_id=content_id,
            license=record.get("license") or None,
            status=status,
            provenance=Provenance.AUTHORITATIVE,
            authority=str(record.get("authority") or "foundation"),
            confidence=_to_int(record.get("confidence")),
        )
