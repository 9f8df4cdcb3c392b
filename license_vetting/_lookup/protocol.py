"""LicenseDataSource protocol for license lookup plugins."""

from typing import Dict, List, Protocol

import requests

from ..content_id import ContentId
from .models import LicenseData


class LicenseDataSource(Protocol):
    """
    Protocol defining the interface for license data sources.

    Sources are consulted by the LicenseChecker in the order they are given;
    each one only sees the ids that earlier sources left unresolved.

    Example:
        class FoundationSource:
            name = "foundation"
            authoritative = True

            def query(self, content_ids, session) -> Dict[ContentId, LicenseData]:
                # POST the ids to the clearance service and map its answer
                ...
    """

    @property
    def name(self) -> str:
        """
        Human-readable name of this data source.

        Used for logging. Examples: "foundation", "clearlydefined"
        """
        ...

    @property
    def authoritative(self) -> bool:
        """
        Whether this source's answers are final.

        Authoritative sources may approve or restrict. Heuristic sources can
        only approve; anything else they say is kept as a hint for review.
        """
        ...

    def query(self, content_ids: List[ContentId], session: requests.Session) -> Dict[ContentId, LicenseData]:
        """
        Look up one batch of ids.

        Implementations should:
        1. Issue a single request for the whole batch
        2. Return entries only for ids the source has a record for
        3. Raise TransportError for connection problems, timeouts,
           unexpected HTTP status codes and undecodable responses so the
           checker can retry the batch

        Args:
            content_ids: Valid ids, at most one batch worth
            session: requests.Session with configured headers (User-Agent, etc.)

        Returns:
            Mapping from id to LicenseData for every id the source knows.
        """
        ...
