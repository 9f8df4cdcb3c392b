"""Data models for license lookup results."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from ..content_id import AnyContentId

INVALID_AUTHORITY = "invalid"


class Status(Enum):
    """Final disposition of a dependency."""

    APPROVED = "approved"
    RESTRICTED = "restricted"
    NEEDS_REVIEW = "needs-review"


class Provenance(Enum):
    """Where a classification came from."""

    AUTHORITATIVE = "authoritative"
    HEURISTIC = "heuristic"
    NONE = "none"


@dataclass(frozen=True)
class LicenseData:
    """License information resolved for one content id.

    Attributes:
        content_id: The id that was looked up
        license: SPDX license expression, None when unknown
        status: Approved, restricted or needs review
        provenance: Authoritative clearance data, heuristic fallback, or none
        authority: Who vouches for the answer (e.g. a clearance record
            reference or "clearlydefined"); empty when nobody does
        confidence: Score reported by the source (0-100)
    """

    content_id: AnyContentId
    license: Optional[str]
    status: Status
    provenance: Provenance = Provenance.NONE
    authority: str = ""
    confidence: int = 0

    @property
    def is_approved(self) -> bool:
        return self.status is Status.APPROVED

    @classmethod
    def needs_review(
        cls,
        content_id: AnyContentId,
        license: Optional[str] = None,
        authority: str = "",
        confidence: int = 0,
    ) -> "LicenseData":
        """Create an unresolved result."""
        return cls(
            content_id=content_id,
            license=license,
            status=Status.NEEDS_REVIEW,
            provenance=Provenance.NONE,
            authority=authority,
            confidence=confidence,
        )

    @classmethod
    def invalid(cls, content_id: AnyContentId) -> "LicenseData":
        """Create the result for an id that could not be parsed."""
        return cls.needs_review(content_id, authority=INVALID_AUTHORITY)

    def as_needs_review(self) -> "LicenseData":
        """Copy of this result demoted to needs review, keeping what the source knew."""
        return replace(self, status=Status.NEEDS_REVIEW)
