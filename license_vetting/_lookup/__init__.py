"""License lookup and classification.

Content ids are looked up in an authoritative clearance service first; ids
it has no record for fall back to ClearlyDefined, where an approved-license
heuristic decides. Whatever is left needs review.

Example usage:
    from license_vetting._lookup import create_default_checker

    checker = create_default_checker()
    results = checker.classify(content_ids)
"""

from typing import Optional

import requests

from .approved_licenses import DEFAULT_APPROVED_LICENSES, ApprovedLicenses, validate_spdx_expression
from .checker import DEFAULT_BATCH_SIZE, DEFAULT_MAX_WORKERS, LicenseChecker, RetryPolicy
from .models import INVALID_AUTHORITY, LicenseData, Provenance, Status
from .protocol import LicenseDataSource
from .sources import ClearlyDefinedSource, FoundationSource
from .sources.clearlydefined import CLEARLYDEFINED_API_BASE, DEFAULT_CONFIDENCE_THRESHOLD
from .sources.foundation import FOUNDATION_API_URL


def create_default_checker(
    session: Optional[requests.Session] = None,
    approved_licenses: Optional[ApprovedLicenses] = None,
    foundation_api_url: str = FOUNDATION_API_URL,
    clearlydefined_api_base: str = CLEARLYDEFINED_API_BASE,
    confidence_threshold: int = DEFAULT_CONFIDENCE_THRESHOLD,
    batch_size: int = DEFAULT_BATCH_SIZE,
    max_workers: int = DEFAULT_MAX_WORKERS,
    retry: Optional[RetryPolicy] = None,
    timeout: Optional[float] = None,
) -> LicenseChecker:
    """
    Create a LicenseChecker with the standard sources.

    Sources, in order:
    - FoundationSource - authoritative clearance records
    - ClearlyDefinedSource - heuristic approval from curated license data

    Returns:
        Configured LicenseChecker
    """
    sources = [
        FoundationSource(api_url=foundation_api_url),
        ClearlyDefinedSource(
            approved_licenses=approved_licenses,
            api_base=clearlydefined_api_base,
            confidence_threshold=confidence_threshold,
        ),
    ]
    return LicenseChecker(
        sources,
        session=session,
        batch_size=batch_size,
        max_workers=max_workers,
        retry=retry,
        timeout=timeout,
    )


__all__ = [
    # Main API
    "create_default_checker",
    "LicenseChecker",
    "RetryPolicy",
    # Sources
    "LicenseDataSource",
    "FoundationSource",
    "ClearlyDefinedSource",
    # Models
    "LicenseData",
    "Status",
    "Provenance",
    "INVALID_AUTHORITY",
    # Licenses
    "ApprovedLicenses",
    "DEFAULT_APPROVED_LICENSES",
    "validate_spdx_expression",
    # Defaults
    "DEFAULT_BATCH_SIZE",
    "DEFAULT_MAX_WORKERS",
    "DEFAULT_CONFIDENCE_THRESHOLD",
    "CLEARLYDEFINED_API_BASE",
    "FOUNDATION_API_URL",
]
