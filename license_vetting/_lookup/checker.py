"""LicenseChecker: batched, concurrent license lookup and classification."""

import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from concurrent.futures import TimeoutError as FuturesTimeoutError
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

import requests

from ..content_id import AnyContentId, ContentId
from ..exceptions import TransportError
from ..http_client import create_session
from ..logging_config import logger
from .models import LicenseData, Status
from .protocol import LicenseDataSource

DEFAULT_BATCH_SIZE = 500
DEFAULT_MAX_WORKERS = 4


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded retries with exponential backoff for one batch.

    The delay before retry ``n`` (1-based) is ``backoff_factor * 2 ** (n - 1)``.
    """

    attempts: int = 3
    backoff_factor: float = 0.5

    def delay(self, attempt: int) -> float:
        return self.backoff_factor * (2 ** (attempt - 1))


class LicenseChecker:
    """
    Resolve the license status of content ids.

    Authoritative sources are consulted before heuristic ones (otherwise in
    the given order) and each one only sees ids that are still
    unresolved. Ids are split into batches of at most ``batch_size`` which are
    sent to a source concurrently, ``max_workers`` at a time. A batch that
    keeps failing after the retry policy is exhausted leaves its ids
    unresolved; it never aborts the run.

    Precedence of answers:
        authoritative approved > authoritative restricted > heuristic approved > needs review

    Results are merged on the calling thread as batches complete, and an id
    is resolved at most once.

    Example:
        checker = LicenseChecker([FoundationSource(), ClearlyDefinedSource()])
        for content_id, data in checker.classify(ids).items():
            print(content_id, data.status.value)
    """

    def __init__(
        self,
        sources: Sequence[LicenseDataSource],
        session: Optional[requests.Session] = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
        max_workers: int = DEFAULT_MAX_WORKERS,
        retry: Optional[RetryPolicy] = None,
        timeout: Optional[float] = None,
    ) -> None:
        """
        Initialize the LicenseChecker.

        Args:
            sources: License data sources; authoritative ones are consulted first
            session: Optional requests session; one with default headers is created otherwise
            batch_size: Maximum number of ids per remote request
            max_workers: Maximum number of batches in flight
            retry: Retry policy per batch
            timeout: Overall time budget in seconds for one classify() call
        """
        if batch_size < 1:
            raise ValueError("batch_size must be positive")
        if max_workers < 1:
            raise ValueError("max_workers must be positive")

        # Authoritative sources are always consulted first; sorting is stable
        self._sources = sorted(sources, key=lambda source: not source.authoritative)
        self._session = session or create_session()
        self._batch_size = batch_size
        self._max_workers = max_workers
        self._retry = retry or RetryPolicy()
        self._timeout = timeout

    def classify(self, content_ids: Iterable[AnyContentId]) -> Dict[AnyContentId, LicenseData]:
        """
        Classify every distinct id.

        Invalid ids are marked needs review without any remote call. The
        returned mapping is ordered by first appearance of each id.

        Args:
            content_ids: Ids to classify; duplicates are looked up once

        Returns:
            Mapping from each distinct id to its LicenseData
        """
        deadline = time.monotonic() + self._timeout if self._timeout else None
        unique: List[AnyContentId] = list(dict.fromkeys(content_ids))

        results: Dict[AnyContentId, LicenseData] = {}
        pending: List[ContentId] = []
        for each in unique:
            if isinstance(each, ContentId):
                pending.append(each)
            else:
                results[each] = LicenseData.invalid(each)

        hints: Dict[ContentId, LicenseData] = {}
        for source in self._sources:
            if not pending:
                break

            found = self._query_source(source, pending, deadline)
            resolved = set()
            for content_id, data in found.items():
                if data.status is Status.APPROVED or (source.authoritative and data.status is Status.RESTRICTED):
                    results[content_id] = data
                    resolved.add(content_id)
                else:
                    hints.setdefault(content_id, data)
            pending = [each for each in pending if each not in resolved]

        for each in pending:
            hint = hints.get(each)
            results[each] = hint.as_needs_review() if hint else LicenseData.needs_review(each)

        if pending:
            logger.info(f"{len(pending)} of {len(unique)} content id(s) need review")

        return {each: results[each] for each in unique}

    def _batches(self, content_ids: List[ContentId]) -> List[List[ContentId]]:
        return [content_ids[i : i + self._batch_size] for i in range(0, len(content_ids), self._batch_size)]

    def _query_source(
        self, source: LicenseDataSource, pending: List[ContentId], deadline: Optional[float]
    ) -> Dict[ContentId, LicenseData]:
        """Send all batches for one source and collect what it knows."""
        batches = self._batches(pending)
        logger.info(f"Querying {source.name} for {len(pending)} content id(s) in {len(batches)} batch(es)")

        found: Dict[ContentId, LicenseData] = {}
        wanted = set(pending)
        executor = ThreadPoolExecutor(max_workers=min(self._max_workers, len(batches)))
        try:
            futures = {executor.submit(self._query_batch, source, batch, deadline): batch for batch in batches}
            remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
            try:
                for future in as_completed(futures, timeout=remaining):
                    for content_id, data in future.result().items():
                        if content_id in wanted and content_id not in found:
                            found[content_id] = data
            except FuturesTimeoutError:
                outstanding = sum(len(batch) for future, batch in futures.items() if not future.done())
                logger.warning(
                    f"Timed out waiting for {source.name}; {outstanding} content id(s) left unresolved"
                )
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        return found

    def _query_batch(
        self, source: LicenseDataSource, batch: List[ContentId], deadline: Optional[float]
    ) -> Dict[ContentId, LicenseData]:
        """Query one batch, retrying transport failures. Never raises."""
        attempts = max(1, self._retry.attempts)
        for attempt in range(1, attempts + 1):
            if deadline is not None and time.monotonic() >= deadline:
                logger.warning(f"Time budget exhausted before querying {source.name} for {len(batch)} id(s)")
                return {}
            try:
                return source.query(batch, self._session)
            except TransportError as e:
                if attempt == attempts:
                    logger.warning(
                        f"Giving up on {source.name} for a batch of {len(batch)} id(s) after {attempts} attempt(s): {e}"
                    )
                    return {}
                delay = self._retry.delay(attempt)
                if deadline is not None:
                    delay = min(delay, max(0.0, deadline - time.monotonic()))
                logger.warning(f"Attempt {attempt}/{attempts} against {source.name} failed: {e}; retrying in {delay:.1f}s")
                time.sleep(delay)
            except Exception as e:
                logger.error(f"Unexpected error querying {source.name}: {e}")
                return {}
        return {}
