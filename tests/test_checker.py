"""Tests for LicenseChecker classification."""

import threading
from unittest.mock import Mock, patch

import pytest

from license_vetting._lookup import (
    INVALID_AUTHORITY,
    LicenseChecker,
    LicenseData,
    Provenance,
    RetryPolicy,
    Status,
)
from license_vetting.content_id import ContentId, InvalidContentId
from license_vetting.exceptions import TransportError
from license_vetting.exclusion import ExcludedSourcesFilter


class FakeSource:
    """In-memory license data source answering from a fixed table."""

    def __init__(self, name, authoritative, answers=None, failures=0, error=TransportError):
        self.name = name
        self.authoritative = authoritative
        self.answers = answers or {}
        self.failures = failures
        self.error = error
        self.calls = []
        self._lock = threading.Lock()

    def query(self, content_ids, session):
        with self._lock:
            self.calls.append(list(content_ids))
            if self.failures:
                self.failures -= 1
                raise self.error("unavailable")
        return {each: self.answers[each] for each in content_ids if each in self.answers}


def record(content_id, status, provenance, license="MIT"):
    return LicenseData(content_id, license, status, provenance, authority="test", confidence=100)


def authoritative(content_id, status=Status.APPROVED, license="MIT"):
    return record(content_id, status, Provenance.AUTHORITATIVE, license)


def heuristic(content_id, status=Status.APPROVED, license="MIT"):
    return record(content_id, status, Provenance.HEURISTIC, license)


def npm_ids(count):
    return [ContentId("npm", "npmjs", "-", f"pkg-{i}", "1.0.0") for i in range(count)]


@pytest.fixture
def no_retry():
    return RetryPolicy(attempts=1, backoff_factor=0)


class TestClassification:
    """Test precedence between sources."""

    def test_authoritative_answers_win(self, mock_session, left_pad, code_frame):
        foundation = FakeSource(
            "foundation",
            True,
            {left_pad: authoritative(left_pad), code_frame: authoritative(code_frame, Status.RESTRICTED)},
        )
        clearlydefined = FakeSource("clearlydefined", False, {left_pad: heuristic(left_pad)})

        results = LicenseChecker([foundation, clearlydefined], session=mock_session).classify([left_pad, code_frame])

        assert results[left_pad].provenance is Provenance.AUTHORITATIVE
        assert results[left_pad].status is Status.APPROVED
        assert results[code_frame].status is Status.RESTRICTED
        # Nothing left for the fallback
        assert clearlydefined.calls == []

    def test_authoritative_source_is_consulted_first_whatever_the_order(self, mock_session, left_pad):
        clearlydefined = FakeSource("clearlydefined", False, {left_pad: heuristic(left_pad)})
        foundation = FakeSource("foundation", True, {left_pad: authoritative(left_pad, Status.RESTRICTED)})

        data = LicenseChecker([clearlydefined, foundation], session=mock_session).classify([left_pad])[left_pad]

        assert data.status is Status.RESTRICTED
        assert data.provenance is Provenance.AUTHORITATIVE
        assert foundation.calls == [[left_pad]]
        assert clearlydefined.calls == []

    def test_heuristic_fallback_for_unknown_ids(self, mock_session, left_pad, code_frame):
        foundation = FakeSource("foundation", True, {left_pad: authoritative(left_pad)})
        clearlydefined = FakeSource("clearlydefined", False, {code_frame: heuristic(code_frame)})

        results = LicenseChecker([foundation, clearlydefined], session=mock_session).classify([left_pad, code_frame])

        assert results[code_frame].status is Status.APPROVED
        assert results[code_frame].provenance is Provenance.HEURISTIC
        assert clearlydefined.calls == [[code_frame]]

    def test_no_record_anywhere_needs_review(self, mock_session, left_pad):
        sources = [FakeSource("foundation", True), FakeSource("clearlydefined", False)]

        data = LicenseChecker(sources, session=mock_session).classify([left_pad])[left_pad]

        assert data.status is Status.NEEDS_REVIEW
        assert data.provenance is Provenance.NONE
        assert data.license is None

    def test_heuristic_hint_is_kept_for_review(self, mock_session, left_pad):
        hint = heuristic(left_pad, Status.NEEDS_REVIEW, license="GPL-3.0-only")
        sources = [FakeSource("foundation", True), FakeSource("clearlydefined", False, {left_pad: hint})]

        data = LicenseChecker(sources, session=mock_session).classify([left_pad])[left_pad]

        assert data.status is Status.NEEDS_REVIEW
        assert data.license == "GPL-3.0-only"

    def test_heuristic_restricted_does_not_resolve(self, mock_session, left_pad):
        sources = [FakeSource("clearlydefined", False, {left_pad: heuristic(left_pad, Status.RESTRICTED)})]

        data = LicenseChecker(sources, session=mock_session).classify([left_pad])[left_pad]

        assert data.status is Status.NEEDS_REVIEW

    def test_invalid_ids_skip_remote_lookup(self, mock_session, left_pad):
        invalid = InvalidContentId("not a coordinate")
        foundation = FakeSource("foundation", True, {left_pad: authoritative(left_pad)})

        results = LicenseChecker([foundation], session=mock_session).classify([invalid, left_pad])

        assert results[invalid].status is Status.NEEDS_REVIEW
        assert results[invalid].authority == INVALID_AUTHORITY
        assert foundation.calls == [[left_pad]]

    def test_duplicates_are_looked_up_once(self, mock_session, left_pad, code_frame):
        foundation = FakeSource("foundation", True, {left_pad: authoritative(left_pad)})

        results = LicenseChecker([foundation], session=mock_session).classify([left_pad, code_frame, left_pad])

        assert list(results) == [left_pad, code_frame]
        assert foundation.calls == [[left_pad, code_frame]]

    def test_results_follow_first_appearance(self, mock_session):
        ids = npm_ids(7)
        answers = {each: authoritative(each) for each in ids[::2]}
        foundation = FakeSource("foundation", True, answers)

        results = LicenseChecker([foundation], session=mock_session, batch_size=2).classify(list(reversed(ids)))

        assert list(results) == list(reversed(ids))

    def test_classify_is_idempotent(self, mock_session, left_pad, code_frame):
        foundation = FakeSource("foundation", True, {left_pad: authoritative(left_pad)})
        checker = LicenseChecker([foundation], session=mock_session)

        assert checker.classify([left_pad, code_frame]) == checker.classify([left_pad, code_frame])

    def test_empty_input(self, mock_session):
        foundation = FakeSource("foundation", True)
        assert LicenseChecker([foundation], session=mock_session).classify([]) == {}
        assert foundation.calls == []

    def test_excluded_ids_are_never_looked_up(self, mock_session, left_pad, code_frame):
        foundation = FakeSource("foundation", True, {code_frame: authoritative(code_frame)})
        id_filter = ExcludedSourcesFilter(["npm/npmjs/-/left-pad/*"])

        results = LicenseChecker([foundation], session=mock_session).classify(id_filter.filter([left_pad, code_frame]))

        assert list(results) == [code_frame]
        assert foundation.calls == [[code_frame]]


class TestBatching:
    """Test batch splitting and concurrency settings."""

    def test_ids_are_split_into_batches(self, mock_session):
        ids = npm_ids(5)
        foundation = FakeSource("foundation", True)

        LicenseChecker([foundation], session=mock_session, batch_size=2, max_workers=3).classify(ids)

        assert sorted(len(batch) for batch in foundation.calls) == [1, 2, 2]
        assert sorted(each for batch in foundation.calls for each in batch) == sorted(ids)

    @pytest.mark.parametrize("kwargs", [{"batch_size": 0}, {"max_workers": 0}])
    def test_invalid_sizes(self, mock_session, kwargs):
        with pytest.raises(ValueError):
            LicenseChecker([], session=mock_session, **kwargs)


class TestRetries:
    """Test retry and degradation behaviour."""

    def test_transient_failure_is_retried(self, mock_session, left_pad):
        foundation = FakeSource("foundation", True, {left_pad: authoritative(left_pad)}, failures=2)
        checker = LicenseChecker([foundation], session=mock_session, retry=RetryPolicy(attempts=3, backoff_factor=0))

        results = checker.classify([left_pad])

        assert results[left_pad].status is Status.APPROVED
        assert len(foundation.calls) == 3

    def test_exhausted_retries_fall_through(self, mock_session, left_pad):
        foundation = FakeSource("foundation", True, {left_pad: authoritative(left_pad)}, failures=5)
        clearlydefined = FakeSource("clearlydefined", False, {left_pad: heuristic(left_pad)})
        checker = LicenseChecker(
            [foundation, clearlydefined], session=mock_session, retry=RetryPolicy(attempts=2, backoff_factor=0)
        )

        results = checker.classify([left_pad])

        assert len(foundation.calls) == 2
        assert results[left_pad].provenance is Provenance.HEURISTIC

    def test_exhausted_retries_leave_needs_review(self, mock_session, left_pad, no_retry):
        foundation = FakeSource("foundation", True, failures=1)

        data = LicenseChecker([foundation], session=mock_session, retry=no_retry).classify([left_pad])[left_pad]

        assert data.status is Status.NEEDS_REVIEW

    def test_unexpected_error_degrades(self, mock_session, left_pad):
        foundation = FakeSource("foundation", True, failures=1, error=RuntimeError)
        checker = LicenseChecker([foundation], session=mock_session, retry=RetryPolicy(attempts=3, backoff_factor=0))

        data = checker.classify([left_pad])[left_pad]

        assert data.status is Status.NEEDS_REVIEW
        assert len(foundation.calls) == 1

    def test_backoff_delays(self, mock_session, left_pad):
        foundation = FakeSource("foundation", True, failures=2)
        checker = LicenseChecker([foundation], session=mock_session, retry=RetryPolicy(attempts=3, backoff_factor=0.5))

        with patch("license_vetting._lookup.checker.time.sleep") as mock_sleep:
            checker.classify([left_pad])

        assert [call.args[0] for call in mock_sleep.call_args_list] == [0.5, 1.0]

    def test_retry_policy_delay(self):
        policy = RetryPolicy(attempts=4, backoff_factor=2)
        assert [policy.delay(n) for n in (1, 2, 3)] == [2, 4, 8]


class TestTimeout:
    """Test the global time budget."""

    def test_timeout_leaves_outstanding_ids_for_review(self, mock_session, left_pad):
        release = threading.Event()

        def slow_query(content_ids, session):
            release.wait(5)
            return {left_pad: authoritative(left_pad)}

        slow = Mock()
        slow.name = "slow"
        slow.authoritative = True
        slow.query.side_effect = slow_query

        try:
            results = LicenseChecker([slow], session=mock_session, timeout=0.2).classify([left_pad])
        finally:
            release.set()

        assert results[left_pad].status is Status.NEEDS_REVIEW
