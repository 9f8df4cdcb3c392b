"""Command-line entry point and run orchestration.

A run reads every input manifest, drops excluded content, classifies what is
left and reports the results:

    license-vetting package-lock.json
    license-vetting --summary DEPENDENCIES yarn.lock go.sum
    mvn dependency:list | license-vetting --format maven-list -

Every option can also be given through a LICENSE_VETTING_* environment
variable (e.g. LICENSE_VETTING_BATCH=100).
"""

import sys
from typing import List, Optional, Tuple

import click
import requests

from .. import __version__
from .._collectors import CSVCollector, NeedsReviewCollector, ResultsCollector
from .._lookup import (
    CLEARLYDEFINED_API_BASE,
    DEFAULT_BATCH_SIZE,
    DEFAULT_CONFIDENCE_THRESHOLD,
    DEFAULT_MAX_WORKERS,
    FOUNDATION_API_URL,
    ApprovedLicenses,
    LicenseChecker,
    RetryPolicy,
    create_default_checker,
)
from .._readers import ReaderKind, read_content_ids
from ..config import DEFAULT_BACKOFF_FACTOR, DEFAULT_RETRY_ATTEMPTS, DEFAULT_TIMEOUT, Settings, validate_project_id
from ..console import gha_error, gha_group, print_review_hint, redirect_to_stderr
from ..content_id import AnyContentId
from ..exceptions import ConfigurationError, FileProcessingError, ValidationError
from ..exclusion import ExcludedSourcesFilter
from ..http_client import create_session
from ..logging_config import logger, setup_logging


def build_checker(settings: Settings, session: requests.Session) -> LicenseChecker:
    """Assemble the checker and its collaborators from the settings."""
    approved_licenses = ApprovedLicenses.load(settings.approved_licenses, session)
    return create_default_checker(
        session=session,
        approved_licenses=approved_licenses,
        foundation_api_url=settings.foundation_api_url,
        clearlydefined_api_base=settings.clearlydefined_api_base,
        confidence_threshold=settings.confidence_threshold,
        batch_size=settings.batch_size,
        max_workers=settings.max_workers,
        retry=RetryPolicy(attempts=settings.retry_attempts, backoff_factor=settings.backoff_factor),
        timeout=settings.timeout,
    )


def run(
    settings: Settings,
    checker: Optional[LicenseChecker] = None,
    collectors: Optional[List[ResultsCollector]] = None,
) -> int:
    """
    Execute one license vetting run.

    All inputs are read before anything is looked up, so a missing file
    stops the run before any remote call. The ids of every input are then
    classified together: an id shared by several inputs is looked up and
    reported once, and the lookup time budget covers the whole run.

    When the CSV summary goes to stdout, console output moves to stderr.

    Args:
        settings: Validated settings
        checker: Optional checker; built from the settings otherwise
        collectors: Optional extra collectors fed alongside the primary one

    Returns:
        Exit status: 0 when everything is approved, 1 otherwise

    Raises:
        FileProcessingError: If an input or the exclusion file cannot be read
        ConfigurationError: If the approved-license list cannot be loaded
    """
    with redirect_to_stderr(settings.summary_file == "-"):
        return _run(settings, checker, collectors)


def _run(
    settings: Settings,
    checker: Optional[LicenseChecker],
    collectors: Optional[List[ResultsCollector]],
) -> int:
    project_id = settings.project_id
    if project_id:
        try:
            validate_project_id(project_id)
        except ValidationError as e:
            gha_error(str(e), title="Invalid project id")
            project_id = None

    id_filter = ExcludedSourcesFilter.from_file(settings.excluded_sources_file)

    inputs: List[Tuple[str, List[AnyContentId]]] = []
    for file_name in settings.files:
        inputs.append((file_name, read_content_ids(file_name, settings.reader_kind)))

    if checker is None:
        checker = build_checker(settings, create_session())

    primary = NeedsReviewCollector()
    all_collectors: List[ResultsCollector] = [primary]
    if settings.summary_file:
        all_collectors.append(CSVCollector(settings.summary_file))
    all_collectors.extend(collectors or [])

    kept: List[AnyContentId] = []
    for file_name, content_ids in inputs:
        kept_ids = id_filter.filter(content_ids)
        if len(kept_ids) != len(content_ids):
            logger.info(f"Excluded {len(content_ids) - len(kept_ids)} content id(s) from {file_name}")
        kept.extend(kept_ids)

    with gha_group(f"License vetting: {', '.join(settings.files)}"):
        results = checker.classify(kept)

    for data in results.values():
        for collector in all_collectors:
            collector.accept(data)

    for collector in all_collectors:
        collector.close()

    status = primary.get_status()
    if status != 0:
        print_review_hint(project_id)
    return status


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("files", nargs=-1, envvar="LICENSE_VETTING_FILES")
@click.option(
    "--format",
    "reader_format",
    type=click.Choice([kind.value for kind in ReaderKind]),
    envvar="LICENSE_VETTING_FORMAT",
    help="Manifest format. Detected from the file name when omitted.",
)
@click.option(
    "--summary",
    "summary_file",
    envvar="LICENSE_VETTING_SUMMARY",
    help="Write a CSV summary to this path ('-' for stdout).",
)
@click.option(
    "--excluded-sources",
    "excluded_sources_file",
    envvar="LICENSE_VETTING_EXCLUDED_SOURCES",
    help="File with content id patterns to exclude, one per line ('*' is a wildcard).",
)
@click.option(
    "--approved-licenses",
    envvar="LICENSE_VETTING_APPROVED_LICENSES",
    help="URL or path of a JSON approved-license list.",
)
@click.option(
    "--foundation-api",
    envvar="LICENSE_VETTING_FOUNDATION_API",
    default=FOUNDATION_API_URL,
    show_default=True,
    help="Clearance service URL.",
)
@click.option(
    "--clearlydefined-api",
    envvar="LICENSE_VETTING_CLEARLYDEFINED_API",
    default=CLEARLYDEFINED_API_BASE,
    show_default=True,
    help="ClearlyDefined base URL.",
)
@click.option(
    "--batch",
    "batch_size",
    type=int,
    envvar="LICENSE_VETTING_BATCH",
    default=DEFAULT_BATCH_SIZE,
    show_default=True,
    help="Ids per request.",
)
@click.option(
    "--workers",
    "max_workers",
    type=int,
    envvar="LICENSE_VETTING_WORKERS",
    default=DEFAULT_MAX_WORKERS,
    show_default=True,
    help="Concurrent requests.",
)
@click.option(
    "--confidence",
    "confidence_threshold",
    type=int,
    envvar="LICENSE_VETTING_CONFIDENCE",
    default=DEFAULT_CONFIDENCE_THRESHOLD,
    show_default=True,
    help="Minimum ClearlyDefined license score for heuristic approval.",
)
@click.option(
    "--retries",
    "retry_attempts",
    type=int,
    envvar="LICENSE_VETTING_RETRIES",
    default=DEFAULT_RETRY_ATTEMPTS,
    show_default=True,
    help="Attempts per batch.",
)
@click.option(
    "--backoff",
    "backoff_factor",
    type=float,
    envvar="LICENSE_VETTING_BACKOFF",
    default=DEFAULT_BACKOFF_FACTOR,
    show_default=True,
    help="Base delay between attempts (s); doubles on every retry.",
)
@click.option(
    "--timeout",
    type=float,
    envvar="LICENSE_VETTING_TIMEOUT",
    default=DEFAULT_TIMEOUT,
    show_default=True,
    help="Lookup time budget per run (s).",
)
@click.option(
    "--project",
    "project_id",
    envvar="LICENSE_VETTING_PROJECT",
    help="Project id used in the review hint, e.g. technology.dash.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    envvar="LICENSE_VETTING_LOG_LEVEL",
    default="INFO",
    show_default=True,
)
@click.option(
    "--structured-logs/--no-structured-logs",
    envvar="LICENSE_VETTING_STRUCTURED_LOGS",
    default=False,
    help="Emit JSON log lines.",
)
@click.version_option(__version__, prog_name="license-vetting")
def cli(
    files: Tuple[str, ...],
    reader_format: Optional[str],
    summary_file: Optional[str],
    excluded_sources_file: Optional[str],
    approved_licenses: Optional[str],
    foundation_api: str,
    clearlydefined_api: str,
    batch_size: int,
    max_workers: int,
    confidence_threshold: int,
    retry_attempts: int,
    backoff_factor: float,
    timeout: float,
    project_id: Optional[str],
    log_level: str,
    structured_logs: bool,
) -> None:
    """Check the license vetting status of a project's dependencies.

    FILES are dependency manifests (package-lock.json, yarn.lock, go.sum,
    Maven dependency lists or flat lists of ids). Use '-' to read a flat list
    from standard input.
    """
    setup_logging(level=log_level, structured=structured_logs, use_rich=sys.stderr.isatty())

    settings = Settings(
        files=list(files) or ["-"],
        reader_kind=ReaderKind(reader_format) if reader_format else None,
        summary_file=summary_file,
        excluded_sources_file=excluded_sources_file,
        approved_licenses=approved_licenses,
        foundation_api_url=foundation_api,
        clearlydefined_api_base=clearlydefined_api,
        batch_size=batch_size,
        max_workers=max_workers,
        confidence_threshold=confidence_threshold,
        retry_attempts=retry_attempts,
        backoff_factor=backoff_factor,
        timeout=timeout,
        project_id=project_id,
        log_level=log_level,
    )

    try:
        settings.validate()
        status = run(settings)
    except ConfigurationError as e:
        gha_error(str(e), title="Configuration error")
        sys.exit(1)
    except FileProcessingError as e:
        gha_error(str(e), title="Input error")
        sys.exit(1)

    sys.exit(status)


def main() -> None:
    """Console script entry point."""
    cli()
