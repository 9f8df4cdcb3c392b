"""Result collectors for classification output."""

from .csv_summary import CSV_HEADER, CSVCollector
from .needs_review import NeedsReviewCollector
from .protocol import ResultsCollector

__all__ = [
    "ResultsCollector",
    "NeedsReviewCollector",
    "CSVCollector",
    "CSV_HEADER",
]
