"""CSV summary collector."""

import csv
import sys
from typing import Optional, TextIO

from .._lookup import LicenseData
from ..exceptions import FileProcessingError
from ..logging_config import logger

CSV_HEADER = ("id", "license", "status", "authority", "confidence")


class CSVCollector:
    """
    Write one CSV row per result.

    Args:
        path: Output file path, or "-" for standard output
        stream: Already open text stream (takes precedence over path)
    """

    def __init__(self, path: Optional[str] = None, stream: Optional[TextIO] = None) -> None:
        self._owns_stream = False
        if stream is not None:
            self._stream = stream
        elif path is None or path == "-":
            self._stream = sys.stdout
        else:
            try:
                self._stream = open(path, "w", newline="", encoding="utf-8")
            except OSError as e:
                raise FileProcessingError(f"Can't write to {path}: {e}") from e
            self._owns_stream = True

        self._path = path
        self._writer = csv.writer(self._stream)
        self._writer.writerow(CSV_HEADER)

    def accept(self, data: LicenseData) -> None:
        self._writer.writerow(
            (str(data.content_id), data.license or "", data.status.value, data.authority, data.confidence)
        )

    def close(self) -> None:
        self._stream.flush()
        if self._owns_stream:
            self._stream.close()
            logger.info(f"Wrote summary to {self._path}")

    def get_status(self) -> int:
        return 0
