"""Protocol definition for result collectors."""

from typing import Protocol

from .._lookup import LicenseData


class ResultsCollector(Protocol):
    """Protocol for consumers of classification results.

    Every LicenseData produced by a run is passed to ``accept``; ``close``
    is called once when the run is over. The primary collector's
    ``get_status`` becomes the process exit status.
    """

    def accept(self, data: LicenseData) -> None:
        """Consume one classification result."""
        ...

    def close(self) -> None:
        """Flush output; called once after the last result."""
        ...

    def get_status(self) -> int:
        """Answer 0 when everything this collector saw is fine, non-zero otherwise."""
        ...
