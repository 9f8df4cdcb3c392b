"""Filtering of content ids the user has excluded from vetting."""

import re
from pathlib import Path
from typing import Iterable, List, Optional, Pattern

from .content_id import AnyContentId
from .exceptions import FileProcessingError
from .logging_config import logger


def _compile(pattern: str) -> Pattern[str]:
    # Only "*" is special: any run of characters
    return re.compile(".*".join(re.escape(part) for part in pattern.split("*")))


class ExcludedSourcesFilter:
    """
    Decide which content ids to keep.

    Patterns are matched against the string form of an id, e.g.
    ``npm/npmjs/-/left-pad/*`` drops every version of left-pad and
    ``maven/mavencentral/org.eclipse.*`` drops a whole group family.
    A pattern without ``*`` must match exactly.

    Example:
        id_filter = ExcludedSourcesFilter(["npm/npmjs/-/left-pad/*"])
        kept = [each for each in ids if id_filter.keep(each)]
    """

    def __init__(self, patterns: Optional[Iterable[str]] = None) -> None:
        self._exact: set[str] = set()
        self._wildcards: List[Pattern[str]] = []
        for pattern in patterns or []:
            pattern = pattern.strip()
            if not pattern or pattern.startswith("#"):
                continue
            if "*" in pattern:
                self._wildcards.append(_compile(pattern))
            else:
                self._exact.add(pattern)

    @classmethod
    def from_file(cls, path: Optional[str]) -> "ExcludedSourcesFilter":
        """Load patterns from a file, one per line. No file keeps everything."""
        if not path:
            return cls()
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise FileProcessingError(f'Cannot read excluded sources file "{path}": {e}') from e
        return cls(text.splitlines())

    @property
    def is_empty(self) -> bool:
        return not self._exact and not self._wildcards

    def keep(self, content_id: AnyContentId) -> bool:
        """Answer False when the id matches an exclusion pattern."""
        if self.is_empty:
            return True
        value = str(content_id)
        if value in self._exact or any(p.fullmatch(value) for p in self._wildcards):
            logger.debug(f"Excluding {value}")
            return False
        return True

    def filter(self, content_ids: Iterable[AnyContentId]) -> List[AnyContentId]:
        """Keep the ids that are not excluded, in order."""
        return [each for each in content_ids if self.keep(each)]
