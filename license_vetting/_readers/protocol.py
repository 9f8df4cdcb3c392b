"""Protocol definition for dependency list readers."""

from typing import List, Protocol, TextIO

from ..content_id import AnyContentId


class DependencyListReader(Protocol):
    """Protocol for manifest readers.

    Each reader implements this protocol to turn the text of one manifest
    format into content ids. Readers are selected by ReaderKind (see
    registry.py), which is detected from the manifest's file name.

    Example:
        class GoSumReader:
            name = "go-sum"
            supported_files = ("go.sum",)

            def get_content_ids(self, stream: TextIO) -> List[AnyContentId]:
                # Parse each line of go.sum
                ...
    """

    @property
    def name(self) -> str:
        """Human-readable name of this reader.

        Used for logging and diagnostics.
        Examples: "flat", "npm-package-lock", "yarn-lock"
        """
        ...

    @property
    def supported_files(self) -> tuple[str, ...]:
        """File names this reader is chosen for during detection.

        The flat reader is the fallback and lists no files.
        """
        ...

    def get_content_ids(self, stream: TextIO) -> List[AnyContentId]:
        """Read every dependency declared in the stream.

        Implementations must:
        1. Preserve input order and duplicates
        2. Turn entries they cannot understand into InvalidContentId
           (or skip them where the format defines them as noise)
        3. Never raise for a single bad entry

        Args:
            stream: Text stream positioned at the start of the manifest

        Returns:
            List of ContentId / InvalidContentId objects.

        Raises:
            FileProcessingError: If the manifest as a whole is unreadable
                (e.g. package-lock.json that is not JSON).
        """
        ...
