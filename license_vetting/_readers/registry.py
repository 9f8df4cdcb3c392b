"""Reader selection for dependency manifests."""

import sys
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from ..content_id import AnyContentId
from ..exceptions import FileProcessingError
from ..logging_config import logger
from .flat_file import FlatFileReader
from .go_sum import GoSumReader
from .maven_list import MavenDependencyListReader
from .package_lock import PackageLockReader
from .protocol import DependencyListReader
from .yarn_lock import YarnLockReader

STDIN_NAME = "-"


class ReaderKind(Enum):
    """The closed set of manifest formats.

    The value is the name used on the command line (``--format``).
    """

    FLAT = "flat"
    PACKAGE_LOCK = "package-lock"
    YARN_LOCK = "yarn-lock"
    GO_SUM = "go-sum"
    MAVEN_LIST = "maven-list"

    @classmethod
    def detect(cls, file_name: str) -> "ReaderKind":
        """Pick the reader kind for a file name; anything unrecognised is a flat list."""
        if file_name == STDIN_NAME:
            return cls.FLAT
        base_name = Path(file_name).name
        for kind in cls:
            if base_name in get_reader(kind).supported_files:
                return kind
        return cls.FLAT


_READERS: Dict[ReaderKind, DependencyListReader] = {
    ReaderKind.FLAT: FlatFileReader(),
    ReaderKind.PACKAGE_LOCK: PackageLockReader(),
    ReaderKind.YARN_LOCK: YarnLockReader(),
    ReaderKind.GO_SUM: GoSumReader(),
    ReaderKind.MAVEN_LIST: MavenDependencyListReader(),
}


def get_reader(kind: ReaderKind) -> DependencyListReader:
    """Answer the reader instance for a kind."""
    return _READERS[kind]


def read_content_ids(file_name: str, kind: Optional[ReaderKind] = None) -> List[AnyContentId]:
    """
    Read all content ids from a manifest file (or stdin for "-").

    Args:
        file_name: Path of the manifest, or "-" for standard input
        kind: Reader kind; detected from the file name when not given

    Returns:
        Content ids in manifest order.

    Raises:
        FileProcessingError: If the file does not exist or cannot be read
    """
    kind = kind or ReaderKind.detect(file_name)
    reader = get_reader(kind)

    if file_name == STDIN_NAME:
        logger.info(f"Reading dependencies from standard input ({reader.name})")
        return reader.get_content_ids(sys.stdin)

    path = Path(file_name)
    if not path.is_file():
        raise FileProcessingError(f'The file "{file_name}" does not exist.')

    logger.info(f"Reading dependencies from {file_name} ({reader.name})")
    try:
        with path.open("r", encoding="utf-8") as f:
            content_ids = reader.get_content_ids(f)
    except (OSError, UnicodeDecodeError) as e:
        raise FileProcessingError(f'Failed to read "{file_name}": {e}') from e

    logger.debug(f"Read {len(content_ids)} content id(s) from {file_name}")
    return content_ids
