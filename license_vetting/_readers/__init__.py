"""Dependency manifest readers.

Supported manifest formats:
- Flat lists of coordinates (any file name, or stdin)
- npm: package-lock.json (v1, v2, v3)
- Yarn: yarn.lock (classic and Berry)
- Go: go.sum
- Maven: dependency:list output (dependencies.txt)

Example usage:
    from license_vetting._readers import ReaderKind, read_content_ids

    ids = read_content_ids("yarn.lock")
    ids = read_content_ids("deps.txt", ReaderKind.MAVEN_LIST)
"""

from .flat_file import FlatFileReader
from .go_sum import GoSumReader
from .maven_list import MavenDependencyListReader
from .package_lock import PackageLockReader, split_npm_name
from .protocol import DependencyListReader
from .registry import STDIN_NAME, ReaderKind, get_reader, read_content_ids
from .yarn_lock import Record, YarnLockReader, read_records

__all__ = [
    # Main API
    "read_content_ids",
    "get_reader",
    "ReaderKind",
    "STDIN_NAME",
    # Readers
    "DependencyListReader",
    "FlatFileReader",
    "GoSumReader",
    "MavenDependencyListReader",
    "PackageLockReader",
    "YarnLockReader",
    # Helpers
    "Record",
    "read_records",
    "split_npm_name",
]
