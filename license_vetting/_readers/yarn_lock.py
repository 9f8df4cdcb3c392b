"""Reader for yarn.lock files.

The format is not YAML (classic yarn lockfiles only look like it), so it is
read with a small indentation-driven parser. For example:

    # THIS IS AN AUTOGENERATED FILE. DO NOT EDIT THIS FILE DIRECTLY.
    # yarn lockfile v1

    "@babel/code-frame@^7.0.0", "@babel/code-frame@^7.10.4":
      version "7.10.4"
      resolved "https://registry.yarnpkg.com/@babel/code-frame/-/code-frame-7.10.4.tgz#168da1a3"
      integrity sha512-vG6SvB6oYEhvgisZNFRmRCUkLz11c7rp+tbNTynGqc6mS1d5ATd/sGyV6W0KZZnXRKMTzZDRgQT3Ou9jhpAfUg==
      dependencies:
        "@babel/highlight" "^7.10.4"

Every top-level block is one resolved package; the block's ``version`` child
holds the version that was actually resolved.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, TextIO

from ..content_id import AnyContentId, ContentId, InvalidContentId
from ..logging_config import logger

_ENTRY_PATTERN = re.compile(r"(?:@(?P<namespace>[\w-]+)/)?(?P<name>[\w.-]+)")
# Classic lockfiles write `version "1.2.3"`, Berry lockfiles `version: 1.2.3`
_VERSION_PATTERN = re.compile(r'version:?\s+"?(?P<version>[^"\s]+)"?')

METADATA_ENTRY = "__metadata"
# Berry entries for the project's own workspaces and local links
LOCAL_PROTOCOLS = ("@workspace:", "@link:", "@portal:")


@dataclass
class Record:
    """One line of the lockfile and the lines nested beneath it."""

    value: Optional[str] = None
    nested: List["Record"] = field(default_factory=list)

    def add(self, item: "Record") -> None:
        self.nested.append(item)

    def get_version(self) -> Optional[str]:
        """Answer the version declared by the first immediate `version` child."""
        for child in self.nested:
            match = _VERSION_PATTERN.fullmatch(child.value or "")
            if match:
                return match.group("version")
        return None

    def get_id(self) -> AnyContentId:
        """Treat this record as a top-level entry and build its content id."""
        value = self.value or ""
        match = _ENTRY_PATTERN.search(value)
        if not match:
            return InvalidContentId(value)

        content_id = ContentId.create("npm", "npmjs", match.group("namespace"), match.group("name"), self.get_version())
        if not content_id.is_valid:
            logger.debug(f"yarn.lock entry without a resolved version: {value}")
            return InvalidContentId(value)
        return content_id


def get_nesting(line: str) -> int:
    """Answer the nesting depth of a line; every two leading spaces are one level."""
    return (len(line) - len(line.lstrip(" "))) // 2


def read_records(stream: TextIO) -> Record:
    """
    Build the record hierarchy of a lockfile in one top-down pass.

    At any point the top of the stack is the last line read and the depth of
    the stack is that line's nesting level (the root record sits at depth 1,
    so top-level lines are at level 2).
    """
    root = Record()
    stack: List[Record] = [root]

    for line in stream:
        line = line.rstrip("\r\n")
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        level = 2 + get_nesting(line)

        while len(stack) > level:
            stack.pop()

        if level > len(stack):
            # Nested under the item on top of the stack
            item = Record(stripped)
            stack[-1].add(item)
            stack.append(item)
        elif level == len(stack):
            # Sibling of the item on top of the stack; it replaces that item
            stack.pop()
            item = Record(stripped)
            stack[-1].add(item)
            stack.append(item)

    return root


def is_skipped(entry: str) -> bool:
    """Answer whether a top-level entry is lockfile metadata or a local package."""
    if entry.lstrip('"').startswith(METADATA_ENTRY):
        return True
    return any(protocol in entry for protocol in LOCAL_PROTOCOLS)


class YarnLockReader:
    """Reader for yarn.lock files (classic v1 and Berry)."""

    name = "yarn-lock"
    supported_files = ("yarn.lock",)

    def get_content_ids(self, stream: TextIO) -> List[AnyContentId]:
        root = read_records(stream)
        return [record.get_id() for record in root.nested if not is_skipped(record.value or "")]
