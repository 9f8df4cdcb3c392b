"""License data source implementations."""

from .clearlydefined import ClearlyDefinedSource
from .foundation import FoundationSource

__all__ = [
    "ClearlyDefinedSource",
    "FoundationSource",
]
