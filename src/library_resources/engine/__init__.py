"""Registry operations and content access."""

from library_resources.engine.content import ContentService
from library_resources.engine.errors import (
    DuplicateResourceError,
    FileNotFoundInResourceError,
    InvalidResourceNameError,
    IsDirectoryError,
    LibraryResourcesError,
    NotClonedError,
    PathNotFoundError,
    PathOutsideResourceError,
    ProviderError,
    ResourceNotFoundError,
)
from library_resources.engine.manager import ProgressCallback, ResourceManager
from library_resources.engine.types import (
    AddResult,
    BatchItem,
    BatchResult,
    FileContent,
    Outcome,
    ResourceInfo,
    ResourceStatus,
    SearchResult,
    SearchSection,
    TreeListing,
)

__all__ = [
    "AddResult",
    "BatchItem",
    "BatchResult",
    "ContentService",
    "DuplicateResourceError",
    "FileContent",
    "FileNotFoundInResourceError",
    "InvalidResourceNameError",
    "IsDirectoryError",
    "LibraryResourcesError",
    "NotClonedError",
    "Outcome",
    "PathNotFoundError",
    "PathOutsideResourceError",
    "ProgressCallback",
    "ProviderError",
    "ResourceInfo",
    "ResourceManager",
    "ResourceNotFoundError",
    "ResourceStatus",
    "SearchResult",
    "SearchSection",
    "TreeListing",
]
