"""External tool providers (git, grep, local filesystem)."""

from library_resources.providers.base import (
    ContentSearchProvider,
    FileProvider,
    ProviderResult,
    VersionControlProvider,
)
from library_resources.providers.files import LocalFileProvider
from library_resources.providers.git import GitProvider
from library_resources.providers.search import GrepSearchProvider

__all__ = [
    "ContentSearchProvider",
    "FileProvider",
    "GitProvider",
    "GrepSearchProvider",
    "LocalFileProvider",
    "ProviderResult",
    "VersionControlProvider",
]
