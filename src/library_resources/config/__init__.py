"""Settings loading and wiring of the registry services."""

from __future__ import annotations

from library_resources.config.loader import ConfigError, load_settings
from library_resources.config.schema import Settings
from library_resources.core.registry import RegistryStore
from library_resources.engine.content import ContentService
from library_resources.engine.manager import ResourceManager
from library_resources.providers import GitProvider, GrepSearchProvider, LocalFileProvider

__all__ = [
    "ConfigError",
    "Settings",
    "build_content",
    "build_manager",
    "load_settings",
]


def build_manager(settings: Settings) -> ResourceManager:
    """Build a ``ResourceManager`` using git and the local filesystem."""
    layout = settings.layout()
    return ResourceManager(
        layout=layout,
        store=RegistryStore(layout),
        vcs=GitProvider(settings.git_executable),
        files=LocalFileProvider(),
        default_branch=settings.default_branch,
    )


def build_content(settings: Settings) -> ContentService:
    """Build a ``ContentService`` using grep and the local filesystem."""
    layout = settings.layout()
    return ContentService(
        layout=layout,
        store=RegistryStore(layout),
        search=GrepSearchProvider(settings.grep_executable),
        files=LocalFileProvider(),
        max_matches=settings.search_max_matches,
        max_entries=settings.tree_max_entries,
        default_depth=settings.tree_default_depth,
    )
