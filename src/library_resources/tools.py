"""Agent-facing operations.

Each method returns the text shown to the agent. Expected failures (unknown
resource, missing clone, provider errors, bad arguments) come back as text
and are never raised.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from library_resources.cli.formatting import (
    format_added,
    format_batch,
    format_file,
    format_info,
    format_list,
    format_removed,
    format_search,
    format_tree,
)
from library_resources.core.registry import Scope
from library_resources.engine.errors import LibraryResourcesError, ProviderError

if TYPE_CHECKING:
    from collections.abc import Callable

    from library_resources.engine.content import ContentService
    from library_resources.engine.manager import ResourceManager

VALID_ACTIONS = ("add", "remove", "list", "update", "info", "restore")

_USAGE = {
    "add": "add <name> <url> [branch] [notes] [--project]",
    "remove": "remove <name>",
    "info": "info <name>",
}


def _usage_error(action: str, requirement: str) -> str:
    return f"Error: '{action}' requires {requirement}.\nUsage: {_USAGE[action]}"


def _error_text(exc: LibraryResourcesError | OSError) -> str:
    # Provider messages already read "Error cloning repository: ...".
    if isinstance(exc, ProviderError):
        return str(exc)
    return f"Error: {exc}"


class ResourceTools:
    """The six registry actions plus search, read and tree, as text in / text out."""

    def __init__(self, manager: ResourceManager, content: ContentService) -> None:
        self._manager = manager
        self._content = content

    def resource_manage(
        self,
        action: str,
        *,
        name: str | None = None,
        url: str | None = None,
        branch: str | None = None,
        notes: str | None = None,
        project: bool = False,
    ) -> str:
        """Run one registry action: add, remove, list, update, info or restore."""
        handlers: dict[str, Callable[[], str]] = {
            "add": lambda: self._add(name, url, branch, notes, project),
            "remove": lambda: self._remove(name),
            "list": lambda: format_list(self._manager.list(), color=False),
            "update": lambda: format_batch(
                self._manager.update(name or None),
                empty_msg="No resources to update.",
                color=False,
            ),
            "info": lambda: self._info(name),
            "restore": lambda: format_batch(
                self._manager.restore(name or None),
                empty_msg="No resources in registry to restore.",
                color=False,
            ),
        }
        handler = handlers.get(action)
        if handler is None:
            return f"Unknown action: {action}. Valid actions: {', '.join(VALID_ACTIONS)}"
        try:
            return handler()
        except (LibraryResourcesError, OSError) as exc:
            return _error_text(exc)

    def _add(
        self,
        name: str | None,
        url: str | None,
        branch: str | None,
        notes: str | None,
        project: bool,
    ) -> str:
        if not name or not url:
            return _usage_error("add", "name and url")
        result = self._manager.add(
            name,
            url,
            branch=branch,
            notes=notes or "",
            scope=Scope.PROJECT if project else Scope.GLOBAL,
        )
        return format_added(result)

    def _remove(self, name: str | None) -> str:
        if not name:
            return _usage_error("remove", "a name")
        return format_removed(self._manager.remove(name))

    def _info(self, name: str | None) -> str:
        if not name:
            return _usage_error("info", "a name")
        return format_info(self._manager.info(name), color=False)

    def resource_search(
        self, query: str, *, name: str | None = None, include: str | None = None
    ) -> str:
        """Search resource content; all resources when *name* is omitted."""
        try:
            return format_search(self._content.search(query, name=name or None, include=include))
        except LibraryResourcesError as exc:
            return str(exc)
        except OSError as exc:
            return f"Error: {exc}"

    def resource_read(self, name: str, file_path: str) -> str:
        """Read one file from a resource, relative to its root."""
        try:
            return format_file(self._content.read(name, file_path))
        except LibraryResourcesError as exc:
            return str(exc)
        except OSError as exc:
            return f"Error: {exc}"

    def resource_tree(self, name: str, subpath: str = "", depth: int | None = None) -> str:
        """List files in a resource, optionally below *subpath*."""
        try:
            return format_tree(self._content.tree(name, subpath, depth))
        except LibraryResourcesError as exc:
            return str(exc)
        except OSError as exc:
            return f"Error: {exc}"
