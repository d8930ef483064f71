"""Merged view over the global and project registries."""

from __future__ import annotations

from typing import TYPE_CHECKING

from library_resources.core.registry import Scope

if TYPE_CHECKING:
    from library_resources.core.registry import RegistryStore, Resource

# Later scopes shadow earlier ones.
_MERGE_ORDER = (Scope.GLOBAL, Scope.PROJECT)


class ScopeResolver:
    """Name-keyed union of both registries, project entries taking precedence.

    A project record replaces the global record of the same name wholesale;
    fields are never merged. Each call re-reads the registry files.
    """

    def __init__(self, store: RegistryStore) -> None:
        self._store = store

    def merged(self) -> list[Resource]:
        by_name: dict[str, Resource] = {}
        for scope in _MERGE_ORDER:
            for record in self._store.load(scope).resources:
                by_name[record.name] = record.model_copy(update={"scope": scope})
        return list(by_name.values())

    def find(self, name: str) -> Resource | None:
        for resource in self.merged():
            if resource.name == name:
                return resource
        return None
