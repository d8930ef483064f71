"""Registry mutations kept in step with the working copies on disk."""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Literal

from library_resources.core.registry import Resource, Scope, is_valid_name, utcnow
from library_resources.core.resolver import ScopeResolver
from library_resources.engine.errors import (
    DuplicateResourceError,
    InvalidResourceNameError,
    ProviderError,
    ResourceNotFoundError,
)
from library_resources.engine.types import (
    AddResult,
    BatchItem,
    BatchResult,
    Outcome,
    ResourceInfo,
    ResourceStatus,
)

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, Literal["start", "done"]], None]

if TYPE_CHECKING:
    from pathlib import Path

    from library_resources.core.layout import ResourceLayout
    from library_resources.core.registry import RegistryStore
    from library_resources.providers.base import (
        FileProvider,
        ProviderResult,
        VersionControlProvider,
    )


def validate_name(name: str) -> None:
    if not is_valid_name(name):
        raise InvalidResourceNameError(name)


def _discard(path: Path) -> None:
    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.exists():
        shutil.rmtree(path)


class ResourceManager:
    """Add, remove, update and restore resources.

    Every operation reads both registries fresh, writes at most the one scope
    that owns the affected record, and only writes after the provider call it
    depends on has finished.
    """

    def __init__(
        self,
        *,
        layout: ResourceLayout,
        store: RegistryStore,
        vcs: VersionControlProvider,
        files: FileProvider,
        default_branch: str = "main",
    ) -> None:
        self._layout = layout
        self._store = store
        self._vcs = vcs
        self._files = files
        self._default_branch = default_branch
        self._resolver = ScopeResolver(store)

    @property
    def resolver(self) -> ScopeResolver:
        return self._resolver

    @property
    def layout(self) -> ResourceLayout:
        return self._layout

    def _require(self, name: str) -> Resource:
        resource = self._resolver.find(name)
        if resource is None:
            raise ResourceNotFoundError(name)
        return resource

    def _targets(self, name: str | None) -> list[Resource]:
        if name is None:
            return self._resolver.merged()
        return [self._require(name)]

    def _call(
        self, operation: str, fn: Callable[..., ProviderResult], *args: Any
    ) -> ProviderResult:
        try:
            result = fn(*args)
        except OSError as exc:
            raise ProviderError(operation, str(exc)) from exc
        if not result.ok:
            raise ProviderError(operation, result.error_text)
        return result

    def _touch(self, resource: Resource) -> None:
        registry = self._store.load(resource.scope)
        if registry.touch(resource.name):
            self._store.save(resource.scope, registry)

    def _stats(self, path: Path) -> tuple[int | None, str | None]:
        try:
            return self._files.file_count(path), self._files.disk_usage(path)
        except OSError as exc:
            logger.debug("Stats unavailable for %s: %s", path, exc)
            return None, None

    # ------------------------------------------------------------------
    # Single-resource operations
    # ------------------------------------------------------------------

    def add(
        self,
        name: str,
        url: str,
        *,
        branch: str | None = None,
        notes: str = "",
        scope: Scope = Scope.GLOBAL,
    ) -> AddResult:
        """Clone *url* and register it under *name* in *scope*.

        Either both the clone and the registry entry exist afterwards, or
        neither does. A directory already present at the target before the
        call is never deleted.
        """
        validate_name(name)
        existing = self._resolver.find(name)
        if existing is not None:
            raise DuplicateResourceError(name, existing.scope.value)

        scope = Scope(scope)
        now = utcnow()
        resource = Resource(
            name=name,
            url=url,
            branch=branch or self._default_branch,
            notes=notes,
            scope=scope,
            cloned_at=now,
            updated_at=now,
        )
        dest = self._layout.resource_path(resource)
        preexisting = dest.exists()

        self._layout.repos_dir(scope).mkdir(parents=True, exist_ok=True)
        try:
            self._call("cloning repository", self._vcs.clone, url, resource.branch, dest)
            registry = self._store.load(scope)
            registry.resources.append(resource)
            self._store.save(scope, registry)
        except Exception:
            if not preexisting:
                _discard(dest)
            raise

        logger.info("Added %s (%s) from %s@%s", name, scope.value, url, resource.branch)
        file_count, size = self._stats(dest)
        return AddResult(resource=resource, path=dest, file_count=file_count, size=size)

    def remove(self, name: str) -> Resource:
        """Delete the working copy (if any) and the record from its owning scope."""
        resource = self._require(name)
        path = self._layout.resource_path(resource)
        _discard(path)

        registry = self._store.load(resource.scope)
        registry.remove(name)
        self._store.save(resource.scope, registry)
        logger.info("Removed %s (%s)", name, resource.scope.value)
        return resource

    def list(self) -> list[ResourceStatus]:
        statuses = []
        for resource in self._resolver.merged():
            path = self._layout.resource_path(resource)
            statuses.append(ResourceStatus(resource=resource, path=path, cloned=path.exists()))
        return statuses

    def info(self, name: str) -> ResourceInfo:
        resource = self._require(name)
        path = self._layout.resource_path(resource)
        info = ResourceInfo(resource=resource, path=path, cloned=path.exists())
        if not info.cloned:
            return info

        info.file_count, info.size = self._stats(path)
        try:
            commit = self._vcs.last_commit(path)
        except OSError as exc:
            logger.debug("Last commit unavailable for %s: %s", name, exc)
        else:
            if commit.ok:
                info.last_commit = commit.stdout.strip() or None
        return info

    # ------------------------------------------------------------------
    # Batch operations
    # ------------------------------------------------------------------

    def _run_batch(
        self,
        name: str | None,
        step: Callable[[Resource], BatchItem],
        progress: ProgressCallback | None,
    ) -> BatchResult:
        result = BatchResult()
        for resource in self._targets(name):
            if progress is not None:
                progress(resource.name, "start")
            result.items.append(step(resource))
            if progress is not None:
                progress(resource.name, "done")
        return result

    def _update_one(self, resource: Resource) -> BatchItem:
        path = self._layout.resource_path(resource)
        if not path.exists():
            return BatchItem(
                name=resource.name,
                outcome=Outcome.NOT_CLONED,
                message="Not cloned (use 'restore' to clone)",
            )
        try:
            pulled = self._call("pulling", self._vcs.pull, path)
        except ProviderError as exc:
            logger.warning("Pull failed for %s: %s", resource.name, exc.message)
            return BatchItem(name=resource.name, outcome=Outcome.FAILED, message=exc.message)

        self._touch(resource)
        return BatchItem(
            name=resource.name,
            outcome=Outcome.UPDATED,
            message=pulled.stdout.strip() or "Already up to date",
        )

    def _restore_one(self, resource: Resource) -> BatchItem:
        path = self._layout.resource_path(resource)
        if path.exists():
            return BatchItem(
                name=resource.name, outcome=Outcome.ALREADY_CLONED, message="Already cloned"
            )

        self._layout.repos_dir(resource.scope).mkdir(parents=True, exist_ok=True)
        try:
            self._call("cloning repository", self._vcs.clone, resource.url, resource.branch, path)
        except ProviderError as exc:
            _discard(path)
            logger.warning("Restore failed for %s: %s", resource.name, exc.message)
            return BatchItem(name=resource.name, outcome=Outcome.FAILED, message=exc.message)

        self._touch(resource)
        logger.info("Restored %s (%s)", resource.name, resource.scope.value)
        return BatchItem(name=resource.name, outcome=Outcome.RESTORED, message="Restored")

    def update(
        self, name: str | None = None, *, progress: ProgressCallback | None = None
    ) -> BatchResult:
        """Pull one resource, or every resource when *name* is None.

        A failure on one resource is reported in its item and does not stop
        the others.
        """
        return self._run_batch(name, self._update_one, progress)

    def restore(
        self, name: str | None = None, *, progress: ProgressCallback | None = None
    ) -> BatchResult:
        """Re-clone missing working copies from the registry's url and branch."""
        return self._run_batch(name, self._restore_one, progress)
