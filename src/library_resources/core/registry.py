"""Registry persistence for tracked resources."""

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidatorFunctionWrapHandler,
    field_validator,
)

if TYPE_CHECKING:
    from library_resources.core.layout import ResourceLayout

logger = logging.getLogger(__name__)

REGISTRY_VERSION = 1


def utcnow() -> datetime:
    return datetime.now(UTC)


def is_valid_name(name: str) -> bool:
    """A name is used as a directory under ``repos/``: one path component, nothing more."""
    return bool(name) and name not in {".", ".."} and "/" not in name and "\\" not in name


class Scope(str, Enum):
    """Which registry owns a resource."""

    GLOBAL = "global"
    PROJECT = "project"


class Resource(BaseModel):
    """A tracked external repository.

    Attributes:
        name: Unique name in the merged view; also the clone directory name
        url: Source location handed to the version-control provider
        branch: Branch cloned and pulled
        notes: Free-text annotation
        scope: Registry the record was read from
        cloned_at: When the resource was first cloned (None if the file lacks it)
        updated_at: Last successful pull or restore (None if the file lacks it)
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str
    url: str
    branch: str = "main"
    notes: str = ""
    scope: Scope = Scope.GLOBAL
    cloned_at: datetime | None = Field(default=None, alias="clonedAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")

    @field_validator("name")
    @classmethod
    def _single_component(cls, value: str) -> str:
        if not is_valid_name(value):
            raise ValueError("must be a single path component")
        return value

    @field_validator("scope", mode="before")
    @classmethod
    def _lenient_scope(cls, value: Any) -> Any:
        # The owning file decides the scope; the stored value is informational.
        if isinstance(value, Scope):
            return value
        try:
            return Scope(str(value).strip().lower())
        except ValueError:
            return Scope.GLOBAL


class Registry(BaseModel):
    """On-disk collection of resources for a single scope."""

    version: int = REGISTRY_VERSION
    resources: list[Resource] = Field(default_factory=list)

    @field_validator("resources", mode="wrap")
    @classmethod
    def _skip_invalid_records(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        if not isinstance(value, list):
            return handler(value)
        kept: list[Resource] = []
        for record in value:
            try:
                kept.extend(handler([record]))
            except ValidationError as exc:
                name = record.get("name") if isinstance(record, dict) else None
                logger.warning(
                    "Skipping invalid registry record %r: %s", name, exc.errors()[0]["msg"]
                )
        return kept

    def get(self, name: str) -> Resource | None:
        for resource in self.resources:
            if resource.name == name:
                return resource
        return None

    def remove(self, name: str) -> bool:
        """Drop every record called *name*. Returns True if anything was removed."""
        kept = [r for r in self.resources if r.name != name]
        removed = len(kept) != len(self.resources)
        self.resources = kept
        return removed

    def touch(self, name: str) -> bool:
        """Refresh ``updated_at`` on *name*. Returns False if it is not tracked here."""
        resource = self.get(name)
        if resource is None:
            return False
        resource.updated_at = utcnow()
        return True


class RegistryStore:
    """Load and save one registry file per scope.

    Files are re-read on every call; nothing is cached between operations.
    There is no locking: two processes writing the same scope concurrently
    can lose updates (last writer wins).
    """

    def __init__(self, layout: ResourceLayout) -> None:
        self._layout = layout

    def path(self, scope: Scope) -> Path:
        return self._layout.registry_path(scope)

    def load(self, scope: Scope) -> Registry:
        """Load a scope's registry.

        A missing, unreadable or malformed file yields an empty registry.
        """
        path = self.path(scope)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return Registry()
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Cannot read %s registry at %s: %s", scope.value, path, exc)
            return Registry()

        try:
            registry = Registry.model_validate_json(raw)
        except ValidationError as exc:
            logger.warning(
                "Ignoring malformed %s registry at %s (%d errors)",
                scope.value,
                path,
                exc.error_count(),
            )
            return Registry()

        if registry.version != REGISTRY_VERSION:
            logger.warning(
                "Registry %s has version %d, expected %d; reading it as-is",
                path,
                registry.version,
                REGISTRY_VERSION,
            )
        logger.debug("Registry loaded: scope=%s resources=%d", scope.value, len(registry.resources))
        return registry

    def save(self, scope: Scope, registry: Registry) -> None:
        """Overwrite a scope's registry file with *registry*.

        The content is written to a temp file next to the target and renamed
        into place.
        """
        path = self.path(scope)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = registry.model_dump(mode="json", by_alias=True)
        content = json.dumps(data, indent=2) + "\n"

        fd, tmp_path = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
        tmp_file = Path(tmp_path)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            tmp_file.replace(path)
        finally:
            with contextlib.suppress(FileNotFoundError):
                tmp_file.unlink()
        logger.debug("Registry saved: scope=%s path=%s", scope.value, path)
