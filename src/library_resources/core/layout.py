"""Scope-to-path resolution.

Layout (default):
- global: ~/.config/opencode/resources/{resources.json,repos/<name>}
- project: {project_root}/.opencode/resources/{resources.json,repos/<name>}
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from library_resources.core.registry import Scope

if TYPE_CHECKING:
    from library_resources.core.registry import Resource

REGISTRY_FILENAME = "resources.json"
REPOS_DIRNAME = "repos"


def default_global_dir() -> Path:
    return Path.home() / ".config" / "opencode" / "resources"


def default_project_dir(project_root: Path) -> Path:
    return project_root / ".opencode" / "resources"


class ResourceLayout:
    """Maps scopes and resources to locations on disk. Never touches the filesystem."""

    def __init__(self, global_dir: Path, project_dir: Path) -> None:
        self._roots = {Scope.GLOBAL: global_dir, Scope.PROJECT: project_dir}

    @classmethod
    def for_project(cls, project_root: Path) -> ResourceLayout:
        return cls(default_global_dir(), default_project_dir(project_root))

    def root(self, scope: Scope) -> Path:
        return self._roots[Scope(scope)]

    def registry_path(self, scope: Scope) -> Path:
        return self.root(scope) / REGISTRY_FILENAME

    def repos_dir(self, scope: Scope) -> Path:
        return self.root(scope) / REPOS_DIRNAME

    def resource_path(self, resource: Resource) -> Path:
        """Working-copy location; depends only on the resource's scope and name."""
        return self.repos_dir(resource.scope) / resource.name
