"""Settings model."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from library_resources.core.layout import ResourceLayout, default_global_dir, default_project_dir


class Settings(BaseSettings):
    """Locations, limits and tool paths.

    Fields can be set via ``.library-resources.yaml`` (constructor kwargs) or
    environment variables with the ``LIBRARY_RESOURCES_`` prefix.
    Constructor kwargs take precedence.
    """

    model_config = SettingsConfigDict(env_prefix="LIBRARY_RESOURCES_")

    project_root: Path = Field(default_factory=Path.cwd)
    global_dir: Path = Field(default_factory=default_global_dir)
    project_dir: Path | None = None
    default_branch: str = Field(default="main", min_length=1)
    search_max_matches: int = Field(default=50, gt=0)
    tree_max_entries: int = Field(default=100, gt=0)
    tree_default_depth: int = Field(default=3, gt=0)
    git_executable: str = "git"
    grep_executable: str = "grep"

    @property
    def resolved_project_dir(self) -> Path:
        if self.project_dir is None:
            return default_project_dir(self.project_root)
        project_dir = self.project_dir.expanduser()
        if project_dir.is_absolute():
            return project_dir
        return self.project_root / project_dir

    def layout(self) -> ResourceLayout:
        return ResourceLayout(self.global_dir.expanduser(), self.resolved_project_dir)
