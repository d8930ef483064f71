"""Tests for the agent-facing text operations."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest

from library_resources.core.registry import Resource, Scope
from library_resources.tools import ResourceTools

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from conftest import FakeSearch, FakeVCS

    from library_resources.engine.content import ContentService
    from library_resources.engine.manager import ResourceManager


@pytest.fixture
def tools(manager: ResourceManager, content: ContentService) -> ResourceTools:
    return ResourceTools(manager, content)


class TestResourceManage:
    def test_empty_list(self, tools: ResourceTools) -> None:
        text = tools.resource_manage("list")
        assert text.startswith("No resources found.")
        assert "add <name> <url>" in text

    def test_unknown_action(self, tools: ResourceTools) -> None:
        text = tools.resource_manage("purge")
        assert text == (
            "Unknown action: purge. Valid actions: add, remove, list, update, info, restore"
        )

    @pytest.mark.parametrize(
        ("action", "kwargs", "usage"),
        [
            ("add", {"name": "svelte"}, "Usage: add <name> <url> [branch] [notes] [--project]"),
            ("add", {"url": "https://x"}, "Usage: add <name> <url>"),
            ("remove", {}, "Usage: remove <name>"),
            ("info", {"name": ""}, "Usage: info <name>"),
        ],
    )
    def test_missing_arguments(
        self, tools: ResourceTools, action: str, kwargs: dict[str, str], usage: str
    ) -> None:
        text = tools.resource_manage(action, **kwargs)
        assert text.startswith(f"Error: '{action}' requires")
        assert usage in text

    def test_add_list_remove_flow(self, tools: ResourceTools) -> None:
        added = tools.resource_manage(
            "add", name="kit", url="https://example/kit", notes="SvelteKit docs", project=True
        )
        assert added.startswith("Added 'kit' (project)")
        assert "Notes: SvelteKit docs" in added
        assert "Files: 1" in added

        listed = tools.resource_manage("list")
        assert "kit [project]" in listed
        assert "https://example/kit (main)" in listed
        assert "[NOT CLONED]" not in listed
        assert "\x1b[" not in listed

        assert tools.resource_manage("remove", name="kit") == "Removed 'kit'"
        assert tools.resource_manage("list").startswith("No resources found.")

    def test_duplicate_add(self, tools: ResourceTools, seed: Callable[..., Resource]) -> None:
        seed("svelte")
        text = tools.resource_manage("add", name="svelte", url="https://other")
        assert text == (
            "Error: Resource 'svelte' already exists (global). "
            "Remove it first or use a different name."
        )

    def test_clone_failure_text(self, tools: ResourceTools, vcs: FakeVCS) -> None:
        vcs.failing_urls.add("https://bad")
        text = tools.resource_manage("add", name="bad", url="https://bad")
        assert text == "Error cloning repository: fatal: repository 'https://bad' not found"

    def test_not_found(self, tools: ResourceTools) -> None:
        assert tools.resource_manage("info", name="ghost") == "Error: Resource 'ghost' not found."
        assert tools.resource_manage("remove", name="ghost") == (
            "Error: Resource 'ghost' not found."
        )
        assert tools.resource_manage("update", name="ghost") == (
            "Error: Resource 'ghost' not found."
        )

    def test_empty_batches(self, tools: ResourceTools) -> None:
        assert tools.resource_manage("update") == "No resources to update."
        assert tools.resource_manage("restore") == "No resources in registry to restore."

    def test_update_and_restore_lines(
        self,
        tools: ResourceTools,
        seed: Callable[..., Resource],
        clone_dir: Callable[..., Path],
        vcs: FakeVCS,
    ) -> None:
        clone_dir(seed("svelte"))
        seed("kit", Scope.PROJECT)
        vcs.pull_output = ""

        assert tools.resource_manage("update") == (
            "svelte: Already up to date\nkit: Not cloned (use 'restore' to clone)"
        )
        assert tools.resource_manage("restore") == "svelte: Already cloned\nkit: Restored"

    def test_failed_batch_item(
        self,
        tools: ResourceTools,
        seed: Callable[..., Resource],
        clone_dir: Callable[..., Path],
        vcs: FakeVCS,
    ) -> None:
        clone_dir(seed("svelte"))
        vcs.failing_pulls.add("svelte")
        assert tools.resource_manage("update", name="svelte") == (
            "svelte: Error - fatal: unable to access remote"
        )

    def test_info_not_cloned(self, tools: ResourceTools, seed: Callable[..., Resource]) -> None:
        seed("svelte", notes="")
        text = tools.resource_manage("info", name="svelte")
        assert "Resource: svelte" in text
        assert "Notes: (none)" in text
        assert "Status: NOT CLONED" in text
        assert "Last Commit" not in text

    def test_info_cloned(
        self,
        tools: ResourceTools,
        seed: Callable[..., Resource],
        clone_dir: Callable[..., Path],
    ) -> None:
        clone_dir(seed("svelte"))
        text = tools.resource_manage("info", name="svelte")
        assert "Status: Cloned" in text
        assert "Last Commit: abc1234 Initial commit (2 days ago)" in text
        assert "Cloned: 2020-01-01T00:00:00Z" in text

    def test_filesystem_error_becomes_text(
        self, tools: ResourceTools, manager: ResourceManager, seed: Callable[..., Resource]
    ) -> None:
        seed("svelte")
        with patch.object(manager, "remove", side_effect=PermissionError("denied")):
            assert tools.resource_manage("remove", name="svelte") == "Error: denied"


class TestContentTools:
    def test_search_no_resources(self, tools: ResourceTools) -> None:
        assert tools.resource_search("x") == "No resources available."

    def test_search_no_matches(
        self,
        tools: ResourceTools,
        seed: Callable[..., Resource],
        clone_dir: Callable[..., Path],
    ) -> None:
        clone_dir(seed("svelte"))
        assert tools.resource_search("runes") == 'No matches found for "runes"'
        assert tools.resource_search("runes", name="svelte") == (
            'No matches found for "runes" in svelte'
        )

    def test_search_results(
        self,
        tools: ResourceTools,
        seed: Callable[..., Resource],
        clone_dir: Callable[..., Path],
        search_provider: FakeSearch,
    ) -> None:
        clone_dir(seed("svelte"))
        search_provider.matches["svelte"] = ["docs/a.md:3:$state rune"]

        text = tools.resource_search("state")

        assert text == (
            'Search results for "state":\n\n### svelte\n```\ndocs/a.md:3:$state rune\n```'
        )

    def test_search_unknown_name(self, tools: ResourceTools) -> None:
        assert tools.resource_search("x", name="ghost") == "Resource 'ghost' not found."

    def test_read(
        self,
        tools: ResourceTools,
        seed: Callable[..., Resource],
        clone_dir: Callable[..., Path],
    ) -> None:
        clone_dir(seed("svelte"), {"docs/a.md": "hello\n"})
        assert tools.resource_read("svelte", "docs/a.md") == "# svelte/docs/a.md\n\nhello\n"

    def test_read_errors(
        self,
        tools: ResourceTools,
        seed: Callable[..., Resource],
        clone_dir: Callable[..., Path],
    ) -> None:
        seed("kit")
        assert tools.resource_read("kit", "a.md") == (
            "Resource 'kit' is not cloned. Run 'restore kit' first."
        )
        clone_dir(seed("svelte"))
        assert tools.resource_read("svelte", "nope.md") == (
            "File not found: nope.md\n\nUse tree to see available files."
        )

    def test_tree(
        self,
        tools: ResourceTools,
        seed: Callable[..., Resource],
        clone_dir: Callable[..., Path],
    ) -> None:
        clone_dir(seed("svelte"), {"a.md": "", "docs/b.md": ""})
        assert tools.resource_tree("svelte") == "Files in svelte (depth: 3):\n\na.md\ndocs/b.md"
        assert tools.resource_tree("svelte", "docs", 1) == (
            "Files in svelte/docs (depth: 1):\n\ndocs/b.md"
        )

    def test_tree_truncated_footer(
        self,
        tools: ResourceTools,
        seed: Callable[..., Resource],
        clone_dir: Callable[..., Path],
    ) -> None:
        clone_dir(seed("svelte"), {f"f{i}.md": "" for i in range(6)})
        assert tools.resource_tree("svelte").endswith("\n\n(truncated at 5 files)")

    def test_tree_empty_dir(
        self,
        tools: ResourceTools,
        seed: Callable[..., Resource],
        clone_dir: Callable[..., Path],
    ) -> None:
        root = clone_dir(seed("svelte"))
        (root / "empty").mkdir()
        assert tools.resource_tree("svelte", "empty") == "No files found in svelte/empty"

    def test_tree_missing_path(
        self,
        tools: ResourceTools,
        seed: Callable[..., Resource],
        clone_dir: Callable[..., Path],
    ) -> None:
        clone_dir(seed("svelte"))
        assert tools.resource_tree("svelte", "nope") == "Path not found: nope"

    @pytest.mark.parametrize(
        ("method", "call"),
        [
            ("search", lambda t: t.resource_search("x")),
            ("read", lambda t: t.resource_read("svelte", "a.md")),
            ("tree", lambda t: t.resource_tree("svelte")),
        ],
    )
    def test_filesystem_error_becomes_text(
        self,
        tools: ResourceTools,
        content: ContentService,
        method: str,
        call: Callable[[ResourceTools], str],
    ) -> None:
        with patch.object(content, method, side_effect=OSError("disk unavailable")):
            assert call(tools) == "Error: disk unavailable"
