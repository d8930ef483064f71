"""Text rendering for registry and content results."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

import typer

from library_resources.engine.types import Outcome

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from library_resources.core.registry import Resource
    from library_resources.engine.types import (
        AddResult,
        BatchItem,
        BatchResult,
        FileContent,
        ResourceInfo,
        ResourceStatus,
        SearchResult,
        TreeListing,
    )


class _OutcomeStyle(NamedTuple):
    color: str
    label: str


_OUTCOME_STYLES: dict[str, _OutcomeStyle] = {
    "updated": _OutcomeStyle("green", "updated"),
    "restored": _OutcomeStyle("green", "restored"),
    "already-cloned": _OutcomeStyle("bright_black", "already cloned"),
    "not-cloned": _OutcomeStyle("yellow", "not cloned"),
    "failed": _OutcomeStyle("red", "failed"),
}

EMPTY_LIST_MESSAGE = "No resources found."
ADD_HINT = "Add one with: add <name> <url> [branch] [notes]"


def styler(color: bool) -> Callable[..., str]:
    """Return ``typer.style`` when *color* is True, otherwise a passthrough."""
    if color:
        return typer.style
    return lambda text, **_kw: text


def _ts(value: datetime | None) -> str:
    if value is None:
        return "unknown"
    return value.isoformat().replace("+00:00", "Z")


def _or_unknown(value: object) -> str:
    return "unknown" if value is None else str(value)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


def format_list(statuses: list[ResourceStatus], *, color: bool = True) -> str:
    """Render the merged view, flagging resources without a working copy."""
    if not statuses:
        return f"{EMPTY_LIST_MESSAGE}\n\n{ADD_HINT}"

    style = styler(color)
    lines = ["Library Resources:"]
    for status in statuses:
        r = status.resource
        flag = "" if status.cloned else style(" [NOT CLONED]", fg="red")
        lines.append("")
        lines.append(f"{style(r.name, bold=True)} [{r.scope.value}]{flag}")
        lines.append(f"  {r.url} ({r.branch})")
        if r.notes:
            lines.append(f"  Notes: {r.notes}")
        lines.append(f"  Updated: {_ts(r.updated_at)}")
    return "\n".join(lines)


def format_added(result: AddResult) -> str:
    r = result.resource
    return "\n".join(
        [
            f"Added '{r.name}' ({r.scope.value})",
            f"  URL: {r.url}",
            f"  Branch: {r.branch}",
            f"  Notes: {r.notes or '(none)'}",
            f"  Files: {_or_unknown(result.file_count)}",
            f"  Size: {_or_unknown(result.size)}",
        ]
    )


def format_removed(resource: Resource) -> str:
    return f"Removed '{resource.name}'"


def format_info(info: ResourceInfo, *, color: bool = True) -> str:
    style = styler(color)
    r = info.resource
    status = "Cloned" if info.cloned else style("NOT CLONED", fg="red")
    lines = [
        f"Resource: {r.name}",
        f"Scope: {r.scope.value}",
        f"URL: {r.url}",
        f"Branch: {r.branch}",
        f"Notes: {r.notes or '(none)'}",
        f"Path: {info.path}",
        f"Cloned: {_ts(r.cloned_at)}",
        f"Updated: {_ts(r.updated_at)}",
        f"Status: {status}",
    ]
    if info.cloned:
        lines.append(f"Size: {_or_unknown(info.size)}")
        lines.append(f"Files: {_or_unknown(info.file_count)}")
        lines.append(f"Last Commit: {_or_unknown(info.last_commit)}")
    return "\n".join(lines)


def format_batch_item(item: BatchItem, *, color: bool = True) -> str:
    if item.outcome == Outcome.FAILED:
        return styler(color)(f"{item.name}: Error - {item.message}", fg="red")
    return f"{item.name}: {item.message}"


def format_batch(result: BatchResult, *, empty_msg: str, color: bool = True) -> str:
    """One ``name: message`` line per resource, or *empty_msg*."""
    if not result.items:
        return empty_msg
    return "\n".join(format_batch_item(i, color=color) for i in result.items)


def format_batch_summary(result: BatchResult, *, header: str, color: bool = True) -> str:
    """Render e.g. ``Update complete: 2 updated, 1 not cloned, 1 failed.``"""
    style = styler(color)
    summary = result.summary()
    parts = [
        style(f"{n} {_OUTCOME_STYLES[key].label}", fg=_OUTCOME_STYLES[key].color)
        for key, n in summary.items()
        if n
    ]
    return f"{style(header, bold=True)}: {', '.join(parts) or 'nothing to do'}."


# ---------------------------------------------------------------------------
# Content
# ---------------------------------------------------------------------------


def format_search(result: SearchResult) -> str:
    if not result.sections:
        if result.name is None and result.targets == 0:
            return "No resources available."
        where = f" in {result.name}" if result.name else ""
        return f'No matches found for "{result.query}"{where}'

    blocks = [f'Search results for "{result.query}":']
    for section in result.sections:
        body = "\n".join(section.lines)
        blocks.append(f"\n### {section.name}\n```\n{body}\n```")
    return "\n".join(blocks)


def format_file(content: FileContent) -> str:
    return f"# {content.name}/{content.file_path}\n\n{content.content}"


def format_tree(listing: TreeListing) -> str:
    if not listing.files:
        return f"No files found in {listing.name}/{listing.subpath}"

    header = f"{listing.name}/{listing.subpath}" if listing.subpath else listing.name
    text = f"Files in {header} (depth: {listing.depth}):\n\n" + "\n".join(listing.files)
    if listing.truncated:
        text += f"\n\n(truncated at {len(listing.files)} files)"
    return text
