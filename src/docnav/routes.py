"""Route collection from a docs directory.

Each Markdown file under the docs directory becomes a route. Only the
leading YAML front matter block is read; page bodies are left alone.
"""

from __future__ import annotations

import posixpath
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from docnav.paths import strip_extension
from docnav.types import (
    Badge,
    LinkAttrs,
    PrevNextLinkConfig,
    parse_attrs,
    parse_prev_next,
)

CONTENT_SUFFIXES = (".md", ".mdx")
FRONT_MATTER_FENCE = "---"


@dataclass(frozen=True)
class SidebarMeta:
    """Sidebar settings from a page's front matter."""

    label: str | None = None
    order: float | None = None
    badge: Badge | None = None
    attrs: LinkAttrs = field(default_factory=dict)
    hidden: bool = False


@dataclass(frozen=True)
class Route:
    """A single content page.

    Attributes:
        id: Source path relative to the docs directory (e.g., "guides/intro.md").
        slug: URL path without slashes, "" for the root index page.
        title: Page title.
        sidebar: Sidebar label, order, badge, attrs and hidden flag.
        prev: Previous-link override from front matter.
        next: Next-link override from front matter.
    """

    id: str
    slug: str
    title: str
    sidebar: SidebarMeta = field(default_factory=SidebarMeta)
    prev: PrevNextLinkConfig = None
    next: PrevNextLinkConfig = None


@dataclass
class CollectResult:
    """Routes found in a docs directory plus anything that was left out."""

    routes: list[Route]
    skipped: list[tuple[Path, str]]
    warnings: list[str]


def slug_from_id(route_id: str) -> str:
    """Derive a URL slug from a source path.

    ``index.md`` maps to ``""`` and ``foo/index.md`` to ``foo``.
    """
    slug = strip_extension(route_id)
    if slug == "index":
        return ""
    if slug.endswith("/index"):
        return slug[: -len("/index")]
    return slug


def title_from_id(route_id: str) -> str:
    """Derive a title from the file name (``setup-guide.md`` -> ``Setup Guide``)."""
    name = posixpath.basename(strip_extension(route_id))
    if name == "index":
        name = posixpath.basename(posixpath.dirname(route_id)) or "home"
    return name.replace("-", " ").replace("_", " ").title()


def split_front_matter(text: str) -> str | None:
    """Return the raw YAML front matter block, or None if the file has none."""
    lines = text.lstrip("\ufeff").splitlines()
    if not lines or lines[0].strip() != FRONT_MATTER_FENCE:
        return None
    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == FRONT_MATTER_FENCE:
            return "\n".join(lines[1:i])
    raise ValueError("Unterminated front matter block")


def _parse_sidebar(value: Any) -> SidebarMeta:
    if value is None:
        return SidebarMeta()
    if not isinstance(value, dict):
        raise ValueError(f"sidebar must be a mapping, got {type(value).__name__}")

    label = value.get("label")
    if label is not None and not isinstance(label, str):
        raise ValueError("sidebar.label must be a string")

    order = value.get("order")
    # bool is an int subclass but never a valid order
    if order is not None and (
        isinstance(order, bool) or not isinstance(order, (int, float))
    ):
        raise ValueError("sidebar.order must be a number")

    hidden = value.get("hidden", False)
    if not isinstance(hidden, bool):
        raise ValueError("sidebar.hidden must be a boolean")

    return SidebarMeta(
        label=label,
        order=order,
        badge=Badge.from_raw(value.get("badge"), "sidebar.badge"),
        attrs=parse_attrs(value.get("attrs"), "sidebar.attrs"),
        hidden=hidden,
    )


def route_from_data(
    route_id: str, data: Mapping[str, Any], warnings: list[str] | None = None
) -> Route:
    """Build a Route from parsed front matter.

    Args:
        route_id: Source path relative to the docs directory.
        data: Front matter mapping.
        warnings: Optional list that collects non-fatal problems.

    Returns:
        The route.

    Raises:
        ValueError: If a field has the wrong type.
    """
    title = data.get("title")
    if title is None:
        title = title_from_id(route_id)
        if warnings is not None:
            warnings.append(f"{route_id}: no title in front matter, using {title!r}")
    elif not isinstance(title, str):
        raise ValueError(f"title must be a string, got {type(title).__name__}")

    slug = data.get("slug")
    if slug is None:
        slug = slug_from_id(route_id)
    elif not isinstance(slug, str):
        raise ValueError(f"slug must be a string, got {type(slug).__name__}")
    else:
        slug = slug.strip("/")

    return Route(
        id=route_id,
        slug=slug,
        title=title,
        sidebar=_parse_sidebar(data.get("sidebar")),
        prev=parse_prev_next(data.get("prev")),
        next=parse_prev_next(data.get("next")),
    )


def routes_from_data(items: Iterable[Mapping[str, Any]]) -> list[Route]:
    """Build routes from in-memory mappings.

    Each mapping needs an ``id`` and may carry any front matter key.
    """
    routes: list[Route] = []
    for item in items:
        route_id = item.get("id")
        if not isinstance(route_id, str):
            raise ValueError("Each route needs a string 'id'")
        routes.append(route_from_data(route_id, item))
    return routes


def _is_ignored(relative: Path) -> bool:
    return any(part.startswith((".", "_")) for part in relative.parts)


def _iter_content_files(docs_dir: Path) -> Iterable[Path]:
    for path in sorted(docs_dir.rglob("*")):
        if path.suffix not in CONTENT_SUFFIXES or not path.is_file():
            continue
        if _is_ignored(path.relative_to(docs_dir)):
            continue
        yield path


def collect_routes(docs_dir: Path) -> CollectResult:
    """Collect routes from every Markdown file in a docs directory.

    Args:
        docs_dir: Root of the content collection.

    Returns:
        CollectResult with routes in path order, skipped files and warnings.

    Raises:
        FileNotFoundError: If the docs directory doesn't exist.
    """
    if not docs_dir.is_dir():
        raise FileNotFoundError(f"Docs directory not found: {docs_dir}")

    routes: list[Route] = []
    skipped: list[tuple[Path, str]] = []
    warnings: list[str] = []
    seen_slugs: dict[str, str] = {}

    for path in _iter_content_files(docs_dir):
        route_id = path.relative_to(docs_dir).as_posix()

        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            skipped.append((path, "File has encoding errors"))
            continue

        try:
            raw = split_front_matter(text)
            data = yaml.safe_load(raw) if raw else None
        except (ValueError, yaml.YAMLError) as exc:
            skipped.append((path, f"Invalid front matter: {exc}"))
            continue

        if data is None:
            data = {}
        if not isinstance(data, dict):
            skipped.append((path, "Front matter must be a mapping"))
            continue

        try:
            route = route_from_data(route_id, data, warnings)
        except ValueError as exc:
            skipped.append((path, str(exc)))
            continue

        if route.slug in seen_slugs:
            owner = seen_slugs[route.slug]
            skipped.append((path, f"Duplicate slug {route.slug!r} (used by {owner})"))
            continue
        seen_slugs[route.slug] = route_id
        routes.append(route)

    return CollectResult(routes=routes, skipped=skipped, warnings=warnings)
