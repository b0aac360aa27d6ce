"""Sidebar tree builder and previous/next pagination.

Turns a flat list of routes, or the user's sidebar config, into an ordered
tree of links and groups, and derives pagination links from it.
"""

from __future__ import annotations

import posixpath
import sys
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import Any, Literal, NamedTuple

from docnav.config.model import (
    AutogenerateItem,
    GroupItem,
    LinkItem,
    SidebarItem,
    SiteConfig,
)
from docnav.paths import (
    ensure_leading_and_trailing_slashes,
    ensure_trailing_slash,
    get_breadcrumbs,
    is_absolute,
    path_with_base,
    strip_extension,
)
from docnav.routes import Route
from docnav.types import Badge, LinkAttrs, PrevNextLinkConfig, PrevNextOverride

# Sort weight for routes without an explicit order
MAX_ORDER = sys.float_info.max


@dataclass(frozen=True)
class Link:
    """Sidebar link."""

    label: str
    href: str
    is_current: bool = False
    badge: Badge | None = None
    attrs: LinkAttrs = field(default_factory=dict)
    type: Literal["link"] = field(default="link", init=False)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "type": self.type,
            "label": self.label,
            "href": self.href,
            "isCurrent": self.is_current,
            "badge": self.badge.to_dict() if self.badge else None,
            "attrs": dict(self.attrs),
        }


@dataclass(frozen=True)
class Group:
    """Sidebar group of nested entries."""

    label: str
    entries: list[SidebarEntry] = field(default_factory=list)
    collapsed: bool = False
    badge: Badge | None = None
    type: Literal["group"] = field(default="group", init=False)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "type": self.type,
            "label": self.label,
            "entries": [entry.to_dict() for entry in self.entries],
            "collapsed": self.collapsed,
            "badge": self.badge.to_dict() if self.badge else None,
        }


SidebarEntry = Link | Group


class Dir(dict[str, "Dir | Route"]):
    """Directory node in the route tree.

    Keys are directory names for subdirectories and slug basenames for
    routes. The node type, not a key, marks a directory, so a page called
    ``items`` or ``keys`` is just another entry.
    """


class PrevNext(NamedTuple):
    """Previous and next links for a page."""

    prev: Link | None
    next: Link | None


def make_link(
    href: str,
    label: str,
    current_pathname: str,
    base: str = "/",
    badge: Badge | None = None,
    attrs: LinkAttrs | None = None,
) -> Link:
    """Create a link, prefixing relative hrefs with the base path.

    ``href`` must already carry leading and trailing slashes unless it is
    absolute.
    """
    if not is_absolute(href):
        href = path_with_base(href, base)
    return Link(
        label=label,
        href=href,
        is_current=href == ensure_trailing_slash(current_pathname),
        badge=badge,
        attrs=dict(attrs) if attrs else {},
    )


def _normalize_href(href: str) -> str:
    return href if is_absolute(href) else ensure_leading_and_trailing_slashes(href)


def treeify(routes: Iterable[Route]) -> Dir:
    """Turn a flat list of routes into a directory tree rooted at the docs root.

    Hidden routes are left out. A page and a directory with the same name
    share one key, and whichever comes later replaces the other.
    """
    root = Dir()
    for route in routes:
        if route.sidebar.hidden:
            continue
        current = root
        for segment in get_breadcrumbs(route.id):
            child = current.get(segment)
            if not isinstance(child, Dir):
                child = Dir()
                current[segment] = child
            current = child
        current[posixpath.basename(route.slug)] = route
    return root


def get_order(node: Dir | Route) -> float:
    """Get the sort weight of a route or directory. Lower ranks higher.

    A directory weighs as much as its lowest weighted descendant.
    """
    if isinstance(node, Dir):
        return min((get_order(child) for child in node.values()), default=MAX_ORDER)
    order = node.sidebar.order
    return MAX_ORDER if order is None else order


def sort_dir_entries(
    entries: Iterable[tuple[str, Dir | Route]],
) -> list[tuple[str, Dir | Route]]:
    """Sort sibling entries by ascending order; ties keep their original order."""
    indexed = list(enumerate(entries))
    indexed.sort(key=lambda pair: (get_order(pair[1][1]), pair[0]))
    return [entry for _, entry in indexed]


def _link_from_route(route: Route, current_pathname: str, base: str) -> Link:
    return make_link(
        ensure_leading_and_trailing_slashes(route.slug),
        route.sidebar.label or route.title,
        current_pathname,
        base=base,
        badge=route.sidebar.badge,
        attrs=route.sidebar.attrs,
    )


def _dir_to_entry(
    name: str,
    node: Dir | Route,
    current_pathname: str,
    base: str,
    collapsed: bool,
) -> SidebarEntry:
    if isinstance(node, Dir):
        return Group(
            label=name,
            entries=sidebar_from_dir(node, current_pathname, base, collapsed),
            collapsed=collapsed,
        )
    return _link_from_route(node, current_pathname, base)


def sidebar_from_dir(
    tree: Dir, current_pathname: str, base: str = "/", collapsed: bool = False
) -> list[SidebarEntry]:
    """Build sorted sidebar entries for a directory tree."""
    return [
        _dir_to_entry(name, node, current_pathname, base, collapsed)
        for name, node in sort_dir_entries(tree.items())
    ]


def routes_in_directory(routes: Iterable[Route], directory: str) -> list[Route]:
    """Select routes stored in a directory.

    Matches ``<directory>.md``, ``<directory>/index.md`` and anything
    deeper under ``<directory>/``.
    """
    return [
        route
        for route in routes
        if strip_extension(route.id) == directory
        or route.id.startswith(f"{directory}/")
    ]


def _group_from_autogenerate(
    item: AutogenerateItem, routes: list[Route], current_pathname: str, base: str
) -> Group:
    tree = treeify(routes_in_directory(routes, item.directory))
    subgroup_collapsed = (
        item.collapsed if item.subgroup_collapsed is None else item.subgroup_collapsed
    )
    return Group(
        label=item.label,
        entries=sidebar_from_dir(tree, current_pathname, base, subgroup_collapsed),
        collapsed=item.collapsed,
        badge=item.badge,
    )


def config_item_to_entry(
    item: SidebarItem, current_pathname: str, routes: list[Route], base: str = "/"
) -> SidebarEntry:
    """Convert an item of the user's sidebar config to a sidebar entry."""
    if isinstance(item, LinkItem):
        return make_link(
            _normalize_href(item.link),
            item.label,
            current_pathname,
            base=base,
            badge=item.badge,
            attrs=item.attrs,
        )
    if isinstance(item, AutogenerateItem):
        return _group_from_autogenerate(item, routes, current_pathname, base)
    if isinstance(item, GroupItem):
        return Group(
            label=item.label,
            entries=[
                config_item_to_entry(child, current_pathname, routes, base)
                for child in item.items
            ],
            collapsed=item.collapsed,
            badge=item.badge,
        )
    raise TypeError(f"Unknown sidebar item: {item!r}")


def get_sidebar(
    pathname: str, routes: list[Route], config: SiteConfig
) -> list[SidebarEntry]:
    """Get the sidebar for the current page.

    Uses the user's sidebar config when there is one, otherwise builds the
    sidebar from the whole route tree.

    Args:
        pathname: Path of the page being viewed (e.g., "/guides/intro/").
        routes: All routes of the site.
        config: Site configuration.

    Returns:
        Top-level sidebar entries.
    """
    if config.sidebar is not None:
        return [
            config_item_to_entry(item, pathname, routes, config.base)
            for item in config.sidebar
        ]
    return sidebar_from_dir(treeify(routes), pathname, config.base, False)


def flatten_sidebar(sidebar: Iterable[SidebarEntry]) -> list[Link]:
    """Flatten a nested sidebar into its links, in display order."""
    links: list[Link] = []
    for entry in sidebar:
        if isinstance(entry, Group):
            links.extend(flatten_sidebar(entry.entries))
        else:
            links.append(entry)
    return links


def get_prev_next_links(
    sidebar: list[SidebarEntry],
    pagination_enabled: bool = True,
    prev: PrevNextLinkConfig = None,
    next: PrevNextLinkConfig = None,
    base: str = "/",
) -> PrevNext:
    """Get previous/next links from the sidebar, applying page overrides.

    Args:
        sidebar: Sidebar built for the current page.
        pagination_enabled: Site-wide pagination setting.
        prev: Front matter override for the previous link.
        next: Front matter override for the next link.
        base: Site base path, used for links created from overrides.

    Returns:
        PrevNext with either link set to None when absent.
    """
    entries = flatten_sidebar(sidebar)
    # First match wins if several links claim to be current
    current: int | None = None
    for i, entry in enumerate(entries):
        if entry.is_current:
            current = i
            break

    prev_link = entries[current - 1] if current else None
    next_link = None
    if current is not None and current + 1 < len(entries):
        next_link = entries[current + 1]

    return PrevNext(
        prev=apply_prev_next_link_config(prev_link, pagination_enabled, prev, base),
        next=apply_prev_next_link_config(next_link, pagination_enabled, next, base),
    )


def apply_prev_next_link_config(
    link: Link | None,
    pagination_enabled: bool,
    config: PrevNextLinkConfig,
    base: str = "/",
) -> Link | None:
    """Apply a prev/next front matter override to a generated link."""
    if config is False:
        return None
    if config is True:
        return link
    if isinstance(config, str) and link is not None:
        return replace(link, label=config)
    if isinstance(config, PrevNextOverride):
        if link is not None:
            # Prev/next links never carry sidebar attributes
            return replace(
                link,
                label=config.label if config.label is not None else link.label,
                href=config.link if config.link is not None else link.href,
                attrs={},
            )
        if config.link and config.label:
            return make_link(
                _normalize_href(config.link), config.label, config.link, base=base
            )
    return link if pagination_enabled else None


def route_href(route: Route, base: str = "/") -> str:
    """Get the site href of a route (e.g., ``/docs/guides/intro/``)."""
    return path_with_base(ensure_leading_and_trailing_slashes(route.slug), base)


def find_route(routes: Iterable[Route], pathname: str, base: str = "/") -> Route | None:
    """Find the route served at a pathname, or None."""
    target = ensure_trailing_slash(pathname)
    return next((route for route in routes if route_href(route, base) == target), None)


@dataclass
class PageNavigation:
    """Sidebar and pagination for one page."""

    pathname: str
    route: Route | None
    sidebar: list[SidebarEntry]
    prev: Link | None
    next: Link | None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization; the route is left out."""
        return {
            "pathname": self.pathname,
            "sidebar": [entry.to_dict() for entry in self.sidebar],
            "prev": self.prev.to_dict() if self.prev else None,
            "next": self.next.to_dict() if self.next else None,
        }


def build_page_navigation(
    pathname: str, routes: list[Route], config: SiteConfig
) -> PageNavigation:
    """Build the sidebar and prev/next links for a page.

    Front matter ``prev``/``next`` overrides come from the route served at
    ``pathname``; unknown pages get no overrides.
    """
    pathname = ensure_trailing_slash(pathname)
    route = find_route(routes, pathname, config.base)
    sidebar = get_sidebar(pathname, routes, config)
    links = get_prev_next_links(
        sidebar,
        config.pagination,
        prev=route.prev if route else None,
        next=route.next if route else None,
        base=config.base,
    )
    return PageNavigation(
        pathname=pathname,
        route=route,
        sidebar=sidebar,
        prev=links.prev,
        next=links.next,
    )
