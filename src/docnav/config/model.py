"""Configuration model and sidebar config items."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from docnav.types import Badge, LinkAttrs


@dataclass(frozen=True)
class LinkItem:
    """Explicit link in the user's sidebar config."""

    label: str
    link: str
    badge: Badge | None = None
    attrs: LinkAttrs = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"label": self.label, "link": self.link}
        if self.badge is not None:
            result["badge"] = self.badge.to_dict()
        if self.attrs:
            result["attrs"] = dict(self.attrs)
        return result


@dataclass(frozen=True)
class GroupItem:
    """Explicit group of nested sidebar config items."""

    label: str
    items: list[SidebarItem] = field(default_factory=list)
    collapsed: bool = False
    badge: Badge | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "label": self.label,
            "items": [item.to_dict() for item in self.items],
        }
        if self.collapsed:
            result["collapsed"] = True
        if self.badge is not None:
            result["badge"] = self.badge.to_dict()
        return result


@dataclass(frozen=True)
class AutogenerateItem:
    """Group generated from every route under a directory.

    Attributes:
        label: Group label.
        directory: Directory relative to the docs root (e.g., "reference").
        collapsed: Whether the generated group starts collapsed.
        subgroup_collapsed: Collapsed state for nested groups; falls back
            to ``collapsed`` when unset.
        badge: Optional badge for the group.
    """

    label: str
    directory: str
    collapsed: bool = False
    subgroup_collapsed: bool | None = None
    badge: Badge | None = None

    def to_dict(self) -> dict[str, Any]:
        autogenerate: dict[str, Any] = {"directory": self.directory}
        if self.subgroup_collapsed is not None:
            autogenerate["collapsed"] = self.subgroup_collapsed
        result: dict[str, Any] = {"label": self.label, "autogenerate": autogenerate}
        if self.collapsed:
            result["collapsed"] = True
        if self.badge is not None:
            result["badge"] = self.badge.to_dict()
        return result


SidebarItem = LinkItem | GroupItem | AutogenerateItem


@dataclass
class SiteConfig:
    """Resolved site navigation configuration."""

    site_name: str
    docs_dir: Path
    base: str = "/"
    pagination: bool = True
    sidebar: list[SidebarItem] | None = None

    def sidebar_to_dict(self) -> list[dict[str, Any]] | None:
        """Serialize the sidebar config back to plain YAML-able data."""
        if self.sidebar is None:
            return None
        return [item.to_dict() for item in self.sidebar]
