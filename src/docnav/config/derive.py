"""Helpers for deriving a sidebar config from an MkDocs nav."""

from __future__ import annotations

from typing import Any

from docnav.config.model import GroupItem, LinkItem, SidebarItem
from docnav.paths import is_absolute
from docnav.routes import slug_from_id, title_from_id


def _nav_link(target: str) -> str:
    """Turn a nav target (``guide/intro.md`` or a URL) into a sidebar link."""
    if is_absolute(target):
        return target
    return slug_from_id(target.strip("/"))


def nav_to_sidebar(nav: list[Any]) -> list[SidebarItem]:
    """Convert an MkDocs nav structure to sidebar config items.

    Entries of unknown shape are dropped.
    """
    items: list[SidebarItem] = []
    for entry in nav:
        if isinstance(entry, str):
            # Bare page path, titled from the file name
            items.append(LinkItem(label=title_from_id(entry), link=_nav_link(entry)))
        elif isinstance(entry, dict):
            for key, value in entry.items():
                label = str(key)
                if isinstance(value, str):
                    items.append(LinkItem(label=label, link=_nav_link(value)))
                elif isinstance(value, list):
                    items.append(GroupItem(label=label, items=nav_to_sidebar(value)))
    return items
