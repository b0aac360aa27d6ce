"""Locate docnav options inside an mkdocs.yml ``plugins`` section."""

from __future__ import annotations

from typing import Any

PLUGIN_NAME = "docnav"


def _find_entry(plugins: Any) -> tuple[Any, Any] | None:
    """Return ``(container, key)`` such that ``container[key]`` holds the entry.

    ``plugins`` may be a mapping of name to options, or a list mixing bare
    names with single-key mappings. For a bare ``- docnav`` list item the
    key is its index.
    """
    if isinstance(plugins, dict):
        return (plugins, PLUGIN_NAME) if PLUGIN_NAME in plugins else None
    if isinstance(plugins, list):
        for index, entry in enumerate(plugins):
            if entry == PLUGIN_NAME:
                return plugins, index
            if isinstance(entry, dict) and PLUGIN_NAME in entry:
                return entry, PLUGIN_NAME
    return None


def plugin_options(raw: dict[str, Any]) -> dict[str, Any] | None:
    """Read-only view of the plugin's options, or None when it is not declared.

    A declared plugin without a mapping of options reads as ``{}``.
    """
    found = _find_entry(raw.get("plugins"))
    if found is None:
        return None
    container, key = found
    options = container[key]
    return options if isinstance(options, dict) else {}


def sidebar_target(raw: dict[str, Any]) -> dict[str, Any] | None:
    """Mapping that a ``sidebar`` key should be written into.

    Without the plugin this is ``raw`` itself. With it, the plugin's options
    are used; an entry without options is given an empty mapping in place.
    Returns None when the plugin's options are something other than a
    mapping, such as a string.
    """
    found = _find_entry(raw.get("plugins"))
    if found is None:
        return raw
    container, key = found
    if isinstance(key, int):
        container[key] = {PLUGIN_NAME: {}}
        return container[key][PLUGIN_NAME]
    if container[key] is None:
        container[key] = {}
    options = container[key]
    return options if isinstance(options, dict) else None
