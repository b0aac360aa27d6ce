"""Configuration loading from docnav.yml or mkdocs.yml."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from docnav.config.derive import nav_to_sidebar
from docnav.config.model import (
    AutogenerateItem,
    GroupItem,
    LinkItem,
    SidebarItem,
    SiteConfig,
)
from docnav.config.plugin import plugin_options
from docnav.types import Badge, parse_attrs

DEFAULT_SITE_NAME = "Documentation"
DEFAULT_DOCS_DIR = "docs"
DEFAULT_BASE = "/"


class _MkDocsLoader(yaml.SafeLoader):
    """Safe loader that also accepts the `!python/...` tags of mkdocs.yml files.

    Markdown extension settings often carry such tags. Their values are
    never needed here, so each one loads as a `<tag>` placeholder string.
    """


def _python_tag_placeholder(
    loader: yaml.Loader, tag_suffix: str, node: yaml.Node
) -> str:
    return f"<{node.tag}>"


for _prefix in ("tag:yaml.org,2002:python/", "!python/"):
    _MkDocsLoader.add_multi_constructor(_prefix, _python_tag_placeholder)


def read_yaml(config_path: Path) -> dict[str, Any]:
    """Read a YAML config file into a mapping.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If the document is not a mapping.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        raw = yaml.load(f, Loader=_MkDocsLoader)

    if not isinstance(raw, dict):
        raise ValueError(f"Config file must be a mapping: {config_path}")
    return raw


def load_config(config_path: Path) -> SiteConfig:
    """Load and resolve navigation configuration.

    The file is either a standalone docnav.yml, or an mkdocs.yml that
    declares the ``docnav`` plugin.

    Args:
        config_path: Path to the config file.

    Returns:
        Resolved SiteConfig. ``docs_dir`` is resolved against the
        config file's directory.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If the config has the wrong shape.
    """
    raw = read_yaml(config_path)
    return config_from_mapping(raw, root=config_path.parent)


def config_from_mapping(raw: dict[str, Any], root: Path) -> SiteConfig:
    """Build a SiteConfig from a parsed config mapping."""
    options = plugin_options(raw)
    if options is None:
        options = raw

    site_name = raw.get("site_name", DEFAULT_SITE_NAME)
    if not isinstance(site_name, str):
        raise ValueError(
            f"'site_name' must be a string, got {type(site_name).__name__}"
        )

    docs_dir = options.get("docs_dir", raw.get("docs_dir", DEFAULT_DOCS_DIR))
    if not isinstance(docs_dir, str):
        raise ValueError(f"'docs_dir' must be a string, got {type(docs_dir).__name__}")

    base = options.get("base", DEFAULT_BASE)
    if not isinstance(base, str):
        raise ValueError(f"'base' must be a string, got {type(base).__name__}")

    pagination = options.get("pagination", True)
    if not isinstance(pagination, bool):
        raise ValueError(
            f"'pagination' must be a boolean, got {type(pagination).__name__}"
        )

    raw_sidebar = options.get("sidebar")
    sidebar: list[SidebarItem] | None
    if raw_sidebar is not None:
        if not isinstance(raw_sidebar, list):
            raise ValueError(
                f"'sidebar' must be a list, got {type(raw_sidebar).__name__}"
            )
        sidebar = [
            parse_sidebar_item(item, f"sidebar[{i}]")
            for i, item in enumerate(raw_sidebar)
        ]
    elif isinstance(raw.get("nav"), list) and raw["nav"]:
        sidebar = nav_to_sidebar(raw["nav"])
    else:
        sidebar = None

    return SiteConfig(
        site_name=site_name,
        docs_dir=root / docs_dir,
        base=base,
        pagination=pagination,
        sidebar=sidebar,
    )


def _require_str(item: dict[str, Any], key: str, where: str) -> str:
    value = item.get(key)
    if not isinstance(value, str):
        raise ValueError(f"{where}.{key} must be a string")
    return value


def _optional_bool(item: dict[str, Any], key: str, where: str) -> bool | None:
    value = item.get(key)
    if value is not None and not isinstance(value, bool):
        raise ValueError(f"{where}.{key} must be a boolean")
    return value


def parse_sidebar_item(item: Any, where: str) -> SidebarItem:
    """Parse one user sidebar config entry.

    Args:
        item: Raw YAML value.
        where: Location used in error messages (e.g., "sidebar[1].items[0]").

    Raises:
        ValueError: If the entry is not a link, group or autogenerate item.
    """
    if not isinstance(item, dict):
        raise ValueError(f"{where} must be a mapping, got {type(item).__name__}")

    label = _require_str(item, "label", where)
    badge = Badge.from_raw(item.get("badge"), f"{where}.badge")

    if "link" in item:
        return LinkItem(
            label=label,
            link=_require_str(item, "link", where),
            badge=badge,
            attrs=parse_attrs(item.get("attrs"), f"{where}.attrs"),
        )

    collapsed = _optional_bool(item, "collapsed", where) or False

    if "autogenerate" in item:
        autogenerate = item["autogenerate"]
        if not isinstance(autogenerate, dict):
            raise ValueError(f"{where}.autogenerate must be a mapping")
        directory = _require_str(autogenerate, "directory", f"{where}.autogenerate")
        return AutogenerateItem(
            label=label,
            directory=directory.strip("/"),
            collapsed=collapsed,
            subgroup_collapsed=_optional_bool(
                autogenerate, "collapsed", f"{where}.autogenerate"
            ),
            badge=badge,
        )

    if "items" in item:
        items = item["items"]
        if not isinstance(items, list):
            raise ValueError(f"{where}.items must be a list")
        return GroupItem(
            label=label,
            items=[
                parse_sidebar_item(child, f"{where}.items[{i}]")
                for i, child in enumerate(items)
            ],
            collapsed=collapsed,
            badge=badge,
        )

    raise ValueError(f"{where} must have one of 'link', 'items' or 'autogenerate'")
