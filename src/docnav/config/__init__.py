"""Configuration loading and resolution."""

from docnav.config.load import load_config
from docnav.config.model import (
    AutogenerateItem,
    GroupItem,
    LinkItem,
    SidebarItem,
    SiteConfig,
)

__all__ = [
    "AutogenerateItem",
    "GroupItem",
    "LinkItem",
    "SidebarItem",
    "SiteConfig",
    "load_config",
]
