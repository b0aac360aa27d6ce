"""Path and href helpers."""

from __future__ import annotations

import posixpath
import re

_EXTENSION_RE = re.compile(r"\.\w+$")
_ABSOLUTE_RE = re.compile(r"^https?://")


def ensure_leading_slash(path: str) -> str:
    return path if path.startswith("/") else f"/{path}"


def ensure_trailing_slash(path: str) -> str:
    return path if path.endswith("/") else f"{path}/"


def ensure_leading_and_trailing_slashes(path: str) -> str:
    return ensure_trailing_slash(ensure_leading_slash(path))


def strip_leading_slash(path: str) -> str:
    return path[1:] if path.startswith("/") else path


def strip_trailing_slash(path: str) -> str:
    return path[:-1] if path.endswith("/") else path


def strip_extension(path: str) -> str:
    """Remove a single trailing file extension (e.g. ``guide.md`` -> ``guide``)."""
    return _EXTENSION_RE.sub("", path)


def get_breadcrumbs(path: str) -> list[str]:
    """Get the directory segments leading to a page.

    Args:
        path: Page path relative to the docs root (e.g., "guides/setup/intro.md").

    Returns:
        Directory names from the root down, empty for root-level pages.
    """
    directory = posixpath.dirname(strip_extension(path))
    if not directory:
        return []
    return directory.split("/")


def is_absolute(href: str) -> bool:
    """Check if an href starts with ``http://`` or ``https://``."""
    return _ABSOLUTE_RE.match(href) is not None


def path_with_base(path: str, base: str = "/") -> str:
    """Prefix a root-relative path with the site base path.

    Examples:
        >>> path_with_base("/guides/", "/docs/")
        '/docs/guides/'
        >>> path_with_base("/", "/")
        '/'
    """
    prefix = strip_trailing_slash(ensure_leading_slash(base))
    path = strip_leading_slash(path)
    return f"{prefix}/{path}" if path else f"{prefix}/"
