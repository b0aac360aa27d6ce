"""Shared value types for sidebar metadata and pagination overrides."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

BADGE_VARIANTS = ("default", "note", "tip", "caution", "danger", "success")

# Extra HTML attributes rendered on a sidebar link
LinkAttrs = dict[str, str | int | float | bool]


@dataclass(frozen=True)
class Badge:
    """Decorative tag shown next to a sidebar entry."""

    text: str
    variant: str = "default"

    @classmethod
    def from_raw(cls, value: Any, where: str) -> Badge | None:
        """Build a badge from a string or ``{text, variant}`` mapping.

        Raises:
            ValueError: If the value has the wrong shape.
        """
        if value is None:
            return None
        if isinstance(value, str):
            return cls(text=value)
        if not isinstance(value, dict):
            raise ValueError(
                f"{where} must be a string or mapping, got {type(value).__name__}"
            )
        text = value.get("text")
        if not isinstance(text, str):
            raise ValueError(f"{where}.text must be a string")
        variant = value.get("variant", "default")
        if variant not in BADGE_VARIANTS:
            raise ValueError(
                f"{where}.variant must be one of {', '.join(BADGE_VARIANTS)}, "
                f"got {variant!r}"
            )
        return cls(text=text, variant=variant)

    def to_dict(self) -> dict[str, str]:
        return {"text": self.text, "variant": self.variant}


@dataclass(frozen=True)
class PrevNextOverride:
    """Partial replacement for a generated previous/next link."""

    link: str | None = None
    label: str | None = None


# False disables the link, True forces it on, a string replaces the label,
# None means no override.
PrevNextLinkConfig = bool | str | PrevNextOverride | None


def parse_attrs(value: Any, where: str) -> LinkAttrs:
    """Validate a mapping of extra link attributes."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{where} must be a mapping, got {type(value).__name__}")
    attrs: LinkAttrs = {}
    for key, attr in value.items():
        if not isinstance(key, str):
            raise ValueError(f"{where} keys must be strings, got {type(key).__name__}")
        if not isinstance(attr, (str, int, float, bool)):
            raise ValueError(
                f"{where}.{key} must be a string, number or boolean, "
                f"got {type(attr).__name__}"
            )
        attrs[key] = attr
    return attrs


def parse_prev_next(value: Any) -> PrevNextLinkConfig:
    """Read a ``prev``/``next`` front matter value.

    Values of any other shape, and mappings with a non-string ``link`` or
    ``label``, are treated as no override.
    """
    if value is None or isinstance(value, (bool, str)):
        return value
    if isinstance(value, dict):
        link = value.get("link")
        label = value.get("label")
        if not isinstance(link, (str, type(None))):
            return None
        if not isinstance(label, (str, type(None))):
            return None
        return PrevNextOverride(link=link, label=label)
    return None
