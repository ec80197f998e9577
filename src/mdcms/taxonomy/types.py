"""
Content type descriptors.

A content type is not stored anywhere: it is a display view of a tag. The
default descriptor comes from the tag itself plus the configured directories,
and a per-tag TagOverride may replace its name, icon or images directory.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from mdcms.core.config import Settings, TagOverride

DEFAULT_ICON = "📁"


@dataclass(frozen=True)
class ContentType:
    """Display descriptor for one tag."""

    name: str
    slug: str
    directory: Path | None
    images_dir: Path | None
    icon: str
    filter_tag: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "slug": self.slug,
            "directory": str(self.directory) if self.directory else "",
            "imagesDir": str(self.images_dir) if self.images_dir else "",
            "icon": self.icon,
            "filterTag": self.filter_tag,
        }


def default_name(tag: str) -> str:
    """Upper-case the first character only; the rest is kept as written."""
    return tag[:1].upper() + tag[1:]


def apply_override(base: ContentType, override: TagOverride | None) -> ContentType:
    """Merge a sparse override onto a descriptor.

    Each non-empty override field replaces the matching field; empty fields
    leave the base untouched.
    """
    if override is None:
        return base

    changes: dict[str, Any] = {}
    if override.name:
        changes["name"] = override.name
    if override.icon:
        changes["icon"] = override.icon
    if override.images_dir is not None:
        changes["images_dir"] = override.images_dir
    return replace(base, **changes) if changes else base


def build_content_type(
    tag: str,
    overrides: Mapping[str, TagOverride] | None = None,
    *,
    directory: Path | None = None,
    images_dir: Path | None = None,
) -> ContentType:
    """Build the descriptor for ``tag``.

    Args:
        tag: Tag string; becomes the slug and the filter tag
        overrides: Override table keyed by tag (missing keys are fine)
        directory: Content directory shared by all types
        images_dir: Default images directory

    Raises:
        ValueError: If ``tag`` is empty
    """
    if not tag:
        raise ValueError("content type tag must be a non-empty string")

    base = ContentType(
        name=default_name(tag),
        slug=tag,
        directory=directory,
        images_dir=images_dir,
        icon=DEFAULT_ICON,
        filter_tag=tag,
    )
    return apply_override(base, (overrides or {}).get(tag))


def content_type_for(tag: str, settings: Settings) -> ContentType:
    """Build the descriptor for ``tag`` from a settings snapshot."""
    return build_content_type(
        tag,
        settings.tag_config,
        directory=settings.content_dir,
        images_dir=settings.images_dir,
    )
