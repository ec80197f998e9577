"""
Content item data model.

A ContentItem holds the metadata decoded from a document's front matter.
``body``, ``slug`` and ``type_slug`` ride along for the caller but are never
written into the metadata block and take no part in equality.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from mdcms.core.errors import MetadataDecodeError


@dataclass
class OGImage:
    """Open Graph image reference."""

    url: str = ""


@dataclass
class ContentItem:
    """A single piece of content."""

    title: str = ""
    excerpt: str = ""
    cover_image: str = ""
    date: str = ""
    og_image: OGImage = field(default_factory=OGImage)
    tags: list[str] = field(default_factory=list)

    # Not persisted in front matter
    body: str = field(default="", compare=False)
    slug: str = field(default="", compare=False)
    type_slug: str = field(default="", compare=False)

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def to_front_matter(self) -> dict[str, Any]:
        """Front matter mapping in on-disk key order."""
        return {
            "title": self.title,
            "excerpt": self.excerpt,
            "coverImage": self.cover_image,
            "date": self.date,
            "ogImage": {"url": self.og_image.url},
            "tags": list(self.tags),
        }

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly representation, including the transient fields."""
        data = self.to_front_matter()
        data["content"] = self.body
        data["slug"] = self.slug
        data["typeSlug"] = self.type_slug
        return data

    @classmethod
    def from_front_matter(cls, data: Any) -> ContentItem:
        """Build an item from a decoded front matter mapping.

        Missing keys become empty values and unknown keys are ignored.

        Raises:
            MetadataDecodeError: If a field has the wrong shape
        """
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise MetadataDecodeError(
                f"front matter must be a mapping, got {type(data).__name__}"
            )

        og_raw = data.get("ogImage")
        if og_raw is None:
            og_raw = {}
        if not isinstance(og_raw, dict):
            raise MetadataDecodeError(
                f"'ogImage' must be a mapping, got {type(og_raw).__name__}"
            )

        tags_raw = data.get("tags")
        if tags_raw is None:
            tags_raw = []
        if not isinstance(tags_raw, list):
            raise MetadataDecodeError(
                f"'tags' must be a sequence, got {type(tags_raw).__name__}"
            )

        return cls(
            title=_as_string(data, "title"),
            excerpt=_as_string(data, "excerpt"),
            cover_image=_as_string(data, "coverImage"),
            date=_as_string(data, "date"),
            og_image=OGImage(url=_as_string(og_raw, "url", prefix="ogImage.")),
            tags=[_scalar(tag, "tags[]") for tag in tags_raw],
        )


def _as_string(data: dict, key: str, prefix: str = "") -> str:
    return _scalar(data.get(key), prefix + key)


def _scalar(value: Any, label: str) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        raise MetadataDecodeError(
            f"'{label}' must be a scalar, got {type(value).__name__}"
        )
    return str(value)


def slug_from_filename(name: str, extension: str = ".md") -> str:
    """Strip the document extension from a file name."""
    if extension and name.endswith(extension):
        return name[: -len(extension)]
    return name
