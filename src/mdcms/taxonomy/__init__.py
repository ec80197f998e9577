"""Tag-derived content types."""

from mdcms.taxonomy.analyzer import (
    ContentTypeDeriver,
    TaxonomyData,
    collect,
    discover_tags,
)
from mdcms.taxonomy.types import (
    DEFAULT_ICON,
    ContentType,
    apply_override,
    build_content_type,
    content_type_for,
)

__all__ = [
    "ContentTypeDeriver",
    "TaxonomyData",
    "collect",
    "discover_tags",
    "DEFAULT_ICON",
    "ContentType",
    "apply_override",
    "build_content_type",
    "content_type_for",
]
