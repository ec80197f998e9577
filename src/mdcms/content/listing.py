"""Per-content-type listing."""

from __future__ import annotations

from dataclasses import dataclass, field

from mdcms.content.document import ContentItem
from mdcms.content.query import collect_tag_universe, filter_by_tag, sort_by_date_desc
from mdcms.content.store import Corpus, decode_corpus
from mdcms.taxonomy.types import ContentType


@dataclass
class ContentListing:
    """Items of one content type plus the tags available to narrow them."""

    content_type: ContentType
    items: list[ContentItem] = field(default_factory=list)
    # Other tags used by this type's items (excludes the type's own tag)
    tags: list[str] = field(default_factory=list)
    active_tag: str | None = None


def list_content(
    corpus: Corpus, content_type: ContentType, tag: str | None = None
) -> ContentListing:
    """Build the listing for a content type.

    Args:
        corpus: Documents to scan
        content_type: Type whose filter tag selects the items
        tag: Optional extra tag to narrow the items (does not narrow ``tags``)

    Returns:
        ContentListing with items newest first
    """
    items = filter_by_tag(decode_corpus(corpus), content_type.filter_tag)
    for item in items:
        item.type_slug = content_type.slug
    items = sort_by_date_desc(items)

    tags = collect_tag_universe(items, exclude_tag=content_type.filter_tag)
    if tag:
        items = filter_by_tag(items, tag)

    return ContentListing(
        content_type=content_type, items=items, tags=tags, active_tag=tag or None
    )
