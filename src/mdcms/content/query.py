"""Pure ordering and filtering helpers over content items."""

from __future__ import annotations

from collections.abc import Iterable

from mdcms.content.document import ContentItem


def sort_by_date_desc(items: Iterable[ContentItem]) -> list[ContentItem]:
    """Newest first.

    Dates are canonical ``YYYY-MM-DD`` strings, so string order is date order.
    The sort is stable: items sharing a date keep their input order.
    """
    return sorted(items, key=lambda item: item.date, reverse=True)


def filter_by_tag(items: Iterable[ContentItem], tag: str) -> list[ContentItem]:
    """Items carrying ``tag`` (exact, case-sensitive), in input order."""
    return [item for item in items if item.has_tag(tag)]


def collect_tag_universe(
    items: Iterable[ContentItem], exclude_tag: str | None = None
) -> list[str]:
    """Sorted, de-duplicated tags across ``items``.

    Args:
        items: Content items to scan
        exclude_tag: Tag to leave out (e.g. a content type's own tag)
    """
    tags = {tag for item in items for tag in item.tags}
    if exclude_tag is not None:
        tags.discard(exclude_tag)
    return sorted(tags)
