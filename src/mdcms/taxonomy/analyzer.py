"""Content type derivation.

Content types are not configured up front: every distinct tag observed across
the corpus is one. The corpus is re-scanned on every call, so the taxonomy is
always current and nothing needs invalidating after a write.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field

from mdcms.content.store import ContentStore, Corpus, RawDocument, decode_corpus
from mdcms.core.config import Settings
from mdcms.core.errors import UnknownContentType
from mdcms.taxonomy.types import ContentType, content_type_for

logger = logging.getLogger(__name__)


@dataclass
class TaxonomyData:
    """Collected tag data from a corpus scan."""

    tag_counts: dict[str, int] = field(default_factory=lambda: defaultdict(int))
    tag_items: dict[str, list[str]] = field(
        default_factory=lambda: defaultdict(list)
    )
    # Documents that failed to decode
    skipped: list[str] = field(default_factory=list)
    documents: int = 0


def collect(corpus: Corpus | Iterable[RawDocument | str]) -> TaxonomyData:
    """Scan a corpus and collect tag usage.

    Every occurrence counts, so a tag listed twice in one document adds 2.
    Empty tags are ignored. Documents that fail to decode are skipped.
    """
    data = TaxonomyData()

    for item in decode_corpus(corpus, skipped=data.skipped):
        data.documents += 1
        for tag in item.tags:
            if not tag:
                continue
            data.tag_counts[tag] += 1
            data.tag_items[tag].append(item.slug)

    if data.skipped:
        logger.debug("Skipped %d undecodable document(s)", len(data.skipped))
    return data


def discover_tags(corpus: Corpus | Iterable[RawDocument | str]) -> dict[str, int]:
    """Map every tag in the corpus to its occurrence count.

    Key order is unspecified; sort before presenting.
    """
    return dict(collect(corpus).tag_counts)


class ContentTypeDeriver:
    """Derives content types from the tags in a corpus."""

    def __init__(self, settings: Settings, corpus: Corpus | None = None):
        """Initialize deriver.

        Args:
            settings: Configuration snapshot (directories and overrides)
            corpus: Documents to scan (defaults to the configured content dir)
        """
        self.settings = settings
        if corpus is None:
            corpus = ContentStore(settings.content_dir)
        self.corpus = corpus

    def collect(self) -> TaxonomyData:
        return collect(self.corpus)

    def discover(self) -> dict[str, int]:
        return discover_tags(self.corpus)

    def content_type(self, tag: str) -> ContentType:
        """Descriptor for ``tag`` whether or not the corpus uses it."""
        return content_type_for(tag, self.settings)

    def content_types(self) -> list[ContentType]:
        """All derived content types, sorted by slug."""
        return [self.content_type(tag) for tag in sorted(self.discover())]

    def get_content_type(self, slug: str) -> ContentType:
        """Look up a derived content type.

        Raises:
            UnknownContentType: If no document carries the tag
        """
        if slug and slug in self.discover():
            return self.content_type(slug)
        raise UnknownContentType(f"Unknown content type: {slug}")

    def dashboard(self) -> list[tuple[ContentType, int]]:
        """Content types with their item counts, sorted by slug."""
        counts = self.discover()
        return [(self.content_type(tag), counts[tag]) for tag in sorted(counts)]
