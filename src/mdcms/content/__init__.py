"""
Content module.

Provides tools for:
- Decoding and encoding front matter documents
- Reading and writing content in a directory
- Sorting and filtering content items
- Listing the items of a content type
"""

from mdcms.content.codec import decode, encode
from mdcms.content.document import ContentItem, OGImage, slug_from_filename
from mdcms.content.listing import ContentListing, list_content
from mdcms.content.query import collect_tag_universe, filter_by_tag, sort_by_date_desc
from mdcms.content.store import ContentStore, Corpus, RawDocument, decode_corpus

__all__ = [
    "ContentItem",
    "OGImage",
    "slug_from_filename",
    "decode",
    "encode",
    "ContentStore",
    "Corpus",
    "RawDocument",
    "decode_corpus",
    "sort_by_date_desc",
    "filter_by_tag",
    "collect_tag_universe",
    "ContentListing",
    "list_content",
]
