"""
Front matter document codec.

A document is a ``---`` delimited YAML block followed by a free-form body::

    ---
    title: "Hello"
    excerpt: "Short summary"
    coverImage: ""
    date: "2024-01-15"
    ogImage:
      url: ""
    tags: [notes, python]
    ---

    Body text...

This textual shape is a compatibility contract with existing files, so the
encoder pins field order, quoting and the one-line tag list.
"""

from __future__ import annotations

import re
from datetime import date as date_type
from pathlib import Path

import yaml

from mdcms.content.document import ContentItem
from mdcms.core.errors import MalformedDocument, MetadataDecodeError

DELIMITER = "---"
DATE_FORMAT = "%Y-%m-%d"

_NULL_TAG = "tag:yaml.org,2002:null"

# Any run of 3+ hyphens would be taken for a closing delimiter by the splitter
_HYPHEN_RUN = re.compile(r"-{3,}")


class _MetadataLoader(yaml.SafeLoader):
    """Safe loader that keeps plain scalars as literal strings.

    Only nulls are resolved, so ``date: 2024-01-15``, ``tags: [2024]`` or
    ``title: 007`` decode to exactly the text written.
    """


_MetadataLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag == _NULL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class _Quoted(str):
    """String always emitted in double-quoted style."""


class _FlowList(list):
    """List always emitted on a single bracketed line."""


class _MetadataDumper(yaml.SafeDumper):
    pass


_MetadataDumper.add_representer(
    _Quoted,
    lambda dumper, value: dumper.represent_scalar(
        "tag:yaml.org,2002:str", str(value), style='"'
    ),
)
_MetadataDumper.add_representer(
    _FlowList,
    lambda dumper, value: dumper.represent_sequence(
        "tag:yaml.org,2002:seq", list(value), flow_style=True
    ),
)


def split_document(text: str, source: str | Path | None = None) -> tuple[str, str]:
    """Split raw text into (front matter text, body), both stripped.

    Only the first two delimiters split; later ``---`` lines stay in the body.

    Raises:
        MalformedDocument: If the block is missing or not closed
    """
    location = f" in {source}" if source else ""

    if not text.startswith(DELIMITER):
        raise MalformedDocument(f"missing metadata block{location}")

    parts = text.split(DELIMITER, 2)
    if len(parts) < 3:
        raise MalformedDocument(f"incomplete metadata block{location}")

    return parts[1].strip(), parts[2].strip()


def decode(
    text: str, source: str | Path | None = None
) -> tuple[ContentItem, str]:
    """Parse a document into its metadata record and body.

    The body is also attached to the returned item.

    Args:
        text: Raw document text
        source: Optional file path or name used in error messages

    Returns:
        Tuple of (ContentItem, body)

    Raises:
        MalformedDocument: Missing or incomplete delimiter structure
        MetadataDecodeError: Block present but not decodable
    """
    fm_text, body = split_document(text, source=source)

    try:
        data = yaml.load(fm_text, Loader=_MetadataLoader)
    except yaml.YAMLError as e:
        location = f" in {source}" if source else ""
        raise MetadataDecodeError(f"YAML error{location}: {e}") from e

    try:
        item = ContentItem.from_front_matter(data)
    except MetadataDecodeError as e:
        if source:
            raise MetadataDecodeError(f"{e} in {source}") from e
        raise

    item.body = body
    return item, body


def today() -> str:
    """Current local date in the canonical ``YYYY-MM-DD`` form."""
    return date_type.today().strftime(DATE_FORMAT)


def encode_front_matter(item: ContentItem) -> str:
    """Render just the YAML block (without delimiters).

    An empty date is replaced by today's date in the output only; the item
    itself is not modified.

    The block never contains a literal ``---``: hyphen runs inside values are
    written as ``\\x2D`` escapes, so the document splits where it should.
    """
    data = {
        "title": _Quoted(item.title),
        "excerpt": _Quoted(item.excerpt),
        "coverImage": _Quoted(item.cover_image),
        "date": _Quoted(item.date or today()),
        "ogImage": {"url": _Quoted(item.og_image.url)},
        # Tags with a hyphen run need double quotes for the escape to be valid
        "tags": _FlowList(
            _Quoted(tag) if _HYPHEN_RUN.search(tag) else tag for tag in item.tags
        ),
    }
    block = yaml.dump(
        data,
        Dumper=_MetadataDumper,
        default_flow_style=False,
        allow_unicode=True,
        sort_keys=False,
        width=float("inf"),
    )
    return _escape_hyphen_runs(block)


def _escape_hyphen_runs(block: str) -> str:
    # Keys are fixed and hyphen-free, so every run sits in a double-quoted value
    return _HYPHEN_RUN.sub(lambda m: "\\x2D" * len(m.group()), block)


def encode(item: ContentItem) -> str:
    """Serialize an item to document text. Never fails."""
    return f"{DELIMITER}\n{encode_front_matter(item)}{DELIMITER}\n\n{item.body}"
