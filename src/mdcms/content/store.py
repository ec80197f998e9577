"""
Directory-backed content storage.

A content directory holds one ``<slug>.md`` file per item. The store lists,
reads, writes and deletes those files; scans go through the Corpus protocol so
a cached corpus can replace the directory without touching the codec or the
type deriver.
"""

from __future__ import annotations

import contextlib
import logging
import os
import tempfile
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import NamedTuple, Protocol, runtime_checkable

from mdcms.content.codec import decode, encode
from mdcms.content.document import ContentItem, slug_from_filename
from mdcms.core.errors import (
    ContentNotFound,
    MalformedDocument,
    MetadataDecodeError,
    StorageUnavailable,
)

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = ".md"


class RawDocument(NamedTuple):
    """Undecoded document text with the name it was stored under."""

    name: str
    text: str


@runtime_checkable
class Corpus(Protocol):
    """Anything that can yield raw documents for a scan."""

    def documents(self) -> Iterator[RawDocument]: ...


def raw_documents(
    corpus: Corpus | Iterable[RawDocument | str],
) -> Iterator[RawDocument]:
    """Normalize a corpus argument to RawDocument pairs.

    Accepts a Corpus, or any iterable of RawDocument pairs or bare strings
    (bare strings are named by position).
    """
    source = corpus.documents() if isinstance(corpus, Corpus) else corpus
    for index, doc in enumerate(source):
        if isinstance(doc, str):
            yield RawDocument(f"<document {index}>", doc)
        else:
            yield RawDocument(*doc)


def decode_corpus(
    corpus: Corpus | Iterable[RawDocument | str],
    extension: str = DEFAULT_EXTENSION,
    skipped: list[str] | None = None,
) -> Iterator[ContentItem]:
    """Decode every document, skipping the ones that fail.

    One bad file never aborts the scan: decode errors are logged as warnings
    and the document name is appended to ``skipped`` when given.

    Yields:
        ContentItem with ``slug`` and ``body`` filled in
    """
    for name, text in raw_documents(corpus):
        try:
            item, _body = decode(text, source=name)
        except (MalformedDocument, MetadataDecodeError) as e:
            logger.warning("Skipping %s: %s", name, e)
            if skipped is not None:
                skipped.append(name)
            continue
        item.slug = slug_from_filename(name, extension)
        yield item


class ContentStore:
    """Reads and writes content documents in a single directory."""

    def __init__(self, directory: Path, extension: str = DEFAULT_EXTENSION):
        """Initialize store.

        Args:
            directory: Directory holding the content files
            extension: File extension of content documents
        """
        self.directory = Path(directory)
        self.extension = extension

    def __repr__(self) -> str:
        return f"ContentStore({str(self.directory)!r})"

    def _check_slug(self, slug: str) -> None:
        if not slug or slug.startswith(".") or "/" in slug or os.sep in slug:
            raise ValueError(f"Invalid slug: {slug!r}")

    def path_for(self, slug: str) -> Path:
        """Return the file path for a slug."""
        self._check_slug(slug)
        return self.directory / f"{slug}{self.extension}"

    def exists(self, slug: str) -> bool:
        return self.path_for(slug).is_file()

    def _iter_files(self) -> Iterator[Path]:
        if not self.directory.exists():
            return
        try:
            entries = sorted(self.directory.iterdir())
        except OSError as e:
            raise StorageUnavailable(f"Cannot list {self.directory}: {e}") from e

        for path in entries:
            # Skip hidden files and editor temp files
            if path.name.startswith("."):
                continue
            if not path.name.endswith(self.extension):
                continue
            if not path.is_file():
                continue
            yield path

    def slugs(self) -> list[str]:
        """Slugs of all documents, sorted by file name."""
        return [
            slug_from_filename(path.name, self.extension)
            for path in self._iter_files()
        ]

    def documents(self) -> Iterator[RawDocument]:
        """Yield every readable document in the directory.

        Files that cannot be read are logged and skipped.
        """
        for path in self._iter_files():
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Skipping unreadable %s: %s", path, e)
                continue
            yield RawDocument(path.name, text)

    def read(self, slug: str) -> ContentItem:
        """Read and decode one document.

        Returns:
            ContentItem with ``slug`` and ``body`` filled in

        Raises:
            ContentNotFound: If the document does not exist
            StorageUnavailable: If the file cannot be read
            MalformedDocument, MetadataDecodeError: If it cannot be decoded
        """
        path = self.path_for(slug)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise ContentNotFound(f"Content not found: {slug}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise StorageUnavailable(f"Cannot read {path}: {e}") from e

        item, _body = decode(text, source=path)
        item.slug = slug
        return item

    def write(self, slug: str, item: ContentItem) -> Path:
        """Encode and write a document, replacing any existing file.

        Writes to a temp file in the same directory and then atomically
        replaces the target, so a crash mid-write cannot corrupt it.

        Returns:
            Path written

        Raises:
            StorageUnavailable: If the file cannot be written
        """
        path = self.path_for(slug)
        content = encode(item)

        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self.directory, suffix=".tmp", prefix=".mdcms_"
            )
            try:
                os.write(fd, content.encode("utf-8"))
                os.close(fd)
                fd = -1  # mark closed
                os.replace(tmp_path, path)
            except Exception:
                if fd >= 0:
                    os.close(fd)
                with contextlib.suppress(OSError):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            raise StorageUnavailable(f"Cannot write {path}: {e}") from e

        logger.debug("Wrote %s", path)
        return path

    def delete(self, slug: str) -> None:
        """Delete a document.

        Raises:
            ContentNotFound: If the document does not exist
            StorageUnavailable: If the file cannot be removed
        """
        path = self.path_for(slug)
        try:
            path.unlink()
        except FileNotFoundError as e:
            raise ContentNotFound(f"Content not found: {slug}") from e
        except OSError as e:
            raise StorageUnavailable(f"Cannot delete {path}: {e}") from e
        logger.debug("Deleted %s", path)
