"""Exception hierarchy for mdcms."""

from __future__ import annotations


class CmsError(Exception):
    """Base class for all mdcms errors."""


class MalformedDocument(CmsError):
    """Document is missing its metadata block or the block is not closed."""


class MetadataDecodeError(CmsError):
    """Metadata block is present but cannot be decoded into a record."""


class StorageUnavailable(CmsError):
    """Reading, writing or listing documents failed."""


class ContentNotFound(StorageUnavailable):
    """The requested document does not exist."""


class ConfigError(CmsError):
    """Configuration file exists but is invalid."""


class UnknownContentType(CmsError):
    """No content type is derived for the requested slug."""
