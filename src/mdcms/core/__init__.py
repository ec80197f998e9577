"""Core utilities for mdcms."""

from mdcms.core.config import Settings, TagOverride, find_config_file, load_settings
from mdcms.core.errors import (
    CmsError,
    ConfigError,
    ContentNotFound,
    MalformedDocument,
    MetadataDecodeError,
    StorageUnavailable,
    UnknownContentType,
)

__all__ = [
    # Config
    "Settings",
    "TagOverride",
    "find_config_file",
    "load_settings",
    # Errors
    "CmsError",
    "ConfigError",
    "ContentNotFound",
    "MalformedDocument",
    "MetadataDecodeError",
    "StorageUnavailable",
    "UnknownContentType",
]
