"""mdcms: file-based content management over Markdown front matter."""

__version__ = "0.1.0"
