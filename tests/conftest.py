"""Shared test fixtures for mdcms package."""

from pathlib import Path
from types import MappingProxyType

import pytest
import yaml
from click.testing import CliRunner

from mdcms.core.config import Settings, TagOverride


def _render_doc(
    title: str = "Test Item",
    date: str = "2024-01-01",
    tags: list[str] | tuple[str, ...] = (),
    body: str = "Test content.",
    excerpt: str = "",
    cover_image: str = "",
) -> str:
    """Render a document in the on-disk format, independent of the encoder."""
    return (
        "---\n"
        f'title: "{title}"\n'
        f'excerpt: "{excerpt}"\n'
        f'coverImage: "{cover_image}"\n'
        f'date: "{date}"\n'
        "ogImage:\n"
        f'  url: "{cover_image}"\n'
        f"tags: [{', '.join(tags)}]\n"
        "---\n"
        "\n"
        f"{body}"
    )


@pytest.fixture
def render_doc():
    """Provide the legacy-format document renderer."""
    return _render_doc


@pytest.fixture
def content_dir(tmp_path):
    """Provide an empty content directory."""
    path = tmp_path / "content"
    path.mkdir()
    return path


@pytest.fixture
def settings(tmp_path, content_dir):
    """Settings pointing at the temp content directory, no overrides."""
    return Settings(
        content_dir=content_dir,
        images_dir=tmp_path / "images",
        tag_config=MappingProxyType({}),
    )


@pytest.fixture
def settings_with_overrides(tmp_path, content_dir):
    """Settings with a couple of tag overrides."""
    return Settings(
        content_dir=content_dir,
        images_dir=tmp_path / "images",
        tag_config=MappingProxyType(
            {
                "notes": TagOverride(name="Field Notes", icon="🗒️"),
                "blog": TagOverride(images_dir=tmp_path / "blog-images"),
            }
        ),
    )


@pytest.fixture
def create_content_file(content_dir):
    """Factory fixture for creating content files in the content directory."""

    def _create(
        slug: str = "test-item",
        title: str = "Test Item",
        date: str = "2024-01-01",
        tags: list[str] | tuple[str, ...] = (),
        body: str = "Test content.",
        raw: str | None = None,
    ) -> Path:
        text = raw if raw is not None else _render_doc(title, date, tags, body)
        path = content_dir / f"{slug}.md"
        path.write_text(text, encoding="utf-8")
        return path

    return _create


@pytest.fixture
def config_file(tmp_path, content_dir):
    """Write an mdcms.yaml next to the content directory."""
    path = tmp_path / "mdcms.yaml"
    path.write_text(
        yaml.dump(
            {
                "contentDir": "content",
                "imagesDir": "images",
                "tagConfig": {"notes": {"name": "Field Notes", "icon": "N"}},
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def invoke(runner, config_file):
    """Invoke the mdcms CLI against the temp config."""
    from mdcms.cli import main

    def _invoke(*args: str, **kwargs):
        return runner.invoke(main, ["--config", str(config_file), *args], **kwargs)

    return _invoke
