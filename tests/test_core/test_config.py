"""Tests for mdcms.core.config module.

Covers:
  - get_global_config_path() with default and XDG_CONFIG_HOME
  - find_config_file() tiered resolution (explicit > env var > walk up > global)
  - parse_settings() / load_settings() including legacy config.json
"""

from __future__ import annotations

import json
from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest
import yaml

from mdcms.core.config import (
    CONFIG_ENV_VAR,
    Settings,
    TagOverride,
    find_config_file,
    get_global_config_path,
    load_settings,
    parse_settings,
)
from mdcms.core.errors import ConfigError
from mdcms.taxonomy.types import content_type_for


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep the user's environment and global config out of the tests."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))


# ---------------------------------------------------------------------------
# get_global_config_path
# ---------------------------------------------------------------------------

class TestGetGlobalConfigPath:
    def test_default_path(self, monkeypatch):
        """Without XDG_CONFIG_HOME, returns ~/.config/mdcms/config.yaml."""
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        assert get_global_config_path() == Path.home() / ".config" / "mdcms" / "config.yaml"

    def test_xdg_config_home(self, tmp_path):
        assert get_global_config_path() == tmp_path / "xdg" / "mdcms" / "config.yaml"


# ---------------------------------------------------------------------------
# find_config_file
# ---------------------------------------------------------------------------

class TestFindConfigFile:
    def test_explicit_path(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("contentDir: content\n")
        assert find_config_file(path) == path

    def test_explicit_path_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            find_config_file(tmp_path / "missing.yaml")

    def test_env_var(self, monkeypatch, tmp_path):
        path = tmp_path / "env.yaml"
        path.write_text("contentDir: content\n")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
        assert find_config_file(start_path=tmp_path) == path

    def test_env_var_missing_file(self, monkeypatch, tmp_path):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "nope.yaml"))
        with pytest.raises(FileNotFoundError, match=CONFIG_ENV_VAR):
            find_config_file(start_path=tmp_path)

    def test_walks_up(self, tmp_path):
        config = tmp_path / "mdcms.yaml"
        config.write_text("contentDir: content\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_file(start_path=nested) == config.resolve()

    def test_finds_legacy_config_json(self, tmp_path):
        config = tmp_path / "config.json"
        config.write_text("{}")
        assert find_config_file(start_path=tmp_path) == config.resolve()

    def test_prefers_mdcms_yaml_over_config_json(self, tmp_path):
        (tmp_path / "config.json").write_text("{}")
        (tmp_path / "mdcms.yaml").write_text("contentDir: c\n")
        assert find_config_file(start_path=tmp_path).name == "mdcms.yaml"

    def test_global_fallback(self, tmp_path):
        global_config = tmp_path / "xdg" / "mdcms" / "config.yaml"
        global_config.parent.mkdir(parents=True)
        global_config.write_text("contentDir: /srv/content\n")
        start = tmp_path / "empty"
        start.mkdir()
        assert find_config_file(start_path=start) == global_config

    def test_nothing_found(self, tmp_path):
        start = tmp_path / "empty"
        start.mkdir()
        with pytest.raises(FileNotFoundError, match="No config file found"):
            find_config_file(start_path=start)


# ---------------------------------------------------------------------------
# parse_settings
# ---------------------------------------------------------------------------

class TestParseSettings:
    def test_relative_dirs_resolve_against_base(self, tmp_path):
        settings = parse_settings(
            {"contentDir": "content", "imagesDir": "public/images"}, tmp_path
        )
        assert settings.content_dir == tmp_path / "content"
        assert settings.images_dir == tmp_path / "public" / "images"

    def test_absolute_dirs_kept(self, tmp_path):
        settings = parse_settings(
            {"contentDir": "/srv/content", "imagesDir": "/srv/images"}, tmp_path
        )
        assert settings.content_dir == Path("/srv/content")
        assert settings.images_dir == Path("/srv/images")

    def test_snake_case_keys(self, tmp_path):
        settings = parse_settings(
            {"content_dir": "c", "images_dir": "i", "tag_config": {"x": {"icon": "X"}}},
            tmp_path,
        )
        assert settings.content_dir == tmp_path / "c"
        assert settings.tag_config["x"] == TagOverride(icon="X")

    def test_images_dir_defaults_to_content_dir(self, tmp_path):
        settings = parse_settings({"contentDir": "content"}, tmp_path)
        assert settings.images_dir == settings.content_dir

    def test_tag_config(self, tmp_path):
        settings = parse_settings(
            {
                "contentDir": "content",
                "tagConfig": {
                    "notes": {"name": "Field Notes", "icon": "🗒️"},
                    "blog": {"imagesDir": "../public/blog"},
                    "empty": None,
                },
            },
            tmp_path,
        )
        assert settings.tag_config["notes"] == TagOverride(name="Field Notes", icon="🗒️")
        assert settings.tag_config["blog"] == TagOverride(images_dir=tmp_path / "../public/blog")
        assert settings.tag_config["empty"] == TagOverride()

    def test_tag_images_dir_resolves_like_top_level(self, tmp_path):
        """A relative per-tag imagesDir is anchored at the config directory."""
        settings = parse_settings(
            {
                "contentDir": "content",
                "imagesDir": "public/images",
                "tagConfig": {
                    "notes": {"imagesDir": "public/notes"},
                    "abs": {"images_dir": "/srv/abs"},
                    "blank": {"imagesDir": ""},
                },
            },
            tmp_path,
        )
        assert settings.images_dir == tmp_path / "public" / "images"
        assert settings.tag_config["notes"].images_dir == tmp_path / "public" / "notes"
        assert settings.tag_config["abs"].images_dir == Path("/srv/abs")
        assert settings.tag_config["blank"].images_dir is None

        ct = content_type_for("notes", settings)
        assert ct.images_dir == tmp_path / "public" / "notes"
        assert content_type_for("other", settings).images_dir == settings.images_dir

    def test_missing_tag_config(self, tmp_path):
        settings = parse_settings({"contentDir": "content"}, tmp_path)
        assert dict(settings.tag_config) == {}

    @pytest.mark.parametrize(
        "data",
        [
            ["not", "a", "mapping"],
            None,
            {},
            {"contentDir": ""},
            {"contentDir": 5},
            {"contentDir": "c", "imagesDir": ["x"]},
            {"contentDir": "c", "tagConfig": ["notes"]},
            {"contentDir": "c", "tagConfig": {"notes": "Notes"}},
            {"contentDir": "c", "tagConfig": {"notes": {"icon": 5}}},
        ],
    )
    def test_invalid(self, tmp_path, data):
        with pytest.raises(ConfigError):
            parse_settings(data, tmp_path)

    def test_settings_frozen(self, tmp_path):
        settings = parse_settings({"contentDir": "content"}, tmp_path)
        with pytest.raises(FrozenInstanceError):
            settings.content_dir = tmp_path  # type: ignore[misc]

    def test_tag_config_read_only(self, tmp_path):
        settings = parse_settings({"contentDir": "c", "tagConfig": {}}, tmp_path)
        with pytest.raises(TypeError):
            settings.tag_config["x"] = TagOverride()  # type: ignore[index]


# ---------------------------------------------------------------------------
# load_settings
# ---------------------------------------------------------------------------

class TestLoadSettings:
    def test_loads_yaml(self, tmp_path):
        path = tmp_path / "mdcms.yaml"
        path.write_text(
            yaml.dump({"contentDir": "content", "tagConfig": {"a": {"name": "A!"}}})
        )
        settings = load_settings(path)
        assert isinstance(settings, Settings)
        assert settings.content_dir == tmp_path.resolve() / "content"
        assert settings.tag_config["a"].name == "A!"
        assert settings.source == path

    def test_loads_legacy_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(
            json.dumps(
                {
                    "contentDir": "../content",
                    "imagesDir": "../public/images",
                    "tagConfig": {"notes": {"icon": "🗒️"}},
                }
            ),
            encoding="utf-8",
        )
        settings = load_settings(path)
        assert settings.content_dir == tmp_path.resolve() / ".." / "content"
        assert settings.tag_config["notes"].icon == "🗒️"

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "mdcms.yaml"
        path.write_text("contentDir: [unclosed\n")
        with pytest.raises(ConfigError, match="Cannot load"):
            load_settings(path)

    def test_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "missing.yaml")
