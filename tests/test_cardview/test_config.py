"""Unit tests for cardview.config."""

import textwrap
from pathlib import Path

import pytest
import tomllib

from cardview.config import Settings, load_settings
from cardview.sorting import SortConfig


def _write_toml(directory: Path, content: str) -> Path:
    path = directory / "cardview.toml"
    path.write_text(textwrap.dedent(content), encoding="utf-8")
    return path


class TestLoadSettings:
    def test_missing_file_gives_defaults(self, tmp_path: Path):
        assert load_settings(tmp_path / "absent.toml") == Settings()

    def test_reads_section(self, tmp_path: Path):
        path = _write_toml(tmp_path, """\
            [cardview]
            sort_key = "priority"
            auto_start = true
        """)
        settings = load_settings(path)
        assert settings.sort_key == "priority"
        assert settings.auto_start is True
        assert settings.show_in_sidebar is False

    def test_mistyped_value_keeps_default(self, tmp_path: Path):
        path = _write_toml(tmp_path, """\
            [cardview]
            sort_key = 3
            show_in_sidebar = "yes"
        """)
        assert load_settings(path) == Settings()

    def test_unknown_keys_ignored(self, tmp_path: Path):
        path = _write_toml(tmp_path, """\
            [cardview]
            colour = "blue"
        """)
        assert load_settings(path) == Settings()

    def test_non_table_section_gives_defaults(self, tmp_path: Path):
        path = _write_toml(tmp_path, """\
            cardview = "sort_key"
        """)
        assert load_settings(path) == Settings()

    def test_invalid_toml_raises(self, tmp_path: Path):
        path = _write_toml(tmp_path, "[cardview\n")
        with pytest.raises(tomllib.TOMLDecodeError):
            load_settings(path)


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.sort_key == "updated"
        assert settings.auto_start is False

    def test_from_flat_dict(self):
        assert Settings.from_dict({"sort_key": "mtime"}).sort_key == "mtime"

    def test_default_sort_config(self):
        assert Settings(sort_key="priority").default_sort_config() == SortConfig("priority", "desc")

    def test_blank_sort_key_uses_default(self):
        assert Settings(sort_key="").default_sort_config() == SortConfig("updated", "desc")
