"""
Tests for data path helpers.
"""

from pathlib import Path

from postfeed.infra.data_paths import (
    ensure_data_directories,
    get_data_root,
    get_posts_file_path,
    get_project_root,
)


class TestDataPaths:
    """Tests for path resolution."""

    def test_project_root_contains_package(self):
        assert (get_project_root() / "postfeed").is_dir()

    def test_default_posts_file(self, monkeypatch):
        monkeypatch.delenv("POSTS_FILE", raising=False)
        assert get_posts_file_path() == get_data_root() / "posts.json"

    def test_posts_file_env_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("POSTS_FILE", str(tmp_path / "feed.json"))
        assert get_posts_file_path() == Path(tmp_path / "feed.json")

    def test_ensure_data_directories(self, monkeypatch, tmp_path):
        monkeypatch.setenv("POSTS_FILE", str(tmp_path / "a" / "b" / "posts.json"))
        ensure_data_directories()
        assert (tmp_path / "a" / "b").is_dir()
