"""
Pytest configuration and shared fixtures.
"""

import json

import pytest


@pytest.fixture(autouse=True)
def auth_disabled(monkeypatch):
    """Tests run with API_AUTH_ENABLED off unless they turn it on."""
    monkeypatch.setenv("API_AUTH_ENABLED", "false")
    monkeypatch.delenv("API_KEY", raising=False)


@pytest.fixture
def posts_file(tmp_path, monkeypatch):
    """Feed file with two posts, exposed through POSTS_FILE."""
    path = tmp_path / "data" / "posts.json"
    path.parent.mkdir(parents=True)
    posts = [
        {
            "id": "aaaaaaaaaaaa",
            "date": "2026-10-17T08:00:00+00:00",
            "title": "Agent handoffs need clear error states",
            "html": "<p>Agent handoffs need clear error states.</p>\n"
                    "<ul class=\"bullets\">\n<li>Show who owns the task</li>\n</ul>",
            "hashtags": ["AgenticAI", "UX"],
            "sources": [],
            "permalink": "",
        },
        {
            "id": "bbbbbbbbbbbb",
            "date": "2026-10-16T08:00:00+00:00",
            "title": "Consent screens that people read",
            "html": "<p>Consent screens that people actually read and understand.</p>",
            "hashtags": ["Privacy"],
            "sources": [],
            "permalink": "",
        },
    ]
    path.write_text(json.dumps({"posts": posts}, indent=2), encoding="utf-8")
    monkeypatch.setenv("POSTS_FILE", str(path))
    return path
