"""
Tests for the postfeed CLI.
"""

import json
from unittest.mock import patch

import pytest

from postfeed import cli
from postfeed.dedup.novelty import NoveltyVerdict
from postfeed.feed.store import build_post_entry
from postfeed.generator.pipeline import GenerationOutcome, GenerationState


@pytest.fixture(autouse=True)
def log_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))


class TestCheckCommand:
    """Tests for `postfeed check`."""

    def test_duplicate_exits_1(self, posts_file, tmp_path, capsys):
        candidate = tmp_path / "candidate.md"
        candidate.write_text("Agent handoffs need clear error states. Show who owns the task", encoding="utf-8")

        code = cli.main(["check", str(candidate)])

        assert code == 1
        output = json.loads(capsys.readouterr().out)
        assert output["accepted"] is False

    def test_novel_exits_0(self, posts_file, tmp_path, capsys):
        candidate = tmp_path / "candidate.md"
        candidate.write_text("Tomatoes, basil and patience in the garden.", encoding="utf-8")

        assert cli.main(["check", str(candidate)]) == 0

    def test_window_option(self, posts_file, tmp_path):
        candidate = tmp_path / "candidate.md"
        candidate.write_text("Agent handoffs need clear error states. Show who owns the task", encoding="utf-8")

        assert cli.main(["check", str(candidate), "--window", "0"]) == 0

    def test_missing_feed_compares_against_nothing(self, tmp_path, capsys):
        candidate = tmp_path / "candidate.md"
        candidate.write_text("Agent handoffs need clear error states.", encoding="utf-8")
        missing = tmp_path / "nope.json"

        code = cli.main(["check", str(candidate), "--posts-file", str(missing)])

        assert code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["accepted"] is True
        assert not missing.exists()

    def test_corrupt_feed_exits_2(self, tmp_path, capsys):
        candidate = tmp_path / "candidate.md"
        candidate.write_text("Agent handoffs need clear error states.", encoding="utf-8")
        feed = tmp_path / "posts.json"
        feed.write_text("<html>gateway</html>", encoding="utf-8")

        code = cli.main(["check", str(candidate), "--posts-file", str(feed)])

        assert code == 2
        assert capsys.readouterr().out == ""


class TestRunCommand:
    """Tests for `postfeed run`."""

    def test_run_passes_options(self, capsys):
        entry = build_post_entry("Body", "<p>Body</p>", "Title", ["UX"], date="2026-10-18")
        outcome = GenerationOutcome(
            text="Body",
            state=GenerationState.ACCEPTED,
            attempts=1,
            verdicts=[NoveltyVerdict(accepted=True)],
            title="Title",
            hashtags=["UX"],
            entry=entry,
        )

        with patch("postfeed.generator.pipeline.run_daily_post", return_value=outcome) as mock_run:
            code = cli.main(["run", "--model", "azure:posts", "--no-save", "--max-attempts", "3"])

        assert code == 0
        mock_run.assert_called_once_with(
            model_spec="azure:posts",
            save_output=False,
            max_attempts=3,
            posts_file=None,
        )
        out = capsys.readouterr().out
        assert "State: accepted" in out
        assert f"Post ID: {entry.id}" in out

    def test_run_failure_reraises(self):
        with patch("postfeed.generator.pipeline.run_daily_post", side_effect=ValueError("no key")):
            with pytest.raises(ValueError):
                cli.main(["run"])


class TestNoCommand:
    def test_prints_help(self, capsys):
        assert cli.main([]) == 1
        assert "usage" in capsys.readouterr().out.lower()
