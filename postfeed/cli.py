"""
Postfeed CLI.

Commands:
- run:   generate today's post with novelty control and append it to the feed
- check: evaluate a text file against the feed's recent posts
"""

import argparse
import json
import os
import sys
from pathlib import Path
from typing import List, Optional

from postfeed.infra.logging_config import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="postfeed", description="Daily AI + UX post generator")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    run_parser = subparsers.add_parser("run", help="Generate and publish a post")
    run_parser.add_argument(
        "--model",
        type=str,
        default=None,
        help="Model. Format: 'azure:<deployment>' or Claude model name"
    )
    run_parser.add_argument(
        "--no-save",
        action="store_true",
        default=False,
        help="Do not write the post to the feed"
    )
    run_parser.add_argument(
        "--max-attempts",
        type=int,
        default=None,
        help="Maximum generations before the last candidate is kept (default: 5)"
    )
    run_parser.add_argument(
        "--posts-file",
        type=str,
        default=None,
        help="Feed file (default: POSTS_FILE or data/posts.json)"
    )

    check_parser = subparsers.add_parser("check", help="Check a text file for novelty")
    check_parser.add_argument("file", type=str, help="Candidate text file (markdown or HTML)")
    check_parser.add_argument(
        "--window",
        type=int,
        default=None,
        help="Number of recent posts to compare against (default: 15)"
    )
    check_parser.add_argument(
        "--posts-file",
        type=str,
        default=None,
        help="Feed file (default: POSTS_FILE or data/posts.json)"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "run":
        return run_generation(args)
    if args.command == "check":
        return run_check(args)

    parser.print_help()
    return 1


def run_generation(args: argparse.Namespace) -> int:
    """Execute one generation run based on args."""
    from postfeed.generator.pipeline import run_daily_post

    logger = setup_logging(os.getenv("LOG_LEVEL", "INFO"))

    logger.info("=" * 80)
    logger.info("[CLI] Post Generation Started")
    logger.info(f"[CLI] Model: {args.model or '(default)'}")
    logger.info(f"[CLI] Save output: {not args.no_save}")
    logger.info("=" * 80)

    try:
        outcome = run_daily_post(
            model_spec=args.model,
            save_output=not args.no_save,
            max_attempts=args.max_attempts,
            posts_file=args.posts_file,
        )
    except Exception as e:
        logger.error(f"[CLI] Generation failed: {e}", exc_info=True)
        raise

    print("\n" + "=" * 80)
    print("RESULT SUMMARY")
    print("=" * 80)
    print(f"State: {outcome.state.value}")
    print(f"Attempts: {outcome.attempts}")
    print(f"Post ID: {outcome.entry.id if outcome.entry else 'N/A'}")
    print(f"Title: {outcome.title}")
    print(f"Hashtags: {' '.join('#' + tag for tag in outcome.hashtags)}")
    print("\n--- Verdicts ---")
    print(json.dumps([v.to_dict() for v in outcome.verdicts], indent=2))
    print("=" * 80)
    return 0


def run_check(args: argparse.Namespace) -> int:
    """
    Evaluate a candidate file.

    Exit codes: 0 novel, 1 rejected, 2 unreadable feed. A missing feed
    counts as no references, as in `run`.
    """
    from dataclasses import replace

    from postfeed.dedup.novelty import NoveltyConfig, NoveltyGuard
    from postfeed.errors import FeedStoreError
    from postfeed.feed.store import FeedStore

    logger = setup_logging(os.getenv("LOG_LEVEL", "INFO"))

    config = NoveltyConfig.from_env()
    if args.window is not None:
        config = replace(config, window=args.window)

    candidate = Path(args.file).read_text(encoding="utf-8")

    store = FeedStore(args.posts_file)
    try:
        references = store.recent_html(config.window)
    except FeedStoreError as e:
        if store.path.exists():
            logger.error(f"[CLI] Cannot read feed: {e}", exc_info=True)
            return 2
        logger.warning(f"[CLI] Feed file not found, comparing against nothing: {store.path}")
        references = []

    verdict = NoveltyGuard(config).evaluate(candidate, references)
    logger.info(f"[CLI] Novelty check: {'ACCEPT' if verdict.accepted else 'REJECT'}")

    print(json.dumps(verdict.to_dict(), indent=2))
    return 0 if verdict.accepted else 1


if __name__ == "__main__":
    sys.exit(main())
