"""
Daily post generation pipeline with novelty control.

Flow of one run:
    fetch trends -> build prompts -> generate -> novelty guard
        -> accepted: write post
        -> rejected: regenerate with a new angle (bounded)
        -> bound reached: write the last candidate anyway

The guard is used as a black-box predicate. It is advisory once the attempt
bound is reached.
"""

import logging
import os
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence

from dotenv import load_dotenv

from postfeed.dedup.novelty import NoveltyConfig, NoveltyGuard, NoveltyVerdict
from postfeed.errors import FeedStoreError
from postfeed.feed.store import FeedStore, PostEntry, build_post_entry
from postfeed.infra.data_paths import ensure_data_directories, get_posts_file_path
from postfeed.infra.env import get_env_float, get_env_int

from .formatting import derive_hashtags, derive_title, to_html
from .model_provider import ModelProvider, get_provider, parse_model_spec
from .prompt_builder import (
    build_rewrite_prompt,
    build_system_prompt,
    build_user_prompt,
    pick_angle,
)
from .trends import Trend, fetch_trends

logger = logging.getLogger("postfeed")

DEFAULT_MAX_ATTEMPTS = 5

NoveltyPredicate = Callable[[str, Sequence[str]], NoveltyVerdict]


class GenerationState(str, Enum):
    """Retry loop states."""
    GENERATING = "generating"
    EVALUATING = "evaluating"
    ACCEPTED = "accepted"
    EXHAUSTED = "exhausted"


@dataclass
class GenerationOutcome:
    """Final result of one generation run."""
    text: str
    state: GenerationState
    attempts: int
    verdicts: List[NoveltyVerdict] = field(default_factory=list)
    title: str = ""
    hashtags: List[str] = field(default_factory=list)
    entry: Optional[PostEntry] = None
    usage: List[Optional[Dict[str, int]]] = field(default_factory=list)

    @property
    def accepted_by_guard(self) -> bool:
        return self.state == GenerationState.ACCEPTED


def load_environment(model_spec: Optional[str] = None) -> Dict[str, Any]:
    """
    Load environment variables and return the run configuration.

    Reads .env first, then the process environment. Credentials are checked
    only for the provider selected by ``model_spec`` (or MODEL_PROVIDER).

    Args:
        model_spec: Optional model override ("azure:<deployment>" or Claude model)

    Returns:
        Dict[str, Any]: Run configuration
            - provider (str): "anthropic" or "azure"
            - anthropic_api_key, azure_endpoint, azure_key, azure_deployment
            - bing_key (Optional[str]): Bing Search key for trends
            - max_tokens (int), temperature (float)
            - posts_file (str): Feed file path
            - max_attempts (int): Generation bound
            - novelty (NoveltyConfig): Guard policy
            - log_level (str)

    Raises:
        ValueError: If the selected provider's credentials are missing
    """
    load_dotenv()

    info = parse_model_spec(model_spec)

    config: Dict[str, Any] = {
        "provider": info.provider,
        "model": info.model_name,
        "anthropic_api_key": os.getenv("ANTHROPIC_API_KEY"),
        "azure_endpoint": os.getenv("AZURE_OPENAI_ENDPOINT"),
        "azure_key": os.getenv("AZURE_OPENAI_KEY"),
        "azure_deployment": os.getenv("AZURE_OPENAI_DEPLOYMENT"),
        "bing_key": os.getenv("BING_SEARCH_KEY") or None,
        "max_tokens": get_env_int("MAX_TOKENS", 500),
        "temperature": get_env_float("TEMPERATURE", 0.7),
        "posts_file": str(get_posts_file_path()),
        "max_attempts": get_env_int("NOVELTY_MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS),
        "novelty": NoveltyConfig.from_env(),
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
    }

    if info.provider == "azure":
        missing = [
            name for name, key in (
                ("AZURE_OPENAI_ENDPOINT", "azure_endpoint"),
                ("AZURE_OPENAI_KEY", "azure_key"),
            ) if not config[key]
        ]
        if not info.model_name:
            missing.append("AZURE_OPENAI_DEPLOYMENT")
        if missing:
            logger.error(f"Missing Azure OpenAI env vars: {', '.join(missing)}")
            raise ValueError(f"Missing Azure OpenAI env vars: {', '.join(missing)}")
    elif not config["anthropic_api_key"]:
        logger.error("ANTHROPIC_API_KEY is not set")
        raise ValueError("ANTHROPIC_API_KEY is not set")

    logger.info(f"Environment loaded - provider: {info.provider}, model: {info.model_name}")
    return config


def _load_references(store: FeedStore, window: int) -> List[str]:
    """Recent post bodies used as novelty references (empty for a new feed)."""
    try:
        return store.recent_html(window)
    except FeedStoreError:
        if store.path.exists():
            raise
        logger.warning(f"[Pipeline] Feed file not found, comparing against nothing: {store.path}")
        return []


def generate_with_novelty_control(
    provider: ModelProvider,
    store: FeedStore,
    config: Dict[str, Any],
    guard: Optional[NoveltyPredicate] = None,
    max_attempts: Optional[int] = None,
    save_output: bool = True,
    trends: Optional[Sequence[Trend]] = None,
    rng: Optional[random.Random] = None,
    date: Optional[str] = None
) -> GenerationOutcome:
    """
    Generate one post, regenerating while the novelty guard rejects it.

    Policy:
    - Accepted by the guard: stop, state ACCEPTED
    - Rejected and attempts remain: new angle picked with the guard's hint
      in the pool, rewrite prompt, generate again
    - Rejected on the last attempt: state EXHAUSTED, the last candidate is
      kept anyway

    Args:
        provider: Model provider used for every attempt
        store: Feed store for references and output
        config: Run configuration (see load_environment)
        guard: Novelty predicate. Defaults to NoveltyGuard(config["novelty"])
        max_attempts: Generation bound (config["max_attempts"] or 5 if None)
        save_output: Whether to append the chosen post to the feed
        trends: Topics for the prompt (fetched if None)
        rng: Random source for angle selection
        date: ISO timestamp stored with the post

    Returns:
        GenerationOutcome: Chosen text, final state and per-attempt verdicts

    Raises:
        ValueError: If max_attempts < 1
        ModelProviderError: Propagated from the provider
        TrendFetchError: Propagated from the trend source
    """
    if max_attempts is None:
        max_attempts = config.get("max_attempts", DEFAULT_MAX_ATTEMPTS)
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")

    novelty_config = config.get("novelty") or NoveltyConfig()
    guard = guard or NoveltyGuard(novelty_config)

    logger.info("[Pipeline] " + "=" * 60)
    logger.info(f"[Pipeline] Novelty-controlled generation (max {max_attempts} attempts)")

    references = _load_references(store, novelty_config.window)
    logger.info(f"[Pipeline] Comparing against {len(references)} recent posts")

    if trends is None:
        trends = fetch_trends(config.get("bing_key"))

    system_prompt = build_system_prompt()
    user_prompt = build_user_prompt(trends, pick_angle(rng=rng))
    prompt = user_prompt

    state = GenerationState.GENERATING
    verdicts: List[NoveltyVerdict] = []
    usage: List[Optional[Dict[str, int]]] = []
    text = ""
    attempt = 0

    for attempt in range(1, max_attempts + 1):
        logger.info(f"[Pipeline] Attempt {attempt}/{max_attempts} - {state.value}")
        result = provider.generate(system_prompt, prompt, config)
        text = result.text
        usage.append(result.usage)

        state = GenerationState.EVALUATING
        verdict = guard(text, references)
        verdicts.append(verdict)

        if verdict.accepted:
            state = GenerationState.ACCEPTED
            logger.info(f"[Pipeline] Decision=ACCEPT, Attempt={attempt}")
            break

        if attempt == max_attempts:
            state = GenerationState.EXHAUSTED
            logger.warning(
                f"[Pipeline] Decision=EXHAUSTED after {attempt} attempts, keeping last candidate"
            )
            break

        alt_angle = pick_angle(verdict.hint, rng=rng)
        prompt = build_rewrite_prompt(user_prompt, alt_angle)
        state = GenerationState.GENERATING
        logger.info(f"[Pipeline] Decision=RETRY, Attempt={attempt}, Angle={alt_angle}")

    title = derive_title(text)
    hashtags = derive_hashtags(text)
    entry = build_post_entry(text, to_html(text), title, hashtags, date=date)

    if save_output:
        store.append(entry)

    logger.info(f"[Pipeline] Done - state={state.value}, post={entry.id} ({title})")
    logger.info("[Pipeline] " + "=" * 60)

    return GenerationOutcome(
        text=text,
        state=state,
        attempts=attempt,
        verdicts=verdicts,
        title=title,
        hashtags=hashtags,
        entry=entry,
        usage=usage,
    )


def run_daily_post(
    model_spec: Optional[str] = None,
    save_output: bool = True,
    max_attempts: Optional[int] = None,
    posts_file: Optional[str] = None
) -> GenerationOutcome:
    """
    Run one full daily cycle from environment configuration.

    Args:
        model_spec: Model override (see model_provider.parse_model_spec)
        save_output: Whether to write the post to the feed
        max_attempts: Generation bound override
        posts_file: Feed file override

    Returns:
        GenerationOutcome
    """
    config = load_environment(model_spec)
    provider = get_provider(model_spec)
    if posts_file is None:
        ensure_data_directories()
    store = FeedStore(posts_file or config["posts_file"])
    return generate_with_novelty_control(
        provider,
        store,
        config,
        max_attempts=max_attempts,
        save_output=save_output,
    )
