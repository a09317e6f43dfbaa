"""
Generator module - post generation components.

- Trend source (Bing News or curated topics)
- Prompt building and angle selection
- Model providers (Claude, Azure OpenAI)
- Post formatting (title, hashtags, HTML)

The retry pipeline lives in ``postfeed.generator.pipeline``.
"""

from .formatting import (
    derive_hashtags,
    derive_title,
    title_from,
    to_html,
)

from .prompt_builder import (
    ANGLES,
    build_rewrite_prompt,
    build_system_prompt,
    build_user_prompt,
    pick_angle,
)

from .trends import Trend, fetch_trends

from .model_provider import (
    AzureOpenAIProvider,
    ClaudeProvider,
    GenerationResult,
    ModelProvider,
    get_provider,
    parse_model_spec,
)

__all__ = [
    # formatting
    "derive_hashtags",
    "derive_title",
    "title_from",
    "to_html",
    # prompt_builder
    "ANGLES",
    "build_rewrite_prompt",
    "build_system_prompt",
    "build_user_prompt",
    "pick_angle",
    # trends
    "Trend",
    "fetch_trends",
    # model_provider
    "AzureOpenAIProvider",
    "ClaudeProvider",
    "GenerationResult",
    "ModelProvider",
    "get_provider",
    "parse_model_spec",
]
