"""
Prompt builder module.

Builds the system and user prompts for daily post generation, and the
rewrite prompt used when the novelty guard rejects a candidate.
"""

import random
from typing import List, Optional, Sequence

from .trends import Trend

ANGLES: List[str] = [
    "User experience: speed, clarity, low-friction flows",
    "Trust & privacy: transparent data use, opt-in, and controls",
    "Change management: onboarding, policy, and enablement",
    "ROI & productivity: time-to-value, adoption metrics",
    "Design patterns: agent handoffs, error states, evaluation",
]

SYSTEM_PROMPT = """You are a senior product strategist writing concise, high-signal LinkedIn posts (<=300 words) about AI + user experience.
- Tone: practical, specific, and human. Avoid buzzwords.
- Include 2–4 bullets if needed. Include 4–7 relevant hashtags at end.
- Cite no links. No emojis unless they help clarity."""


def pick_angle(hint: Optional[str] = None, rng: Optional[random.Random] = None) -> str:
    """
    Pick the editorial angle for a post.

    When a regeneration hint is given it joins the pool as one more option.

    Args:
        hint: Guidance returned by a rejecting novelty verdict
        rng: Random source (module random if None)

    Returns:
        str: Selected angle
    """
    angles = list(ANGLES)
    if hint:
        angles.append(hint)
    return (rng or random).choice(angles)


def build_system_prompt() -> str:
    """Return the writer persona prompt."""
    return SYSTEM_PROMPT


def build_user_prompt(trends: Sequence[Trend], angle: str) -> str:
    """
    Build the user prompt from today's topics and angle.

    Args:
        trends: Topics to synthesize, numbered in the prompt
        angle: Angle to emphasize today

    Returns:
        str: User prompt
    """
    topics = "\n".join(
        f"{i + 1}. {trend.title} — {trend.snippet}" for i, trend in enumerate(trends)
    )
    return f"""Synthesize a fresh daily post about AI + UX from these topics:
{topics}
Angle to emphasize today: {angle}

Constraints:
- <= 300 words
- Add concrete examples
- End with a thoughtful question to spark discussion
- Avoid repeating phrasing from prior posts"""


def build_rewrite_prompt(user_prompt: str, angle: str) -> str:
    """Append the rewrite instruction used after a novelty rejection."""
    return (
        user_prompt
        + f"\n\nRewrite with a different angle: {angle}. "
        "Change structure and language; avoid similar phrases to previous content."
    )
