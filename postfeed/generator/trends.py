"""
Trend source for daily posts.

Uses Bing News search when BING_SEARCH_KEY is configured, otherwise a fixed
list of curated AI + UX topics.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional

import httpx

from postfeed.errors import TrendFetchError

logger = logging.getLogger("postfeed")

BING_NEWS_URL = "https://api.bing.microsoft.com/v7.0/news/search"
BING_QUERY = (
    '("artificial intelligence" OR AI) (product OR policy OR UX OR adoption) '
    "site:news OR site:blog"
)
BING_TIMEOUT_SECONDS = 15
MAX_TRENDS = 6


@dataclass
class Trend:
    """One topic fed into the user prompt."""
    title: str
    snippet: str
    url: Optional[str] = None


FALLBACK_TRENDS: List[Trend] = [
    Trend("Agentic AI for workflows",
          "Move from prompts to agentic, human-in-the-loop workflows for recruiting, support, and ops."),
    Trend("Privacy/consent & model training",
          "Growing expectation for clear opt-out and data minimization in enterprise AI."),
    Trend("Evaluation & guardrails",
          "Shift from demos to measurable, task-level evaluations and safety guardrails."),
    Trend("On-device and edge AI",
          "Latency and privacy benefits for productivity apps and assistive features."),
    Trend("Multimodal UX",
          "Speech + vision + text interactions becoming mainstream in business tools."),
    Trend("RAG over enterprise data",
          "More accurate answers via retrieval + verifiable citations inside orgs."),
]


def _collapse_whitespace(text: str) -> str:
    return re.sub(r"\s+", " ", text or "").strip()


def fetch_trends(
    api_key: Optional[str] = None,
    client: Optional[httpx.Client] = None
) -> List[Trend]:
    """
    Fetch today's AI news topics.

    Args:
        api_key: Bing Search key. Without one the curated fallback is returned.
        client: HTTP client to use (a short-lived client is created if None)

    Returns:
        List[Trend]: Up to 6 topics

    Raises:
        TrendFetchError: On network failure or non-2xx response
    """
    if not api_key:
        logger.info("[Trends] No BING_SEARCH_KEY, using curated topics")
        return list(FALLBACK_TRENDS)

    params = {
        "q": BING_QUERY,
        "count": 10,
        "safeSearch": "Moderate",
        "setLang": "en-US",
        "freshness": "Day",
    }
    headers = {"Ocp-Apim-Subscription-Key": api_key}

    owns_client = client is None
    http = client or httpx.Client(timeout=BING_TIMEOUT_SECONDS)
    try:
        response = http.get(BING_NEWS_URL, params=params, headers=headers)
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPStatusError as e:
        logger.error(f"[Trends] Bing news search failed: {e.response.status_code}")
        raise TrendFetchError(f"Bing news search failed: {e.response.status_code}") from e
    except httpx.RequestError as e:
        logger.error(f"[Trends] Bing news request error: {e}")
        raise TrendFetchError(f"Bing news request error: {e}") from e
    finally:
        if owns_client:
            http.close()

    trends = [
        Trend(
            title=item.get("name", ""),
            snippet=_collapse_whitespace(item.get("description", "")),
            url=item.get("url"),
        )
        for item in data.get("value") or []
    ][:MAX_TRENDS]

    logger.info(f"[Trends] Fetched {len(trends)} topics from Bing News")
    return trends
