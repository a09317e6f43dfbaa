"""
Dedup operations router.

Endpoints:
- POST /dedup/evaluate - Evaluate a candidate post against recent posts
"""

import logging
from dataclasses import replace

from fastapi import APIRouter, HTTPException

from postfeed.dedup.novelty import NoveltyConfig, NoveltyGuard
from postfeed.errors import FeedStoreError
from postfeed.feed.store import FeedStore

from ..schemas.dedup import NoveltyEvaluateRequest, NoveltyEvaluateResponse

logger = logging.getLogger("postfeed")

router = APIRouter()


@router.post("/evaluate", response_model=NoveltyEvaluateResponse)
async def evaluate_novelty(request: NoveltyEvaluateRequest):
    """
    Evaluate a candidate post for near-duplication.

    Compares against the given references, or the feed's most recent posts
    when none are given. Rejects if any reference exceeds the cosine or
    trigram Jaccard threshold.
    """
    config = NoveltyConfig.from_env()
    if request.window is not None:
        config = replace(config, window=request.window)

    if request.references is not None:
        references = request.references
    else:
        try:
            references = FeedStore().recent_html(config.window)
        except FeedStoreError as e:
            logger.error(f"[DedupAPI] Feed unavailable: {e}")
            raise HTTPException(status_code=503, detail=str(e))

    verdict = NoveltyGuard(config).evaluate(request.candidate, references)

    return NoveltyEvaluateResponse(
        accepted=verdict.accepted,
        hint=verdict.hint,
        cosine=round(verdict.cosine, 4),
        jaccard=round(verdict.jaccard, 4),
        reference_index=verdict.reference_index,
        references_compared=min(len(references), config.window),
    )
