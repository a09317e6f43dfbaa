"""
Dedup operation schemas.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class NoveltyEvaluateRequest(BaseModel):
    """Request to evaluate a candidate post for novelty."""

    candidate: str = Field(..., description="Candidate post text (markdown or HTML)")
    references: Optional[List[str]] = Field(
        default=None,
        description="Reference texts, most recent first. Uses the feed's recent posts if omitted",
    )
    window: Optional[int] = Field(
        default=None, ge=0, description="Number of references to compare (default: 15)"
    )


class NoveltyEvaluateResponse(BaseModel):
    """Response from novelty evaluation."""

    accepted: bool = Field(..., description="True if the candidate is novel")
    hint: Optional[str] = Field(default=None, description="Regeneration guidance when rejected")
    cosine: float = Field(..., description="Cosine score of the rejecting or closest reference")
    jaccard: float = Field(..., description="Trigram Jaccard score of the rejecting or closest reference")
    reference_index: Optional[int] = Field(
        default=None, description="Index of the rejecting reference"
    )
    references_compared: int = Field(..., description="Number of references in the window")
