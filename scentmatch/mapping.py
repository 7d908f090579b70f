from __future__ import annotations

"""
Mapping utilities for the scentmatch API.

This module turns ranked ``(perfume_id, raw_score)`` pairs into the
strict Pydantic objects defined in :mod:`scentmatch.config`: each
catalog item is hydrated with its integer match score and reasoning
string, and the full response carries the user vector and keywords.
All transformation logic is encapsulated here to keep ``api.py`` simple.
"""

import math
from typing import List, Sequence, Tuple

from loguru import logger

from .config import Analysis, CatalogItem, RecommendedPerfume, RecommendResponse
from .embed_index import CatalogIndex
from .profile import UserProfile
from .reasoning import build_reasoning


def to_match_score(raw_score: float) -> int:
    """Percentage, rounding halves up (0.125 -> 13)."""
    return int(math.floor(raw_score * 100.0 + 0.5))


def to_recommended(item: CatalogItem, raw_score: float, keywords: Sequence[str]) -> RecommendedPerfume:
    try:
        return RecommendedPerfume(
            **item.model_dump(),
            matchScore=to_match_score(raw_score),
            reasoning=build_reasoning(item, keywords),
        )
    except Exception as e:
        logger.exception("Error mapping perfume {} into API schema: {}", item.id, e)
        raise


def map_items_to_response(
    profile: UserProfile,
    ranked: Sequence[Tuple[str, float]],
    index: CatalogIndex,
) -> RecommendResponse:
    """Convert ranked perfume ids into a full RecommendResponse object."""
    items: List[RecommendedPerfume] = []
    for perfume_id, score in ranked:
        if perfume_id not in index.positions:
            logger.warning("Perfume id {} not in catalog; skipping", perfume_id)
            continue
        items.append(to_recommended(index.item(perfume_id), score, profile.keywords))
    logger.debug("Mapped {} perfumes into API schema", len(items))
    return RecommendResponse(
        dna_vector=[float(v) for v in profile.vector],
        analysis=Analysis(keywords=list(profile.keywords)),
        recommendations=items,
    )
