from __future__ import annotations

"""
Short, human readable justification for a recommended perfume.

The explanation names up to three words the user's keyword phrases share
with the perfume's family, notes and tags.
"""

from typing import List, Sequence

from .config import (
    REASONING_FALLBACK,
    REASONING_MAX_TERMS,
    REASONING_MIN_TOKEN_LENGTH,
    REASONING_PREFIX,
    REASONING_STOPWORDS,
    CatalogItem,
)
from .normalize import dedup_preserve_order, item_tokens


def matched_terms(item: CatalogItem, keywords: Sequence[str]) -> List[str]:
    """Shared tokens in the order they appear in the user's keywords, capped."""
    perfume_tokens = set(item_tokens(item))
    search_terms = dedup_preserve_order(" ".join(keywords).lower().split())
    matched = [
        term
        for term in search_terms
        if term in perfume_tokens
        and len(term) >= REASONING_MIN_TOKEN_LENGTH
        and term not in REASONING_STOPWORDS
    ]
    return matched[:REASONING_MAX_TERMS]


def build_reasoning(item: CatalogItem, keywords: Sequence[str]) -> str:
    terms = matched_terms(item, keywords)
    if not terms:
        return REASONING_FALLBACK
    return REASONING_PREFIX + ", ".join(terms)
