from __future__ import annotations

"""
Similarity ranking for the scentmatch recommender.

The user vector is compared against every catalog vector with cosine
similarity.  Items are ordered by descending score; equal scores keep
catalog order (stable sort), and the list is truncated to ``top_k``.

Example::

    from scentmatch.retrieval import rank_candidates
    for perfume_id, score in rank_candidates(user_vector, index, top_k=4):
        ...
"""

from typing import List, Tuple

import numpy as np

from .config import DEFAULT_TOP_K
from .embed_index import CatalogIndex


def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    """``dot(a, b) / (|a| * |b|)``, defined as 0.0 when either norm is zero."""
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    if a.shape != b.shape:
        raise ValueError(f"Vector length mismatch: {a.shape} vs {b.shape}")
    na = float(np.linalg.norm(a))
    nb = float(np.linalg.norm(b))
    if na == 0.0 or nb == 0.0:
        return 0.0
    return float(np.dot(a, b) / (na * nb))


def score_catalog(user_vector: np.ndarray, index: CatalogIndex) -> np.ndarray:
    """Cosine similarity of ``user_vector`` against every item, in catalog order."""
    user_vector = np.asarray(user_vector, dtype=np.float64)
    if user_vector.shape != (index.vocabulary_size,):
        raise ValueError(
            f"User vector has shape {user_vector.shape}, expected ({index.vocabulary_size},)"
        )
    dots = index.matrix @ user_vector
    denom = np.linalg.norm(index.matrix, axis=1) * float(np.linalg.norm(user_vector))
    scores = np.zeros(len(index), dtype=np.float64)
    np.divide(dots, denom, out=scores, where=denom > 0.0)
    return scores


def rank_candidates(
    user_vector: np.ndarray,
    index: CatalogIndex,
    top_k: int = DEFAULT_TOP_K,
) -> List[Tuple[str, float]]:
    """Return the ``top_k`` best ``(perfume_id, raw_score)`` pairs."""
    if top_k < 1:
        raise ValueError("top_k must be >= 1")
    scores = score_catalog(user_vector, index)
    order = np.argsort(-scores, kind="stable")[:top_k]
    return [(index.items[i].id, float(scores[i])) for i in order]
