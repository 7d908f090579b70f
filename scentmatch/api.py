from __future__ import annotations

"""
FastAPI application for the scentmatch recommender.

- The catalog index is built once at startup and published as a single
  immutable :class:`~scentmatch.embed_index.CatalogIndex`
- Every request reads the published index and builds its own user vector
- A reload builds a complete new index first, then swaps the reference
- ``run_full_pipeline`` is the transport-free entrypoint used by the CLI
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel, Field

from .config import (
    DEFAULT_TOP_K,
    QUIZ_QUESTIONS,
    CatalogItem,
    HealthResponse,
    QuizQuestion,
    RecommendResponse,
)
from .embed_index import CatalogIndex, build_catalog_index
from .mapping import map_items_to_response
from .profile import build_user_profile
from .retrieval import rank_candidates


# =============================================================================
# Pipeline
# =============================================================================

def run_full_pipeline(
    answers: Mapping[Any, Any],
    index: CatalogIndex,
    top_k: int = DEFAULT_TOP_K,
) -> RecommendResponse:
    """answers -> keywords -> user vector -> top-k ranking -> annotated results."""
    profile = build_user_profile(index, answers)
    logger.info("Matched {} keyword phrases from {} answers", len(profile.keywords), len(answers))

    ranked = rank_candidates(profile.vector, index, top_k=top_k)
    response = map_items_to_response(profile, ranked, index)
    logger.info(
        "Recommended {} perfumes (top score {})",
        len(response.recommendations),
        response.recommendations[0].matchScore if response.recommendations else None,
    )
    return response


# =============================================================================
# Published index
# =============================================================================

_index: Optional[CatalogIndex] = None


def set_index(index: Optional[CatalogIndex]) -> None:
    global _index
    _index = index


def get_index() -> Optional[CatalogIndex]:
    return _index


def reload_index(catalog_path: Optional[Path] = None) -> CatalogIndex:
    """
    Build a fresh index from the catalog file and publish it.

    The currently published index stays in place if the build fails.
    """
    new_index = build_catalog_index(catalog_path)
    set_index(new_index)
    logger.info("Published catalog index with {} perfumes", len(new_index))
    return new_index


# =============================================================================
# FastAPI app + startup
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting app warmup...")
    try:
        reload_index()
    except Exception as e:
        logger.error("Catalog index build failed: {}", e)
        raise
    logger.info("Warmup complete.")
    yield


app = FastAPI(title="scentmatch", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="healthy")


@app.get("/api/quiz", response_model=List[QuizQuestion])
def quiz() -> List[QuizQuestion]:
    return QUIZ_QUESTIONS


def _require_index() -> CatalogIndex:
    index = get_index()
    if index is None:
        raise HTTPException(status_code=500, detail="Catalog not loaded")
    return index


@app.get("/api/perfumes", response_model=List[CatalogItem])
def perfumes() -> List[CatalogItem]:
    return list(_require_index().items)


AnswerValue = Union[str, int, float, List[Union[str, int, float]]]


class RecommendRequest(BaseModel):
    answers: Optional[Dict[str, AnswerValue]] = None
    top_k: Optional[int] = Field(default=None, ge=1)


@app.post("/api/recommend", response_model=RecommendResponse)
def recommend(req: RecommendRequest):
    if req.answers is None:
        return JSONResponse(status_code=400, content={"error": "Missing answers"})
    index = _require_index()
    try:
        return run_full_pipeline(req.answers, index, top_k=req.top_k or DEFAULT_TOP_K)
    except Exception as e:
        logger.exception("Recommendation error: {}", e)
        return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


# =============================================================================
# CLI convenience
# =============================================================================

def recommend_answers(
    answers: Mapping[Any, Any],
    top_k: int = DEFAULT_TOP_K,
    catalog_path: Optional[Path] = None,
) -> RecommendResponse:
    index = get_index()
    if index is None or catalog_path is not None:
        index = reload_index(catalog_path)
    return run_full_pipeline(answers, index, top_k=top_k)
