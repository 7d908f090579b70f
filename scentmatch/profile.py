from __future__ import annotations

"""
User profile construction from quiz answers.

Quiz answers arrive as a mapping of question id to either one selected
value or a list of selected values.  They are parsed into an explicit
:class:`Single` / :class:`Multi` variant, flattened to a sequence of
answer tokens, and expanded through the fixed keyword tables in
:mod:`scentmatch.config` into descriptive phrases.  The phrases form the
query text that is projected into the catalog's vector space.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Sequence, Tuple, Union

import numpy as np
from loguru import logger

from .config import DEFAULT_QUERY_TEXT, MEMORY_KEYWORDS, VIBE_KEYWORDS
from .embed_index import CatalogIndex


@dataclass(frozen=True)
class Single:
    value: str

    @property
    def selected(self) -> Tuple[str, ...]:
        return (self.value,)


@dataclass(frozen=True)
class Multi:
    values: Tuple[str, ...]

    @property
    def selected(self) -> Tuple[str, ...]:
        return self.values


Answer = Union[Single, Multi]

KEYWORD_TABLES: Sequence[Mapping[str, str]] = (VIBE_KEYWORDS, MEMORY_KEYWORDS)


def parse_answer(raw: Any) -> Answer:
    if isinstance(raw, (Single, Multi)):
        return raw
    if isinstance(raw, (list, tuple)):
        return Multi(tuple(str(v) for v in raw))
    if isinstance(raw, (str, int, float)):
        return Single(str(raw))
    raise TypeError(f"Unsupported answer value: {raw!r}")


def parse_answers(raw_answers: Mapping[Any, Any]) -> Dict[str, Answer]:
    """Question id (str or int) -> parsed answer, in input order."""
    return {str(qid): parse_answer(raw) for qid, raw in raw_answers.items()}


def flatten_answers(answers: Mapping[Any, Any]) -> List[str]:
    out: List[str] = []
    for answer in parse_answers(answers).values():
        out.extend(answer.selected)
    return out


def extract_keywords(answers: Mapping[Any, Any]) -> List[str]:
    """
    Every selected value is looked up in each keyword table independently,
    so one value may contribute zero, one or two phrases.  Unknown values
    are ignored.
    """
    keywords: List[str] = []
    for value in flatten_answers(answers):
        for table in KEYWORD_TABLES:
            phrase = table.get(value)
            if phrase:
                keywords.append(phrase)
    return keywords


def query_text_for(keywords: Sequence[str]) -> str:
    return " ".join(keywords) or DEFAULT_QUERY_TEXT


@dataclass(frozen=True, eq=False)
class UserProfile:
    keywords: Tuple[str, ...]
    query_text: str
    vector: np.ndarray


def build_user_profile(index: CatalogIndex, answers: Mapping[Any, Any]) -> UserProfile:
    keywords = extract_keywords(answers)
    if not keywords:
        logger.debug("No answer matched a keyword table; using default query text")
    query_text = query_text_for(keywords)
    return UserProfile(
        keywords=tuple(keywords),
        query_text=query_text,
        vector=index.vectorize(query_text),
    )
