from __future__ import annotations

"""
Text normalization utilities used across the scentmatch recommender.

These helpers build the searchable document text for a catalog item and
perform the deliberately simple tokenization the index relies on:
lowercasing plus whitespace splitting.  Keeping the rules centralized
here ensures catalog documents and user queries are treated the same way.
"""

import re
from typing import Iterable, List

from .config import CatalogItem


# ---------------------------
# Basic helpers
# ---------------------------

def normalize_whitespace(text: str) -> str:
    """
    Collapse all whitespace runs into a single space and strip edges.
    """
    if not text:
        return ""
    return re.sub(r"\s+", " ", text).strip()


def dedup_preserve_order(seq: Iterable[str]) -> List[str]:
    seen = set()
    out: List[str] = []
    for s in seq:
        if s not in seen:
            seen.add(s)
            out.append(s)
    return out


# ---------------------------
# Tokenization
# ---------------------------

# Item tokens used for reasoning are split on commas as well as whitespace
ITEM_TOKEN_SPLIT_RE = re.compile(r"[,\s]+")


def simple_tokenize(text: str) -> List[str]:
    """
    Lowercase and split on whitespace.  Punctuation is kept attached to
    its word, so "leather," and "leather" are distinct terms.
    """
    if not text:
        return []
    return text.lower().split()


def item_tokens(item: CatalogItem) -> List[str]:
    """
    Tokens describing an item's character: family, every note tier and the
    tags, lowercased and split on whitespace or commas.  The description is
    not part of this set.
    """
    parts = [item.family, *item.notes.all_notes(), *item.tags]
    text = " ".join(parts).lower()
    return [t for t in ITEM_TOKEN_SPLIT_RE.split(text) if t]


# ---------------------------
# Documents
# ---------------------------

def build_document_text(item: CatalogItem) -> str:
    """
    Build the document text for an item:

    family + all notes (top, middle, base) + tags + description

    joined by single spaces and lowercased.
    """
    all_notes = " ".join(item.notes.all_notes())
    tags = " ".join(item.tags)
    return f"{item.family} {all_notes} {tags} {item.description}".lower()
