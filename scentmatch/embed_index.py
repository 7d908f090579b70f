from __future__ import annotations

"""
Index builder for the TF-IDF vector space over the perfume catalog.

This module owns the three pieces of state every recommendation reads:

* The vocabulary: distinct catalog terms (length >= 2) in first-seen
  order.  Position *i* of every vector produced here, for catalog items
  and user queries alike, corresponds to ``vocabulary.terms[i]``.
* The inverse document frequency table, ``ln(N / (1 + df))``.  Terms
  that occur in (almost) every document get zero or negative weights;
  these are kept as computed.
* The catalog vector store, one TF-IDF vector per catalog item.

Everything is built once by :meth:`CatalogIndex.build` and is read-only
afterwards (numpy arrays are flagged non-writeable), so a published
index can be shared between concurrent requests without locking.
"""

from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import numpy as np
from loguru import logger

from .catalog_build import load_catalog
from .config import MIN_TERM_LENGTH, CatalogItem
from .normalize import build_document_text, dedup_preserve_order, simple_tokenize


class EmptyCatalogIndex(ValueError):
    """Raised when an index is requested over a catalog with no items."""


def _readonly(arr: np.ndarray) -> np.ndarray:
    arr.setflags(write=False)
    return arr


# -----------------------------------------------------------------------------
# Vocabulary & document frequencies
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Vocabulary:
    """Ordered term list plus a term -> position lookup."""

    terms: Tuple[str, ...]
    positions: Mapping[str, int]

    @classmethod
    def from_terms(cls, terms: Iterable[str]) -> "Vocabulary":
        ordered = tuple(dedup_preserve_order(terms))
        return cls(terms=ordered, positions=MappingProxyType({t: i for i, t in enumerate(ordered)}))

    def __len__(self) -> int:
        return len(self.terms)

    def __contains__(self, term: object) -> bool:
        return term in self.positions

    def position(self, term: str) -> Optional[int]:
        return self.positions.get(term)


def build_document_frequencies(documents: Sequence[str]) -> Tuple[Vocabulary, Dict[str, int]]:
    """
    Scan the corpus once and return ``(vocabulary, df)``.

    Each document contributes its *distinct* whitespace tokens of length
    >= ``MIN_TERM_LENGTH``; a term repeated inside one document still
    counts once.  Vocabulary order is the order in which terms are first
    seen across the corpus.
    """
    df: Dict[str, int] = {}
    order: List[str] = []
    for text in documents:
        for term in dedup_preserve_order(simple_tokenize(text)):
            if len(term) < MIN_TERM_LENGTH:
                continue
            if term not in df:
                df[term] = 0
                order.append(term)
            df[term] += 1
    return Vocabulary.from_terms(order), df


def compute_idf(vocabulary: Vocabulary, df: Mapping[str, int], n_docs: int) -> np.ndarray:
    """IDF weights aligned to ``vocabulary``: ``ln(N / (1 + df))``, unclamped."""
    counts = np.array([df[t] for t in vocabulary.terms], dtype=np.float64)
    return np.log(float(n_docs) / (1.0 + counts))


# -----------------------------------------------------------------------------
# Vector space model
# -----------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class VectorSpaceModel:
    vocabulary: Vocabulary
    idf: np.ndarray

    @classmethod
    def from_documents(cls, documents: Sequence[str]) -> "VectorSpaceModel":
        vocabulary, df = build_document_frequencies(documents)
        idf = compute_idf(vocabulary, df, len(documents))
        return cls(vocabulary=vocabulary, idf=_readonly(idf))

    @property
    def dimension(self) -> int:
        return len(self.vocabulary)

    def idf_of(self, term: str) -> float:
        pos = self.vocabulary.position(term)
        return 0.0 if pos is None else float(self.idf[pos])

    def vectorize(self, text: str) -> np.ndarray:
        """
        Project text into the vocabulary space.

        ``vector[i] = count(vocabulary[i] in text) * idf[i]``; terms outside
        the vocabulary are dropped.  The result always has length
        ``dimension``.
        """
        counts = np.zeros(self.dimension, dtype=np.float64)
        for tok in simple_tokenize(text):
            pos = self.vocabulary.position(tok)
            if pos is not None:
                counts[pos] += 1.0
        # absent terms stay exactly 0.0 (never -0.0) when idf is negative
        return np.where(counts > 0.0, counts * self.idf, 0.0)


# -----------------------------------------------------------------------------
# Catalog vector store
# -----------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class CatalogIndex:
    """
    Immutable context for recommendations: the catalog items in catalog
    order, their documents, the vector space model and one vector per item
    (row ``i`` of ``matrix`` belongs to ``items[i]``).
    """

    items: Tuple[CatalogItem, ...]
    documents: Tuple[str, ...]
    model: VectorSpaceModel
    matrix: np.ndarray
    positions: Mapping[str, int]

    @classmethod
    def build(cls, items: Iterable[CatalogItem]) -> "CatalogIndex":
        items = tuple(items)
        if not items:
            raise EmptyCatalogIndex("EmptyCatalogIndex: cannot build an index over an empty catalog")

        positions: Dict[str, int] = {}
        for i, item in enumerate(items):
            if item.id in positions:
                raise ValueError(f"Duplicate perfume id in catalog: {item.id!r}")
            positions[item.id] = i

        documents = tuple(build_document_text(item) for item in items)
        model = VectorSpaceModel.from_documents(documents)
        matrix = np.vstack([model.vectorize(doc) for doc in documents])

        logger.info(
            "Built catalog index: {} perfumes, vocabulary size {}",
            len(items),
            model.dimension,
        )
        return cls(
            items=items,
            documents=documents,
            model=model,
            matrix=_readonly(matrix),
            positions=MappingProxyType(positions),
        )

    def __len__(self) -> int:
        return len(self.items)

    @property
    def vocabulary(self) -> Vocabulary:
        return self.model.vocabulary

    @property
    def vocabulary_size(self) -> int:
        return self.model.dimension

    @property
    def vectors(self) -> Mapping[str, np.ndarray]:
        """Item id -> read-only catalog vector."""
        return MappingProxyType({item.id: self.matrix[i] for i, item in enumerate(self.items)})

    def item(self, item_id: str) -> CatalogItem:
        return self.items[self.positions[item_id]]

    def vector_for(self, item_id: str) -> np.ndarray:
        return self.matrix[self.positions[item_id]]

    def vectorize(self, text: str) -> np.ndarray:
        return self.model.vectorize(text)


def build_catalog_index(catalog_path: Optional[Path] = None) -> CatalogIndex:
    """
    High-level entrypoint: load the catalog file and build the index.

    Raises :class:`EmptyCatalogIndex` if the catalog has no usable rows.
    """
    items = load_catalog(catalog_path)
    logger.info("Starting index build for {} catalog items", len(items))
    return CatalogIndex.build(items)
