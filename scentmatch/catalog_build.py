from __future__ import annotations

"""
Utilities to load and normalise the perfume catalog.

This module accepts a catalog file (JSON array of perfume records, or a
flat CSV export with one column per note tier), maps the column names
to a canonical schema, cleans the fields and converts every row into an
immutable :class:`~scentmatch.config.CatalogItem`.  Catalog order is
preserved: it defines tie-breaking order when ranking.
"""

import json
import re
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd
from loguru import logger

from .config import CATALOG_PATH, CatalogItem, PerfumeNotes
from .normalize import normalize_whitespace


# ---------------------------
# Column detection / standardisation
# ---------------------------

# Nested JSON ``notes`` objects are flattened by ``pd.json_normalize`` into
# ``notes.top`` etc; flat CSV exports usually carry ``top_notes`` columns.
COLUMN_CANDIDATES: Dict[str, List[str]] = {
    "id": ["id", "perfume_id", "item_id"],
    "brand": ["brand", "house", "Brand"],
    "name": ["name", "Name", "title"],
    "family": ["family", "Family", "category", "olfactive_family"],
    "top_raw": ["notes.top", "top_notes", "top"],
    "middle_raw": ["notes.middle", "middle_notes", "heart_notes", "middle"],
    "base_raw": ["notes.base", "base_notes", "base"],
    "description": ["description", "Description", "desc"],
    "tags_raw": ["tags", "Tags"],
    "link": ["link", "url", "URL"],
}

CANONICAL_COLUMNS = ["id", "brand", "name", "family", "top", "middle", "base", "description", "tags", "link"]


def _standardise_columns(df: pd.DataFrame) -> pd.DataFrame:
    """
    Rename columns from the raw catalog to the canonical internal schema.
    """
    col_map: Dict[str, str] = {}
    lower_to_original = {str(c).lower(): c for c in df.columns}

    for canon, candidates in COLUMN_CANDIDATES.items():
        for candidate in candidates:
            if candidate in df.columns:
                col_map[candidate] = canon
                break
            cand_lower = candidate.lower()
            if cand_lower in lower_to_original:
                col_map[lower_to_original[cand_lower]] = canon
                break

    logger.debug("Standardising columns with map: {}", col_map)
    df_std = df.rename(columns=col_map)

    required = ["id", "brand", "name", "family"]
    missing = [c for c in required if c not in df_std.columns]
    if missing:
        logger.warning("Raw catalog is missing required columns: {}", missing)

    return df_std


# ---------------------------
# Field parsing helpers
# ---------------------------

def _is_missing(value) -> bool:
    return value is None or (isinstance(value, float) and pd.isna(value))


def _clean_scalar(value) -> str:
    """Render a scalar cell as a trimmed string ('' for missing cells)."""
    if _is_missing(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return normalize_whitespace(str(value))


def parse_list_field(value) -> List[str]:
    """
    Parse a notes / tags cell into an ordered list of strings.

    Lists and tuples are kept in order.  Strings are split on ``;`` or
    ``|`` (commas are left alone: a single note may legitimately contain
    one).  Empty entries are dropped.
    """
    if _is_missing(value):
        return []

    if isinstance(value, (list, tuple)):
        tokens = [str(v) for v in value if not _is_missing(v)]
    else:
        tokens = re.split(r"[;|]+", str(value))

    return [normalize_whitespace(t) for t in tokens if normalize_whitespace(t)]


# ---------------------------
# Catalog normalisation
# ---------------------------

def normalise_catalog_df(df_raw: pd.DataFrame) -> pd.DataFrame:
    """
    Main normalisation pipeline for the perfume catalog.

    Output: canonical schema, one row per perfume, in input order:

    - id, brand, name, family, description, link (str)
    - top, middle, base, tags (List[str])
    """
    logger.info("Normalising catalog dataframe with {} raw rows", len(df_raw))

    df = _standardise_columns(df_raw.copy())

    if "id" not in df.columns:
        logger.error("No id column found after standardisation; resulting catalog will be empty.")
        return pd.DataFrame(columns=CANONICAL_COLUMNS)

    df["id"] = df["id"].apply(_clean_scalar)
    empty_ids = int((df["id"] == "").sum())
    if empty_ids:
        logger.warning("Dropping {} catalog rows without an id", empty_ids)
    df = df[df["id"] != ""]

    dupes = df["id"][df["id"].duplicated()].tolist()
    if dupes:
        logger.warning("Dropping duplicate perfume ids (first occurrence kept): {}", dupes)
    df = df.drop_duplicates(subset=["id"]).reset_index(drop=True)

    for col in ["brand", "name", "family", "description", "link"]:
        if col in df.columns:
            df[col] = df[col].apply(_clean_scalar)
        else:
            df[col] = ""

    for raw_col, col in [("top_raw", "top"), ("middle_raw", "middle"), ("base_raw", "base"), ("tags_raw", "tags")]:
        if raw_col in df.columns:
            df[col] = df[raw_col].apply(parse_list_field)
        else:
            df[col] = pd.Series([[] for _ in range(len(df))], index=df.index, dtype=object)

    df_out = df[CANONICAL_COLUMNS]
    logger.info("Catalog normalisation complete. Final rows: {}", len(df_out))
    return df_out


def to_catalog_item(row: pd.Series) -> CatalogItem:
    """Convert one normalised catalog row into a :class:`CatalogItem`."""
    try:
        return CatalogItem(
            id=row["id"],
            brand=row["brand"],
            name=row["name"],
            family=row["family"],
            notes=PerfumeNotes(top=row["top"], middle=row["middle"], base=row["base"]),
            description=row["description"],
            tags=row["tags"],
            link=row["link"] or None,
        )
    except Exception as e:
        logger.exception("Error mapping catalog row {} to CatalogItem: {}", row.get("id"), e)
        raise


# ---------------------------
# IO helpers
# ---------------------------

def load_raw_catalog(path: Optional[Path] = None) -> pd.DataFrame:
    """
    Load raw catalog data from a JSON (array of records) or CSV file.
    """
    path = Path(path) if path is not None else CATALOG_PATH
    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found: {path}")

    logger.info("Loading raw catalog from {}", path)
    if path.suffix.lower() == ".csv":
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
    else:
        with open(path, "r", encoding="utf-8") as f:
            records = json.load(f)
        if not isinstance(records, list):
            raise ValueError(f"Expected a JSON array of perfume records in {path}")
        df = pd.json_normalize(records)
    logger.info("Loaded {} rows from raw catalog", len(df))
    return df


def items_from_df(df: pd.DataFrame) -> List[CatalogItem]:
    return [to_catalog_item(row) for _, row in df.iterrows()]


def load_catalog(path: Optional[Path] = None) -> List[CatalogItem]:
    """
    End-to-end: load raw catalog → normalise → immutable items, in file order.
    """
    items = items_from_df(normalise_catalog_df(load_raw_catalog(path)))
    logger.info("Loaded catalog with {} perfumes", len(items))
    return items


if __name__ == "__main__":
    # python -m scentmatch.catalog_build
    for it in load_catalog():
        print(f"{it.id}: {it.brand} - {it.name} ({it.family})")
