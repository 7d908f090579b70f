"""
Configuration for the scentmatch recommender.
"""

import os
from pathlib import Path
from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

# Paths
PROJECT_ROOT = Path(__file__).resolve().parents[1]
DATA_DIR = PROJECT_ROOT / "data"
DEFAULT_CATALOG_PATH = DATA_DIR / "perfumes.json"
CATALOG_PATH = Path(os.getenv("SCENTMATCH_CATALOG_PATH", str(DEFAULT_CATALOG_PATH)))

# Result policy
DEFAULT_TOP_K = int(os.getenv("SCENTMATCH_TOP_K", "4"))

# Vocabulary
MIN_TERM_LENGTH = 2  # shorter tokens never enter the vocabulary

# Query text used when no answer maps to a keyword phrase
DEFAULT_QUERY_TEXT = "fresh clean"

# Answer token -> descriptive keyword phrase
VIBE_KEYWORDS: Dict[str, str] = {
    "clean": "fresh clean citrus soap",
    "dark": "dark incense leather tobacco smoky",
    "warm": "warm amber vanilla spicy cozy",
    "floral": "rose jasmine floral bouquet romantic",
}

MEMORY_KEYWORDS: Dict[str, str] = {
    "woody_rain": "pine cedar vetiver woody rain earth",
    "gourmand_cookies": "vanilla sugar chocolate sweet gourmand",
    "floral_rose": "rose garden floral fresh petals",
    "citrus_beach": "lime lemon salt sea ocean beach",
}

# Reasoning
REASONING_MIN_TOKEN_LENGTH = 3
REASONING_MAX_TERMS = 3
REASONING_STOPWORDS = frozenset({"notes", "accord"})
REASONING_PREFIX = "Matches your love for "
REASONING_FALLBACK = "Matches your overall vibe"


# Pydantic schemas
class PerfumeNotes(BaseModel):
    model_config = ConfigDict(frozen=True)

    top: Tuple[str, ...] = ()
    middle: Tuple[str, ...] = ()
    base: Tuple[str, ...] = ()

    def all_notes(self) -> List[str]:
        return [*self.top, *self.middle, *self.base]


class CatalogItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    brand: str = Field(min_length=1)
    name: str = Field(min_length=1)
    family: str = Field(min_length=1)
    notes: PerfumeNotes
    description: str = ""
    tags: Tuple[str, ...] = ()
    link: Optional[str] = None


class RecommendedPerfume(CatalogItem):
    matchScore: int
    reasoning: str


class Analysis(BaseModel):
    keywords: List[str]


class RecommendResponse(BaseModel):
    dna_vector: List[float]
    analysis: Analysis
    recommendations: List[RecommendedPerfume]


class HealthResponse(BaseModel):
    status: str


class QuizOption(BaseModel):
    label: str
    value: str
    emoji: Optional[str] = None


class QuizQuestion(BaseModel):
    id: int
    text: str
    type: Literal["single", "multi"]
    options: List[QuizOption]


QUIZ_QUESTIONS: List[QuizQuestion] = [
    QuizQuestion(
        id=1,
        text="What vibe are you looking for?",
        type="multi",
        options=[
            QuizOption(label="Clean & Fresh", value="clean", emoji="🛁"),
            QuizOption(label="Dark & Mysterious", value="dark", emoji="🌑"),
            QuizOption(label="Warm & Cozy", value="warm", emoji="🧣"),
            QuizOption(label="Floral & Romantic", value="floral", emoji="🌹"),
        ],
    ),
    QuizQuestion(
        id=2,
        text="Where will you wear this perfume?",
        type="single",
        options=[
            QuizOption(label="Daily / Office", value="office", emoji="💼"),
            QuizOption(label="Date Night", value="date", emoji="🍷"),
            QuizOption(label="Vacation", value="vacation", emoji="🌴"),
            QuizOption(label="Gym / Active", value="gym", emoji="💪"),
        ],
    ),
    QuizQuestion(
        id=3,
        text="Pick a scent memory:",
        type="single",
        options=[
            QuizOption(label="Walking in a pine forest after rain", value="woody_rain", emoji="🌲"),
            QuizOption(label="Baking vanilla cookies", value="gourmand_cookies", emoji="🍪"),
            QuizOption(label="A bouquet of fresh roses", value="floral_rose", emoji="💐"),
            QuizOption(label="Sipping a margarita on the beach", value="citrus_beach", emoji="🍹"),
        ],
    ),
]
