import json

import pytest

from scentmatch import api
from scentmatch.config import CatalogItem, PerfumeNotes
from scentmatch.embed_index import CatalogIndex


def make_item(item_id, family="Woody", top=(), middle=(), base=(), tags=(), description="", brand="Test House", name=None, link=None):
    return CatalogItem(
        id=item_id,
        brand=brand,
        name=name or f"Perfume {item_id}",
        family=family,
        notes=PerfumeNotes(top=top, middle=middle, base=base),
        description=description,
        tags=tags,
        link=link,
    )


@pytest.fixture
def catalog_items():
    return [
        make_item("dark-1", family="Leather", top=("Tobacco",), base=("Incense",), tags=("dark", "smoky")),
        make_item("floral-1", family="Floral", top=("Rose",), middle=("Jasmine",), tags=("romantic",)),
        make_item("citrus-1", family="Citrus", top=("Lemon", "Lime"), tags=("fresh", "clean")),
        make_item("gourmand-1", family="Gourmand", top=("Vanilla",), base=("Chocolate",), tags=("sweet",)),
    ]


@pytest.fixture
def index(catalog_items):
    return CatalogIndex.build(catalog_items)


@pytest.fixture
def single_item_index():
    item = make_item("santal", family="Woody", top=("Cedar",), middle=("Leather",), base=("Violet",))
    return CatalogIndex.build([item])


@pytest.fixture
def published_index(index):
    api.set_index(index)
    yield index
    api.set_index(None)


@pytest.fixture
def catalog_file(tmp_path):
    records = [
        {
            "id": "a",
            "brand": "House A",
            "name": "Night Smoke",
            "family": "Leather",
            "notes": {"top": ["Tobacco"], "middle": ["Incense"], "base": ["Leather"]},
            "description": "Dark and smoky.",
            "tags": ["dark", "smoky"],
            "link": "https://example.com/a",
        },
        {
            "id": "b",
            "brand": "House B",
            "name": "Morning Lemon",
            "family": "Citrus",
            "notes": {"top": ["Lemon", "Lime"], "middle": [], "base": ["Musk"]},
            "description": "A fresh citrus splash.",
            "tags": ["fresh", "clean"],
        },
        {
            "id": "c",
            "brand": "House C",
            "name": "Rose Garden",
            "family": "Floral",
            "notes": {"top": ["Rose"], "middle": ["Jasmine"], "base": ["Musk"]},
            "description": "Petals in bloom.",
            "tags": ["romantic"],
            "link": None,
        },
    ]
    path = tmp_path / "perfumes.json"
    path.write_text(json.dumps(records), encoding="utf-8")
    return path


@pytest.fixture
def item_factory():
    return make_item
