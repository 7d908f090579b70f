"""
Tests for catalog loading and normalisation.
"""
import json

import pytest
from pydantic import ValidationError

from scentmatch.catalog_build import load_catalog, parse_list_field
from scentmatch.config import DEFAULT_CATALOG_PATH


def _write_json(tmp_path, records, name="catalog.json"):
    path = tmp_path / name
    path.write_text(json.dumps(records), encoding="utf-8")
    return path


class TestParseListField:

    def test_list_kept_in_order(self):
        assert parse_list_field([" Rose ", "Jasmine", ""]) == ["Rose", "Jasmine"]

    def test_string_split_on_semicolon_and_pipe(self):
        assert parse_list_field("Rose; Jasmine|Musk") == ["Rose", "Jasmine", "Musk"]

    def test_missing_values(self):
        assert parse_list_field(None) == []
        assert parse_list_field(float("nan")) == []


class TestLoadCatalog:

    def test_json_records(self, catalog_file):
        items = load_catalog(catalog_file)
        assert [it.id for it in items] == ["a", "b", "c"]
        first = items[0]
        assert first.brand == "House A"
        assert first.notes.top == ("Tobacco",)
        assert first.notes.base == ("Leather",)
        assert first.tags == ("dark", "smoky")
        assert first.link == "https://example.com/a"
        # no link in the second record
        assert items[1].link is None
        assert items[1].notes.middle == ()

    def test_items_are_immutable(self, catalog_file):
        item = load_catalog(catalog_file)[0]
        with pytest.raises(ValidationError):
            item.name = "Changed"

    def test_numeric_ids_become_strings(self, tmp_path):
        path = _write_json(tmp_path, [
            {"id": 1, "brand": "B", "name": "N", "family": "Woody", "notes": {"top": ["Cedar"]}},
            {"id": 2, "brand": "B", "name": "M", "family": "Floral"},
        ])
        items = load_catalog(path)
        assert [it.id for it in items] == ["1", "2"]
        assert items[1].notes.top == ()
        assert items[1].tags == ()

    def test_duplicate_and_empty_ids_dropped(self, tmp_path):
        path = _write_json(tmp_path, [
            {"id": "x", "brand": "B", "name": "First", "family": "Woody"},
            {"id": "", "brand": "B", "name": "No id", "family": "Woody"},
            {"id": "x", "brand": "B", "name": "Second", "family": "Woody"},
            {"id": "y", "brand": "B", "name": "Other", "family": "Floral"},
        ])
        items = load_catalog(path)
        assert [(it.id, it.name) for it in items] == [("x", "First"), ("y", "Other")]

    def test_missing_required_field_fails(self, tmp_path):
        path = _write_json(tmp_path, [{"id": "x", "name": "N", "family": "Woody"}])
        with pytest.raises(ValidationError):
            load_catalog(path)

    def test_empty_array(self, tmp_path):
        assert load_catalog(_write_json(tmp_path, [])) == []

    def test_non_array_json_rejected(self, tmp_path):
        with pytest.raises(ValueError):
            load_catalog(_write_json(tmp_path, {"id": "x"}))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_catalog(tmp_path / "nope.json")

    def test_csv_export(self, tmp_path):
        path = tmp_path / "catalog.csv"
        path.write_text(
            "id,brand,name,family,top_notes,middle_notes,base_notes,description,tags,url\n"
            "c1,House,Sea,Aromatic Fresh,Ambrette,Sea Salt,Sage;Driftwood,Windswept shore,fresh|beach,\n",
            encoding="utf-8",
        )
        items = load_catalog(path)
        assert len(items) == 1
        item = items[0]
        assert item.family == "Aromatic Fresh"
        assert item.notes.base == ("Sage", "Driftwood")
        assert item.tags == ("fresh", "beach")
        assert item.link is None

    def test_bundled_catalog(self):
        items = load_catalog(DEFAULT_CATALOG_PATH)
        assert len(items) == 8
        assert len({it.id for it in items}) == 8
