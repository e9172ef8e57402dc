"""Tests for transformation modules."""

from datetime import datetime, timezone

import pytest

from befithub.errors import DataError
from befithub.transform.catalog import (
    catalog_doc_id,
    enrich_exercise,
    prepare_catalog,
    proxy_image_url,
    translation_patch,
)
from befithub.transform.normalize import (
    require_fields,
    sanitize_record,
    to_sentence_case,
    validate_records,
    validate_required_fields,
)
from befithub.transform.records import (
    extract_exercises,
    extract_list,
    ingredient_document,
    recipe_document,
    user_exercise_document,
)


class TestValidation:
    """Tests for field contract validation."""
    
    def test_valid_record(self):
        result = validate_required_fields({"id": "1", "name": "Test"}, ["id", "name"])
        
        assert result.is_valid
        assert result.errors == []
    
    def test_missing_null_and_empty(self):
        """Test missing, null and blank values are all reported."""
        result = validate_required_fields({"id": None, "name": "  "}, ["id", "name", "unit"])
        
        assert not result.is_valid
        assert len(result.errors) == 3
    
    def test_non_dict_record(self):
        result = validate_required_fields(["not", "a", "dict"], ["id"])
        
        assert not result.is_valid
    
    def test_require_fields_raises(self):
        """Test require_fields raises DataError with context."""
        with pytest.raises(DataError) as exc_info:
            require_fields({"id": "1"}, ["id", "name"], context="recipe")
        
        assert "recipe: Missing required field: name" in exc_info.value.errors
    
    def test_validate_records_split(self):
        records = [{"id": "1"}, {"id": None}, {"id": "3"}]
        
        valid, invalid = validate_records(records, ["id"])
        
        assert len(valid) == 2
        assert invalid[0]["_record_index"] == 1
    
    def test_validate_records_raise(self):
        with pytest.raises(DataError):
            validate_records([{"name": "x"}], ["id"], raise_on_error=True)


class TestNormalize:
    """Tests for small normalizers."""
    
    @pytest.mark.parametrize("value,expected", [
        ("PRESS INCLINADO MANCUERNAS", "Press inclinado mancuernas"),
        ("  remo con BARRA ", "Remo con barra"),
        ("", ""),
        (None, ""),
    ])
    def test_sentence_case(self, value, expected):
        assert to_sentence_case(value) == expected
    
    def test_sanitize_drops_none(self):
        """Test None values are removed at every depth."""
        record = {"id": "1", "gifUrl": None, "meta": {"a": None, "b": 2}, "tags": ["x", None]}
        
        assert sanitize_record(record) == {"id": "1", "meta": {"b": 2}, "tags": ["x"]}


class TestCatalog:
    """Tests for catalog enrichment."""
    
    def test_enrich_translates_tags(self, catalog_exercises):
        result = enrich_exercise(catalog_exercises[1])
        
        assert result["bodyPart_es"] == "Pecho"
        assert result["equipment_es"] == "Barra"
        assert result["target_es"] == "Pectorales"
        assert result["source"] == "exercisedb_offline"
        assert result["searchable"] == "barbell bench press pecho barra pectorales"
    
    def test_enrich_keeps_unknown_tags(self, catalog_exercises):
        """Test tags without a translation fall back to the original."""
        result = enrich_exercise(catalog_exercises[2])
        
        assert result["target_es"] == "rear delts"
        assert result["equipment_es"] == "Banda Elástica"
    
    def test_media_url_prefers_gif(self, catalog_exercises):
        assert enrich_exercise(catalog_exercises[0])["mediaUrl"] == "https://cdn.example.com/0001.gif"
    
    def test_media_url_falls_back_to_proxy(self, catalog_exercises):
        result = enrich_exercise(catalog_exercises[1])
        
        assert result["mediaUrl"] == proxy_image_url("0025")
        assert result["mediaUrl"] == (
            "https://exercisedb.p.rapidapi.com/image?exerciseId=0025&resolution=360"
        )
    
    def test_enrich_requires_id(self):
        with pytest.raises(DataError):
            enrich_exercise({"name": "No id"})
    
    def test_prepare_catalog(self, catalog_exercises):
        """Test metadata is kept and stamped."""
        processed_at = datetime(2026, 1, 25, 10, 0, tzinfo=timezone.utc)
        content = {"metadata": {"total": 3, "source": "exercisedb"}, "exercises": catalog_exercises}
        
        result = prepare_catalog(content, processed_at=processed_at)
        
        assert len(result["exercises"]) == 3
        assert result["metadata"]["total"] == 3
        assert result["metadata"]["processedDate"] == "2026-01-25T10:00:00+00:00"
        assert "note" in result["metadata"]
    
    @pytest.mark.parametrize("exercise_id,expected", [
        ("0001", "yuh_0001"),
        ("band 12", "yuh_band_12"),
        ("a  b\tc", "yuh_a_b_c"),
        (42, "yuh_42"),
    ])
    def test_catalog_doc_id(self, exercise_id, expected):
        assert catalog_doc_id(exercise_id) == expected
    
    def test_translation_patch_defaults(self):
        """Test missing translated fields get their defaults."""
        patch = translation_patch({"id": "1", "name_es": "Abdominal", "gifUrl": "g.gif"})
        
        assert patch == {
            "name_es": "Abdominal",
            "description": "",
            "level": "Intermedio",
            "qualities": [],
            "subQualities": [],
            "equipment_es": "",
            "mediaUrl": "g.gif",
        }
    
    def test_translation_patch_omits_missing_translations(self):
        """Test absent translations are left out rather than written as null."""
        patch = translation_patch({"id": "1", "name": "3/4 sit-up"})
        
        assert "name_es" not in patch
        assert "instructions_es" not in patch


class TestRecords:
    """Tests for Firestore document builders."""
    
    def test_extract_from_list(self, catalog_exercises):
        assert extract_exercises(catalog_exercises) == catalog_exercises
    
    @pytest.mark.parametrize("key", ["exercises", "data"])
    def test_extract_from_object(self, catalog_exercises, key):
        assert extract_exercises({key: catalog_exercises}) == catalog_exercises
    
    def test_extract_missing(self):
        with pytest.raises(DataError):
            extract_exercises({"items": []})
    
    def test_extract_list(self):
        assert extract_list({"menus": [1]}, "menus") == [1]
        with pytest.raises(DataError):
            extract_list({"menus": "x"}, "menus")
    
    def test_ingredient_document(self, ingredient):
        """Test macros are flattened into the stored layout."""
        assert ingredient_document(ingredient) == {
            "name": "Pechuga de Pollo",
            "category": "Proteínas",
            "unit": "100g",
            "protein": 23,
            "carbs": 0,
            "fats": 2.5,
            "calories": 113,
        }
    
    def test_ingredient_portion_weight(self, ingredient):
        ingredient["portionWeight"] = 60
        
        assert ingredient_document(ingredient)["portionWeight"] == 60
    
    def test_ingredient_missing_macro(self, ingredient):
        del ingredient["macros"]["kcal"]
        
        with pytest.raises(DataError):
            ingredient_document(ingredient)
    
    def test_recipe_document(self):
        recipe = {"id": "rec_bowl_griego", "name": "Bowl de Yogur Griego", "image": None}
        
        assert recipe_document(recipe) == {"id": "rec_bowl_griego", "name": "Bowl de Yogur Griego"}
    
    def test_user_exercise_defaults(self):
        """Test user-list defaults override media fields."""
        doc = user_exercise_document({
            "name": "PRESS INCLINADO MANCUERNAS",
            "group": "Míos",
            "mediaUrl": "ignored",
            "tags": ["Empuje"],
        })
        
        assert doc["source"] == "user_list"
        assert doc["usageCount"] == 0
        assert doc["isFavorite"] is False
        assert doc["mediaUrl"] == ""
        assert doc["youtubeUrl"] == ""
        assert doc["tags"] == ["Empuje"]
        assert doc["group"] == "Míos"
    
    def test_user_exercise_without_tags(self):
        assert user_exercise_document({"name": "X"})["tags"] == []
