import pytest

from mealwise.logic.ai.parsing import (
    Err,
    Ok,
    clamp_confidence,
    parse_json_payload,
    validate_meal_plan,
    validate_recipes,
    validate_scan,
)


def test_parse_plain_json():
    result = parse_json_payload('{"a": 1}')
    assert isinstance(result, Ok)
    assert result.value == {"a": 1}


def test_parse_fenced_json_with_trailing_comma():
    text = 'Here you go:\n```json\n{"recipes": [{"title": "Soup",}],}\n```'
    result = parse_json_payload(text)
    assert result.ok
    assert result.value["recipes"][0]["title"] == "Soup"


def test_parse_json_embedded_in_prose():
    result = parse_json_payload('Sure! {"ingredients": []} Enjoy.')
    assert result.ok
    assert result.value == {"ingredients": []}


@pytest.mark.parametrize("text", ["", "   ", "not json at all", "[1, 2, 3]"])
def test_parse_rejects_non_objects(text):
    result = parse_json_payload(text)
    assert isinstance(result, Err)
    assert not result.ok


@pytest.mark.parametrize("raw,expected", [
    (1.5, 1.0),
    (-0.2, 0.1),
    (0, 0.5),
    (None, 0.5),
    ("high", 0.5),
    (0.73, 0.73),
])
def test_clamp_confidence(raw, expected):
    assert clamp_confidence(raw) == pytest.approx(expected)


def test_scan_normalization():
    payload = {
        "ingredients": [
            {"name": "Carrot", "confidence": 1.5, "quantity": 3},
            {"confidence": -0.2, "category": None, "unit": ""},
        ],
        "totalConfidence": 7,
    }
    result = validate_scan(payload)
    assert result.ok
    data = result.value.model_dump(by_alias=True)
    first, second = data["ingredients"]
    assert first == {"name": "Carrot", "quantity": "3", "unit": None, "confidence": 1.0, "category": "Unknown"}
    assert second["name"] == "Unknown ingredient"
    assert second["confidence"] == pytest.approx(0.1)
    assert second["unit"] is None
    assert data["totalConfidence"] == 1.0
    assert data["suggestions"] == []


def test_scan_rejects_wrong_shape():
    assert not validate_scan({"ingredients": "tomatoes"}).ok


def test_recipe_defaults_and_difficulty_coercion():
    result = validate_recipes({"recipes": [{"difficulty": "Extreme", "cookTime": "abc"}]}, family_size=6)
    assert result.ok
    recipe = result.value.recipes[0].model_dump(by_alias=True)
    assert recipe["title"] == "Untitled Recipe"
    assert recipe["description"] == "No description available"
    assert recipe["difficulty"] == "Medium"
    assert recipe["cookTime"] == 30
    assert recipe["servings"] == 6
    assert recipe["ingredients"] == []
    assert recipe["cuisine"] is None


def test_recipes_require_non_empty_list():
    assert not validate_recipes({"recipes": []}, family_size=4).ok
    assert not validate_recipes({}, family_size=4).ok


def test_meal_plan_validation():
    payload = {
        "days": [{"day": "Sunday", "date": "2025-03-02",
                  "meals": {"dinner": {"title": "Tacos", "cookTime": 20}, "brunch": {"title": "x"}}}],
        "nutritionSummary": {"averageCalories": "1800 kcal", "varietyScore": 7},
    }
    result = validate_meal_plan(payload)
    assert result.ok
    data = result.value.model_dump(by_alias=True)
    assert list(data["days"][0]["meals"]) == ["dinner"]
    assert data["days"][0]["meals"]["dinner"]["cookTime"] == 20
    assert data["nutritionSummary"]["averageCalories"] == 1800
    assert data["shoppingList"] == {"ingredients": [], "categories": {}}

    assert not validate_meal_plan({"days": []}).ok
