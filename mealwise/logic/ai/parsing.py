"""Turn raw model output into validated, normalized payloads.

Every step returns Ok(value) or Err(reason); callers decide whether an Err
means "use the fallback". Nothing in this module raises on bad model output.
"""
import json
import math
import re
from dataclasses import dataclass
from json import JSONDecodeError
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from mealwise.utilities.constants import DIFFICULTIES, PLANNED_SLOTS


@dataclass(frozen=True)
class Ok:
    value: Any
    ok = True


@dataclass(frozen=True)
class Err:
    reason: str
    ok = False


Result = Union[Ok, Err]


# === Text Cleaning Helpers ===
_FENCE = re.compile(r"```(?:json)?\s*\n(.*?)```", re.S)
_TRAILING_COMMA = re.compile(r",\s*([}\]])")


def _strip_code_fences(text: str) -> str:
    """Unwrap ```json fenced blocks; stray fences at either end are dropped."""
    text = _FENCE.sub(r"\1", text)
    return text.strip().strip("`").strip()


def _remove_trailing_commas(text: str) -> str:
    return _TRAILING_COMMA.sub(r"\1", text)


def _first_object(text: str) -> Optional[str]:
    """Slice out the first balanced {...} block, ignoring braces inside strings."""
    start = text.find("{")
    if start < 0:
        return None
    depth = 0
    in_string = escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start:i + 1]
    return None


def parse_json_payload(text: Optional[str]) -> Result:
    """Decode a JSON object from model output, tolerating fences and trailing commas."""
    raw = (text or "").strip()
    if not raw:
        return Err("empty response")

    cleaned = _remove_trailing_commas(_strip_code_fences(raw))
    candidates = [raw, cleaned]
    block = _first_object(cleaned)
    if block:
        candidates.append(block)

    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except JSONDecodeError:
            continue
        if isinstance(parsed, dict):
            return Ok(parsed)
        return Err(f"expected a JSON object, got {type(parsed).__name__}")
    return Err("response is not valid JSON")


# === Coercion helpers ===
def clamp_confidence(value) -> float:
    """Missing, zero or non-numeric confidence counts as 0.5; result lies in [0.1, 1.0]."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        number = 0.0
    if not number or math.isnan(number):
        number = 0.5
    return max(0.1, min(1.0, number))


def _optional_text(value) -> Optional[str]:
    if value is None or value is False or value == 0:
        return None
    text = str(value).strip()
    if not text or text.lower() in ("null", "none", "n/a"):
        return None
    return text


def _text_list(value) -> List[str]:
    if not isinstance(value, list):
        return []
    out = []
    for v in value:
        if isinstance(v, dict):
            v = v.get("name") or v.get("title") or v.get("text")
        if v is None:
            continue
        text = str(v).strip()
        if text:
            out.append(text)
    return out


def _positive_int(value, default: int) -> int:
    try:
        number = int(float(value))
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


class _Upstream(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


# === Ingredient scan ===
class ScannedIngredient(_Upstream):
    name: str = "Unknown ingredient"
    quantity: Optional[str] = None
    unit: Optional[str] = None
    confidence: float = 0.5
    category: str = "Unknown"

    @field_validator("name", mode="before")
    @classmethod
    def default_name(cls, v):
        return _optional_text(v) or "Unknown ingredient"

    @field_validator("quantity", "unit", mode="before")
    @classmethod
    def optional_text(cls, v):
        return _optional_text(v)

    @field_validator("confidence", mode="before")
    @classmethod
    def clamp(cls, v):
        return clamp_confidence(v)

    @field_validator("category", mode="before")
    @classmethod
    def default_category(cls, v):
        return _optional_text(v) or "Unknown"


class ScanResult(_Upstream):
    ingredients: List[ScannedIngredient] = Field(default_factory=list)
    total_confidence: float = Field(0.5, validate_default=True)
    suggestions: List[str] = Field(default_factory=list)

    @field_validator("ingredients", mode="before")
    @classmethod
    def require_list(cls, v):
        if v is None:
            return []
        if not isinstance(v, list):
            raise ValueError("ingredients must be a list")
        return v

    @field_validator("total_confidence", mode="before")
    @classmethod
    def clamp(cls, v):
        return clamp_confidence(v)

    @field_validator("suggestions", mode="before")
    @classmethod
    def text_list(cls, v):
        return _text_list(v)


# === Recipe recommendations ===
class RecipeSuggestion(_Upstream):
    title: str = "Untitled Recipe"
    description: str = "No description available"
    ingredients: List[str] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    cook_time: int = 30
    servings: int = Field(0, validate_default=True)
    difficulty: str = "Medium"
    cuisine: Optional[str] = None
    tags: List[str] = Field(default_factory=list)

    @field_validator("title", mode="before")
    @classmethod
    def default_title(cls, v):
        return _optional_text(v) or "Untitled Recipe"

    @field_validator("description", mode="before")
    @classmethod
    def default_description(cls, v):
        return _optional_text(v) or "No description available"

    @field_validator("ingredients", "instructions", "tags", mode="before")
    @classmethod
    def text_list(cls, v):
        return _text_list(v)

    @field_validator("cook_time", mode="before")
    @classmethod
    def default_cook_time(cls, v):
        return _positive_int(v, 30)

    @field_validator("servings", mode="before")
    @classmethod
    def default_servings(cls, v, info: ValidationInfo):
        family_size = (info.context or {}).get("family_size", 4)
        return _positive_int(v, family_size)

    @field_validator("difficulty", mode="before")
    @classmethod
    def known_difficulty(cls, v):
        return v if v in DIFFICULTIES else "Medium"

    @field_validator("cuisine", mode="before")
    @classmethod
    def optional_cuisine(cls, v):
        return _optional_text(v)


class RecipeSuggestions(_Upstream):
    recipes: List[RecipeSuggestion]

    @field_validator("recipes", mode="before")
    @classmethod
    def non_empty(cls, v):
        if not isinstance(v, list) or not v:
            raise ValueError("recipes must be a non-empty list")
        return [r for r in v if isinstance(r, dict)] or v


# === Weekly meal plan ===
class PlannedMeal(_Upstream):
    title: str = "Untitled Recipe"
    description: str = ""
    cook_time: int = 30
    ingredients: List[str] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)

    @field_validator("title", mode="before")
    @classmethod
    def default_title(cls, v):
        return _optional_text(v) or "Untitled Recipe"

    @field_validator("description", mode="before")
    @classmethod
    def default_description(cls, v):
        return _optional_text(v) or ""

    @field_validator("cook_time", mode="before")
    @classmethod
    def default_cook_time(cls, v):
        return _positive_int(v, 30)

    @field_validator("ingredients", "instructions", "tags", mode="before")
    @classmethod
    def text_list(cls, v):
        return _text_list(v)


class PlanDay(_Upstream):
    day: str
    date: str = ""
    meals: Dict[str, PlannedMeal] = Field(default_factory=dict)

    @field_validator("date", mode="before")
    @classmethod
    def date_text(cls, v):
        return _optional_text(v) or ""

    @field_validator("meals", mode="before")
    @classmethod
    def known_slots(cls, v):
        if not isinstance(v, dict):
            raise ValueError("meals must be an object")
        return {slot: meal for slot, meal in v.items() if slot in PLANNED_SLOTS and isinstance(meal, dict)}


class ShoppingSummary(_Upstream):
    ingredients: List[str] = Field(default_factory=list)
    categories: Dict[str, List[str]] = Field(default_factory=dict)

    @field_validator("ingredients", mode="before")
    @classmethod
    def text_list(cls, v):
        return _text_list(v)

    @field_validator("categories", mode="before")
    @classmethod
    def category_lists(cls, v):
        if not isinstance(v, dict):
            return {}
        return {str(k): _text_list(items) for k, items in v.items()}


class NutritionSummary(_Upstream):
    average_calories: float = 0
    protein_balance: str = "Unknown"
    variety_score: float = 0

    @field_validator("average_calories", "variety_score", mode="before")
    @classmethod
    def number(cls, v):
        if isinstance(v, str):
            m = re.search(r"\d+(\.\d+)?", v)
            return float(m.group(0)) if m else 0
        return v if isinstance(v, (int, float)) and not isinstance(v, bool) else 0

    @field_validator("protein_balance", mode="before")
    @classmethod
    def balance_text(cls, v):
        return _optional_text(v) or "Unknown"


class WeeklyMealPlan(_Upstream):
    days: List[PlanDay]
    shopping_list: ShoppingSummary = Field(default_factory=ShoppingSummary)
    nutrition_summary: NutritionSummary = Field(default_factory=NutritionSummary)

    @field_validator("days", mode="before")
    @classmethod
    def at_most_a_week(cls, v):
        if not isinstance(v, list) or not v:
            raise ValueError("days must be a non-empty list")
        return v[:7]

    @field_validator("shopping_list", "nutrition_summary", mode="before")
    @classmethod
    def object_or_default(cls, v):
        return v if isinstance(v, dict) else {}


def _validate(model, payload: Dict[str, Any], context=None) -> Result:
    try:
        return Ok(model.model_validate(payload, context=context))
    except ValidationError as e:
        return Err(f"{model.__name__} schema mismatch: {e.error_count()} error(s)")


def validate_scan(payload: Dict[str, Any]) -> Result:
    return _validate(ScanResult, payload)


def validate_recipes(payload: Dict[str, Any], family_size: int) -> Result:
    return _validate(RecipeSuggestions, payload, context={"family_size": family_size})


def validate_meal_plan(payload: Dict[str, Any]) -> Result:
    return _validate(WeeklyMealPlan, payload)
