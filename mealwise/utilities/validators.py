"""
Input validation schemas using Pydantic for better data integrity.

Wire payloads use camelCase keys; every schema also accepts the snake_case
field names so tests and internal callers can build them directly.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Dict, List, Optional
from datetime import date, datetime

from mealwise.utilities.constants import DIFFICULTIES


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _clean_list(values):
    return [v.strip() for v in values if isinstance(v, str) and v.strip()]


class LoginInput(CamelModel):
    """Schema for a session login."""
    email: str = Field(..., min_length=3, max_length=200, pattern=r'^[^@\s]+@[^@\s]+$')
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower()


class PantryIngredientInput(CamelModel):
    """Schema for one ingredient added to the pantry."""
    name: str = Field(..., min_length=1, max_length=100)
    quantity: Optional[str] = Field(None, max_length=50)
    unit: Optional[str] = Field(None, max_length=30)
    category: Optional[str] = Field(None, max_length=50)
    expiry_date: Optional[date] = None

    @field_validator('name')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        v = v.strip()
        if not v:
            raise ValueError('Ingredient name cannot be empty')
        return v

    @field_validator('quantity', mode='before')
    @classmethod
    def quantity_as_text(cls, v):
        """Scanned quantities may arrive as numbers."""
        if v is None:
            return None
        return str(v).strip() or None


class PantryAddInput(CamelModel):
    ingredients: List[PantryIngredientInput] = Field(..., min_length=1, max_length=100)


class PantryUpdateInput(CamelModel):
    """Schema for pantry item update validation."""
    quantity: Optional[str] = Field(None, max_length=50)
    unit: Optional[str] = Field(None, max_length=30)
    expiry_date: Optional[date] = None


class RecipeIngredientInput(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    quantity: Optional[str] = Field(None, max_length=50)
    unit: Optional[str] = Field(None, max_length=30)
    category: Optional[str] = Field(None, max_length=50)
    is_optional: bool = False

    @field_validator('name')
    @classmethod
    def strip_whitespace(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Ingredient name cannot be empty')
        return v


class RecipeInput(CamelModel):
    """Schema for recipe input validation."""
    title: str = Field(..., min_length=3, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    instructions: List[str] = Field(default_factory=list)
    cook_time: int = Field(30, ge=1, le=1440)
    servings: int = Field(4, ge=1, le=50)
    difficulty: str = "Medium"
    cuisine: Optional[str] = Field(None, max_length=50)
    tags: List[str] = Field(default_factory=list)
    ingredients: List[RecipeIngredientInput] = Field(default_factory=list)
    nutritional_info: Optional[Dict[str, float]] = None
    image_url: Optional[str] = None

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        """Validate recipe title."""
        if not v.strip():
            raise ValueError('Recipe title cannot be empty')
        return v.strip()

    @field_validator('instructions', 'tags')
    @classmethod
    def drop_empty(cls, v):
        """Filter out empty steps and tags."""
        return _clean_list(v)

    @field_validator('difficulty')
    @classmethod
    def validate_difficulty(cls, v):
        if v not in DIFFICULTIES:
            raise ValueError(f"difficulty must be one of {', '.join(DIFFICULTIES)}")
        return v


class FavoriteInput(CamelModel):
    is_favorite: bool


class RecipeSearchInput(CamelModel):
    query: str = Field('', max_length=200)


class MealPlanInput(CamelModel):
    week_starting: date


class MealInput(CamelModel):
    """Schema for scheduling a recipe into a plan slot."""
    recipe_id: str = Field(..., min_length=1)
    day_of_week: int = Field(..., ge=0, le=6)
    meal_type: str = Field(..., pattern=r'^(breakfast|lunch|dinner|snack)$')
    scheduled_time: Optional[str] = Field(None, pattern=r'^\d{2}:\d{2}$')


class MealUpdateInput(CamelModel):
    recipe_id: Optional[str] = None
    day_of_week: Optional[int] = Field(None, ge=0, le=6)
    meal_type: Optional[str] = Field(None, pattern=r'^(breakfast|lunch|dinner|snack)$')
    scheduled_time: Optional[str] = Field(None, pattern=r'^\d{2}:\d{2}$')


class AddRecipeToPlanInput(CamelModel):
    recipe_id: str = Field(..., min_length=1)
    planned_date: date = Field(..., alias='date')
    meal_type: str = Field('dinner', pattern=r'^(breakfast|lunch|dinner|snack)$')


class GenerateMealPlanInput(CamelModel):
    week_starting: Optional[date] = None


class ShoppingGenerateInput(CamelModel):
    meal_plan_id: str = Field('current', min_length=1)


class ShoppingListItemInput(CamelModel):
    """Schema for shopping list item validation."""
    name: str = Field(..., min_length=1, max_length=100)
    category: Optional[str] = Field(None, max_length=50)
    quantity: Optional[str] = Field(None, max_length=50)
    unit: Optional[str] = Field(None, max_length=30)


class ShoppingListItemUpdateInput(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    category: Optional[str] = Field(None, max_length=50)
    quantity: Optional[str] = Field(None, max_length=50)
    unit: Optional[str] = Field(None, max_length=30)
    is_checked: Optional[bool] = None


class FamilyMemberInput(CamelModel):
    """Schema for a household member profile."""
    name: str = Field(..., min_length=1, max_length=100)
    age: Optional[int] = Field(None, ge=0, le=120)
    dietary: List[str] = Field(default_factory=list)
    allergies: List[str] = Field(default_factory=list)
    preferences: List[str] = Field(default_factory=list)
    is_active: bool = True

    @field_validator('name')
    @classmethod
    def strip_whitespace(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Name cannot be empty')
        return v

    @field_validator('dietary', 'allergies', 'preferences')
    @classmethod
    def validate_tags(cls, v):
        """Ensure tags are non-empty strings."""
        return _clean_list(v)


class FamilyMemberUpdateInput(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    age: Optional[int] = Field(None, ge=0, le=120)
    dietary: Optional[List[str]] = None
    allergies: Optional[List[str]] = None
    preferences: Optional[List[str]] = None
    is_active: Optional[bool] = None


class PreferencesInput(CamelModel):
    """Schema for household preferences."""
    family_size: Optional[int] = Field(None, ge=1, le=20)
    cooking_skill: Optional[str] = Field(None, pattern=r'^(Beginner|Intermediate|Advanced)$')
    budget: Optional[str] = Field(None, pattern=r'^(Low|Medium|High)$')
    cooking_time: Optional[str] = Field(None, max_length=50)
    cuisine_preferences: Optional[List[str]] = None
    healthy_alternatives: Optional[bool] = None
    seasonal_ingredients: Optional[bool] = None
    meal_variety: Optional[bool] = None


class ChatMessageInput(CamelModel):
    role: str = Field(..., pattern=r'^(user|assistant)$')
    content: str = Field(..., max_length=4000)


class ChatContextInput(CamelModel):
    previous_messages: List[ChatMessageInput] = Field(default_factory=list)


class ChatInput(CamelModel):
    message: str = Field(..., min_length=1, max_length=2000)
    context: ChatContextInput = Field(default_factory=ChatContextInput)

    @field_validator('message')
    @classmethod
    def validate_message(cls, v):
        if not v.strip():
            raise ValueError('Message cannot be empty')
        return v.strip()


class SuggestionContextInput(CamelModel):
    current_time: Optional[datetime] = None


class GenerateSuggestionsInput(CamelModel):
    context: SuggestionContextInput = Field(default_factory=SuggestionContextInput)


class DismissSuggestionInput(CamelModel):
    suggestion_id: str = Field(..., min_length=1, max_length=200)


class QuickGenerateInput(CamelModel):
    """Suggestion payload used to generate a single recipe on demand."""
    ingredients: List[str] = Field(default_factory=list)
    cuisine: Optional[str] = Field(None, max_length=50)
    max_cook_time: Optional[int] = Field(None, ge=1, le=1440)

    @field_validator('ingredients')
    @classmethod
    def drop_empty(cls, v):
        return _clean_list(v)


class RecommendationsInput(CamelModel):
    enhance: bool = False
