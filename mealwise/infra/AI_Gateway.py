"""OpenAI-backed helpers for scanning, recipe generation, meal planning and chat.

Every public method returns a usable answer. When the provider is missing,
failing, or returns something that does not validate, a warning is logged
and the matching fixed fallback from mealwise.logic.ai.fallbacks is returned.
"""
import base64
import json
import logging
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

import httpx
import openai
from openai import OpenAI

from mealwise.domain.errors import AIUnavailableError
from mealwise.logic.ai import fallbacks
from mealwise.logic.ai.parsing import parse_json_payload, validate_meal_plan, validate_recipes, validate_scan
from mealwise.logic.suggestions.policy import fallback_chat_reply
from mealwise.utilities import config
from mealwise.utilities.constants import (
    CHAT_SYSTEM_PROMPT,
    DATE_FORMAT,
    EMPTY_CHAT_REPLY,
    ENHANCE_SYSTEM_PROMPT,
    MEAL_PLAN_SYSTEM_PROMPT,
    RECIPE_JSON_FORMAT,
    RECIPE_SYSTEM_PROMPT,
    SCAN_SYSTEM_PROMPT,
    SCAN_USER_PROMPT,
)

logger = logging.getLogger(__name__)


class AIGateway:
    def __init__(self, client: Optional[OpenAI] = None, api_key: Optional[str] = None,
                 model: Optional[str] = None, vision_model: Optional[str] = None,
                 chat_model: Optional[str] = None, timeout: Optional[float] = None,
                 max_retries: Optional[int] = None):
        self._client = client
        self.api_key = config.OPENAI_API_KEY if api_key is None else api_key
        self.model = model or config.OPENAI_MODEL
        self.vision_model = vision_model or config.OPENAI_VISION_MODEL
        self.chat_model = chat_model or config.OPENAI_CHAT_MODEL
        self.timeout = config.AI_TIMEOUT_SECONDS if timeout is None else timeout
        self.max_retries = config.AI_MAX_RETRIES if max_retries is None else max_retries

    # === Helper: Get OpenAI Client ===
    def _get_client(self) -> OpenAI:
        """Return the OpenAI client, building it on first use; raise if no key is configured."""
        if self._client is None:
            if not self.api_key:
                raise AIUnavailableError("OPENAI_API_KEY not set")
            self._client = OpenAI(
                api_key=self.api_key,
                timeout=httpx.Timeout(self.timeout, connect=min(10.0, self.timeout)),
                max_retries=self.max_retries,
            )
        return self._client

    def _complete(self, model: str, messages: List[Dict[str, Any]], **kwargs) -> str:
        client = self._get_client()
        try:
            response = client.chat.completions.create(model=model, messages=messages, **kwargs)
        except (openai.OpenAIError, httpx.HTTPError) as e:
            raise AIUnavailableError(f"{type(e).__name__}: {e}") from e
        choices = getattr(response, "choices", None) or []
        message = getattr(choices[0], "message", None) if choices else None
        if message is None:
            return ""
        return (message.content or "").strip()

    def _complete_json(self, model: str, messages: List[Dict[str, Any]], max_tokens: int) -> Dict[str, Any]:
        text = self._complete(model, messages, response_format={"type": "json_object"}, max_tokens=max_tokens)
        parsed = parse_json_payload(text)
        if not parsed.ok:
            raise AIUnavailableError(parsed.reason)
        return parsed.value

    # === Ingredient scan ===
    def identify_ingredients(self, image: bytes, mime_type: str = "image/jpeg") -> Dict[str, Any]:
        """Identify food items in an image; returns {ingredients, totalConfidence, suggestions}."""
        encoded = base64.b64encode(image).decode("ascii")
        messages = [
            {"role": "system", "content": SCAN_SYSTEM_PROMPT},
            {"role": "user", "content": [
                {"type": "text", "text": SCAN_USER_PROMPT},
                {"type": "image_url", "image_url": {"url": f"data:{mime_type};base64,{encoded}"}},
            ]},
        ]
        try:
            payload = self._complete_json(self.vision_model, messages, max_tokens=2048)
            result = validate_scan(payload)
            if not result.ok:
                raise AIUnavailableError(result.reason)
            return result.value.model_dump(by_alias=True)
        except Exception as e:
            logger.warning("AI unavailable for ingredient scanning, using fallback: %s", e)
            return fallbacks.scan_fallback()

    # === Recipe generation ===
    def _recipes(self, user_message: str, family_size: int, max_tokens: int = 3000) -> List[Dict[str, Any]]:
        messages = [
            {"role": "system", "content": RECIPE_SYSTEM_PROMPT + RECIPE_JSON_FORMAT},
            {"role": "user", "content": user_message},
        ]
        payload = self._complete_json(self.model, messages, max_tokens=max_tokens)
        result = validate_recipes(payload, family_size)
        if not result.ok:
            raise AIUnavailableError(result.reason)
        return [r.model_dump(by_alias=True) for r in result.value.recipes]

    def recommend_recipes(self, available: Sequence[str], dietary_restrictions: Sequence[str] = (),
                          preferences: Sequence[str] = (), family_size: int = 4) -> List[Dict[str, Any]]:
        user_message = (
            f"Generate 3-5 recipe recommendations using these available ingredients: {', '.join(available)}\n\n"
            f"Family size: {family_size}\n"
            f"Dietary restrictions: {', '.join(dietary_restrictions) if dietary_restrictions else 'None'}\n"
            f"Cuisine preferences: {', '.join(preferences) if preferences else 'Any'}\n\n"
            "Focus on recipes that use mostly the available ingredients, with minimal additional items needed."
        )
        try:
            return self._recipes(user_message, family_size)
        except Exception as e:
            logger.warning("AI unavailable for recipe recommendations, using fallback: %s", e)
            return fallbacks.recipe_fallback(available, family_size)

    def enhance_recipes(self, base: List[Dict[str, Any]], preferences, family: Sequence[Any]) -> List[Dict[str, Any]]:
        """Adapt recipes to the household; returns base unchanged when the model cannot help."""
        if not base:
            return base
        family_context = "\n".join(member.describe() for member in family)
        prefs = preferences
        user_message = (
            "Please analyze and enhance these recipes for this family:\n\n"
            f"Family Context:\n{family_context or 'No family members recorded'}\n\n"
            "User Preferences:\n"
            f"- Cooking skill: {getattr(prefs, 'cooking_skill', 'Unknown')}\n"
            f"- Budget: {getattr(prefs, 'budget', 'Unknown')}\n"
            f"- Cooking time preference: {getattr(prefs, 'cooking_time', 'Unknown')}\n"
            f"- Healthy alternatives: {'Yes' if getattr(prefs, 'healthy_alternatives', False) else 'No'}\n\n"
            f"Base Recipes to enhance:\n{json.dumps(base, indent=2)}\n\n"
            "Please provide enhanced versions that better suit this specific family's needs."
        )
        messages = [
            {"role": "system", "content": ENHANCE_SYSTEM_PROMPT},
            {"role": "user", "content": user_message},
        ]
        family_size = getattr(prefs, "family_size", None) or 4
        try:
            payload = self._complete_json(self.model, messages, max_tokens=4000)
            result = validate_recipes(payload, family_size)
            if not result.ok:
                raise AIUnavailableError(result.reason)
            return [r.model_dump(by_alias=True) for r in result.value.recipes]
        except Exception as e:
            logger.warning("Failed to enhance recipe recommendations, keeping originals: %s", e)
            return base

    def generate_quick_recipe(self, ingredients: Sequence[str], family_size: int = 4,
                              cuisine: Optional[str] = None, max_cook_time: Optional[int] = None) -> Dict[str, Any]:
        """One recipe for a dashboard suggestion."""
        constraints = []
        if cuisine:
            constraints.append(f"Cuisine: {cuisine}")
        if max_cook_time:
            constraints.append(f"Maximum cooking time: {max_cook_time} minutes")
        user_message = (
            f"Generate exactly 1 recipe using these ingredients: {', '.join(ingredients) or 'any pantry staples'}\n\n"
            f"Family size: {family_size}\n" + "\n".join(constraints)
        )
        try:
            recipes = self._recipes(user_message, family_size, max_tokens=1500)
            recipe = recipes[0]
            if max_cook_time and recipe["cookTime"] > max_cook_time:
                raise AIUnavailableError(f"recipe takes {recipe['cookTime']} min, limit is {max_cook_time}")
            return recipe
        except Exception as e:
            logger.warning("AI unavailable for quick recipe, using fallback: %s", e)
            return fallbacks.quick_recipe_fallback(ingredients, family_size, cuisine, max_cook_time)

    # === Meal planning ===
    def generate_meal_plan(self, family: Sequence[Any], preferences, pantry: Sequence[str],
                           week_starting: date) -> Dict[str, Any]:
        """Seven day plan with shopping and nutrition summaries (WeeklyMealPlan shape)."""
        user_message = (
            f"Week starting (Sunday): {week_starting.strftime(DATE_FORMAT)}\n"
            f"Family:\n{chr(10).join(m.describe() for m in family) or 'Not specified'}\n"
            f"Family size: {getattr(preferences, 'family_size', None) or max(len(family), 1)}\n"
            f"Cooking time budget: {getattr(preferences, 'cooking_time', 'Any')}\n"
            f"Budget: {getattr(preferences, 'budget', 'Any')}\n"
            f"Cuisine preferences: {', '.join(getattr(preferences, 'cuisine_preferences', []) or []) or 'Any'}\n"
            f"Pantry: {', '.join(pantry) or 'empty'}"
        )
        messages = [
            {"role": "system", "content": MEAL_PLAN_SYSTEM_PROMPT},
            {"role": "user", "content": user_message},
        ]
        try:
            payload = self._complete_json(self.model, messages, max_tokens=4000)
            result = validate_meal_plan(payload)
            if not result.ok:
                raise AIUnavailableError(result.reason)
            return result.value.model_dump(by_alias=True)
        except Exception as e:
            logger.warning("AI unavailable for meal plan generation, using fallback: %s", e)
            return fallbacks.meal_plan_fallback(week_starting)

    # === Chat ===
    def chat(self, message: str, previous_messages: Sequence[Dict[str, str]] = (),
             system_prompt: str = CHAT_SYSTEM_PROMPT) -> str:
        """Short conversational reply using the last four turns as context."""
        messages = [{"role": "system", "content": system_prompt}]
        messages.extend({"role": m["role"], "content": m["content"]} for m in list(previous_messages)[-4:])
        messages.append({"role": "user", "content": message})
        try:
            reply = self._complete(self.chat_model, messages, max_tokens=200, temperature=0.7)
        except Exception as e:
            logger.warning("AI unavailable for chat, using canned reply: %s", e)
            return fallback_chat_reply(message)
        return reply or EMPTY_CHAT_REPLY
