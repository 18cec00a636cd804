import json
import unittest
from datetime import date
from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import openai

from mealwise.domain.FamilyMember import FamilyMember
from mealwise.infra.AI_Gateway import AIGateway
from mealwise.utilities.constants import EMPTY_CHAT_REPLY


def _response(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def _client_returning(content):
    client = MagicMock()
    client.chat.completions.create.return_value = _response(content)
    return client


def _failing_client():
    client = MagicMock()
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    client.chat.completions.create.side_effect = openai.APIConnectionError(request=request)
    return client


class TestGatewayWithoutKey(unittest.TestCase):
    def setUp(self):
        self.gateway = AIGateway(api_key="")

    def test_scan_fallback(self):
        with self.assertLogs("mealwise.infra.AI_Gateway", level="WARNING"):
            result = self.gateway.identify_ingredients(b"\xff\xd8\xff")
        self.assertEqual([i["name"] for i in result["ingredients"]],
                         ["Tomatoes", "Bell peppers", "Onions", "Garlic"])
        self.assertEqual(result["totalConfidence"], 0.88)
        self.assertEqual(len(result["suggestions"]), 2)

    def test_recipe_fallback_uses_available_ingredients(self):
        available = ["a", "b", "c", "d", "e", "f"]
        recipes = self.gateway.recommend_recipes(available, family_size=3)
        self.assertEqual([r["title"] for r in recipes], ["Quick Vegetable Stir-Fry", "Simple Family Soup"])
        self.assertEqual(recipes[0]["ingredients"][:6], ["a", "b", "c", "d", "e", "soy sauce"])
        self.assertEqual(recipes[1]["ingredients"][:5], ["a", "b", "c", "d", "broth"])
        self.assertTrue(all(r["servings"] == 3 for r in recipes))

    def test_chat_fallback_by_keyword(self):
        reply = self.gateway.chat("Can you help me shop for dinner?")
        self.assertTrue(reply.startswith("I can help generate shopping lists"))
        self.assertTrue(self.gateway.chat("hello").startswith("I'm your meal planning assistant!"))

    def test_meal_plan_fallback_is_dated_from_week_start(self):
        plan = self.gateway.generate_meal_plan([], None, [], date(2025, 3, 2))
        self.assertEqual(len(plan["days"]), 7)
        self.assertEqual(plan["days"][0]["day"], "Sunday")
        self.assertEqual(plan["days"][0]["date"], "2025-03-02")
        self.assertEqual(plan["days"][6]["date"], "2025-03-08")
        self.assertIn("Garlic", plan["shoppingList"]["ingredients"])

    def test_enhance_keeps_base_on_failure(self):
        base = [{"title": "Soup"}]
        self.assertIs(self.gateway.enhance_recipes(base, None, []), base)

    def test_quick_recipe_fallback_respects_time_budget(self):
        recipe = self.gateway.generate_quick_recipe(["Rice"], cuisine="Thai", max_cook_time=20)
        self.assertEqual(recipe["title"], "Quick Vegetable Stir-Fry")
        self.assertEqual(recipe["cuisine"], "Thai")


class TestGatewayWithClient(unittest.TestCase):
    def test_scan_parses_and_clamps(self):
        content = json.dumps({
            "ingredients": [{"name": "Lemon", "confidence": 1.5, "category": "Fruits"}],
            "totalConfidence": -0.2,
        })
        client = _client_returning(content)
        gateway = AIGateway(client=client)
        result = gateway.identify_ingredients(b"png-bytes", "image/png")

        self.assertEqual(result["ingredients"][0]["confidence"], 1.0)
        self.assertAlmostEqual(result["totalConfidence"], 0.1)
        kwargs = client.chat.completions.create.call_args.kwargs
        self.assertEqual(kwargs["response_format"], {"type": "json_object"})
        self.assertEqual(kwargs["max_tokens"], 2048)
        image_part = kwargs["messages"][1]["content"][1]
        self.assertTrue(image_part["image_url"]["url"].startswith("data:image/png;base64,"))

    def test_invalid_json_falls_back(self):
        gateway = AIGateway(client=_client_returning("I cannot see any food."))
        with self.assertLogs("mealwise.infra.AI_Gateway", level="WARNING"):
            result = gateway.identify_ingredients(b"x")
        self.assertEqual(result["totalConfidence"], 0.88)

    def test_connection_error_falls_back(self):
        gateway = AIGateway(client=_failing_client())
        recipes = gateway.recommend_recipes(["Rice"])
        self.assertEqual(recipes[0]["title"], "Quick Vegetable Stir-Fry")

    def test_recommendations_coerce_difficulty(self):
        content = json.dumps({"recipes": [{"title": "Curry", "difficulty": "Extreme", "servings": 2}]})
        gateway = AIGateway(client=_client_returning(content))
        recipes = gateway.recommend_recipes(["Rice"], ["Vegetarian"], ["Indian"], family_size=4)
        self.assertEqual(recipes[0]["difficulty"], "Medium")
        self.assertEqual(recipes[0]["servings"], 2)

    def test_enhance_uses_family_context(self):
        client = _client_returning(json.dumps({"recipes": [{"title": "Dairy-free Curry"}]}))
        gateway = AIGateway(client=client)
        member = FamilyMember(id="m1", user_id="u1", name="Emma", age=8, allergies=["Dairy"])
        result = gateway.enhance_recipes([{"title": "Curry"}], None, [member])
        self.assertEqual(result[0]["title"], "Dairy-free Curry")
        prompt = client.chat.completions.create.call_args.kwargs["messages"][1]["content"]
        self.assertIn("Emma (age 8): dietary needs: none, allergies: Dairy", prompt)

    def test_chat_sends_last_four_turns(self):
        client = _client_returning("Try a frittata!")
        gateway = AIGateway(client=client)
        history = [{"role": "user" if i % 2 == 0 else "assistant", "content": f"m{i}"} for i in range(6)]
        reply = gateway.chat("What now?", history)

        self.assertEqual(reply, "Try a frittata!")
        kwargs = client.chat.completions.create.call_args.kwargs
        sent = kwargs["messages"]
        self.assertEqual(sent[0]["role"], "system")
        self.assertEqual([m["content"] for m in sent[1:-1]], ["m2", "m3", "m4", "m5"])
        self.assertEqual(sent[-1], {"role": "user", "content": "What now?"})
        self.assertEqual(kwargs["max_tokens"], 200)
        self.assertEqual(kwargs["temperature"], 0.7)

    def test_chat_empty_reply(self):
        gateway = AIGateway(client=_client_returning(""))
        self.assertEqual(gateway.chat("hi"), EMPTY_CHAT_REPLY)


class TestGatewayUnexpectedFailures(unittest.TestCase):
    def _raising(self, exc):
        client = MagicMock()
        client.chat.completions.create.side_effect = exc
        return AIGateway(client=client)

    def test_any_exception_falls_back_everywhere(self):
        gateway = self._raising(RuntimeError("upstream boom"))
        with self.assertLogs("mealwise.infra.AI_Gateway", level="WARNING"):
            scan = gateway.identify_ingredients(b"x")
        self.assertEqual(len(scan["ingredients"]), 4)
        self.assertEqual(gateway.recommend_recipes(["Rice"])[0]["title"], "Quick Vegetable Stir-Fry")
        base = [{"title": "Soup"}]
        self.assertIs(gateway.enhance_recipes(base, None, []), base)
        self.assertEqual(gateway.generate_quick_recipe(["Rice"])["title"], "Quick Vegetable Stir-Fry")
        self.assertEqual(len(gateway.generate_meal_plan([], None, [], date(2025, 3, 2))["days"]), 7)

    def test_chat_timeout_uses_canned_reply(self):
        gateway = self._raising(TimeoutError("slow"))
        self.assertTrue(gateway.chat("hello").startswith("I'm your meal planning assistant!"))

    def test_response_without_message(self):
        client = MagicMock()
        client.chat.completions.create.return_value = SimpleNamespace(choices=[SimpleNamespace(message=None)])
        gateway = AIGateway(client=client)
        self.assertEqual(gateway.identify_ingredients(b"x")["totalConfidence"], 0.88)
        self.assertEqual(gateway.chat("hi"), EMPTY_CHAT_REPLY)


if __name__ == "__main__":
    unittest.main()
