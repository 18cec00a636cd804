import unittest
from datetime import date
from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient

from mealwise.api.api_run import create_app
from mealwise.infra.AI_Gateway import AIGateway
from mealwise.infra.Memory_Store import MemoryStore


def _client(allow_default_user=True):
    app = create_app(store=MemoryStore(seed=True), gateway=AIGateway(api_key=""),
                     allow_default_user=allow_default_user)
    return TestClient(app)


class TestHouseholdEndpoints(unittest.TestCase):
    def setUp(self):
        self.client = _client()

    def test_health(self):
        r = self.client.get("/api/health")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), {"status": "ok", "ai": False})

    def test_validation_error_shape(self):
        r = self.client.post("/api/family", json={})
        self.assertEqual(r.status_code, 400)
        body = r.json()
        self.assertEqual(body["error"], "Invalid request")
        self.assertTrue(body["details"])

    def test_family_crud(self):
        r = self.client.get("/api/family")
        self.assertEqual(len(r.json()), 4)

        r = self.client.post("/api/family", json={"name": "Grandpa", "age": 72, "allergies": ["Shellfish", " "]})
        self.assertEqual(r.status_code, 200)
        member = r.json()
        self.assertEqual(member["allergies"], ["Shellfish"])

        r = self.client.put(f"/api/family/{member['id']}", json={"age": None, "name": None})
        self.assertEqual(r.status_code, 200)
        self.assertIsNone(r.json()["age"])
        self.assertEqual(r.json()["name"], "Grandpa")

        r = self.client.delete(f"/api/family/{member['id']}")
        self.assertEqual(r.json(), {"success": True})
        self.assertEqual(self.client.put(f"/api/family/{member['id']}", json={"age": 3}).status_code, 404)

    def test_preferences_upsert(self):
        r = self.client.post("/api/preferences", json={"budget": "Low", "cuisinePreferences": ["Thai"]})
        self.assertEqual(r.status_code, 200)
        prefs = self.client.get("/api/preferences").json()
        self.assertEqual(prefs["budget"], "Low")
        self.assertEqual(prefs["cuisinePreferences"], ["Thai"])
        self.assertEqual(prefs["familySize"], 4)
        self.assertEqual(self.client.post("/api/preferences", json={"budget": "Huge"}).status_code, 400)

    def test_pantry_add_keeps_duplicates(self):
        payload = {"ingredients": [{"name": "Lemon", "quantity": 2}, {"name": "lemon", "unit": "pieces"}]}
        r = self.client.post("/api/pantry/add", json=payload)
        self.assertEqual(r.status_code, 200)
        body = r.json()
        self.assertTrue(body["success"])
        self.assertEqual([i["ingredient"]["name"] for i in body["items"]], ["Lemon", "Lemon"])
        self.assertEqual(body["items"][0]["quantity"], "2")
        self.assertEqual(len(self.client.get("/api/pantry").json()), 10)

    def test_pantry_update_and_delete(self):
        item = self.client.get("/api/pantry").json()[0]
        r = self.client.put(f"/api/pantry/{item['id']}", json={"quantity": "3", "expiryDate": "2030-01-02"})
        self.assertEqual(r.json()["expiryDate"], "2030-01-02")
        self.client.delete(f"/api/pantry/{item['id']}")
        self.assertEqual(self.client.delete(f"/api/pantry/{item['id']}").status_code, 404)


class TestRecipeEndpoints(unittest.TestCase):
    def setUp(self):
        self.client = _client()

    def test_recommended_orders_by_match(self):
        ranked = self.client.get("/api/recipes/recommended").json()
        self.assertEqual(ranked[0]["title"], "Grilled Chicken with Quinoa & Roasted Vegetables")
        self.assertEqual(ranked[0]["matchRatio"], 0.8333)
        self.assertEqual(ranked[-1]["matchRatio"], 0.0)

    def test_search_and_detail(self):
        found = self.client.get("/api/recipes/search", params={"tags": "Quick,Healthy"}).json()
        self.assertEqual([r["title"] for r in found], ["Baked Salmon with Herbs"])
        detail = self.client.get(f"/api/recipes/{found[0]['id']}").json()
        self.assertEqual(len(detail["ingredients"]), 3)
        self.assertFalse(detail["isFavorite"])
        self.assertEqual(self.client.get("/api/recipes/missing").status_code, 404)

    def test_blank_ingredient_name_rejected(self):
        r = self.client.post("/api/recipes", json={"title": "Blank test", "ingredients": [{"name": "   "}]})
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.json()["error"], "Invalid request")
        self.assertEqual(len(self.client.get("/api/recipes").json()), 4)

    def test_favorites(self):
        recipe = self.client.get("/api/recipes").json()[0]
        r = self.client.post(f"/api/recipes/{recipe['id']}/favorite", json={"isFavorite": True})
        self.assertTrue(r.json()["isFavorite"])
        self.assertEqual([f["id"] for f in self.client.get("/api/favorites").json()], [recipe["id"]])

    def test_recipe_recommendations_fallback(self):
        r = self.client.post("/api/recipes/recommendations")
        self.assertEqual(r.status_code, 200)
        recipes = r.json()["recipes"]
        self.assertEqual(recipes[0]["title"], "Quick Vegetable Stir-Fry")
        self.assertEqual(recipes[0]["servings"], 4)
        self.assertEqual(recipes[0]["ingredients"][0], "Chicken breast")

    def test_quick_generate_saves_recipe(self):
        r = self.client.post("/api/recipes/quick-generate", json={"ingredients": ["Rice"], "maxCookTime": 20})
        self.assertEqual(r.status_code, 200)
        recipe = r.json()
        self.assertEqual(recipe["title"], "Quick Vegetable Stir-Fry")
        self.assertEqual(recipe["cookTime"], 15)
        self.assertEqual(len(self.client.get("/api/recipes").json()), 5)


class TestAssistantEndpoints(unittest.TestCase):
    def setUp(self):
        self.client = _client()

    def test_scan_rejects_non_images(self):
        r = self.client.post("/api/scan-ingredients", files={"image": ("notes.txt", b"hello", "text/plain")})
        self.assertEqual(r.status_code, 400)

    def test_scan_rejects_large_upload(self):
        with patch("mealwise.api.api_ai.MAX_UPLOAD_BYTES", 4):
            r = self.client.post("/api/scan-ingredients",
                                 files={"image": ("fridge.jpg", b"0123456789", "image/jpeg")})
        self.assertEqual(r.status_code, 400)

    def test_scan_fallback(self):
        r = self.client.post("/api/scan-ingredients", files={"image": ("fridge.jpg", b"\xff\xd8\xff", "image/jpeg")})
        self.assertEqual(r.status_code, 200)
        body = r.json()
        self.assertEqual(len(body["ingredients"]), 4)
        self.assertEqual(body["totalConfidence"], 0.88)

    def test_scan_survives_upstream_crash(self):
        client = MagicMock()
        client.chat.completions.create.side_effect = RuntimeError("upstream boom")
        app = create_app(store=MemoryStore(seed=True), gateway=AIGateway(client=client), allow_default_user=True)
        r = TestClient(app).post("/api/scan-ingredients",
                                 files={"image": ("fridge.jpg", b"\xff\xd8\xff", "image/jpeg")})
        self.assertEqual(r.status_code, 200)
        self.assertEqual([i["name"] for i in r.json()["ingredients"]],
                         ["Tomatoes", "Bell peppers", "Onions", "Garlic"])

    def test_chat_returns_quick_replies(self):
        r = self.client.post("/api/chat", json={"message": "What should I cook tonight?",
                                                "context": {"previousMessages": [{"role": "user", "content": "hi"}]}})
        self.assertEqual(r.status_code, 200)
        body = r.json()
        self.assertTrue(body["message"].startswith("I can help you find recipes!"))
        self.assertEqual(body["suggestions"], ["Show quick recipes", "Find healthy options", "Use my pantry items"])

    def test_generated_meal_plan(self):
        r = self.client.post("/api/meal-plans/generate", json={"weekStarting": "2025-03-05"})
        body = r.json()
        self.assertEqual(body["weekStarting"], "2025-03-02")
        self.assertEqual(len(body["days"]), 7)

    def test_proactive_suggestions_and_dismiss(self):
        payload = {"context": {"currentTime": "2025-03-04T08:00:00"}}
        ids = [c["id"] for c in self.client.post("/api/suggestions/generate", json=payload).json()]
        self.assertIn("tip-2025-03-04-morning", ids)
        self.assertIn("meal-plan-2025-03-02", ids)
        self.assertTrue(any(i.startswith("recipe-") for i in ids))

        r = self.client.post("/api/suggestions/dismiss", json={"suggestionId": "meal-plan-2025-03-02"})
        self.assertEqual(r.json(), {"success": True})
        ids = [c["id"] for c in self.client.post("/api/suggestions/generate", json=payload).json()]
        self.assertNotIn("meal-plan-2025-03-02", ids)


class TestPlanningEndpoints(unittest.TestCase):
    def setUp(self):
        self.client = _client()
        self.recipes = {r["title"]: r["id"] for r in self.client.get("/api/recipes").json()}

    def _add(self, title, day, meal_type="dinner"):
        r = self.client.post("/api/meal-plans/add-recipe",
                             json={"recipeId": self.recipes[title], "date": day.isoformat(), "mealType": meal_type})
        self.assertEqual(r.status_code, 200)
        return r.json()

    def test_missing_plan_is_404(self):
        r = self.client.get("/api/meal-plans", params={"weekStarting": "2001-01-07"})
        self.assertEqual(r.status_code, 404)

    def test_add_recipe_then_shopping_list_for_current_week(self):
        today = date.today()
        added = self._add("Classic Pasta Marinara with Fresh Basil", today)
        self._add("Beef and Vegetable Stir Fry", today, "lunch")

        plan = self.client.get("/api/meal-plans").json()
        self.assertEqual(plan["id"], added["mealPlanId"])
        self.assertEqual(len(plan["meals"]), 2)

        r = self.client.post("/api/shopping/generate", json={"mealPlanId": "current"})
        self.assertEqual(r.status_code, 200)
        items = {i["name"]: i for i in r.json()["items"]}
        self.assertEqual(len(items), 10)
        self.assertIn("Beef and Vegetable Stir Fry", items["Garlic"]["addedFrom"])
        self.assertIn("Classic Pasta Marinara with Fresh Basil", items["Garlic"]["addedFrom"])

        lists = self.client.get("/api/shopping-lists").json()
        self.assertEqual(len(lists), 1)

    def test_shopping_generate_without_plan(self):
        r = self.client.post("/api/shopping/generate", json={})
        self.assertEqual(r.status_code, 404)

    def test_shopping_list_items_and_pdf(self):
        added = self._add("Baked Salmon with Herbs", date(2025, 3, 4))
        shopping = self.client.post("/api/shopping/generate", json={"mealPlanId": added["mealPlanId"]}).json()

        r = self.client.post(f"/api/shopping-lists/{shopping['id']}/items", json={"name": "Lemon"})
        item = r.json()
        self.assertEqual(item["addedFrom"], "Added manually")
        r = self.client.put(f"/api/shopping-list-items/{item['id']}", json={"isChecked": True})
        self.assertTrue(r.json()["isChecked"])

        r = self.client.get(f"/api/shopping-lists/{shopping['id']}/pdf")
        self.assertEqual(r.headers["content-type"], "application/pdf")
        self.assertTrue(r.content.startswith(b"%PDF"))

    def test_week_pdf_and_nutrition(self):
        added = self._add("Baked Salmon with Herbs", date(2025, 3, 4))
        plan_id = added["mealPlanId"]
        self.assertEqual(added["meal"]["dayOfWeek"], 2)

        r = self.client.get(f"/api/meal-plans/{plan_id}/pdf")
        self.assertTrue(r.content.startswith(b"%PDF"))

        nutrition = self.client.get(f"/api/meal-plans/{plan_id}/nutrition").json()
        self.assertEqual(nutrition["weekTotals"]["calories"], 410)

    def test_unknown_recipe_in_plan_is_400(self):
        added = self._add("Baked Salmon with Herbs", date(2025, 3, 4))
        r = self.client.post(f"/api/meal-plans/{added['mealPlanId']}/meals",
                             json={"recipeId": "nope", "dayOfWeek": 1, "mealType": "lunch"})
        self.assertEqual(r.status_code, 400)
        self.assertIn("nope", r.json()["detail"])

    def test_meal_update_and_delete(self):
        added = self._add("Baked Salmon with Herbs", date(2025, 3, 4))
        meal_id = added["meal"]["id"]
        r = self.client.put(f"/api/meals/{meal_id}", json={"mealType": "lunch"})
        self.assertEqual(r.json()["mealType"], "lunch")
        self.assertEqual(self.client.put(f"/api/meals/{meal_id}", json={"mealType": "brunch"}).status_code, 400)
        self.client.delete(f"/api/meals/{meal_id}")
        self.assertEqual(self.client.delete(f"/api/meals/{meal_id}").status_code, 404)


class TestInternalErrors(unittest.TestCase):
    def test_unexpected_value_error_is_generic_500(self):
        store = MemoryStore(seed=True)
        app = create_app(store=store, gateway=AIGateway(api_key=""), allow_default_user=True)
        client = TestClient(app, raise_server_exceptions=False)
        with patch.object(store, "get_family_members", side_effect=ValueError("secret internals")):
            r = client.get("/api/family")
        self.assertEqual(r.status_code, 500)
        self.assertEqual(r.json(), {"detail": "Internal server error"})


class TestSessions(unittest.TestCase):
    def test_login_logout_flow(self):
        client = _client(allow_default_user=False)
        self.assertEqual(client.get("/api/family").status_code, 401)

        r = client.post("/api/auth/login", json={"email": "Alex@Example.com", "firstName": "Alex"})
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json()["email"], "alex@example.com")

        me = client.get("/api/auth/user")
        self.assertEqual(me.status_code, 200)
        self.assertEqual(me.json()["firstName"], "Alex")
        self.assertEqual(client.get("/api/family").json(), [])

        client.post("/api/auth/logout")
        self.assertEqual(client.get("/api/auth/user").status_code, 401)

    def test_default_user_without_session(self):
        client = _client()
        self.assertEqual(client.get("/api/auth/user").json()["username"], "sarah_mom")


if __name__ == "__main__":
    unittest.main()
