"""ShoppingList domain entity and its line items."""
from datetime import datetime
from typing import Optional


class ShoppingListItem:
    def __init__(self, id: str, shopping_list_id: str, name: str, category: str = "Other",
                 quantity: Optional[str] = None, unit: Optional[str] = None,
                 ingredient_id: Optional[str] = None, is_checked: bool = False,
                 added_from: Optional[str] = None):
        self.id = id
        self.shopping_list_id = shopping_list_id
        self.name = name
        self.category = category or "Other"
        self.quantity = quantity
        self.unit = unit
        self.ingredient_id = ingredient_id
        self.is_checked = is_checked
        # provenance, e.g. "Pasta Marinara, Baked Salmon"
        self.added_from = added_from

    def __str__(self) -> str:
        mark = "x" if self.is_checked else " "
        return f"[{mark}] {self.name} {self.quantity or ''} {self.unit or ''}".rstrip()

    __repr__ = __str__

    def update(self, changes: dict):
        for key in ("name", "category", "quantity", "unit", "is_checked"):
            if key in changes:
                setattr(self, key, changes[key])

    def to_dict(self):
        return {
            "id": self.id,
            "shoppingListId": self.shopping_list_id,
            "ingredientId": self.ingredient_id,
            "name": self.name,
            "category": self.category,
            "quantity": self.quantity,
            "unit": self.unit,
            "isChecked": self.is_checked,
            "addedFrom": self.added_from,
        }


class ShoppingList:
    def __init__(self, id: str, user_id: str, name: str, meal_plan_id: Optional[str] = None,
                 is_completed: bool = False, created_at: Optional[datetime] = None):
        self.id = id
        self.user_id = user_id
        self.name = name
        self.meal_plan_id = meal_plan_id
        self.is_completed = is_completed
        self.created_at = created_at or datetime.now()

    def __str__(self) -> str:
        return self.name

    __repr__ = __str__

    def to_dict(self, items=None):
        data = {
            "id": self.id,
            "userId": self.user_id,
            "name": self.name,
            "mealPlanId": self.meal_plan_id,
            "isCompleted": self.is_completed,
            "createdAt": self.created_at.isoformat(),
        }
        if items is not None:
            data["items"] = [item.to_dict() for item in items]
            data["categories"] = sorted({item.category for item in items})
        return data
