"""PantryItem domain entity: a quantity of a catalog ingredient owned by a user."""
from datetime import date, datetime
from typing import Optional

from mealwise.utilities.constants import DATE_FORMAT


class PantryItem:
    def __init__(self, id: str, user_id: str, ingredient_id: str, quantity: Optional[str] = None,
                 unit: Optional[str] = None, expiry_date: Optional[date] = None,
                 added_at: Optional[datetime] = None):
        self.id = id
        self.user_id = user_id
        self.ingredient_id = ingredient_id
        self.quantity = quantity
        self.unit = unit
        self.expiry_date = expiry_date
        self.added_at = added_at or datetime.now()

    def __str__(self) -> str:
        parts = [f"{self.ingredient_id} - {self.quantity or ''} {self.unit or ''}".rstrip()]
        if self.expiry_date:
            parts.append(f"Exp: {self.expiry_date.strftime(DATE_FORMAT)}")
        return " - ".join(parts)

    __repr__ = __str__

    def days_until_expiry(self, today: Optional[date] = None) -> Optional[int]:
        if not self.expiry_date:
            return None
        return (self.expiry_date - (today or date.today())).days

    def to_dict(self, ingredient=None):
        '''Converts the item to its wire form; joins the ingredient when given.'''
        data = {
            "id": self.id,
            "userId": self.user_id,
            "ingredientId": self.ingredient_id,
            "quantity": self.quantity,
            "unit": self.unit,
            "expiryDate": self.expiry_date.strftime(DATE_FORMAT) if self.expiry_date else None,
            "addedAt": self.added_at.isoformat(),
        }
        if ingredient is not None:
            data["ingredient"] = ingredient.to_dict()
        return data
