"""FamilyMember domain entity: a household member with dietary tags."""
from datetime import datetime
from typing import List, Optional


class FamilyMember:
    def __init__(self, id: str, user_id: str, name: str, age: Optional[int] = None,
                 dietary: Optional[List[str]] = None, allergies: Optional[List[str]] = None,
                 preferences: Optional[List[str]] = None, is_active: bool = True,
                 created_at: Optional[datetime] = None):
        self.id = id
        self.user_id = user_id
        self.name = name
        self.age = age
        # Avoid mutable default arguments
        self.dietary = dietary[:] if dietary else []
        self.allergies = allergies[:] if allergies else []
        self.preferences = preferences[:] if preferences else []
        self.is_active = is_active
        self.created_at = created_at or datetime.now()

    def __str__(self) -> str:
        age = f" (age {self.age})" if self.age is not None else ""
        return f"{self.name}{age}"

    __repr__ = __str__

    def describe(self) -> str:
        """One prompt line: name, age, dietary needs, allergies and preferences."""
        return (
            f"{self.name} (age {self.age if self.age is not None else 'unknown'}): "
            f"dietary needs: {', '.join(self.dietary) or 'none'}, "
            f"allergies: {', '.join(self.allergies) or 'none'}, "
            f"preferences: {', '.join(self.preferences) or 'none'}"
        )

    def update(self, changes: dict):
        '''Applies a partial update. Ignores unknown keys.'''
        for key in ("name", "age", "dietary", "allergies", "preferences", "is_active"):
            if key in changes:
                setattr(self, key, changes[key])

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "name": self.name,
            "age": self.age,
            "dietary": self.dietary,
            "allergies": self.allergies,
            "preferences": self.preferences,
            "isActive": self.is_active,
            "createdAt": self.created_at.isoformat(),
        }
