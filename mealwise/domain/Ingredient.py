"""Ingredient domain entity: catalog name, category and optional nutrition info."""
from datetime import datetime
from typing import Dict, Optional


class Ingredient:
    def __init__(self, id: str, name: str = "", category: str = "Other",
                 nutritional_info: Optional[Dict[str, float]] = None,
                 created_at: Optional[datetime] = None):
        self.id = id
        self.name = name
        self.category = category or "Other"
        self.nutritional_info = dict(nutritional_info) if nutritional_info else None
        self.created_at = created_at or datetime.now()

    def __str__(self) -> str:
        return f"{self.name} ({self.category})"

    __repr__ = __str__

    def matches_name(self, name: str) -> bool:
        '''Case-insensitive exact name comparison used for catalog lookups.'''
        return self.name.strip().lower() == (name or "").strip().lower()

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "nutritionalInfo": self.nutritional_info,
            "createdAt": self.created_at.isoformat(),
        }
