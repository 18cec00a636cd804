"""ProactiveSuggestion: a dismissable card shown on the dashboard."""
from datetime import datetime
from typing import Any, Dict, Optional


class ProactiveSuggestion:
    def __init__(self, id: str, type: str, title: str, description: str, priority: str = "medium",
                 action: Optional[str] = None, data: Optional[Dict[str, Any]] = None,
                 created_at: Optional[datetime] = None):
        self.id = id
        self.type = type
        self.title = title
        self.description = description
        self.priority = priority
        self.action = action
        self.data = data
        self.created_at = created_at or datetime.now()

    def __str__(self) -> str:
        return f"[{self.priority}] {self.title}"

    __repr__ = __str__

    def to_dict(self):
        return {
            "id": self.id,
            "type": self.type,
            "title": self.title,
            "description": self.description,
            "action": self.action,
            "priority": self.priority,
            "data": self.data,
            "createdAt": self.created_at.isoformat(),
        }
