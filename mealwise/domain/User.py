"""User domain entity: identity plus display names."""
from datetime import datetime
from typing import Optional


class User:
    def __init__(self, id: str, email: str = "", first_name: Optional[str] = None,
                 last_name: Optional[str] = None, username: Optional[str] = None,
                 profile_image_url: Optional[str] = None,
                 created_at: Optional[datetime] = None, updated_at: Optional[datetime] = None):
        self.id = id
        self.email = email
        self.first_name = first_name
        self.last_name = last_name
        self.username = username
        self.profile_image_url = profile_image_url
        self.created_at = created_at or datetime.now()
        self.updated_at = updated_at or self.created_at

    def __str__(self) -> str:
        return f"{self.first_name or self.username or self.email} <{self.email}>"

    __repr__ = __str__

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "username": self.username,
            "profileImageUrl": self.profile_image_url,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }
