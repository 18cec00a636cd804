"""Domain error types shared by the store, the AI gateway and the API layer."""


class NotFoundError(LookupError):
    """Raised when an entity id does not resolve (mapped to HTTP 404)."""

    def __init__(self, entity: str, entity_id):
        super().__init__(f"{entity} not found: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id


class IntegrityError(ValueError):
    """Raised when a write would reference a missing ingredient, recipe or plan."""


class AIUnavailableError(RuntimeError):
    """Raised inside the AI gateway when the provider cannot produce a usable answer."""
