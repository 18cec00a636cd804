"""Core business logic layer.

Subpackages:
- recommend: pantry match scoring and ranking
- shopping: building shopping lists from meal plans
- reporting: nutrition for a stored week
- pantry: pantry analysis helpers
- suggestions: quick replies and dashboard cards
- ai: parsing, validation and fallbacks for model output
"""
__all__ = ["recommend", "shopping", "reporting", "pantry", "suggestions", "ai"]
