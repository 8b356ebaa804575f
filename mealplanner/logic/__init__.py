"""Core business logic layer.

Subpackages:
- planning: candidate acquisition, constraint filtering, meal-type classification, slot assignment
- reporting: nutrition aggregation
- shopping: building shopping lists from generated plans
"""
__all__ = ["planning", "reporting", "shopping"]
