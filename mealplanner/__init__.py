"""Meal plan generation service: constrained multi-day recipe assignment over a recipe catalog."""
__version__ = "0.1.0"
