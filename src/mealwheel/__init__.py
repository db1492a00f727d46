"""
Mealwheel meal-rotation and grocery package.

The package aggregates a household's weekly meal rotation and recurring household
supplies into a categorized grocery list with persisted check-off state.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
