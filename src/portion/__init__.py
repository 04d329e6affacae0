"""
Portion - Quantity and composition engine for recipe content.

Modules:
- ingredients: Parse, format and scale ingredient lines
- instructions: Scale {{quantity unit}} annotations in steps
- shopping: Unit reconciliation and shopping list aggregation
- recipes: Cross-recipe component reference resolution
"""

__version__ = "1.0.0"
