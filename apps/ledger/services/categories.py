"""
Category seeding service.

Every new family starts with a fixed set of expense and income categories.
"""

import logging
from decimal import Decimal

from apps.ledger.models import Category, CategoryType

logger = logging.getLogger(__name__)


DEFAULT_CATEGORIES = [
    # (name, type, budget_limit, color, icon)
    ('Groceries', CategoryType.EXPENSE, Decimal('600'), '#ef4444', 'shopping-cart'),
    ('Cafes & restaurants', CategoryType.EXPENSE, Decimal('300'), '#f97316', 'utensils'),
    ('Housing', CategoryType.EXPENSE, Decimal('1500'), '#8b5cf6', 'home'),
    ('Transport', CategoryType.EXPENSE, Decimal('200'), '#06b6d4', 'car'),
    ('Entertainment', CategoryType.EXPENSE, Decimal('150'), '#ec4899', 'film'),
    ('Utilities', CategoryType.EXPENSE, Decimal('200'), '#6366f1', 'zap'),
    ('Salary', CategoryType.INCOME, None, '#10b981', 'briefcase'),
    ('Freelance', CategoryType.INCOME, None, '#34d399', 'laptop'),
]


def seed_default_categories(*, family) -> list:
    """
    Create the default categories for a family.

    Args:
        family: Family receiving the categories

    Returns:
        List of created Category instances
    """
    categories = Category.objects.bulk_create([
        Category(
            family=family,
            name=name,
            type=category_type,
            budget_limit=limit,
            color=color,
            icon=icon,
        )
        for name, category_type, limit, color, icon in DEFAULT_CATEGORIES
    ])
    logger.debug("Seeded %d categories for family %s", len(categories), family.id)
    return categories
