"""Shopping list builder.

Provides build_shopping_list(plan): the ingredients of every assigned recipe,
aggregated by (normalized name, unit).
"""
from typing import Any, Dict, List, Tuple

from mealplanner.domain.Plan import MealPlan


def _normalize(name: str) -> str:
    return (name or '').strip().lower()


def _stem(word: str) -> str:
    # Simple plural to singular heuristics (not perfect, acceptable for this use case)
    if word.endswith('ies') and len(word) > 3:
        return word[:-3] + 'y'  # berries -> berry
    if word.endswith('oes') and len(word) > 3:
        return word[:-3] + 'o'  # tomatoes -> tomato
    if word.endswith('ses') and len(word) > 3:
        return word[:-2]
    if word.endswith('es') and len(word) > 2 and word[-3] not in 'aeiou':
        return word[:-2]  # radishes -> radish
    if word.endswith('s') and not word.endswith('ss') and len(word) > 1:
        return word[:-1]
    return word


def _key(name: str) -> str:
    return _stem(_normalize(name))


def build_shopping_list(plan: MealPlan) -> List[Dict[str, Any]]:
    """Aggregate the ingredients needed for a generated plan.

    Args:
        plan: MealPlan whose recipes may carry ingredient lists.

    Returns:
        List of dicts { name, unit, amount, aisle, recipes } sorted by aisle then name.
        Recipes without ingredient data contribute nothing.
    """
    if not plan or not plan.days:
        return []

    lines: Dict[Tuple[str, str], Dict[str, Any]] = {}
    for meal in plan.meals:
        recipe = meal.recipe
        for ing in recipe.ingredients or ():
            if not ing.name.strip():
                continue
            unit = _normalize(ing.unit)
            k = (_key(ing.name), unit)
            line = lines.setdefault(k, {
                'name': ing.name.strip(),
                'unit': ing.unit.strip(),
                'amount': 0.0,
                'aisle': ing.aisle or 'Other',
                'recipes': [],
            })
            line['amount'] += ing.amount or 0
            if recipe.title not in line['recipes']:
                line['recipes'].append(recipe.title)

    shopping_list = list(lines.values())
    for line in shopping_list:
        line['amount'] = round(line['amount'], 2)
    shopping_list.sort(key=lambda x: (x['aisle'].lower(), x['name'].lower()))
    return shopping_list


__all__ = ['build_shopping_list']
