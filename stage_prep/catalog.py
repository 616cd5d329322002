"""Static food catalog with nutrition facts per 100g.

Values are typical figures for the foods as eaten (rice and dal cooked,
oats and soy chunks dry).
"""

from types import MappingProxyType

from stage_prep.models import FoodCatalogEntry, MealItem, round_nutrition

FOOD_CATALOG = MappingProxyType({
    "oats": FoodCatalogEntry("Oats", 389, 16.9, 66.3, 6.9),
    "egg_whites": FoodCatalogEntry("Egg whites", 52, 11.0, 0.7, 0.2),
    "whole_egg": FoodCatalogEntry("Whole egg", 143, 13.0, 1.1, 10.0),
    "rice_cooked": FoodCatalogEntry("Rice (cooked)", 130, 2.7, 28.0, 0.3),
    "chicken_breast": FoodCatalogEntry("Chicken breast", 165, 31.0, 0.0, 3.6),
    "paneer": FoodCatalogEntry("Paneer", 265, 18.0, 6.0, 20.0),
    "dal_cooked": FoodCatalogEntry("Dal", 116, 9.0, 20.0, 0.4),
    "roti": FoodCatalogEntry("Roti", 297, 9.0, 49.0, 3.0),
    "soy_chunks": FoodCatalogEntry("Soy chunks", 345, 52.0, 33.0, 0.5),
    "roasted_chana": FoodCatalogEntry("Roasted chana", 369, 22.0, 60.0, 6.0),
    "milk": FoodCatalogEntry("Milk", 61, 3.2, 4.8, 3.3),
    "banana": FoodCatalogEntry("Banana", 89, 1.1, 23.0, 0.3),
    "sabzi": FoodCatalogEntry("Sabzi", 45, 2.0, 8.0, 1.0),
    "curd": FoodCatalogEntry("Curd", 60, 3.5, 4.7, 3.0),
})


def get_food(food_id: str) -> FoodCatalogEntry:
    """Look up a catalog entry. Raises KeyError for unknown foods."""
    return FOOD_CATALOG[food_id]


def make_item(food_id: str, grams: int) -> MealItem:
    """Build a meal item by scaling the catalog entry to the given portion.

    Each nutrient is rounded independently, so summed item macros can differ
    slightly from the unrounded scaled totals.
    """
    entry = get_food(food_id)
    ratio = grams / 100
    return MealItem(
        food_id=food_id,
        name=entry.name,
        grams=grams,
        calories=round_nutrition(entry.calories * ratio),
        protein_g=round_nutrition(entry.protein_g * ratio),
        carbs_g=round_nutrition(entry.carbs_g * ratio),
        fat_g=round_nutrition(entry.fat_g * ratio),
    )


def format_catalog() -> str:
    """Format the catalog as a table for display."""
    lines = [
        f"{'ID':<16}  {'Food':<16}  {'Cal':>5}  {'P(g)':>5}  {'C(g)':>5}  {'F(g)':>5}",
        "-" * 62,
    ]
    for food_id, entry in FOOD_CATALOG.items():
        lines.append(
            f"{food_id:<16}  {entry.name:<16}  {entry.calories:>5.0f}  "
            f"{entry.protein_g:>5.1f}  {entry.carbs_g:>5.1f}  {entry.fat_g:>5.1f}"
        )
    lines.append("(values per 100g)")
    return "\n".join(lines)
