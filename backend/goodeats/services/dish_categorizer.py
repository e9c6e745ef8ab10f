"""Potluck meal planning: bucket pledged dishes into courses.

Rules are evaluated in order; the first rule whose keywords match a dish
wins. A dish matching no rule is a main. Matching is case-insensitive
substring search, except for a few short words that need word boundaries
(so "Steak" is not counted as tea). Soda bread and coffee-rubbed
meats are not drinks.
"""
import enum
import re
from dataclasses import dataclass, field
from typing import Iterable, Optional


class DishCategory(str, enum.Enum):
    appetizer = "appetizer"
    main = "main"
    dessert = "dessert"
    drink = "drink"


@dataclass(frozen=True)
class DishRule:
    category: DishCategory
    keywords: tuple[str, ...]
    pattern: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "pattern", re.compile("|".join(self.keywords), re.IGNORECASE))

    def matches(self, dish: str) -> bool:
        return self.pattern.search(dish) is not None


DEFAULT_CATEGORY = DishCategory.main

RULES: tuple[DishRule, ...] = (
    DishRule(DishCategory.appetizer, (
        r"appetizer", r"starter", r"\bdips?\b", r"hummus", r"bruschetta", r"crudit", r"\bchips\b",
    )),
    DishRule(DishCategory.dessert, (
        r"dessert", r"cake", r"cookie", r"brownie", r"\bpies?\b", r"pudding", r"ice cream",
        r"cobbler", r"tiramisu",
    )),
    DishRule(DishCategory.drink, (
        r"drink", r"beverage", r"\btea\b", r"\bcoffee\b(?!-)", r"\bjuices?\b", r"lemonade",
        r"\bsoda\b(?!\s+bread)", r"\bwine\b", r"\bbeer\b", r"cocktail", r"\bpunch\b", r"sangria",
    )),
)


def categorize_dish(dish: str) -> DishCategory:
    for rule in RULES:
        if rule.matches(dish):
            return rule.category
    return DEFAULT_CATEGORY


def categorize_dishes(dishes: Iterable[Optional[str]]) -> dict[DishCategory, list[str]]:
    """Partition dish descriptions into course buckets, preserving input order.

    Blank or missing entries are skipped; every other entry lands in
    exactly one bucket. All four buckets are always present.
    """
    buckets: dict[DishCategory, list[str]] = {category: [] for category in DishCategory}
    for dish in dishes:
        if not dish or not dish.strip():
            continue
        text = dish.strip()
        buckets[categorize_dish(text)].append(text)
    return buckets
