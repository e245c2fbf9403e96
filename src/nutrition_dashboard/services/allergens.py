"""Keyword-based allergen screening for foods."""

from collections.abc import Iterable

from nutrition_dashboard.domain.nutrition import Food

ALLERGY_KEYWORDS: dict[str, list[str]] = {
    "peanuts": ["peanut", "groundnut"],
    "tree_nuts": [
        "almond",
        "walnut",
        "cashew",
        "pistachio",
        "pecan",
        "macadamia",
        "hazelnut",
        "brazil nut",
        "nut",
    ],
    "dairy": [
        "milk",
        "cheese",
        "butter",
        "cream",
        "yogurt",
        "whey",
        "casein",
        "lactose",
        "dairy",
    ],
    "eggs": ["egg", "albumin", "mayonnaise"],
    "wheat": ["wheat", "flour", "bread", "pasta", "semolina", "spelt", "durum"],
    "gluten": ["gluten", "wheat", "barley", "rye", "bread", "pasta"],
    "soy": ["soy", "soya", "edamame", "tofu", "tempeh", "miso"],
    "fish": ["fish", "salmon", "tuna", "cod", "anchovy", "sardine", "tilapia"],
    "shellfish": [
        "shrimp",
        "crab",
        "lobster",
        "clam",
        "oyster",
        "mussel",
        "scallop",
        "shellfish",
        "prawn",
    ],
    "sesame": ["sesame", "tahini", "hummus"],
    "lactose": ["milk", "lactose", "cream", "cheese", "yogurt"],
}


class AllergenConfirmationRequired(Exception):
    """Raised when a food matching user allergies is logged unconfirmed."""

    def __init__(self, food: Food, matches: list[str]) -> None:
        super().__init__(allergy_warning(matches))
        self.food = food
        self.matches = matches


def match_allergens(food: Food, user_allergy_ids: Iterable[str]) -> list[str]:
    """Return user allergies whose keywords appear in the food name or category.

    Matching is a case-insensitive substring check, so false positives are
    possible. Unknown allergy ids are matched against the id itself, with
    underscores read as spaces.
    """
    allergy_ids = list(user_allergy_ids)
    if not allergy_ids:
        return []

    food_name = food.name.lower()
    food_category = (food.category or "").lower()
    matched: list[str] = []
    for allergy in allergy_ids:
        if allergy in matched:
            continue
        keywords = ALLERGY_KEYWORDS.get(allergy) or [allergy.lower().replace("_", " ")]
        for keyword in keywords:
            if keyword in food_name or keyword in food_category:
                matched.append(allergy)
                break
    return matched


def normalize_allergy_ids(raw: Iterable[str]) -> list[str]:
    """Lower-case and snake-case allergy ids, dropping blanks and repeats."""
    ids: list[str] = []
    for chunk in raw:
        value = chunk.strip().lower().replace(" ", "_")
        if value and value not in ids:
            ids.append(value)
    return ids


def allergy_warning(matches: list[str]) -> str:
    """Return the confirmation prompt for matched allergies."""
    return (
        f"This food may contain: {', '.join(matches)}.\n\n"
        "Do you still want to add it?"
    )


def ensure_confirmed(
    food: Food, user_allergy_ids: Iterable[str], confirmed: bool
) -> None:
    """Raise unless the food is allergen free or the user confirmed it."""
    matches = match_allergens(food, user_allergy_ids)
    if matches and not confirmed:
        raise AllergenConfirmationRequired(food, matches)
