# chefai/services/generation.py
# Ingredients + dietary flags → 3 generated recipes (Gemini text)
# - empty ingredient list raises before any call
# - on any failure a single "Simple Ingredient Medley" is returned with fallback=True
#   (AI_STRICT_PARSING=true raises instead)
# - no retry / caching / dedup of repeated requests

from __future__ import annotations
import logging
import random
import re
import time
from typing import Any, List, Mapping, Optional, Sequence, Union

from chefai.core.config import settings
from chefai.models.ai import DietaryFilters, GeneratedRecipe, GenerationResult
from chefai.services import gemini
from chefai.services.errors import EmptyInput
from chefai.services.parsing import parse_list

log = logging.getLogger(__name__)

STOCK_IMAGE = "https://images.unsplash.com/photo-1546069901-ba9599a7e63c?w=400&h=300&fit=crop"
FALLBACK_INGREDIENTS = 6

# flag → prompt label, in prompt order
FILTER_LABELS = [
    ("vegetarian", "vegetarian"),
    ("vegan", "vegan"),
    ("glutenFree", "gluten-free"),
    ("dairyFree", "dairy-free"),
    ("lowCarb", "low-carb"),
    ("highProtein", "high-protein"),
    ("lowCalorie", "low-calorie"),
]

PROMPT = """
Create 3 unique, practical recipes using these ingredients: {ingredients}

Dietary requirements: {requirements}

For each recipe, provide:
1. Recipe name (creative but descriptive)
2. Brief description (1-2 sentences)
3. Cooking time in minutes
4. Difficulty level (Easy/Medium/Hard)
5. Number of servings
6. Estimated calories per serving
7. Complete ingredient list with measurements
8. Step-by-step cooking instructions (6-8 steps)
9. 3-4 relevant tags (e.g., Healthy, Quick, Comfort Food)
10. Cuisine type if applicable

Format the response as valid JSON array with this structure:
[
  {{
    "name": "Recipe Name",
    "description": "Brief description",
    "cookTime": "25 min",
    "difficulty": "Easy",
    "servings": 4,
    "calories": 320,
    "ingredients": [
      {{"name": "ingredient", "amount": "1 cup", "category": "vegetable"}}
    ],
    "steps": ["Step 1", "Step 2"],
    "tags": ["tag1", "tag2", "tag3"],
    "cuisine": "Mediterranean"
  }}
]
""".strip()

IngredientLike = Union[str, Mapping[str, Any], Any]


def ingredient_name(item: IngredientLike) -> str:
    # plain string, dict with "name", or any object with .name
    if isinstance(item, str):
        return item
    if isinstance(item, Mapping):
        return str(item.get("name") or "")
    return str(getattr(item, "name", "") or "")

def format_dietary_filters(filters: Union[DietaryFilters, Mapping[str, Any], None]) -> str:
    if filters is None:
        filters = DietaryFilters()
    elif not isinstance(filters, DietaryFilters):
        filters = DietaryFilters.model_validate(dict(filters))
    labels = [label for flag, label in FILTER_LABELS if getattr(filters, flag)]
    return ", ".join(labels) if labels else "no specific dietary restrictions"

def generate_rating() -> float:
    return round(random.uniform(4.0, 5.0), 1)

def recipe_image_url(name: str) -> str:
    # stock photo; the slug only varies the URL, it does not pick the image
    term = re.sub(r"[^a-zA-Z0-9\s]", "", (name or "").lower())
    term = re.sub(r"\s+", "%20", term)
    return f"{STOCK_IMAGE}&q=80&{term}"

def fallback_recipes(ingredients: Sequence[IngredientLike]) -> List[GeneratedRecipe]:
    return [
        GeneratedRecipe(
            id=int(time.time() * 1000),
            name="Simple Ingredient Medley",
            description="A quick and nutritious dish using your available ingredients.",
            cookTime="20 min",
            difficulty="Easy",
            servings=4,
            calories=280,
            rating=4.5,
            ingredients=[
                {"name": ingredient_name(i), "amount": "as needed", "category": "mixed"}
                for i in list(ingredients)[:FALLBACK_INGREDIENTS]
            ],
            steps=[
                "Prepare all ingredients by washing and chopping",
                "Heat oil in a large pan or wok",
                "Add harder vegetables first and cook for 3-4 minutes",
                "Add remaining ingredients and seasonings",
                "Cook until tender but still crisp",
                "Serve immediately while hot",
            ],
            tags=["Quick", "Healthy", "Simple"],
            cuisine="Fusion",
            image=STOCK_IMAGE,
        )
    ]


async def generate_recipes(
    ingredients: Sequence[IngredientLike],
    dietary_filters: Union[DietaryFilters, Mapping[str, Any], None] = None,
) -> GenerationResult:
    if not ingredients:
        raise EmptyInput("No ingredients provided for recipe generation")

    try:
        prompt = PROMPT.format(
            ingredients=", ".join(ingredient_name(i) for i in ingredients),
            requirements=format_dietary_filters(dietary_filters),
        )
        text = await gemini.complete(
            prompt,
            model=settings.GEMINI_TEXT_MODEL,
            temperature=0.7,
            max_tokens=2048,
        )
        recipes = parse_list(text, GeneratedRecipe)
        now = int(time.time() * 1000)
        return GenerationResult(recipes=[
            r.model_copy(update={
                "id": now + i,
                "rating": generate_rating(),
                "image": recipe_image_url(r.name),
            })
            for i, r in enumerate(recipes)
        ])
    except Exception as e:
        if settings.AI_STRICT_PARSING:
            raise
        log.warning("recipe generation failed, using fallback recipe: %s", e)
        return GenerationResult(recipes=fallback_recipes(ingredients), fallback=True, error=str(e))
