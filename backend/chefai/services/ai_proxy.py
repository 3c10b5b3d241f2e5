# chefai/services/ai_proxy.py
# Server-side recipe text generation for /api/ai/generate
# - no GEMINI_API_KEY → templated markdown mock
# - upstream failure → the same mock (this route never errors on Gemini outages)

from __future__ import annotations
import logging
from typing import List, Optional

from chefai.core.config import settings
from chefai.services import gemini

log = logging.getLogger(__name__)

PROMPT = (
    "Create a detailed recipe using these ingredients: {ingredients}.\n"
    "Cuisine: {cuisine}, Diet: {diet}.\n"
    "Include preparation time, cooking time, servings, and step-by-step instructions."
)


def _cap(s: str) -> str:
    return s[:1].upper() + s[1:]

def mock_recipe_text(ingredients: List[str], cuisine: Optional[str] = None, diet: Optional[str] = None) -> str:
    main = ingredients[0] if ingredients else "mixed vegetables"
    cuisine_type = cuisine or "fusion"
    diet_type = diet or "regular"
    ing_lines = "\n".join(f"- {i}" for i in ingredients)

    return f"""# {_cap(cuisine_type)} {_cap(main)} Recipe

## Ingredients:
{ing_lines}
- Salt and pepper to taste
- 2 tbsp olive oil
- 1 onion, diced
- 2 cloves garlic, minced

## Instructions:

**Prep Time:** 15 minutes
**Cook Time:** 25 minutes
**Servings:** 4

1. **Prepare ingredients:** Wash and chop all vegetables. Dice the onion and mince the garlic.

2. **Heat oil:** In a large pan, heat olive oil over medium heat.

3. **Sauté aromatics:** Add diced onion and cook for 3-4 minutes until translucent. Add minced garlic and cook for another minute.

4. **Add main ingredients:** Add {main} and other ingredients to the pan. Season with salt and pepper.

5. **Cook:** Stir frequently and cook for 15-20 minutes until everything is tender and well combined.

6. **Final seasoning:** Taste and adjust seasoning as needed.

7. **Serve:** Serve hot as a main dish or side dish.

**Chef's Note:** This {diet_type} {cuisine_type} recipe is perfect for using up fresh ingredients and can be easily customized to your taste preferences.

**Nutritional Benefits:** Rich in vitamins and minerals from fresh ingredients, this dish provides a healthy and satisfying meal option."""


async def generate_recipe_text(ingredients: List[str], cuisine: Optional[str] = None, diet: Optional[str] = None) -> str:
    if not settings.GEMINI_API_KEY:
        log.info("GEMINI_API_KEY not set, returning mock recipe")
        return mock_recipe_text(ingredients, cuisine, diet)

    try:
        return await gemini.generate_content(
            PROMPT.format(
                ingredients=", ".join(ingredients),
                cuisine=cuisine or "any",
                diet=diet or "regular",
            ),
        )
    except Exception as e:
        log.error("AI generation error, returning mock recipe: %s", e)
        return mock_recipe_text(ingredients, cuisine, diet)
