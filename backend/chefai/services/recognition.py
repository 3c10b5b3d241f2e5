# chefai/services/recognition.py
# Photo → ingredient guesses (Gemini multimodal)
# - the reply's JSON array is schema-checked; confidence ≤ 0.5 is dropped
# - on any failure the fixed two-item mock is returned with fallback=True
#   (AI_STRICT_PARSING=true raises instead)

from __future__ import annotations
import logging
import re
import time
from typing import Any, Dict, List, Optional, Sequence

from chefai.core.config import settings
from chefai.models.ai import DetectedIngredient, NutritionAnalysis, RecognitionResult
from chefai.services import gemini
from chefai.services.errors import EmptyInput
from chefai.services.generation import generate_recipes, ingredient_name
from chefai.services.parsing import parse_list, parse_object

log = logging.getLogger(__name__)

MIN_CONFIDENCE = 0.5

CATEGORY_COLORS: Dict[str, str] = {
    "Vegetables": "#4CAF50",
    "Fruits": "#FF9800",
    "Protein": "#F44336",
    "Dairy": "#2196F3",
    "Grains": "#795548",
    "Spices": "#9C27B0",
    "Herbs": "#8BC34A",
    "Nuts": "#FF5722",
    "Oils": "#FFC107",
}
DEFAULT_COLOR = "#607D8B"

DATA_URI_RE = re.compile(r"^data:image/[a-z]+;base64,")

PROMPT = """
Analyze this image and identify all food ingredients, fruits, vegetables, and cooking items visible.

For each item detected, provide:
1. Name of the ingredient
2. Confidence level (0.0 to 1.0)
3. Category (Vegetables, Fruits, Protein, Dairy, Grains, Spices, etc.)
4. Approximate bounding box coordinates (normalized 0-1)
5. Freshness assessment if applicable (Fresh, Good, Fair)

Return the results as a valid JSON array:
[
  {
    "name": "Ingredient Name",
    "confidence": 0.95,
    "category": "Vegetables",
    "freshness": "Fresh",
    "boundingBox": {"x": 0.1, "y": 0.2, "width": 0.3, "height": 0.4}
  }
]

Only include items that are clearly food ingredients. Exclude plates, utensils, or packaging unless they contain identifiable ingredients.
""".strip()

NUTRITION_PROMPT = """
Based on the detected ingredients: {ingredients}, provide a nutritional analysis.

Estimate the total nutritional value including:
- Calories per serving
- Macronutrients (protein, carbs, fat)
- Key vitamins and minerals
- Health benefits
- Dietary considerations

Return as JSON:
{{
  "totalCalories": 250,
  "macronutrients": {{"protein": "15g", "carbs": "30g", "fat": "8g"}},
  "vitamins": ["Vitamin C", "Vitamin A"],
  "healthBenefits": ["High in antioxidants", "Good source of fiber"],
  "dietaryTags": ["Vegetarian", "Gluten-Free"]
}}
""".strip()


def category_color(category: Optional[str]) -> str:
    return CATEGORY_COLORS.get(category or "", DEFAULT_COLOR)

def strip_data_uri(image_data: str) -> str:
    return DATA_URI_RE.sub("", image_data)

def _now_ms() -> int:
    return int(time.time() * 1000)

def mock_detection() -> List[DetectedIngredient]:
    # fixed substitute list; colours are part of it, not derived from the category
    now = _now_ms()
    return [
        DetectedIngredient(
            id=now,
            name="Tomatoes",
            confidence=0.92,
            category="Vegetables",
            freshness="Fresh",
            color="#F44336",
            boundingBox={"x": 0.2, "y": 0.3, "width": 0.25, "height": 0.3},
        ),
        DetectedIngredient(
            id=now + 1,
            name="Bell Peppers",
            confidence=0.87,
            category="Vegetables",
            freshness="Good",
            color="#4CAF50",
            boundingBox={"x": 0.5, "y": 0.2, "width": 0.3, "height": 0.35},
        ),
    ]

def _postprocess(items: List[DetectedIngredient]) -> List[DetectedIngredient]:
    now = _now_ms()
    kept = [it for it in items if it.confidence > MIN_CONFIDENCE]
    return [
        it.model_copy(update={"id": now + i, "color": category_color(it.category)})
        for i, it in enumerate(kept)
    ]


async def recognize_ingredients(image_data: str, mime_type: Optional[str] = "image/jpeg") -> RecognitionResult:
    if not image_data:
        raise EmptyInput("No image data provided for ingredient recognition")

    try:
        text = await gemini.complete(
            PROMPT,
            model=settings.GEMINI_VISION_MODEL,
            temperature=0.3,
            max_tokens=1024,
            image_b64=strip_data_uri(image_data),
            mime_type=mime_type or "image/jpeg",
        )
        items = parse_list(text, DetectedIngredient)
        return RecognitionResult(ingredients=_postprocess(items))
    except Exception as e:
        if settings.AI_STRICT_PARSING:
            raise
        log.warning("ingredient recognition failed, using mock detection: %s", e)
        return RecognitionResult(ingredients=mock_detection(), fallback=True, error=str(e))


async def analyze_nutrition(image_data: str, detected: Sequence[Any]) -> Optional[NutritionAnalysis]:
    # best effort: None on any failure
    try:
        names = ", ".join(ingredient_name(d) for d in detected)
        text = await gemini.complete(
            NUTRITION_PROMPT.format(ingredients=names),
            model=settings.GEMINI_VISION_MODEL,
            temperature=0.3,
            max_tokens=1024,
            image_b64=strip_data_uri(image_data) if image_data else None,
        )
        return parse_object(text, NutritionAnalysis)
    except Exception as e:
        log.warning("nutrition analysis failed: %s", e)
        return None


async def suggest_recipes(detected: Sequence[Any]) -> list:
    # detected ingredients → generation adapter; [] on failure
    try:
        result = await generate_recipes([ingredient_name(d) for d in detected], {})
        return result.recipes
    except Exception as e:
        log.warning("recipe suggestion failed: %s", e)
        return []

