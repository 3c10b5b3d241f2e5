# chefai/services/mealdb.py
# TheMealDB lookups, reshaped into flat meal dicts.
# Detail records carry up to 20 numbered strIngredientN/strMeasureN pairs.

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

import httpx

from chefai.core.config import settings
from chefai.services.errors import UpstreamError

log = logging.getLogger(__name__)

MAX_INGREDIENT_SLOTS = 20

def _client() -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=settings.MEALDB_BASE_URL, timeout=settings.HTTP_TIMEOUT)

async def _get(path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    try:
        async with _client() as cli:
            r = await cli.get(path, params=params)
            r.raise_for_status()
            return r.json() or {}
    except httpx.HTTPError as e:
        log.error("MealDB error %s: %s", path, e)
        raise UpstreamError("mealdb", str(e)) from e

def _tags(meal: Dict[str, Any]) -> List[str]:
    raw = meal.get("strTags") or ""
    return [t.strip() for t in raw.split(",") if t.strip()]

def ingredient_pairs(meal: Dict[str, Any]) -> List[Dict[str, str]]:
    out: List[Dict[str, str]] = []
    for i in range(1, MAX_INGREDIENT_SLOTS + 1):
        ing = (meal.get(f"strIngredient{i}") or "").strip()
        if not ing:
            continue
        out.append({"ingredient": ing, "measure": (meal.get(f"strMeasure{i}") or "").strip()})
    return out

def format_search(data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "meals": [
            {
                "id": m.get("idMeal"),
                "name": m.get("strMeal"),
                "category": m.get("strCategory"),
                "area": m.get("strArea"),
                "thumbnail": m.get("strMealThumb"),
                "tags": _tags(m),
            }
            for m in data.get("meals") or []
        ]
    }

def format_list(data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "meals": [
            {"id": m.get("idMeal"), "name": m.get("strMeal"), "thumbnail": m.get("strMealThumb")}
            for m in data.get("meals") or []
        ]
    }

def format_details(data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    meals = data.get("meals") or []
    if not meals:
        return None
    m = meals[0]
    return {
        "id": m.get("idMeal"),
        "name": m.get("strMeal"),
        "category": m.get("strCategory"),
        "area": m.get("strArea"),
        "instructions": m.get("strInstructions"),
        "thumbnail": m.get("strMealThumb"),
        "youtube": m.get("strYoutube"),
        "source": m.get("strSource"),
        "tags": _tags(m),
        "ingredients": ingredient_pairs(m),
    }

async def search_meals(query: str) -> Dict[str, Any]:
    return format_search(await _get("/search.php", {"s": query}))

async def get_meal_by_id(meal_id: str) -> Optional[Dict[str, Any]]:
    return format_details(await _get("/lookup.php", {"i": meal_id}))

async def get_random_meal() -> Optional[Dict[str, Any]]:
    return format_details(await _get("/random.php"))

async def get_meals_by_category(category: str) -> Dict[str, Any]:
    return format_list(await _get("/filter.php", {"c": category}))

async def get_categories() -> List[Dict[str, Any]]:
    data = await _get("/categories.php")
    return data.get("categories") or []
