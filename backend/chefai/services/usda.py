# chefai/services/usda.py
# USDA FoodData Central: search + detail, nutrients reshaped to {name, value, unit}

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

import httpx

from chefai.core.config import settings
from chefai.services.errors import UpstreamError

log = logging.getLogger(__name__)

def _client() -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=settings.USDA_BASE_URL, timeout=settings.HTTP_TIMEOUT)

async def _get(path: str, params: Dict[str, Any]) -> Dict[str, Any]:
    params = {**params, "api_key": settings.USDA_API_KEY}
    try:
        async with _client() as cli:
            r = await cli.get(path, params=params)
            r.raise_for_status()
            return r.json()
    except httpx.HTTPError as e:
        log.error("USDA API error: %s", e)
        raise UpstreamError("usda", str(e)) from e

def _nutrients(food: Dict[str, Any], with_daily_value: bool = False) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for n in food.get("foodNutrients") or []:
        # search hits are flat; /food/{id} nests name/unit under "nutrient"
        inner = n.get("nutrient") or {}
        item = {
            "name": n.get("nutrientName") or inner.get("name"),
            "value": n.get("value", n.get("amount")),
            "unit": n.get("unitName") or inner.get("unitName"),
        }
        if with_daily_value:
            item["dailyValue"] = n.get("percentDailyValue")
        out.append(item)
    return out

def format_search(data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "totalHits": data.get("totalHits", 0),
        "foods": [
            {
                "fdcId": f.get("fdcId"),
                "description": f.get("description"),
                "dataType": f.get("dataType"),
                "ingredients": f.get("ingredients") or "",
                "nutrients": _nutrients(f),
            }
            for f in data.get("foods") or []
        ],
    }

def format_details(data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "fdcId": data.get("fdcId"),
        "description": data.get("description"),
        "ingredients": data.get("ingredients") or "",
        "nutrients": _nutrients(data, with_daily_value=True),
    }

async def search_foods(query: str, data_type: str = "Foundation", page_size: int = 10) -> Dict[str, Any]:
    data = await _get("/foods/search", {"query": query, "dataType": data_type, "pageSize": page_size})
    return format_search(data)

async def get_food_details(fdc_id: int) -> Dict[str, Any]:
    data = await _get(f"/food/{fdc_id}", {})
    return format_details(data)

async def nutrition_for(ingredient: str) -> Optional[Dict[str, Any]]:
    """first Foundation hit as {name, nutrients: {nutrientName: "value unit"}}; None when no hit"""
    result = await search_foods(ingredient, data_type="Foundation")
    if not result["foods"]:
        return None
    food = result["foods"][0]
    return {
        "name": food["description"],
        "nutrients": {n["name"]: f"{n['value']} {n['unit']}" for n in food["nutrients"] if n["name"]},
    }
