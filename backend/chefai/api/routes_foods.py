# chefai/api/routes_foods.py
# USDA FoodData Central passthrough (public)

from __future__ import annotations
import logging

from fastapi import APIRouter, HTTPException, Query

from chefai.services import usda
from chefai.services.errors import UpstreamError

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/foods", tags=["foods"])

@router.get("/search")
async def search(
    q: str = Query(..., min_length=1),
    dataType: str = "Foundation",
    pageSize: int = Query(10, ge=1, le=50),
):
    try:
        return await usda.search_foods(q, data_type=dataType, page_size=pageSize)
    except UpstreamError as e:
        log.error("food search failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to search foods")

@router.get("/{fdc_id}")
async def details(fdc_id: int):
    try:
        return await usda.get_food_details(fdc_id)
    except UpstreamError as e:
        log.error("food details failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to get food details")
