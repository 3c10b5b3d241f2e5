# chefai/api/routes_meals.py
# TheMealDB passthrough (public)

from __future__ import annotations
import logging

from fastapi import APIRouter, HTTPException, Query

from chefai.services import mealdb
from chefai.services.errors import UpstreamError

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/meals", tags=["meals"])

def _upstream_failed(e: UpstreamError, what: str) -> HTTPException:
    log.error("%s failed: %s", what, e)
    return HTTPException(status_code=500, detail=f"Failed to {what}")

@router.get("/search")
async def search(q: str = Query(..., min_length=1)):
    try:
        return await mealdb.search_meals(q)
    except UpstreamError as e:
        raise _upstream_failed(e, "search meals")

@router.get("/random")
async def random_meal():
    try:
        meal = await mealdb.get_random_meal()
    except UpstreamError as e:
        raise _upstream_failed(e, "get random meal")
    if not meal:
        raise HTTPException(status_code=404, detail="Meal not found")
    return meal

@router.get("/categories")
async def categories():
    try:
        return {"categories": await mealdb.get_categories()}
    except UpstreamError as e:
        raise _upstream_failed(e, "get categories")

@router.get("/category/{name}")
async def by_category(name: str):
    try:
        return await mealdb.get_meals_by_category(name)
    except UpstreamError as e:
        raise _upstream_failed(e, "get meals by category")

# keep last: catches any single segment
@router.get("/{meal_id}")
async def get_meal(meal_id: str):
    try:
        meal = await mealdb.get_meal_by_id(meal_id)
    except UpstreamError as e:
        raise _upstream_failed(e, "get meal details")
    if not meal:
        raise HTTPException(status_code=404, detail="Meal not found")
    return meal
