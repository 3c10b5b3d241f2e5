# chefai/api/routes_recipes.py
# Recipe CRUD + favorites + comments
# - mutations require the creator or an admin (401 otherwise)
# - no versioning: concurrent PUTs are last-writer-wins

from __future__ import annotations
from typing import Any, Dict, List, Optional
from datetime import datetime
import logging
import re

from bson import ObjectId
from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError

from chefai.core.deps import get_current_user, get_optional_user
from chefai.db.init import get_db
from chefai.db.models.recipe import (
    Comment,
    RecipeIn,
    RecipeOut,
    RecipeUpdate,
    new_recipe_doc,
    to_recipe_out,
)
from chefai.db.models.schemas import CommentIn, FavoritesOut
from chefai.models.ai import GeneratedRecipe

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/recipes", tags=["recipes"])

RECENT_LIMIT = 10
NULLABLE_FIELDS = {"image", "nutrition"}

# ------------------------------
# helpers
# ------------------------------

def _oid(rid: str) -> ObjectId:
    if not ObjectId.is_valid(rid):
        raise HTTPException(status_code=400, detail=f"'{rid}' is not a valid ObjectId")
    return ObjectId(rid)

def _can_modify(recipe: Dict[str, Any], user: Dict[str, Any]) -> bool:
    return str(recipe.get("createdBy")) == str(user["_id"]) or bool(user.get("is_admin"))

def _visible(recipe: Dict[str, Any], user: Optional[Dict[str, Any]]) -> bool:
    if recipe.get("isPublic", True):
        return True
    return user is not None and _can_modify(recipe, user)

async def _find(db, rid: str) -> Dict[str, Any]:
    recipe = await db["recipes"].find_one({"_id": _oid(rid)})
    if not recipe:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return recipe

async def _load(db, rid: str, user: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    # read access: private recipes look missing to everyone but owner/admin
    recipe = await _find(db, rid)
    if not _visible(recipe, user):
        raise HTTPException(status_code=404, detail="Recipe not found")
    return recipe

async def _insert(db, payload: RecipeIn, user: Dict[str, Any]) -> RecipeOut:
    doc = new_recipe_doc(payload, str(user["_id"]))
    result = await db["recipes"].insert_one(doc)
    doc["_id"] = result.inserted_id
    log.info("recipe created id=%s by=%s", result.inserted_id, user["_id"])
    return to_recipe_out(doc)

# ------------------------------
# list / create
# ------------------------------

@router.get("", response_model=List[RecipeOut])
async def list_recipes(
    search: Optional[str] = None,
    tags: Optional[str] = Query(None, description="comma separated, matches any"),
    difficulty: Optional[str] = None,
    time: Optional[int] = Query(None, ge=0, description="max cookingTime (minutes)"),
    limit: int = Query(50, ge=1, le=100),
    skip: int = Query(0, ge=0),
    db=Depends(get_db),
    user=Depends(get_optional_user),
):
    query: Dict[str, Any] = {}
    if search:
        query["title"] = {"$regex": re.escape(search), "$options": "i"}
    if tags:
        wanted = [t.strip() for t in tags.split(",") if t.strip()]
        if wanted:
            query["tags"] = {"$in": wanted}
    if difficulty:
        query["difficulty"] = difficulty
    if time is not None:
        query["cookingTime"] = {"$lte": time}

    # private recipes only for their owner (admins see everything)
    if user is None:
        query["isPublic"] = {"$ne": False}
    elif not user.get("is_admin"):
        query["$or"] = [{"isPublic": {"$ne": False}}, {"createdBy": str(user["_id"])}]

    cursor = db["recipes"].find(query, sort=[("createdAt", -1)], skip=skip, limit=limit)
    docs = await cursor.to_list(length=limit)
    return [to_recipe_out(d) for d in docs]

@router.post("", response_model=RecipeOut, status_code=201)
async def create_recipe(payload: RecipeIn, db=Depends(get_db), user=Depends(get_current_user)):
    return await _insert(db, payload, user)

@router.post("/generated", response_model=RecipeOut, status_code=201)
async def save_generated_recipe(payload: GeneratedRecipe, db=Depends(get_db), user=Depends(get_current_user)):
    """Store an AI-generated recipe in the canonical recipe schema."""
    try:
        recipe_in = payload.to_recipe_in()
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=f"generated recipe is incomplete ({e.error_count()} error(s))")
    return await _insert(db, recipe_in, user)

@router.get("/recent", response_model=List[RecipeOut])
async def list_recent(db=Depends(get_db), user=Depends(get_current_user)):
    """The caller's own newest recipes, private ones included."""
    cursor = db["recipes"].find(
        {"createdBy": str(user["_id"])},
        sort=[("createdAt", -1)],
        limit=RECENT_LIMIT,
    )
    docs = await cursor.to_list(length=RECENT_LIMIT)
    return [to_recipe_out(d) for d in docs]

@router.get("/favorites", response_model=List[RecipeOut])
async def list_favorites(db=Depends(get_db), user=Depends(get_current_user)):
    ids = [ObjectId(f) for f in (user.get("favorites") or []) if ObjectId.is_valid(f)]
    if not ids:
        return []
    docs = await db["recipes"].find({"_id": {"$in": ids}}).to_list(length=len(ids))
    return [to_recipe_out(d) for d in docs if _visible(d, user)]

# ------------------------------
# single recipe
# ------------------------------

@router.get("/{rid}", response_model=RecipeOut)
async def get_recipe(rid: str, db=Depends(get_db), user=Depends(get_optional_user)):
    return to_recipe_out(await _load(db, rid, user))

@router.put("/{rid}", response_model=RecipeOut)
async def update_recipe(rid: str, payload: RecipeUpdate, db=Depends(get_db), user=Depends(get_current_user)):
    recipe = await _find(db, rid)
    if not _can_modify(recipe, user):
        raise HTTPException(status_code=401, detail="Not authorized")

    # null clears optional fields; null on a required field is ignored
    updates = {
        k: v for k, v in payload.model_dump(exclude_unset=True).items()
        if v is not None or k in NULLABLE_FIELDS
    }
    updates["updatedAt"] = datetime.utcnow()
    await db["recipes"].update_one({"_id": recipe["_id"]}, {"$set": updates})

    fresh = await db["recipes"].find_one({"_id": recipe["_id"]})
    return to_recipe_out(fresh)

@router.delete("/{rid}")
async def delete_recipe(rid: str, db=Depends(get_db), user=Depends(get_current_user)):
    recipe = await _find(db, rid)
    if not _can_modify(recipe, user):
        raise HTTPException(status_code=401, detail="Not authorized")

    await db["recipes"].delete_one({"_id": recipe["_id"]})
    # drop dangling favorites
    await db["users"].update_many({"favorites": rid}, {"$pull": {"favorites": rid}})
    log.info("recipe deleted id=%s by=%s", rid, user["_id"])
    return {"message": "Recipe removed"}

@router.post("/{rid}/favorite", response_model=FavoritesOut)
async def toggle_favorite(rid: str, db=Depends(get_db), user=Depends(get_current_user)):
    recipe = await _load(db, rid, user)
    key = str(recipe["_id"])

    if key in (user.get("favorites") or []):
        op = {"$pull": {"favorites": key}}
    else:
        op = {"$addToSet": {"favorites": key}}
    await db["users"].update_one({"_id": user["_id"]}, op)

    fresh = await db["users"].find_one({"_id": user["_id"]}, {"favorites": 1})
    return FavoritesOut(favorites=(fresh or {}).get("favorites") or [])

@router.post("/{rid}/comments", response_model=List[Comment], status_code=201)
async def add_comment(rid: str, payload: CommentIn, db=Depends(get_db), user=Depends(get_current_user)):
    recipe = await _load(db, rid, user)
    comment = Comment(user=str(user["_id"]), text=payload.text)
    await db["recipes"].update_one({"_id": recipe["_id"]}, {"$push": {"comments": comment.model_dump()}})

    fresh = await db["recipes"].find_one({"_id": recipe["_id"]}, {"comments": 1})
    return (fresh or {}).get("comments") or []
