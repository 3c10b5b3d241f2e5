# chefai/api/routes_pantry.py
# The caller's saved pantry: ingredient names fed into recipe generation

from __future__ import annotations
import logging
from typing import List

from fastapi import APIRouter, Depends

from chefai.core.deps import get_current_user
from chefai.db.init import get_db
from chefai.db.models.schemas import PantryIn, PantryOut

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/pantry", tags=["pantry"])

def normalize_pantry(items: List[str]) -> List[str]:
    # trimmed, blanks dropped, first spelling wins on case-insensitive duplicates
    seen = set()
    out: List[str] = []
    for raw in items:
        name = (raw or "").strip()
        key = name.lower()
        if not name or key in seen:
            continue
        seen.add(key)
        out.append(name)
    return out

@router.get("", response_model=PantryOut)
async def get_pantry(user=Depends(get_current_user)):
    return PantryOut(pantry=user.get("pantry") or [])

@router.put("", response_model=PantryOut)
async def save_pantry(payload: PantryIn, db=Depends(get_db), user=Depends(get_current_user)):
    pantry = normalize_pantry(payload.pantry)
    await db["users"].update_one({"_id": user["_id"]}, {"$set": {"pantry": pantry}})
    log.info("pantry saved user=%s items=%d", user["_id"], len(pantry))
    return PantryOut(pantry=pantry)
