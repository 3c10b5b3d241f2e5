# Canonical recipe schema (collection "recipes")
from __future__ import annotations
from typing import Any, List, Literal, Mapping, Optional
from datetime import datetime

from pydantic import BaseModel, Field

Difficulty = Literal["Easy", "Medium", "Hard"]
DIFFICULTIES = ("Easy", "Medium", "Hard")

class Nutrition(BaseModel):
    calories: Optional[float] = None
    protein: Optional[float] = None
    carbs: Optional[float] = None
    fat: Optional[float] = None

class RecipeIn(BaseModel):
    title: str = Field(..., min_length=1)
    description: str
    ingredients: List[str] = Field(..., min_length=1)
    instructions: List[str] = Field(..., min_length=1)
    cookingTime: int = Field(..., ge=0)         # minutes
    servings: int = Field(..., ge=1)
    difficulty: Difficulty
    cuisine: str
    image: Optional[str] = None
    isPublic: bool = True
    tags: List[str] = Field(default_factory=list)
    nutrition: Optional[Nutrition] = None

class RecipeUpdate(BaseModel):
    # PUT body: only the fields that were sent are applied
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    ingredients: Optional[List[str]] = None
    instructions: Optional[List[str]] = None
    cookingTime: Optional[int] = Field(default=None, ge=0)
    servings: Optional[int] = Field(default=None, ge=1)
    difficulty: Optional[Difficulty] = None
    cuisine: Optional[str] = None
    image: Optional[str] = None
    isPublic: Optional[bool] = None
    tags: Optional[List[str]] = None
    nutrition: Optional[Nutrition] = None

class Comment(BaseModel):
    user: str
    text: str
    createdAt: datetime = Field(default_factory=datetime.utcnow)

class RecipeOut(RecipeIn):
    id: str
    createdBy: str
    comments: List[Comment] = Field(default_factory=list)
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

def new_recipe_doc(payload: RecipeIn, user_id: str) -> dict:
    now = datetime.utcnow()
    doc = payload.model_dump()
    doc.update({
        "createdBy": user_id,
        "comments": [],
        "createdAt": now,
        "updatedAt": now,
    })
    return doc

def to_recipe_out(doc: Mapping[str, Any]) -> RecipeOut:
    d = dict(doc)
    d["id"] = str(d.pop("_id", "") or d.get("id", ""))
    d["createdBy"] = str(d.get("createdBy") or "")
    return RecipeOut(**d)
