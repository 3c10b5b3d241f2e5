# chefai/db/models/schemas.py
# Request / response bodies (field names follow the frontend's camelCase)
from __future__ import annotations
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from chefai.models.ai import DetectedIngredient, DietaryFilters

# --- auth ---------------------------------------------------------------------
class RegisterIn(BaseModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=6)

class LoginIn(BaseModel):
    email: str
    password: str

class UserOut(BaseModel):
    id: str
    name: str
    email: str
    isAdmin: bool = False
    favorites: List[str] = Field(default_factory=list)

class AuthOut(BaseModel):
    token: str
    user: UserOut

def to_user_out(user: Dict[str, Any]) -> UserOut:
    return UserOut(
        id=str(user["_id"]),
        name=user.get("name", ""),
        email=user.get("email", ""),
        isAdmin=bool(user.get("is_admin")),
        favorites=[str(f) for f in user.get("favorites") or []],
    )

# --- recipes ------------------------------------------------------------------
class CommentIn(BaseModel):
    text: str = Field(..., min_length=1)

class FavoritesOut(BaseModel):
    favorites: List[str]

# --- pantry -------------------------------------------------------------------
class PantryIn(BaseModel):
    pantry: List[str]

class PantryOut(BaseModel):
    pantry: List[str] = Field(default_factory=list)

# --- ai proxy -----------------------------------------------------------------
class GenerateIn(BaseModel):
    ingredients: List[str] = Field(default_factory=list)
    cuisine: Optional[str] = None
    diet: Optional[str] = None

class GenerateOut(BaseModel):
    recipe: str

class IdentifyIn(BaseModel):
    imageUrl: Optional[str] = None
    imageBase64: Optional[str] = None

class IdentifyOut(BaseModel):
    ingredients: List[str]

class NutritionIn(BaseModel):
    ingredient: str = Field(..., min_length=1)

class NutritionOut(BaseModel):
    name: str
    nutrients: Dict[str, str]

class VisionIn(BaseModel):
    imageBase64: str

# --- ai adapters --------------------------------------------------------------
class RecognizeIn(BaseModel):
    image: str = ""                       # base64 or data URI
    mimeType: Optional[str] = "image/jpeg"

class IngredientRef(BaseModel):
    model_config = ConfigDict(extra="ignore")
    name: str

class RecipesIn(BaseModel):
    ingredients: List[Union[str, IngredientRef]] = Field(default_factory=list)
    dietaryFilters: DietaryFilters = Field(default_factory=DietaryFilters)

class AnalyzeNutritionIn(BaseModel):
    image: str = ""
    ingredients: List[DetectedIngredient] = Field(default_factory=list)

class SuggestIn(BaseModel):
    ingredients: List[DetectedIngredient] = Field(default_factory=list)
