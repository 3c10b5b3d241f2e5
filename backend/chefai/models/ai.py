# chefai/models/ai.py
# Shapes produced by the AI adapters (never stored as-is).
# GeneratedRecipe.to_recipe_in() is the only bridge to the stored recipe schema.

from __future__ import annotations
from typing import Dict, List, Optional
import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

from chefai.db.models.recipe import DIFFICULTIES, Nutrition, RecipeIn

class BoundingBox(BaseModel):
    x: float
    y: float
    width: float
    height: float

class DetectedIngredient(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    name: str = Field(..., min_length=1)
    confidence: float = Field(..., ge=0.0, le=1.0)
    category: Optional[str] = None
    freshness: Optional[str] = None
    boundingBox: Optional[BoundingBox] = None
    color: Optional[str] = None

class GeneratedIngredient(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    amount: str = ""
    category: str = ""

    @field_validator("amount", "category", mode="before")
    @classmethod
    def _v_none_to_empty(cls, v):
        return "" if v is None else str(v)

class GeneratedRecipe(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    name: str = Field(..., min_length=1)
    description: str = ""
    cookTime: str = ""
    difficulty: str = "Easy"
    servings: Optional[int] = None
    calories: Optional[int] = None
    ingredients: List[GeneratedIngredient] = Field(default_factory=list)
    steps: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    cuisine: str = ""
    rating: Optional[float] = None
    image: Optional[str] = None

    @field_validator("cookTime", mode="before")
    @classmethod
    def _v_cook_time(cls, v):
        # models sometimes send a bare number of minutes
        if isinstance(v, (int, float)):
            return f"{int(v)} min"
        return v or ""

    @field_validator("ingredients", mode="before")
    @classmethod
    def _v_ingredients(cls, v):
        if v is None:
            return []
        if not isinstance(v, list):
            raise ValueError("ingredients must be a list")
        return [{"name": x} if isinstance(x, str) else x for x in v]

    def cook_minutes(self) -> int:
        text = self.cookTime.lower()
        hours = re.search(r"(\d+)\s*(?:h|hr|hrs|hour|hours)\b", text)
        mins = re.search(r"(\d+)\s*(?:m|min|mins|minute|minutes)\b", text)
        if hours or mins:
            return (int(hours.group(1)) * 60 if hours else 0) + (int(mins.group(1)) if mins else 0)
        bare = re.search(r"\d+", text)
        return int(bare.group(0)) if bare else 0

    def to_recipe_in(self) -> RecipeIn:
        difficulty = (self.difficulty or "").strip().capitalize()
        if difficulty not in DIFFICULTIES:
            difficulty = "Medium"
        lines = [f"{i.amount} {i.name}".strip() for i in self.ingredients if i.name]
        return RecipeIn(
            title=self.name,
            description=self.description or self.name,
            ingredients=lines,
            instructions=self.steps,
            cookingTime=self.cook_minutes(),
            servings=self.servings or 1,
            difficulty=difficulty,
            cuisine=self.cuisine or "Any",
            image=self.image,
            tags=self.tags,
            nutrition=Nutrition(calories=self.calories) if self.calories is not None else None,
        )

class DietaryFilters(BaseModel):
    # flat flags, combinations are not checked for conflicts
    model_config = ConfigDict(extra="ignore")

    vegetarian: bool = False
    vegan: bool = False
    glutenFree: bool = False
    dairyFree: bool = False
    lowCarb: bool = False
    highProtein: bool = False
    lowCalorie: bool = False

class NutritionAnalysis(BaseModel):
    model_config = ConfigDict(extra="ignore")

    totalCalories: Optional[float] = None
    macronutrients: Dict[str, str] = Field(default_factory=dict)
    vitamins: List[str] = Field(default_factory=list)
    healthBenefits: List[str] = Field(default_factory=list)
    dietaryTags: List[str] = Field(default_factory=list)

    @field_validator("macronutrients", mode="before")
    @classmethod
    def _v_macros(cls, v):
        if v is None:
            return {}
        if not isinstance(v, dict):
            raise ValueError("macronutrients must be an object")
        return {str(k): str(val) for k, val in v.items()}

# Adapter results: `fallback` is True when the data is the built-in substitute
class RecognitionResult(BaseModel):
    ingredients: List[DetectedIngredient]
    fallback: bool = False
    error: Optional[str] = None

class GenerationResult(BaseModel):
    recipes: List[GeneratedRecipe]
    fallback: bool = False
    error: Optional[str] = None
