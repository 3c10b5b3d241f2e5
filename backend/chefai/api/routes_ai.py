# chefai/api/routes_ai.py
# AI proxy + ingredient/recipe adapters (login required for every route)
# - /generate never fails on upstream errors (mock recipe text instead)
# - /recognize, /recipes report fallback=True when the mock was used

from __future__ import annotations
import logging

from fastapi import APIRouter, Depends, HTTPException

from chefai.core.deps import get_current_user
from chefai.db.models.schemas import (
    AnalyzeNutritionIn,
    GenerateIn,
    GenerateOut,
    IdentifyIn,
    IdentifyOut,
    NutritionIn,
    NutritionOut,
    RecipesIn,
    RecognizeIn,
    SuggestIn,
    VisionIn,
)
from chefai.models.ai import GenerationResult, RecognitionResult
from chefai.services import ai_proxy, generation, recognition, usda, vision_google
from chefai.services.errors import AINotReady, EmptyInput, MalformedResponse, UpstreamError

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ai", tags=["ai"], dependencies=[Depends(get_current_user)])

# ------------------------------
# proxy routes
# ------------------------------

@router.post("/generate", response_model=GenerateOut)
async def generate(payload: GenerateIn):
    text = await ai_proxy.generate_recipe_text(payload.ingredients, payload.cuisine, payload.diet)
    return GenerateOut(recipe=text)

@router.post("/identify", response_model=IdentifyOut)
async def identify(payload: IdentifyIn):
    try:
        labels = await vision_google.detect_labels(
            image_url=payload.imageUrl,
            content_b64=payload.imageBase64,
        )
    except AINotReady as e:
        raise HTTPException(status_code=503, detail=str(e))
    except EmptyInput as e:
        raise HTTPException(status_code=400, detail=str(e))
    except UpstreamError as e:
        log.error("identify failed: %s", e)
        raise HTTPException(status_code=500, detail="Ingredient identification failed")
    return IdentifyOut(ingredients=labels)

@router.post("/nutrition", response_model=NutritionOut)
async def nutrition(payload: NutritionIn):
    try:
        found = await usda.nutrition_for(payload.ingredient)
    except UpstreamError as e:
        log.error("nutrition lookup failed: %s", e)
        raise HTTPException(status_code=500, detail="Nutrition lookup failed")
    if not found:
        raise HTTPException(status_code=404, detail="Nutrition data not found")
    return NutritionOut(**found)

@router.post("/vision")
async def vision(payload: VisionIn):
    """labels / objects / webEntities, scores as integer percentages"""
    try:
        return await vision_google.analyze_image(payload.imageBase64)
    except AINotReady as e:
        raise HTTPException(status_code=503, detail=str(e))
    except EmptyInput as e:
        raise HTTPException(status_code=400, detail=str(e))
    except UpstreamError as e:
        log.error("vision analysis failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to analyze image")

# ------------------------------
# adapter routes
# ------------------------------

@router.post("/recognize", response_model=RecognitionResult)
async def recognize(payload: RecognizeIn):
    try:
        return await recognition.recognize_ingredients(payload.image, payload.mimeType)
    except EmptyInput as e:
        raise HTTPException(status_code=400, detail=str(e))
    except AINotReady as e:
        raise HTTPException(status_code=503, detail=str(e))
    except (MalformedResponse, UpstreamError) as e:
        # only reachable with AI_STRICT_PARSING
        log.error("recognition failed: %s", e)
        raise HTTPException(status_code=500, detail="Ingredient recognition failed")

@router.post("/recipes", response_model=GenerationResult)
async def recipes(payload: RecipesIn):
    try:
        return await generation.generate_recipes(payload.ingredients, payload.dietaryFilters)
    except EmptyInput as e:
        raise HTTPException(status_code=400, detail=str(e))
    except AINotReady as e:
        raise HTTPException(status_code=503, detail=str(e))
    except (MalformedResponse, UpstreamError) as e:
        log.error("recipe generation failed: %s", e)
        raise HTTPException(status_code=500, detail="Recipe generation failed")

@router.post("/analyze-nutrition")
async def analyze_nutrition(payload: AnalyzeNutritionIn):
    if not payload.ingredients:
        raise HTTPException(status_code=400, detail="No ingredients provided for nutrition analysis")
    analysis = await recognition.analyze_nutrition(payload.image, payload.ingredients)
    return {"analysis": analysis}

@router.post("/suggest")
async def suggest(payload: SuggestIn):
    return {"recipes": await recognition.suggest_recipes(payload.ingredients)}
