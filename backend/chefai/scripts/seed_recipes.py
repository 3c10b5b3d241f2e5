# scripts/seed_recipes.py
# python -m chefai.scripts.seed_recipes
# Upserts a handful of public sample recipes owned by a seed admin (created if missing).
import asyncio
import logging
import os
from typing import Any, Dict, List

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import UpdateOne

from chefai.core.config import settings
from chefai.db.models.recipe import RecipeIn, new_recipe_doc
from chefai.services import auth

log = logging.getLogger("seed_recipes")

ADMIN_EMAIL = os.getenv("SEED_ADMIN_EMAIL") or "admin@chefai.local"
ADMIN_PASSWORD = os.getenv("SEED_ADMIN_PASSWORD") or "changeme123"

SAMPLES: List[Dict[str, Any]] = [
    {
        "title": "Tomato Basil Pasta",
        "description": "Quick weeknight pasta with fresh tomatoes and basil.",
        "ingredients": ["200g spaghetti", "4 ripe tomatoes", "2 cloves garlic", "1 handful basil", "2 tbsp olive oil"],
        "instructions": [
            "Cook the spaghetti in salted water until al dente.",
            "Saute garlic in olive oil, add chopped tomatoes and simmer 10 minutes.",
            "Toss pasta with the sauce and torn basil.",
        ],
        "cookingTime": 25,
        "servings": 2,
        "difficulty": "Easy",
        "cuisine": "Italian",
        "tags": ["Quick", "Vegetarian"],
        "nutrition": {"calories": 520, "protein": 16, "carbs": 88, "fat": 12},
    },
    {
        "title": "Chicken Stir Fry",
        "description": "Crisp vegetables and chicken in a soy ginger sauce.",
        "ingredients": ["300g chicken breast", "1 bell pepper", "1 head broccoli", "2 tbsp soy sauce", "1 tsp grated ginger"],
        "instructions": [
            "Slice chicken and vegetables into bite-sized pieces.",
            "Stir fry chicken over high heat until browned.",
            "Add vegetables, soy sauce and ginger; cook 5 minutes more.",
        ],
        "cookingTime": 20,
        "servings": 3,
        "difficulty": "Easy",
        "cuisine": "Asian",
        "tags": ["Quick", "High Protein"],
        "nutrition": {"calories": 310, "protein": 34, "carbs": 12, "fat": 9},
    },
    {
        "title": "Lentil Vegetable Soup",
        "description": "Hearty soup that keeps well for several days.",
        "ingredients": ["1 cup green lentils", "2 carrots", "2 celery stalks", "1 onion", "1 l vegetable stock"],
        "instructions": [
            "Dice the onion, carrots and celery.",
            "Soften the vegetables in a pot, then add lentils and stock.",
            "Simmer 35 minutes until the lentils are tender; season to taste.",
        ],
        "cookingTime": 45,
        "servings": 6,
        "difficulty": "Easy",
        "cuisine": "Mediterranean",
        "tags": ["Vegan", "Healthy"],
        "nutrition": {"calories": 240, "protein": 14, "carbs": 38, "fat": 3},
    },
    {
        "title": "Beef Bourguignon",
        "description": "Slow braised beef in red wine.",
        "ingredients": ["1 kg beef chuck", "750 ml red wine", "200g mushrooms", "150g bacon", "12 pearl onions"],
        "instructions": [
            "Brown the bacon and beef in batches.",
            "Add wine, onions and herbs; braise covered for 3 hours.",
            "Add mushrooms for the last 30 minutes.",
        ],
        "cookingTime": 210,
        "servings": 6,
        "difficulty": "Hard",
        "cuisine": "French",
        "tags": ["Comfort"],
    },
]

async def ensure_admin(db) -> Dict[str, Any]:
    user = await db["users"].find_one({"email": ADMIN_EMAIL})
    if user:
        return user
    log.info("creating seed admin %s", ADMIN_EMAIL)
    return await auth.create_user(db, "Seed Admin", ADMIN_EMAIL, ADMIN_PASSWORD, is_admin=True)

def build_ops(owner_id: str) -> List[UpdateOne]:
    ops: List[UpdateOne] = []
    for raw in SAMPLES:
        doc = new_recipe_doc(RecipeIn(**raw), owner_id)
        on_insert = {"createdAt": doc.pop("createdAt"), "comments": doc.pop("comments")}
        # title + owner is the natural key so reruns do not duplicate
        ops.append(UpdateOne(
            {"title": doc["title"], "createdBy": owner_id},
            {"$set": doc, "$setOnInsert": on_insert},
            upsert=True,
        ))
    return ops

async def seed(db) -> int:
    admin = await ensure_admin(db)
    ops = build_ops(str(admin["_id"]))
    res = await db["recipes"].bulk_write(ops, ordered=False)
    n = (res.upserted_count or 0) + (res.modified_count or 0)
    log.info("seeded recipes: upserted=%s modified=%s", res.upserted_count, res.modified_count)
    return n

async def main():
    logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    client = AsyncIOMotorClient(settings.MONGODB_URI)
    try:
        await seed(client[settings.MONGODB_DB])
    finally:
        client.close()

if __name__ == "__main__":
    asyncio.run(main())
