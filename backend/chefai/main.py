# chefai/main.py
# FastAPI app setup and router wiring
# each router defines its own prefix

from __future__ import annotations

import logging
from asyncio import sleep
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chefai.api.routes_ai import router as ai_router
from chefai.api.routes_auth import router as auth_router
from chefai.api.routes_foods import router as foods_router
from chefai.api.routes_meals import router as meals_router
from chefai.api.routes_pantry import router as pantry_router
from chefai.api.routes_recipes import router as recipes_router
from chefai.core.config import settings
from chefai.db.indexes import ensure_indexes
from chefai.db.init import close_db, get_db, init_db

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger("chefai")

DB_RETRIES = 20

app = FastAPI(title="ChefAI - API", version="0.1.0")

# CORS: frontend origins from settings, cookies allowed
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CLIENT_URLS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("startup")
async def on_startup() -> None:
    # 1) connect first (up to 20 tries, 1s apart)
    db = None
    for i in range(DB_RETRIES):
        try:
            db = await init_db()
            log.info("[startup] db ready")
            break
        except Exception as e:
            log.warning("[startup] db init retry %d: %s", i + 1, e)
            await sleep(1.0)
    if db is None:
        log.error("[startup] db init failed after %d retries", DB_RETRIES)
        return

    # 2) indexes
    try:
        await ensure_indexes()
        log.info("[startup] indexes ensured")
    except Exception as e:
        log.error("[startup] ensure_indexes failed: %s", e)

    if not settings.GEMINI_API_KEY:
        log.warning("[startup] GEMINI_API_KEY not set; AI routes will serve mock data")

@app.on_event("shutdown")
async def on_shutdown() -> None:
    await close_db()

@app.get("/")
async def root():
    return {"status": "ok"}

@app.get("/health")
async def health():
    ok = {"status": "ok", "db": "skip"}
    try:
        db = get_db()
        await db.command("ping")
        ok["db"] = "ok"
    except Exception as e:
        ok["db"] = f"error: {e}"
    return ok

app.include_router(auth_router)
app.include_router(recipes_router)
app.include_router(pantry_router)
app.include_router(ai_router)
app.include_router(meals_router)
app.include_router(foods_router)
