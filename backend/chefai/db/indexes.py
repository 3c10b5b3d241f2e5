# chefai/db/indexes.py
# Collection indexes. Awaited once from the startup hook.

from chefai.db.init import get_db

async def ensure_indexes():
    db = get_db()

    # users / sessions
    await db["users"].create_index("email", unique=True)
    await db["sessions"].create_index("token", unique=True)
    await db["sessions"].create_index("expires_at", expireAfterSeconds=0)

    # recipe list filters
    await db["recipes"].create_index("tags")
    await db["recipes"].create_index("createdBy")
    await db["recipes"].create_index("cookingTime")
    await db["recipes"].create_index([("createdAt", -1)])
