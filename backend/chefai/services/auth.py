"""Local password authentication backed by Mongo.

Passwords are hashed with bcrypt. Sessions are random tokens stored in the
``sessions`` collection with an expiry; a TTL index removes stale ones.
"""
import logging
import secrets
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

import bcrypt
from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from chefai.core.config import settings
from chefai.db.models.user import SessionDoc, UserDoc

log = logging.getLogger(__name__)


class EmailTaken(Exception):
    pass


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # stored value is not a bcrypt hash
        return False


def generate_session_token() -> str:
    return secrets.token_urlsafe(32)


async def create_user(
    db: AsyncIOMotorDatabase,
    name: str,
    email: str,
    password: str,
    is_admin: bool = False,
) -> Dict[str, Any]:
    """Create a user with a hashed password. Raises EmailTaken on duplicates."""
    email = email.strip().lower()
    if await db["users"].find_one({"email": email}):
        raise EmailTaken(email)

    doc = UserDoc(
        name=name.strip(),
        email=email,
        password_hash=hash_password(password),
        is_admin=is_admin,
    ).model_dump()
    try:
        result = await db["users"].insert_one(doc)
    except DuplicateKeyError:
        raise EmailTaken(email)
    doc["_id"] = result.inserted_id
    log.info("user created email=%s admin=%s", email, is_admin)
    return doc


async def authenticate(db: AsyncIOMotorDatabase, email: str, password: str) -> Optional[Dict[str, Any]]:
    """Return the user document if the credentials are valid, None otherwise."""
    user = await db["users"].find_one({"email": email.strip().lower()})
    if not user or not user.get("password_hash"):
        return None
    if not verify_password(password, user["password_hash"]):
        return None
    return user


async def create_session(db: AsyncIOMotorDatabase, user: Dict[str, Any]) -> str:
    token = generate_session_token()
    session = SessionDoc(
        token=token,
        user_id=str(user["_id"]),
        expires_at=datetime.utcnow() + timedelta(seconds=settings.SESSION_MAX_AGE),
    )
    await db["sessions"].insert_one(session.model_dump())
    return token


async def get_user_by_token(db: AsyncIOMotorDatabase, token: str) -> Optional[Dict[str, Any]]:
    """Resolve a session token to its user; expired or unknown tokens give None."""
    session = await db["sessions"].find_one({
        "token": token,
        "expires_at": {"$gt": datetime.utcnow()},
    })
    if not session or not ObjectId.is_valid(session["user_id"]):
        return None
    return await db["users"].find_one({"_id": ObjectId(session["user_id"])})


async def revoke_session(db: AsyncIOMotorDatabase, token: str) -> bool:
    result = await db["sessions"].delete_one({"token": token})
    return result.deleted_count > 0
