# chefai/db/models/user.py
from typing import List
from datetime import datetime
from pydantic import BaseModel, Field

# users collection
class UserDoc(BaseModel):
    name: str
    email: str                      # stored lower-cased
    password_hash: str
    is_admin: bool = False
    favorites: List[str] = []       # recipe ids (str)
    pantry: List[str] = []          # saved ingredient names
    created_at: datetime = Field(default_factory=datetime.utcnow)

# sessions collection (expires_at carries a TTL index)
class SessionDoc(BaseModel):
    token: str
    user_id: str
    expires_at: datetime
    created_at: datetime = Field(default_factory=datetime.utcnow)
