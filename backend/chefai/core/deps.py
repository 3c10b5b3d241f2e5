# Shared dependencies: the current user from a bearer / x-auth-token header
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, Request, status

from chefai.db.init import get_db
from chefai.services.auth import get_user_by_token

def token_from_request(request: Request) -> Optional[str]:
    # "Authorization: Bearer <t>" first, then "x-auth-token: <t>"
    auth = request.headers.get("authorization", "")
    if auth.lower().startswith("bearer "):
        t = auth[7:].strip()
        if t:
            return t
    return request.headers.get("x-auth-token") or None

async def get_current_user(request: Request, db=Depends(get_db)) -> Dict[str, Any]:
    token = token_from_request(request)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="No token provided")
    user = await get_user_by_token(db, token)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    return user

async def get_optional_user(request: Request, db=Depends(get_db)) -> Optional[Dict[str, Any]]:
    token = token_from_request(request)
    if not token:
        return None
    return await get_user_by_token(db, token)
