# chefai/api/routes_auth.py
# Register / login / logout / me

from __future__ import annotations
import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from chefai.core.deps import get_current_user, token_from_request
from chefai.db.init import get_db
from chefai.db.models.schemas import AuthOut, LoginIn, RegisterIn, UserOut, to_user_out
from chefai.services import auth

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

@router.post("/register", response_model=AuthOut, status_code=201)
async def register(payload: RegisterIn, db=Depends(get_db)):
    try:
        user = await auth.create_user(db, payload.name, payload.email, payload.password)
    except auth.EmailTaken:
        raise HTTPException(status_code=400, detail="User already exists")

    token = await auth.create_session(db, user)
    return AuthOut(token=token, user=to_user_out(user))

@router.post("/login", response_model=AuthOut)
async def login(payload: LoginIn, db=Depends(get_db)):
    user = await auth.authenticate(db, payload.email, payload.password)
    if not user:
        log.info("login failed email=%s", payload.email)
        raise HTTPException(status_code=400, detail="Invalid credentials")

    token = await auth.create_session(db, user)
    return AuthOut(token=token, user=to_user_out(user))

@router.post("/logout")
async def logout(request: Request, db=Depends(get_db), _=Depends(get_current_user)):
    await auth.revoke_session(db, token_from_request(request))
    return {"ok": True}

@router.get("/me", response_model=UserOut)
async def me(user=Depends(get_current_user)):
    return to_user_out(user)
