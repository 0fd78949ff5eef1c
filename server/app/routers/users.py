# app/routers/users.py
import logging
from typing import List

import bcrypt
from fastapi import APIRouter, Depends, HTTPException

from app.database.connection import get_store
from app.database.storage import MemStorage
from app.models.user import FamilyIn, FamilyOut, UserIn, UserOut, UserUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Users & Families"])


def hash_password(password: str) -> str:
    """Hash a password using bcrypt"""
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
    return hashed.decode('utf-8')


def _user_out(doc: dict) -> UserOut:
    # UserOut has no password field, so the hash never leaves the store
    return UserOut(**doc)


# ---------- users ----------
@router.get("/users", response_model=List[UserOut])
def list_users(store: MemStorage = Depends(get_store)):
    return [_user_out(u) for u in store.list_users()]


@router.post("/users", response_model=UserOut, status_code=201)
def create_user(payload: UserIn, store: MemStorage = Depends(get_store)):
    if store.get_user_by_username(payload.username):
        raise HTTPException(status_code=409, detail="Username already taken")
    body = payload.dict()
    body["password"] = hash_password(payload.password)
    user = store.create_user(body)
    logger.info(f"Created user {user['id']} ({user['username']})")
    return _user_out(user)


@router.get("/users/{user_id}", response_model=UserOut)
def read_user(user_id: int, store: MemStorage = Depends(get_store)):
    user = store.get_user(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return _user_out(user)


@router.patch("/users/{user_id}", response_model=UserOut)
def update_user(user_id: int, payload: UserUpdate, store: MemStorage = Depends(get_store)):
    # explicit nulls are dropped so required profile fields and the hash survive
    patch = payload.dict(exclude_none=True)
    if "password" in patch:
        patch["password"] = hash_password(patch["password"])
    updated = store.update_user(user_id, patch)
    if not updated:
        raise HTTPException(status_code=404, detail="User not found")
    return _user_out(updated)


# ---------- families ----------
@router.get("/families", response_model=List[FamilyOut])
def list_families(store: MemStorage = Depends(get_store)):
    return [FamilyOut(**f) for f in store.list_families()]


@router.post("/families", response_model=FamilyOut, status_code=201)
def create_family(payload: FamilyIn, store: MemStorage = Depends(get_store)):
    return FamilyOut(**store.create_family(payload.dict()))


@router.get("/families/{family_id}", response_model=FamilyOut)
def read_family(family_id: int, store: MemStorage = Depends(get_store)):
    family = store.get_family(family_id)
    if not family:
        raise HTTPException(status_code=404, detail="Family not found")
    return FamilyOut(**family)


@router.get("/families/{family_id}/users", response_model=List[UserOut])
def list_family_users(family_id: int, store: MemStorage = Depends(get_store)):
    if not store.get_family(family_id):
        raise HTTPException(status_code=404, detail="Family not found")
    return [_user_out(u) for u in store.list_family_users(family_id)]
