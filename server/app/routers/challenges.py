# app/routers/challenges.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.database.connection import get_store
from app.database.storage import MemStorage
from app.models.challenge import (
    ChallengeIn, ChallengeOut, LeaderboardEntry, ProgressUpdate, UserChallengeIn, UserChallengeOut
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Challenges"])


@router.get("/challenges", response_model=List[ChallengeOut])
def list_challenges(active: Optional[bool] = Query(default=None), store: MemStorage = Depends(get_store)):
    return [ChallengeOut(**c) for c in store.list_challenges(active=active)]


@router.post("/challenges", response_model=ChallengeOut, status_code=201)
def create_challenge(payload: ChallengeIn, store: MemStorage = Depends(get_store)):
    return ChallengeOut(**store.create_challenge(payload.dict()))


@router.get("/challenges/{challenge_id}/leaderboard", response_model=List[LeaderboardEntry])
def challenge_leaderboard(challenge_id: int, store: MemStorage = Depends(get_store)):
    """Participants ordered by progress, highest first"""
    challenge = store.get_challenge(challenge_id)
    if not challenge:
        raise HTTPException(status_code=404, detail="Challenge not found")

    entries = []
    for p in store.list_user_challenges(challenge_id=challenge_id):
        user = store.get_user(p["user_id"]) or {}
        entries.append(LeaderboardEntry(
            user_id=p["user_id"],
            name=user.get("name") or f"User {p['user_id']}",
            avatar=user.get("avatar"),
            progress=p["progress"],
            percent=min(100, round(p["progress"] / challenge["goal_value"] * 100)),
            completed=p["completed"],
        ))
    entries.sort(key=lambda e: e.progress, reverse=True)
    return entries


# ---------- participation ----------
@router.get("/user-challenges", response_model=List[UserChallengeOut])
def list_user_challenges(user_id: int = Query(...), store: MemStorage = Depends(get_store)):
    return [UserChallengeOut(**uc) for uc in store.list_user_challenges(user_id=user_id)]


@router.post("/user-challenges", response_model=UserChallengeOut, status_code=201)
def join_challenge(payload: UserChallengeIn, store: MemStorage = Depends(get_store)):
    return UserChallengeOut(**store.create_user_challenge(payload.dict()))


@router.put("/user-challenges/{user_challenge_id}/progress", response_model=UserChallengeOut)
def update_progress(user_challenge_id: int, payload: ProgressUpdate, store: MemStorage = Depends(get_store)):
    updated = store.update_user_challenge_progress(user_challenge_id, payload.progress)
    if not updated:
        raise HTTPException(status_code=404, detail="User challenge or its challenge not found")
    if updated["completed"]:
        logger.info(f"User {updated['user_id']} completed challenge {updated['challenge_id']}")
    return UserChallengeOut(**updated)
