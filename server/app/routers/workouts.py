# app/routers/workouts.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from app.database.connection import get_store
from app.database.storage import MemStorage
from app.models.workout import UserWorkoutIn, UserWorkoutOut, WorkoutIn, WorkoutOut

router = APIRouter(prefix="/api", tags=["Workouts"])


# ---------- workout templates ----------
@router.get("/workouts", response_model=List[WorkoutOut])
def list_workouts(store: MemStorage = Depends(get_store)):
    return [WorkoutOut(**w) for w in store.list_workouts()]


@router.post("/workouts", response_model=WorkoutOut, status_code=201)
def create_workout(payload: WorkoutIn, store: MemStorage = Depends(get_store)):
    return WorkoutOut(**store.create_workout(payload.dict()))


@router.get("/workouts/{workout_id}", response_model=WorkoutOut)
def read_workout(workout_id: int, store: MemStorage = Depends(get_store)):
    workout = store.get_workout(workout_id)
    if not workout:
        raise HTTPException(status_code=404, detail="Workout not found")
    return WorkoutOut(**workout)


# ---------- assignments ----------
@router.get("/user-workouts", response_model=List[UserWorkoutOut])
def list_user_workouts(
    user_id: int = Query(...),
    upcoming: bool = Query(default=False),
    store: MemStorage = Depends(get_store),
):
    """All assignments for a user, or only future uncompleted ones when upcoming=true"""
    if upcoming:
        docs = store.list_upcoming_user_workouts(user_id)
    else:
        docs = store.list_user_workouts(user_id)
    return [UserWorkoutOut(**d) for d in docs]


@router.post("/user-workouts", response_model=UserWorkoutOut, status_code=201)
def create_user_workout(payload: UserWorkoutIn, store: MemStorage = Depends(get_store)):
    return UserWorkoutOut(**store.create_user_workout(payload.dict()))


@router.put("/user-workouts/{user_workout_id}/complete", response_model=UserWorkoutOut)
def complete_user_workout(user_workout_id: int, store: MemStorage = Depends(get_store)):
    updated = store.complete_user_workout(user_workout_id)
    if not updated:
        raise HTTPException(status_code=404, detail="User workout not found")
    return UserWorkoutOut(**updated)
