# app/routers/nutrition.py
from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.database.connection import get_store
from app.database.storage import DEFAULT_NUTRITION_GOALS, MemStorage
from app.models.nutrition import (
    MealIn, MealOut, NutritionGoalsOut, NutritionGoalsUpdate, NutritionSummary
)

router = APIRouter(prefix="/api", tags=["Nutrition"])

# ---------- helpers ----------
def _today():
    return datetime.utcnow().date()

def _goals_out(store: MemStorage, user_id: int) -> NutritionGoalsOut:
    goals = store.get_nutrition_goals(user_id)
    if not goals:
        # defaults until the user saves their own
        return NutritionGoalsOut(user_id=user_id, **DEFAULT_NUTRITION_GOALS)
    return NutritionGoalsOut(**goals)

def _require_user(store: MemStorage, user_id: int):
    if not store.get_user(user_id):
        raise HTTPException(status_code=404, detail="User not found")

# ---------- meals ----------
@router.get("/meals", response_model=List[MealOut])
def list_meals(
    user_id: int = Query(...),
    on_date: Optional[date] = Query(default=None, alias="date", description="YYYY-MM-DD; all meals when omitted"),
    store: MemStorage = Depends(get_store),
):
    return [MealOut(**m) for m in store.list_meals(user_id, on_date=on_date)]

@router.post("/meals", response_model=MealOut, status_code=201)
def create_meal(payload: MealIn, store: MemStorage = Depends(get_store)):
    return MealOut(**store.create_meal(payload.dict()))

# ---------- goals ----------
@router.get("/users/{user_id}/nutrition-goals", response_model=NutritionGoalsOut)
def read_nutrition_goals(user_id: int, store: MemStorage = Depends(get_store)):
    _require_user(store, user_id)
    return _goals_out(store, user_id)

@router.patch("/users/{user_id}/nutrition-goals", response_model=NutritionGoalsOut)
def update_nutrition_goals(user_id: int, payload: NutritionGoalsUpdate, store: MemStorage = Depends(get_store)):
    _require_user(store, user_id)
    saved = store.update_nutrition_goals(user_id, payload.dict(exclude_none=True))
    return NutritionGoalsOut(**saved)

@router.get("/users/{user_id}/nutrition-summary", response_model=NutritionSummary)
def nutrition_summary(
    user_id: int,
    on_date: Optional[date] = Query(default=None, alias="date"),
    store: MemStorage = Depends(get_store),
):
    """Totals of the meals logged on one day against the user's goals"""
    _require_user(store, user_id)
    day = on_date or _today()
    meals = store.list_meals(user_id, on_date=day)
    return NutritionSummary(
        user_id=user_id,
        date=day.isoformat(),
        meals=[MealOut(**m) for m in meals],
        total_calories=sum(m.get("calories") or 0 for m in meals),
        total_protein=sum(m.get("protein") or 0 for m in meals),
        total_carbs=sum(m.get("carbs") or 0 for m in meals),
        total_fat=sum(m.get("fat") or 0 for m in meals),
        goals=_goals_out(store, user_id),
    )
