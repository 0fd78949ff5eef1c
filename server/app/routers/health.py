# app/routers/health.py
from datetime import datetime, timedelta
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.database.connection import get_store
from app.database.storage import MemStorage
from app.models.health import (
    DailyActivity, GoalProgress, HealthMetricIn, HealthMetricOut, HealthSummary, WeeklyActivity
)
from app.models.timestamps import to_naive_utc

router = APIRouter(prefix="/api", tags=["Health"])

STEPS_GOAL = 10000
SLEEP_GOAL_HOURS = 8
CALORIES_GOAL = 2500


def _progress(current: float, goal: float) -> GoalProgress:
    return GoalProgress(current=current, goal=goal, percent_complete=round(current / goal * 100) if goal else 0)


@router.get("/health-metrics", response_model=List[HealthMetricOut])
def list_health_metrics(
    user_id: int = Query(...),
    start: Optional[datetime] = Query(default=None),
    end: Optional[datetime] = Query(default=None),
    store: MemStorage = Depends(get_store),
):
    metrics = store.list_health_metrics(user_id, start=to_naive_utc(start), end=to_naive_utc(end))
    return [HealthMetricOut(**m) for m in metrics]


@router.post("/health-metrics", response_model=HealthMetricOut, status_code=201)
def create_health_metric(payload: HealthMetricIn, store: MemStorage = Depends(get_store)):
    return HealthMetricOut(**store.create_health_metric(payload.dict()))


@router.get("/users/{user_id}/health-summary", response_model=HealthSummary)
def health_summary(user_id: int, store: MemStorage = Depends(get_store)):
    if not store.get_user(user_id):
        raise HTTPException(status_code=404, detail="User not found")
    metrics = store.list_health_metrics(user_id)
    latest = metrics[0] if metrics else {}
    return HealthSummary(
        user_id=user_id,
        date=latest.get("date"),
        heart_rate=latest.get("heart_rate"),
        steps=_progress(latest.get("steps", 0), STEPS_GOAL),
        sleep=_progress(round(latest.get("sleep_minutes", 0) / 60, 1), SLEEP_GOAL_HOURS),
        calories=_progress(latest.get("calories_burned", 0), CALORIES_GOAL),
        active_minutes=latest.get("active_minutes", 0),
    )


@router.get("/users/{user_id}/weekly-activity", response_model=WeeklyActivity)
def weekly_activity(user_id: int, store: MemStorage = Depends(get_store)):
    """Steps and calories for each day of the current Monday-Sunday week"""
    if not store.get_user(user_id):
        raise HTTPException(status_code=404, detail="User not found")
    today = datetime.utcnow().date()
    monday = today - timedelta(days=today.weekday())
    week = [monday + timedelta(days=i) for i in range(7)]
    metrics = store.list_health_metrics(
        user_id,
        start=datetime.combine(week[0], datetime.min.time()),
        end=datetime.combine(week[-1], datetime.max.time()),
    )

    activities = []
    for day in week:
        same_day = [m for m in metrics if m["date"].date() == day]
        activities.append(DailyActivity(
            day=day.strftime("%a"),
            date=day.isoformat(),
            steps=sum(m.get("steps", 0) for m in same_day),
            calories=sum(m.get("calories_burned", 0) for m in same_day),
        ))
    return WeeklyActivity(user_id=user_id, activities=activities)
