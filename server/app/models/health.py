from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, validator

from app.models.timestamps import to_naive_utc


class HealthMetricIn(BaseModel):
    user_id: int
    date: datetime = Field(default_factory=datetime.utcnow)
    steps: int = Field(default=0, ge=0)
    active_minutes: int = Field(default=0, ge=0)
    calories_burned: int = Field(default=0, ge=0)
    sleep_minutes: int = Field(default=0, ge=0)
    heart_rate: Optional[int] = Field(default=None, ge=0)
    weight: Optional[float] = Field(default=None, ge=0)

    @validator("date")
    def normalize_date(cls, v):
        return to_naive_utc(v)


class HealthMetricOut(HealthMetricIn):
    id: int


# -----------------
# Dashboard summaries
# -----------------
class GoalProgress(BaseModel):
    current: float
    goal: float
    percent_complete: int


class HealthSummary(BaseModel):
    user_id: int
    date: Optional[datetime] = None
    heart_rate: Optional[int] = None
    steps: GoalProgress
    sleep: GoalProgress  # hours
    calories: GoalProgress
    active_minutes: int = 0


class DailyActivity(BaseModel):
    day: str  # Mon..Sun
    date: str  # YYYY-MM-DD
    steps: int = 0
    calories: int = 0


class WeeklyActivity(BaseModel):
    user_id: int
    activities: List[DailyActivity]
