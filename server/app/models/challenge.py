from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, validator

from app.models.timestamps import to_naive_utc


# -----------------
# Challenges
# -----------------
class ChallengeIn(BaseModel):
    title: str = Field(..., min_length=1, max_length=128)
    description: str = ""
    start_date: datetime
    end_date: datetime
    goal_type: str = Field(..., min_length=1, max_length=32)  # steps, workout, nutrition
    goal_value: float = Field(..., gt=0)
    unit: Optional[str] = None

    @validator("start_date", "end_date")
    def normalize_dates(cls, v):
        return to_naive_utc(v)

    @validator("end_date")
    def end_after_start(cls, v, values):
        start = values.get("start_date")
        if start is not None and v < start:
            raise ValueError("end_date must not be before start_date")
        return v


class ChallengeOut(ChallengeIn):
    id: int


# -----------------
# Participation
# -----------------
class UserChallengeIn(BaseModel):
    user_id: int
    challenge_id: int
    progress: float = Field(default=0, ge=0)


class UserChallengeOut(UserChallengeIn):
    id: int
    completed: bool
    joined_at: Optional[datetime] = None


class ProgressUpdate(BaseModel):
    progress: float = Field(..., ge=0)


class LeaderboardEntry(BaseModel):
    user_id: int
    name: str
    avatar: Optional[str] = None
    progress: float
    percent: int  # progress toward goal, 0-100
    completed: bool
