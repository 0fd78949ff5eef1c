from pydantic import BaseModel, Field, validator
from typing import List, Optional
from datetime import datetime

from app.models.timestamps import to_naive_utc

class ExerciseRef(BaseModel):
    name: str
    sets: int = 3
    reps: int = 10
    duration: Optional[int] = None  # seconds, for timed holds
    description: Optional[str] = None

class WorkoutIn(BaseModel):
    title: str = Field(..., min_length=1, max_length=128)
    description: Optional[str] = None
    duration: int = Field(..., gt=0, le=600)  # minutes
    intensity: str = Field(default="moderate", max_length=32)
    image_url: Optional[str] = None
    scheduled_time: Optional[str] = None  # default time of day, e.g. "17:30"
    workout_type: Optional[str] = None
    exercises: List[ExerciseRef] = []

class WorkoutOut(WorkoutIn):
    id: int

class UserWorkoutIn(BaseModel):
    user_id: int
    workout_id: int
    scheduled_for: Optional[datetime] = None

    @validator("scheduled_for")
    def normalize_scheduled_for(cls, v):
        return to_naive_utc(v)

class UserWorkoutOut(UserWorkoutIn):
    id: int
    completed: bool = False
    completed_at: Optional[datetime] = None
