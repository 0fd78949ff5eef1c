from typing import Optional
from pydantic import BaseModel, Field

class MealRecommendationRequest(BaseModel):
    user_id: int
    preferences: Optional[str] = Field(default=None, max_length=1024)
    dietary_restrictions: Optional[str] = Field(default=None, max_length=1024)

class WorkoutRecommendationRequest(BaseModel):
    user_id: int
    fitness_level: Optional[str] = Field(default=None, max_length=64)
    goals: Optional[str] = Field(default=None, max_length=1024)
    duration: Optional[int] = Field(default=None, gt=0, le=240)  # minutes
    equipment: Optional[str] = Field(default=None, max_length=256)
