from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, Field, validator

from app.models.timestamps import to_naive_utc

MealType = Literal["breakfast", "lunch", "dinner", "snack"]

class MealIn(BaseModel):
    user_id: int
    name: str = Field(..., min_length=1, max_length=128)
    calories: int = Field(..., ge=0)
    protein: int = Field(..., ge=0)
    carbs: Optional[int] = Field(default=None, ge=0)
    fat: Optional[int] = Field(default=None, ge=0)
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    meal_type: MealType

    @validator("timestamp")
    def normalize_timestamp(cls, v):
        return to_naive_utc(v)

class MealOut(MealIn):
    id: int

class NutritionGoalsUpdate(BaseModel):
    goal_calories: Optional[int] = Field(default=None, ge=0)
    goal_protein: Optional[int] = Field(default=None, ge=0)
    goal_carbs: Optional[int] = Field(default=None, ge=0)
    goal_fat: Optional[int] = Field(default=None, ge=0)
    goal_water: Optional[int] = Field(default=None, ge=0)
    goal_fiber: Optional[int] = Field(default=None, ge=0)

class NutritionGoalsOut(BaseModel):
    id: Optional[int] = None  # None until the user saves goals
    user_id: int
    goal_calories: int
    goal_protein: int
    goal_carbs: int
    goal_fat: int
    goal_water: int
    goal_fiber: int

class NutritionSummary(BaseModel):
    user_id: int
    date: str
    meals: List[MealOut]
    total_calories: int
    total_protein: int
    total_carbs: int
    total_fat: int
    goals: NutritionGoalsOut
