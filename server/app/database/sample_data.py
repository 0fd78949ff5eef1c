# app/database/sample_data.py
"""Demo family used when the server starts with SEED_SAMPLE_DATA enabled."""
from datetime import datetime, timedelta
from typing import Optional

from app.database.storage import MemStorage


def seed_sample_data(store: MemStorage, now: Optional[datetime] = None) -> None:
    now = now or datetime.utcnow()
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)

    family = store.create_family({"name": "Johnson Family"})
    members = [
        ("emma.johnson", "Emma Johnson", "parent", "female", "1990-05-15"),
        ("michael.johnson", "Michael Johnson", "parent", "male", "1988-02-03"),
        ("sophia.johnson", "Sophia Johnson", "child", "female", "2013-09-21"),
        ("ethan.johnson", "Ethan Johnson", "child", "male", "2015-11-08"),
    ]
    users = [
        store.create_user({
            "username": username,
            "password": None,
            "name": name,
            "email": f"{username.split('.')[0]}@example.com",
            "role": role,
            "avatar": None,
            "family_id": family["id"],
            "gender": gender,
            "date_of_birth": dob,
            "height": None,
            "weight": None,
        })
        for username, name, role, gender, dob in members
    ]
    emma = users[0]

    hiit = store.create_workout({
        "title": "Full Body HIIT",
        "description": "High-intensity interval training targeting all major muscle groups",
        "duration": 30,
        "intensity": "intermediate",
        "image_url": None,
        "scheduled_time": "17:30",
        "workout_type": "HIIT",
        "exercises": [
            {"name": "Jumping Jacks", "sets": 1, "reps": 30},
            {"name": "Push-ups", "sets": 3, "reps": 10},
            {"name": "Bodyweight Squats", "sets": 3, "reps": 15},
            {"name": "Mountain Climbers", "sets": 3, "reps": 20},
            {"name": "Plank", "sets": 3, "reps": 1, "duration": 30},
        ],
    })
    strength = store.create_workout({
        "title": "Upper Body Strength",
        "description": "Focused on building strength in arms, chest, and back",
        "duration": 45,
        "intensity": "beginner",
        "image_url": None,
        "scheduled_time": None,
        "workout_type": "Strength",
        "exercises": [
            {"name": "Push-ups", "sets": 3, "reps": 10},
            {"name": "Dumbbell Rows", "sets": 3, "reps": 12},
            {"name": "Shoulder Press", "sets": 3, "reps": 10},
            {"name": "Bicep Curls", "sets": 3, "reps": 12},
            {"name": "Tricep Dips", "sets": 3, "reps": 10},
        ],
    })
    store.create_user_workout({
        "user_id": emma["id"],
        "workout_id": hiit["id"],
        "scheduled_for": today + timedelta(days=1, hours=17, minutes=30),
    })
    store.create_user_workout({
        "user_id": emma["id"],
        "workout_id": strength["id"],
        "scheduled_for": today + timedelta(days=2, hours=7),
    })

    steps = store.create_challenge({
        "title": "10K Steps Challenge",
        "description": "Complete 10,000 steps daily for a week",
        "start_date": today,
        "end_date": today + timedelta(days=7),
        "goal_type": "steps",
        "goal_value": 70000,
        "unit": "steps",
    })
    water = store.create_challenge({
        "title": "Drink More Water",
        "description": "Drink 8 glasses of water daily for 14 days",
        "start_date": today,
        "end_date": today + timedelta(days=14),
        "goal_type": "nutrition",
        "goal_value": 112,
        "unit": "glasses",
    })
    store.create_user_challenge({"user_id": emma["id"], "challenge_id": steps["id"], "progress": 18429})
    store.create_user_challenge({"user_id": users[1]["id"], "challenge_id": steps["id"], "progress": 25000})
    store.create_user_challenge({"user_id": emma["id"], "challenge_id": water["id"], "progress": 16})

    for name, hour, minute, calories, protein, carbs, fat, meal_type in [
        ("Oatmeal with Fruit", 8, 30, 350, 12, 60, 8, "breakfast"),
        ("Grilled Chicken Salad", 12, 45, 450, 35, 25, 18, "lunch"),
        ("Protein Shake", 16, 0, 180, 25, 10, 3, "snack"),
    ]:
        store.create_meal({
            "user_id": emma["id"],
            "name": name,
            "calories": calories,
            "protein": protein,
            "carbs": carbs,
            "fat": fat,
            "timestamp": today.replace(hour=hour, minute=minute),
            "meal_type": meal_type,
        })

    for days_ago in range(7):
        store.create_health_metric({
            "user_id": emma["id"],
            "date": today - timedelta(days=days_ago),
            "steps": 8429 - days_ago * 350,
            "active_minutes": 45 - days_ago * 2,
            "calories_burned": 1842 - days_ago * 40,
            "sleep_minutes": 450,
            "heart_rate": 72,
            "weight": 65,
        })

    store.update_nutrition_goals(emma["id"], {})
