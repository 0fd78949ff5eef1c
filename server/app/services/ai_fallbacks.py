# app/services/ai_fallbacks.py
"""
Static content served when the completion API is unavailable.

Every builder returns a fresh object so callers can mutate the result freely.
"""
from typing import Any, Dict, List, Optional

POST_WORKOUT_QUESTION = "Can you suggest a good post-workout meal?"

POST_WORKOUT_REPLY = (
    "Great timing to ask! Within 30-60 minutes after your workout, aim for a meal that "
    "combines protein to repair muscle with carbohydrates to refill your energy stores. "
    "A few easy options:\n\n"
    "- Grilled chicken with sweet potato and steamed vegetables\n"
    "- Greek yogurt with berries, honey and a sprinkle of granola\n"
    "- A whole-grain wrap with eggs, spinach and avocado\n"
    "- A smoothie with banana, milk or a plant alternative, and a scoop of protein powder\n\n"
    "Aim for roughly 20-30 g of protein and drink plenty of water to rehydrate. "
    "Would you like a recipe for any of these?"
)

WORKOUT_REPLY = (
    "I'd be happy to suggest a workout! Here's a quick 15-minute routine you can do at home:\n\n"
    "- 2 minutes warm-up with light jogging in place\n"
    "- 30 seconds jumping jacks\n"
    "- 30 seconds push-ups (modified if needed)\n"
    "- 30 seconds bodyweight squats\n"
    "- 30 seconds plank\n"
    "- 30 seconds rest\n"
    "- Repeat 3 times\n\n"
    "Finish with 2 minutes of stretching. Would you like more specific exercises targeting "
    "certain muscle groups?"
)

NUTRITION_REPLY = (
    "Great question about nutrition! A balanced diet is key to fitness success. Try to include:\n\n"
    "- Lean proteins (chicken, fish, tofu)\n"
    "- Complex carbs (whole grains, sweet potatoes)\n"
    "- Healthy fats (avocados, nuts, olive oil)\n"
    "- Plenty of vegetables and fruits\n\n"
    "Aim for balanced meals and stay hydrated throughout the day. Would you like some specific "
    "meal ideas?"
)

GENERIC_REPLY = (
    "Thanks for your message! As your fitness coach, I'm here to help with workout plans, "
    "nutrition advice, and wellness strategies. Could you provide more details about your "
    "fitness goals so I can give you personalized guidance?"
)

NUTRITION_KEYWORDS = ("nutrition", "diet", "meal")


def fallback_chat_reply(message: str) -> str:
    """Pick a canned coach reply by keyword; the first match wins."""
    text = (message or "").lower()
    if "post-workout meal" in text:
        return POST_WORKOUT_REPLY
    if "workout" in text:
        return WORKOUT_REPLY
    if any(keyword in text for keyword in NUTRITION_KEYWORDS):
        return NUTRITION_REPLY
    return GENERIC_REPLY


def fallback_meal_recommendations(user_name: str, dietary_restrictions: Optional[str] = None) -> Dict[str, Any]:
    payload = {
        "message": f"Here are some balanced meal recommendations for you, {user_name}.",
        "recommendations": [
            {
                "name": "High-Protein Breakfast Bowl",
                "description": "A nutritious breakfast bowl packed with protein and healthy fats to start your day.",
                "calories": 450,
                "protein": 25,
                "carbs": 35,
                "fats": 20,
                "foods": ["Greek yogurt", "Berries", "Granola", "Nuts", "Honey"],
            },
            {
                "name": "Mediterranean Lunch Plate",
                "description": "A balanced lunch with lean protein, complex carbs, and healthy fats.",
                "calories": 550,
                "protein": 30,
                "carbs": 45,
                "fats": 25,
                "foods": ["Grilled chicken", "Quinoa", "Cucumber", "Cherry tomatoes", "Feta cheese", "Olive oil"],
            },
            {
                "name": "Vegetable Stir-Fry with Tofu",
                "description": "A nutrient-dense dinner high in protein and fiber.",
                "calories": 500,
                "protein": 25,
                "carbs": 40,
                "fats": 20,
                "foods": ["Tofu", "Broccoli", "Bell peppers", "Carrots", "Brown rice", "Low-sodium soy sauce"],
            },
        ],
    }

    # Plain substring match on the free text, nothing smarter.
    if dietary_restrictions and "vegetarian" in dietary_restrictions.lower():
        lunch = payload["recommendations"][1]
        lunch["name"] = "Mediterranean Vegetarian Plate"
        lunch["description"] = "A balanced vegetarian lunch with plant protein, complex carbs, and healthy fats."
        lunch["foods"] = ["Chickpeas", "Quinoa", "Cucumber", "Cherry tomatoes", "Feta cheese", "Olive oil"]

    return payload


def _bodyweight_exercises() -> List[Dict[str, Any]]:
    return [
        {"name": "Push-ups", "sets": 3, "reps": 10,
         "description": "Standard push-ups targeting chest, shoulders, and triceps."},
        {"name": "Bodyweight Squats", "sets": 3, "reps": 15,
         "description": "Standing squats targeting quadriceps, hamstrings, and glutes."},
        {"name": "Plank", "sets": 3, "reps": 30,
         "description": "Hold plank position for 30 seconds, targeting core and shoulders."},
        {"name": "Mountain Climbers", "sets": 3, "reps": 20,
         "description": "Dynamic exercise targeting core, shoulders, and increasing heart rate."},
        {"name": "Lunges", "sets": 3, "reps": 12,
         "description": "Alternating lunges targeting legs and improving balance."},
    ]


def _dumbbell_exercises() -> List[Dict[str, Any]]:
    return [
        {"name": "Dumbbell Rows", "sets": 3, "reps": 12,
         "description": "Bent-over rows with dumbbells targeting back muscles."},
        {"name": "Dumbbell Shoulder Press", "sets": 3, "reps": 10,
         "description": "Overhead press with dumbbells targeting shoulders."},
    ]


def fallback_workout_recommendation(
    user_name: str,
    fitness_level: Optional[str] = None,
    duration: Optional[int] = None,
    equipment: Optional[str] = None,
) -> Dict[str, Any]:
    level = (fitness_level or "Intermediate").lower()
    gear = (equipment or "Minimal/bodyweight").lower()

    exercises = _bodyweight_exercises()
    if "beginner" in level:
        for ex in exercises:
            ex["sets"] = 2
            ex["reps"] = round(ex["reps"] * 0.7)
    elif "advanced" in level:
        for ex in exercises:
            ex["sets"] = 4
            ex["reps"] = round(ex["reps"] * 1.3)

    if "dumbbell" in gear or "weights" in gear:
        exercises += _dumbbell_exercises()

    return {
        "message": f"Here's a personalized workout plan for you, {user_name}.",
        "recommendations": {
            "type": "Full Body Circuit",
            # echoed only; the exercise list does not scale with it
            "duration": duration or 30,
            "exercises": exercises,
        },
    }
