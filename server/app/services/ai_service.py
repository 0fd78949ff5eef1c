# app/services/ai_service.py
import asyncio
import json
import logging
import os
import re
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from groq import AsyncGroq

from app.services.ai_fallbacks import (
    POST_WORKOUT_QUESTION,
    POST_WORKOUT_REPLY,
    fallback_chat_reply,
    fallback_meal_recommendations,
    fallback_workout_recommendation,
)

load_dotenv()

logger = logging.getLogger(__name__)

GROQ_API_KEY = os.getenv("GROQ_API_KEY")
GROQ_MODEL = os.getenv("GROQ_MODEL", "llama-3.3-70b-versatile")
AI_TIMEOUT_SECONDS = float(os.getenv("AI_TIMEOUT_SECONDS", "20"))

RECENT_MEALS_LIMIT = 5

COACH_PERSONA = (
    "You are a helpful fitness and wellness coach named FitLife AI. You provide personalized advice "
    "on fitness, nutrition, and general wellness for the whole family. Keep responses concise, "
    "motivational, and actionable."
)

MEAL_SYSTEM_PROMPT = (
    "You are a nutrition expert. Generate personalized meal recommendations based on user preferences, "
    "dietary restrictions, and recent meal history. Always return STRICT JSON with keys: message (string) "
    "and recommendations (array of exactly 3 meals, each with name, description, calories, protein, "
    "carbs, fats, foods)."
)

WORKOUT_SYSTEM_PROMPT = (
    "You are a fitness expert. Generate a personalized workout based on the user's fitness level, goals, "
    "available time, and equipment. Always return STRICT JSON with keys: message (string) and "
    "recommendations (object with type, duration, exercises; each exercise has name, sets, reps, description)."
)


class AIServiceError(Exception):
    """Any failure talking to, or understanding, the completion API."""


def _build_client() -> Optional[AsyncGroq]:
    if not GROQ_API_KEY:
        logger.warning("GROQ_API_KEY not set; AI endpoints will serve fallback content")
        return None
    try:
        client = AsyncGroq(api_key=GROQ_API_KEY, timeout=AI_TIMEOUT_SECONDS, max_retries=0)
        logger.info(f"Groq client initialized successfully with model: {GROQ_MODEL}")
        return client
    except Exception as e:
        logger.error(f"Failed to initialize Groq client: {e}")
        return None


def _extract_json_from_text(text: str) -> Optional[Dict[str, Any]]:
    """
    Pull a JSON object out of a model response: the whole text, a fenced
    code block, or the first balanced {...} span, in that order.
    """
    if not text or not text.strip():
        return None
    text = text.strip()

    try:
        parsed = json.loads(text)
        return parsed if isinstance(parsed, dict) else None
    except json.JSONDecodeError:
        pass

    for match in re.findall(r"```(?:json)?\s*(\{[\s\S]*?\})\s*```", text, re.IGNORECASE):
        try:
            parsed = json.loads(match)
            if isinstance(parsed, dict):
                return parsed
        except json.JSONDecodeError:
            continue

    start = text.find("{")
    if start == -1:
        return None
    depth = 0
    for i in range(start, len(text)):
        if text[i] == "{":
            depth += 1
        elif text[i] == "}":
            depth -= 1
            if depth == 0:
                try:
                    parsed = json.loads(text[start:i + 1])
                    return parsed if isinstance(parsed, dict) else None
                except json.JSONDecodeError:
                    return None
    return None


def _meal_prompt(
    user_name: str,
    recent_meals: List[str],
    preferences: Optional[str],
    dietary_restrictions: Optional[str],
) -> str:
    parts = [f"Generate meal recommendations for {user_name}."]
    if preferences:
        parts.append(f"Preferences: {preferences}")
    if dietary_restrictions:
        parts.append(f"Dietary restrictions: {dietary_restrictions}")
    parts.append(f"Recent meals: {json.dumps(list(recent_meals)[:RECENT_MEALS_LIMIT])}")
    return "\n".join(parts)


def _workout_prompt(
    user_name: str,
    fitness_level: Optional[str],
    goals: Optional[str],
    duration: Optional[int],
    equipment: Optional[str],
) -> str:
    return "\n".join([
        f"Generate a workout for {user_name}.",
        f"Fitness level: {fitness_level or 'Intermediate'}",
        f"Goals: {goals or 'General fitness'}",
        f"Duration: {duration or 30} minutes",
        f"Equipment: {equipment or 'Minimal/bodyweight'}",
    ])


class AIService:
    """
    Recommendation gateway. Every public method returns usable content:
    completion API failures are logged and replaced with static fallbacks.
    """

    def __init__(self, client: Optional[Any] = None, model: str = GROQ_MODEL, timeout: float = AI_TIMEOUT_SECONDS):
        self.client = client
        self.model = model
        self.timeout = timeout

    async def _call_groq_chat(
        self,
        messages: List[Dict[str, str]],
        temperature: float = 0.4,
        max_tokens: int = 900,
        json_mode: bool = False,
    ) -> str:
        if self.client is None:
            raise AIServiceError("AI service not configured (GROQ).")

        params = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if json_mode:
            params["response_format"] = {"type": "json_object"}

        try:
            response = await asyncio.wait_for(
                self.client.chat.completions.create(**params), timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            raise AIServiceError(f"Model {self.model} timed out after {self.timeout}s") from e
        except Exception as e:
            raise AIServiceError(f"Model {self.model} failed: {e}") from e

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as e:
            raise AIServiceError(f"Unexpected completion shape: {e}") from e
        if not content or not content.strip():
            raise AIServiceError("Empty completion")
        return content

    async def _call_json(self, system: str, user: str, required_key: str) -> Dict[str, Any]:
        text = await self._call_groq_chat(
            [{"role": "system", "content": system}, {"role": "user", "content": user}],
            json_mode=True,
        )
        parsed = _extract_json_from_text(text)
        if not parsed or required_key not in parsed:
            raise AIServiceError(f"AI did not return a JSON object with '{required_key}'")
        return parsed

    async def recommend_meals(
        self,
        user_name: str,
        recent_meals: List[str],
        preferences: Optional[str] = None,
        dietary_restrictions: Optional[str] = None,
    ) -> Dict[str, Any]:
        prompt = _meal_prompt(user_name, recent_meals, preferences, dietary_restrictions)
        try:
            return await self._call_json(MEAL_SYSTEM_PROMPT, prompt, "recommendations")
        except AIServiceError as e:
            logger.warning(f"Meal recommendations falling back to static content: {e}")
            return fallback_meal_recommendations(user_name, dietary_restrictions)

    async def recommend_workout(
        self,
        user_name: str,
        fitness_level: Optional[str] = None,
        goals: Optional[str] = None,
        duration: Optional[int] = None,
        equipment: Optional[str] = None,
    ) -> Dict[str, Any]:
        prompt = _workout_prompt(user_name, fitness_level, goals, duration, equipment)
        try:
            return await self._call_json(WORKOUT_SYSTEM_PROMPT, prompt, "recommendations")
        except AIServiceError as e:
            logger.warning(f"Workout recommendation falling back to static content: {e}")
            return fallback_workout_recommendation(user_name, fitness_level, duration, equipment)

    async def chat(
        self,
        user_name: str,
        message: str,
        history: Optional[List[Dict[str, str]]] = None,
    ) -> str:
        if message == POST_WORKOUT_QUESTION:
            return POST_WORKOUT_REPLY

        messages = [{"role": "system", "content": f"{COACH_PERSONA} You are talking with {user_name}."}]
        messages += [{"role": m["role"], "content": m["content"]} for m in (history or [])]
        messages.append({"role": "user", "content": message})
        try:
            return await self._call_groq_chat(messages, temperature=0.7, max_tokens=500)
        except AIServiceError as e:
            logger.warning(f"Coach chat falling back to canned reply: {e}")
            return fallback_chat_reply(message)


_ai_service: Optional[AIService] = None


def get_ai_service() -> AIService:
    """FastAPI dependency; the Groq client is built once per process."""
    global _ai_service
    if _ai_service is None:
        _ai_service = AIService(client=_build_client())
    return _ai_service
