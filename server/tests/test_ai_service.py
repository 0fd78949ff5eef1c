# server/tests/test_ai_service.py
import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from conftest import make_groq_stub
from app.services.ai_fallbacks import (
    GENERIC_REPLY,
    NUTRITION_REPLY,
    POST_WORKOUT_QUESTION,
    POST_WORKOUT_REPLY,
    WORKOUT_REPLY,
    fallback_chat_reply,
)
from app.services.ai_service import AIService, _extract_json_from_text


def _sent_messages(client):
    return client.chat.completions.create.call_args.kwargs["messages"]


class TestMealRecommendations:
    """Meal suggestions and their static fallback"""

    @pytest.mark.asyncio
    async def test_returns_parsed_completion(self):
        payload = {"message": "Enjoy!", "recommendations": [{"name": "Salmon bowl"}]}
        client = make_groq_stub(content=json.dumps(payload))
        service = AIService(client=client, model="test-model")

        result = await service.recommend_meals(
            "Emma", ["m1", "m2", "m3", "m4", "m5", "m6", "m7"], preferences="spicy", dietary_restrictions="no nuts"
        )

        assert result == payload
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["response_format"] == {"type": "json_object"}
        user_prompt = kwargs["messages"][1]["content"]
        assert "Emma" in user_prompt
        assert "Preferences: spicy" in user_prompt
        assert "Dietary restrictions: no nuts" in user_prompt
        assert '"m5"' in user_prompt
        assert '"m6"' not in user_prompt

    @pytest.mark.asyncio
    async def test_vegetarian_fallback_on_api_failure(self):
        client = make_groq_stub(error=RuntimeError("connection reset"))
        service = AIService(client=client)

        result = await service.recommend_meals("Emma", [], dietary_restrictions="vegetarian please")

        assert len(result["recommendations"]) == 3
        lunch = result["recommendations"][1]
        assert "Chickpeas" in lunch["foods"]
        assert "Grilled chicken" not in lunch["foods"]
        assert lunch["name"] == "Mediterranean Vegetarian Plate"

    @pytest.mark.asyncio
    async def test_fallback_without_client_keeps_default_meals(self):
        result = await AIService(client=None).recommend_meals("Sam", ["Toast"], dietary_restrictions="No gluten")
        assert result["message"].endswith("Sam.")
        assert "Grilled chicken" in result["recommendations"][1]["foods"]

    @pytest.mark.asyncio
    async def test_vegetarian_match_is_case_insensitive(self):
        result = await AIService(client=None).recommend_meals("Sam", [], dietary_restrictions="Strict VEGETARIAN")
        assert "Chickpeas" in result["recommendations"][1]["foods"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["not json at all", '{"message": "no list here"}', "   "])
    async def test_malformed_completion_falls_back(self, content):
        service = AIService(client=make_groq_stub(content=content))
        result = await service.recommend_meals("Emma", [])
        assert result["recommendations"][0]["name"] == "High-Protein Breakfast Bowl"

    @pytest.mark.asyncio
    async def test_timeout_falls_back(self):
        async def _slow(**kwargs):
            await asyncio.sleep(5)

        client = MagicMock()
        client.chat.completions.create = AsyncMock(side_effect=_slow)
        service = AIService(client=client, timeout=0.01)

        result = await service.recommend_meals("Emma", [])
        assert len(result["recommendations"]) == 3


class TestWorkoutRecommendations:
    """Workout suggestion and its static fallback"""

    @pytest.mark.asyncio
    async def test_returns_parsed_completion(self):
        payload = {"message": "Go!", "recommendations": {"type": "Yoga", "duration": 20, "exercises": []}}
        client = make_groq_stub(content="Here you go:\n```json\n" + json.dumps(payload) + "\n```")
        result = await AIService(client=client).recommend_workout("Emma", duration=20)
        assert result == payload
        assert "Duration: 20 minutes" in _sent_messages(client)[1]["content"]

    @pytest.mark.asyncio
    async def test_fallback_echoes_duration(self):
        result = await AIService(client=None).recommend_workout("Emma", duration=45)
        assert result["recommendations"]["duration"] == 45
        assert result["recommendations"]["type"] == "Full Body Circuit"
        assert len(result["recommendations"]["exercises"]) == 5

    @pytest.mark.asyncio
    async def test_fallback_defaults_to_thirty_minutes(self):
        result = await AIService(client=make_groq_stub(error=TimeoutError())).recommend_workout("Emma")
        assert result["recommendations"]["duration"] == 30
        assert {ex["sets"] for ex in result["recommendations"]["exercises"]} == {3}

    @pytest.mark.asyncio
    async def test_fallback_scales_by_level_and_equipment(self):
        service = AIService(client=None)
        beginner = await service.recommend_workout("Emma", fitness_level="Beginner")
        advanced = await service.recommend_workout("Emma", fitness_level="advanced", equipment="Dumbbells")

        assert {ex["sets"] for ex in beginner["recommendations"]["exercises"]} == {2}
        pushups = advanced["recommendations"]["exercises"][0]
        assert pushups["sets"] == 4 and pushups["reps"] == 13
        names = [ex["name"] for ex in advanced["recommendations"]["exercises"]]
        assert names[-2:] == ["Dumbbell Rows", "Dumbbell Shoulder Press"]


class TestCoachChat:
    """Coach replies, canned fallbacks and the post-workout shortcut"""

    @pytest.mark.asyncio
    async def test_post_workout_question_skips_the_api(self):
        client = make_groq_stub(content="model reply")
        reply = await AIService(client=client).chat("Emma", POST_WORKOUT_QUESTION)
        assert reply == POST_WORKOUT_REPLY
        client.chat.completions.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_padded_post_workout_question_goes_to_the_api(self):
        client = make_groq_stub(content="model reply")
        reply = await AIService(client=client).chat("Emma", f"  {POST_WORKOUT_QUESTION} ")
        assert reply == "model reply"
        client.chat.completions.create.assert_called_once()

    @pytest.mark.asyncio
    async def test_post_workout_question_without_api(self):
        assert await AIService(client=None).chat("Emma", "Can you suggest a good post-workout meal?") == POST_WORKOUT_REPLY

    @pytest.mark.asyncio
    async def test_sends_persona_history_and_message(self):
        client = make_groq_stub(content="Drink water!")
        history = [{"role": "user", "content": "hi"}, {"role": "assistant", "content": "hello"}]

        reply = await AIService(client=client).chat("Emma", "Any tips?", history)

        assert reply == "Drink water!"
        messages = _sent_messages(client)
        assert messages[0]["role"] == "system"
        assert "FitLife AI" in messages[0]["content"]
        assert messages[1:3] == history
        assert messages[-1] == {"role": "user", "content": "Any tips?"}
        assert client.chat.completions.create.call_args.kwargs["max_tokens"] == 500

    @pytest.mark.asyncio
    @pytest.mark.parametrize("message, expected", [
        ("Any post-workout meal ideas?", POST_WORKOUT_REPLY),
        ("Give me a leg WORKOUT", WORKOUT_REPLY),
        ("How should I plan my diet?", NUTRITION_REPLY),
        ("What about nutrition for kids?", NUTRITION_REPLY),
        ("Hello coach", GENERIC_REPLY),
    ])
    async def test_fallback_reply_selection(self, message, expected):
        service = AIService(client=make_groq_stub(error=ConnectionError("down")))
        assert await service.chat("Emma", message) == expected


class TestHelpers:
    """Pure helpers behind the gateway"""

    def test_fallback_reply_priority(self):
        assert fallback_chat_reply("post-workout meal and workout and diet") == POST_WORKOUT_REPLY
        assert fallback_chat_reply("workout meal") == WORKOUT_REPLY
        assert fallback_chat_reply("") == GENERIC_REPLY

    def test_extract_json_variants(self):
        assert _extract_json_from_text('{"a": 1}') == {"a": 1}
        assert _extract_json_from_text('Sure!\n```json\n{"a": 2}\n```') == {"a": 2}
        assert _extract_json_from_text('Result: {"a": {"b": 3}} thanks') == {"a": {"b": 3}}
        assert _extract_json_from_text("[1, 2]") is None
        assert _extract_json_from_text("") is None
        assert _extract_json_from_text("{broken") is None
