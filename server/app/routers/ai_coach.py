# app/routers/ai_coach.py
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from app.database.connection import get_store
from app.database.storage import MemStorage
from app.models.chat import (
    ChatRequest, ChatResponse, ConversationIn, ConversationOut, ConversationReply, MessageIn
)
from app.models.recommendation import MealRecommendationRequest, WorkoutRecommendationRequest
from app.services.ai_service import RECENT_MEALS_LIMIT, AIService, get_ai_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["AI Coach"])


def _get_user_or_404(store: MemStorage, user_id: int) -> dict:
    user = store.get_user(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


# ---------- recommendations ----------
@router.post("/ai/meal-recommendations")
async def meal_recommendations(
    payload: MealRecommendationRequest,
    store: MemStorage = Depends(get_store),
    ai: AIService = Depends(get_ai_service),
):
    user = _get_user_or_404(store, payload.user_id)
    recent = [m["name"] for m in reversed(store.list_meals(user["id"]))][:RECENT_MEALS_LIMIT]
    return await ai.recommend_meals(
        user["name"], recent, payload.preferences, payload.dietary_restrictions
    )


@router.post("/ai/workout-recommendations")
async def workout_recommendations(
    payload: WorkoutRecommendationRequest,
    store: MemStorage = Depends(get_store),
    ai: AIService = Depends(get_ai_service),
):
    user = _get_user_or_404(store, payload.user_id)
    return await ai.recommend_workout(
        user["name"],
        fitness_level=payload.fitness_level,
        goals=payload.goals,
        duration=payload.duration,
        equipment=payload.equipment,
    )


@router.post("/ai/chat", response_model=ChatResponse)
async def chat(
    payload: ChatRequest,
    store: MemStorage = Depends(get_store),
    ai: AIService = Depends(get_ai_service),
):
    """Stateless coach chat; the client re-sends earlier turns in history"""
    user = _get_user_or_404(store, payload.user_id)
    history = [m.dict() for m in payload.history or []]
    reply = await ai.chat(user["name"], payload.message, history)
    return ChatResponse(response=reply)


# ---------- stored conversations ----------
@router.get("/ai-conversations", response_model=List[ConversationOut])
def list_conversations(user_id: int = Query(...), store: MemStorage = Depends(get_store)):
    return [ConversationOut(**c) for c in store.list_conversations(user_id)]


@router.post("/ai-conversations", response_model=ConversationOut, status_code=201)
def create_conversation(payload: ConversationIn, store: MemStorage = Depends(get_store)):
    return ConversationOut(**store.create_conversation(payload.dict()))


@router.get("/ai-conversations/{conversation_id}", response_model=ConversationOut)
def read_conversation(conversation_id: int, store: MemStorage = Depends(get_store)):
    conversation = store.get_conversation(conversation_id)
    if not conversation:
        raise HTTPException(status_code=404, detail="Conversation not found")
    return ConversationOut(**conversation)


@router.post("/ai-conversations/{conversation_id}/messages", response_model=ConversationReply)
async def post_message(
    conversation_id: int,
    payload: MessageIn,
    store: MemStorage = Depends(get_store),
    ai: AIService = Depends(get_ai_service),
):
    conversation = store.get_conversation(conversation_id)
    if not conversation:
        raise HTTPException(status_code=404, detail="Conversation not found")
    user = store.get_user(conversation["user_id"]) or {}

    reply = await ai.chat(user.get("name") or "there", payload.message, conversation["messages"])
    updated = store.append_conversation_messages(conversation_id, [
        {"role": "user", "content": payload.message},
        {"role": "assistant", "content": reply},
    ])
    logger.debug(f"Conversation {conversation_id} now has {len(updated['messages'])} messages")
    return ConversationReply(reply=reply, conversation=ConversationOut(**updated))
