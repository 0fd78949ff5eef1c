# app/models/chat.py
from pydantic import BaseModel, Field
from typing import List, Literal, Optional
from datetime import datetime


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str

class ConversationIn(BaseModel):
    user_id: int
    messages: List[ChatMessage] = Field(default_factory=list)

class ConversationOut(BaseModel):
    id: int
    user_id: int
    messages: List[ChatMessage]
    created_at: datetime
    updated_at: datetime

class MessageIn(BaseModel):
    message: str = Field(..., min_length=1, max_length=4000)

class ConversationReply(BaseModel):
    """Reply to a posted message plus the conversation as it now stands"""
    reply: str
    conversation: ConversationOut

class ChatRequest(BaseModel):
    user_id: int
    message: str = Field(..., min_length=1, max_length=4000)
    history: Optional[List[ChatMessage]] = None

class ChatResponse(BaseModel):
    response: str
