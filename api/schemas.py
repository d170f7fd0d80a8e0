from typing import List, Optional
from pydantic import BaseModel, Field

class StartRequest(BaseModel):
    """Mission start request schema."""
    seed: Optional[int] = None  # falls back to settings
    autorun: Optional[bool] = None

class CommandIn(BaseModel):
    """One line typed by the player."""
    text: str = Field(max_length=200)

class TickRequest(BaseModel):
    count: int = Field(default=1, ge=1, le=1440)

class MessageOut(BaseModel):
    time: str
    sender: str
    text: str
    urgent: bool = False

class MessagesResponse(BaseModel):
    messages: List[MessageOut]

class TickResponse(BaseModel):
    clock: int
    time: str
    running: bool
    messages: List[MessageOut]

class LogResponse(BaseModel):
    """Radio log page schema."""
    next_offset: int
    messages: List[MessageOut]

class OutcomeOut(BaseModel):
    success: bool
    title: str
    reason: str
