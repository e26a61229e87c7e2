# reply_assistant/models/student.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from uuid import uuid4

from reply_assistant.models.conversation import MessageType, ReplyTone


def new_id() -> str:
    return uuid4().hex

class Student(BaseModel):
    id: str = Field(default_factory=new_id)
    name: str
    last_contacted_at: datetime = Field(default_factory=datetime.now)
    preferred_tone: ReplyTone = ReplyTone.FRIENDLY
    total_messages: int = 0

class Reminder(BaseModel):
    id: str = Field(default_factory=new_id)
    student_id: str
    student_name: str
    remind_at: datetime
    message: str
    done: bool = False

class SavedReply(BaseModel):
    id: str = Field(default_factory=new_id)
    student_id: Optional[str] = None
    arabic_reply: str
    english_reply: str
    message_type: MessageType
    tone: ReplyTone
    date: datetime = Field(default_factory=datetime.now)
    student_message: str
