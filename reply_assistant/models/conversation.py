# reply_assistant/models/conversation.py
from pydantic import BaseModel, Field
from typing import List, Optional
from enum import Enum

class MessageType(str, Enum):
    NEW_STUDENT = "New student inquiry"
    CURRENT_STUDENT = "Current student"
    ABSENT_STUDENT = "Absent student"
    RESCHEDULE = "Reschedule request"
    PAYMENT = "Payment inquiry"
    GENERAL = "General question"

class Sentiment(str, Enum):
    POSITIVE = "Positive"
    NEUTRAL = "Neutral"
    NEGATIVE = "Negative"
    APOLOGETIC = "Apologetic"
    ENTHUSIASTIC = "Enthusiastic"
    INQUIRY = "Inquiry"

class DetectedLanguage(str, Enum):
    ENGLISH = "en"
    ARABIC = "ar"
    UNKNOWN = "unknown"

class ReplyTone(str, Enum):
    FORMAL = "Professional"
    FRIENDLY = "Friendly"
    WARM_MOTIVATIONAL = "Warm & Motivational"
    BRIEF_DIRECT = "Brief & Direct"
    ISLAMIC = "Islamic (Spiritual)"
    FOR_KIDS = "For Kids"

class IntegrationPlatform(str, Enum):
    WHATSAPP = "WhatsApp"
    EMAIL = "Email"
    GENERIC = "Generic Chat"

class AnalyzedContext(BaseModel):
    message_type: MessageType = Field(description="The kind of message the student sent")
    sentiment: Sentiment = Field(description="The student's sentiment")
    detected_language: DetectedLanguage = Field(description="Primary language of the message: en, ar or unknown")

    @classmethod
    def fallback(cls) -> "AnalyzedContext":
        return cls(
            message_type=MessageType.GENERAL,
            sentiment=Sentiment.NEUTRAL,
            detected_language=DetectedLanguage.UNKNOWN,
        )

class BilingualReplySentence(BaseModel):
    english_sentence: str = Field(description="A single sentence of the reply in English.")
    arabic_sentence: str = Field(description="The direct, equivalent translation of that single sentence in Arabic.")

class GeneratedReply(BaseModel):
    sentences: List[BilingualReplySentence] = Field(default_factory=list)
    tone_description: Optional[str] = "⭐ Balanced"

    @property
    def english_text(self) -> str:
        return " ".join(s.english_sentence for s in self.sentences)

    @property
    def arabic_text(self) -> str:
        return " ".join(s.arabic_sentence for s in self.sentences)

class GenerationStage(str, Enum):
    IDLE = "idle"
    READING = "reading"
    DETECTING = "detecting"
    DRAFTING = "drafting"
    DONE = "done"
    ERROR = "error"

class GenerationProgress(BaseModel):
    stage: GenerationStage = GenerationStage.IDLE
    error: Optional[str] = None

    @property
    def is_loading(self) -> bool:
        return self.stage in (GenerationStage.READING, GenerationStage.DETECTING, GenerationStage.DRAFTING)
