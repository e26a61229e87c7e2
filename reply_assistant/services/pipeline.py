# reply_assistant/services/pipeline.py
from typing import Callable, Optional

from pydantic import BaseModel

from reply_assistant.models.conversation import (
    AnalyzedContext,
    GeneratedReply,
    GenerationStage,
    IntegrationPlatform,
    ReplyTone,
)
from reply_assistant.models.student import Student
from reply_assistant.services.intelligence import IntelligenceService, ReplyGenerationError
from reply_assistant.logger import get_logger

logger = get_logger(__name__)

ProgressCallback = Callable[[GenerationStage, Optional[str]], None]


class EmptyMessageError(ValueError):
    """Raised before any model call when the student message is blank"""

    def __init__(self, message: str = "Please enter a student message."):
        super().__init__(message)


def clean_message(student_message: Optional[str]) -> str:
    """Strip a student message, raising EmptyMessageError when nothing is left"""
    if not student_message or not student_message.strip():
        raise EmptyMessageError()
    return student_message.strip()


class PipelineResult(BaseModel):
    student_message: str
    tone: ReplyTone
    context: AnalyzedContext
    reply: GeneratedReply


class ReplyPipeline:
    """Runs context analysis then reply generation for one student message"""

    def __init__(self, intelligence: Optional[IntelligenceService] = None):
        self.intelligence = intelligence or IntelligenceService()

    async def run(self,
                  student_message: str,
                  tone: ReplyTone,
                  platform: IntegrationPlatform,
                  teacher_name: str,
                  student: Optional[Student] = None,
                  on_progress: Optional[ProgressCallback] = None) -> PipelineResult:
        def report(stage: GenerationStage, error: Optional[str] = None):
            logger.debug("Pipeline stage: %s", stage.value)
            if on_progress:
                on_progress(stage, error)

        message = clean_message(student_message)
        report(GenerationStage.READING)

        # analyze_context falls back instead of raising
        report(GenerationStage.DETECTING)
        context = await self.intelligence.analyze_context(message)

        report(GenerationStage.DRAFTING)
        try:
            reply = await self.intelligence.generate_bilingual_reply(
                message, context, tone, platform, teacher_name, student
            )
        except ReplyGenerationError as e:
            report(GenerationStage.ERROR, str(e))
            raise

        report(GenerationStage.DONE)
        return PipelineResult(student_message=message, tone=tone, context=context, reply=reply)
