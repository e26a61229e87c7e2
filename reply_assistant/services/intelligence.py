# reply_assistant/services/intelligence.py
from typing import Optional

from langchain_ollama import OllamaLLM
from langchain_core.language_models import BaseLanguageModel
from langchain_core.prompts import PromptTemplate
from langchain_core.output_parsers import PydanticOutputParser

from reply_assistant.models.conversation import (
    AnalyzedContext,
    GeneratedReply,
    IntegrationPlatform,
    ReplyTone,
)
from reply_assistant.models.student import Student
from reply_assistant.utils.prompts import CONTEXT_ANALYSIS_PROMPT, REPLY_GENERATION_PROMPT
from reply_assistant.config import OLLAMA_BASE_URL, OLLAMA_MODEL, ANALYSIS_TEMPERATURE, REPLY_TEMPERATURE
from reply_assistant.logger import get_logger

logger = get_logger(__name__)

REPLY_FAILED_MESSAGE = (
    "Failed to generate a reply. The model may be unable to process this request. "
    "Please try again or rephrase."
)


class ReplyGenerationError(RuntimeError):
    """Raised when the model did not produce a usable bilingual reply"""

    def __init__(self, message: str = REPLY_FAILED_MESSAGE):
        super().__init__(message)


def _create_ollama_llm(temperature: float) -> OllamaLLM:
    """Create an Ollama LLM instance in JSON output mode"""
    return OllamaLLM(
        base_url=OLLAMA_BASE_URL,
        model=OLLAMA_MODEL,
        temperature=temperature,
        format="json",
    )


class IntelligenceService:
    def __init__(self,
                 analysis_llm: Optional[BaseLanguageModel] = None,
                 reply_llm: Optional[BaseLanguageModel] = None):
        self.analysis_llm = analysis_llm or _create_ollama_llm(ANALYSIS_TEMPERATURE)
        self.reply_llm = reply_llm or _create_ollama_llm(REPLY_TEMPERATURE)

    async def analyze_context(self, student_message: str) -> AnalyzedContext:
        """Classify a student message, falling back to a neutral default on any failure"""
        parser = PydanticOutputParser(pydantic_object=AnalyzedContext)
        prompt = PromptTemplate(
            template=CONTEXT_ANALYSIS_PROMPT,
            input_variables=["student_message"],
            partial_variables={"format_instructions": parser.get_format_instructions()}
        )
        chain = prompt | self.analysis_llm | parser

        try:
            context = await chain.ainvoke({"student_message": student_message})
            logger.debug("Analyzed context: %s", context.model_dump_json())
            return context
        except Exception:
            logger.exception("Error analyzing context, using fallback")
            return AnalyzedContext.fallback()

    async def generate_bilingual_reply(self,
                                       student_message: str,
                                       context: AnalyzedContext,
                                       tone: ReplyTone,
                                       platform: IntegrationPlatform,
                                       teacher_name: str,
                                       student: Optional[Student] = None) -> GeneratedReply:
        """Draft a sentence-aligned English/Arabic reply.

        Every failure surfaces as ReplyGenerationError with the same generic
        message; the real cause is logged and chained.
        """
        parser = PydanticOutputParser(pydantic_object=GeneratedReply)
        prompt = PromptTemplate(
            template=REPLY_GENERATION_PROMPT,
            input_variables=[
                "teacher_name", "platform", "student_name", "student_message",
                "message_type", "sentiment", "tone",
            ],
            partial_variables={"format_instructions": parser.get_format_instructions()}
        )
        chain = prompt | self.reply_llm | parser

        try:
            reply = await chain.ainvoke({
                "teacher_name": teacher_name,
                "platform": platform.value,
                "student_name": student.name if student and student.name else "student",
                "student_message": student_message,
                "message_type": context.message_type.value,
                "sentiment": context.sentiment.value,
                "tone": tone.value,
            })
            _check_reply(reply)
        except Exception as e:
            logger.exception("Error generating bilingual reply")
            raise ReplyGenerationError() from e

        if not (reply.tone_description or "").strip():
            reply.tone_description = "⭐ Balanced"
        logger.info("Generated reply with %d sentence pairs", len(reply.sentences))
        return reply


def _check_reply(reply: GeneratedReply) -> None:
    if not reply.sentences:
        raise ValueError("AI returned an empty reply.")
    for index, sentence in enumerate(reply.sentences):
        if not sentence.english_sentence.strip() or not sentence.arabic_sentence.strip():
            raise ValueError(f"Sentence pair {index} is missing its English or Arabic side.")
