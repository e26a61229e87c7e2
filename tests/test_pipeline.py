import asyncio

import pytest

from reply_assistant.models.conversation import (
    AnalyzedContext,
    BilingualReplySentence,
    DetectedLanguage,
    GeneratedReply,
    GenerationStage,
    IntegrationPlatform,
    MessageType,
    ReplyTone,
    Sentiment,
)
from reply_assistant.services.intelligence import ReplyGenerationError
from reply_assistant.services.pipeline import EmptyMessageError, ReplyPipeline, clean_message

CONTEXT = AnalyzedContext(
    message_type=MessageType.RESCHEDULE,
    sentiment=Sentiment.APOLOGETIC,
    detected_language=DetectedLanguage.ENGLISH,
)

REPLY = GeneratedReply(sentences=[
    BilingualReplySentence(english_sentence="No problem at all.", arabic_sentence="لا مشكلة على الإطلاق."),
])


class FakeIntelligence:
    def __init__(self, fail_reply=False):
        self.fail_reply = fail_reply
        self.calls = []

    async def analyze_context(self, student_message):
        self.calls.append(("analyze", student_message))
        return CONTEXT

    async def generate_bilingual_reply(self, student_message, context, tone, platform, teacher_name, student=None):
        self.calls.append(("generate", student_message, context, tone, platform, teacher_name, student))
        if self.fail_reply:
            raise ReplyGenerationError()
        return REPLY


def _run(pipeline, message, on_progress=None):
    return asyncio.run(pipeline.run(
        message,
        ReplyTone.WARM_MOTIVATIONAL,
        IntegrationPlatform.EMAIL,
        "Amina",
        on_progress=on_progress,
    ))


def test_run_chains_analysis_into_generation():
    intelligence = FakeIntelligence()
    stages = []

    result = _run(ReplyPipeline(intelligence), "  Sorry, I can't come today  ",
                  on_progress=lambda stage, error: stages.append(stage))

    assert result.context == CONTEXT
    assert result.reply == REPLY
    assert result.student_message == "Sorry, I can't come today"
    assert result.tone == ReplyTone.WARM_MOTIVATIONAL
    assert stages == [
        GenerationStage.READING,
        GenerationStage.DETECTING,
        GenerationStage.DRAFTING,
        GenerationStage.DONE,
    ]
    assert intelligence.calls[0] == ("analyze", "Sorry, I can't come today")
    generate_call = intelligence.calls[1]
    assert generate_call[2] is CONTEXT
    assert generate_call[3] == ReplyTone.WARM_MOTIVATIONAL
    assert generate_call[4] == IntegrationPlatform.EMAIL


@pytest.mark.parametrize("message", ["", "   \n"])
def test_run_rejects_blank_message_before_calling_model(message):
    intelligence = FakeIntelligence()

    with pytest.raises(EmptyMessageError, match="Please enter a student message."):
        _run(ReplyPipeline(intelligence), message)

    assert intelligence.calls == []


@pytest.mark.parametrize("message", ["", "  ", None])
def test_clean_message_rejects_blank(message):
    with pytest.raises(EmptyMessageError):
        clean_message(message)


def test_clean_message_strips():
    assert clean_message("  Salam \n") == "Salam"


def test_blank_message_reports_no_progress():
    stages = []

    with pytest.raises(EmptyMessageError):
        _run(ReplyPipeline(FakeIntelligence()), " ", on_progress=lambda stage, error: stages.append(stage))

    assert stages == []


def test_run_reports_error_stage_when_generation_fails():
    stages = []

    with pytest.raises(ReplyGenerationError):
        _run(ReplyPipeline(FakeIntelligence(fail_reply=True)), "Salam",
             on_progress=lambda stage, error: stages.append((stage, error)))

    assert stages[-2][0] == GenerationStage.DRAFTING
    assert stages[-1][0] == GenerationStage.ERROR
    assert stages[-1][1].startswith("Failed to generate a reply.")
    assert GenerationStage.DONE not in [s for s, _ in stages]


def test_run_without_progress_callback():
    result = _run(ReplyPipeline(FakeIntelligence()), "Salam")

    assert result.reply.sentences
