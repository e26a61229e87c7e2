# reply_assistant/state.py
"""Application state and the reducer that updates it.

The UI never mutates state directly: it dispatches an ``Action`` and replaces
its state with ``reduce(state, action)``. ``init_state`` and
``teardown_state`` bracket a session against the key/value store.
"""
from enum import Enum
from typing import Any, Callable, Dict, List, NamedTuple, Optional

from pydantic import BaseModel, Field, ValidationError

from reply_assistant.models.conversation import (
    AnalyzedContext,
    GeneratedReply,
    GenerationProgress,
    GenerationStage,
    IntegrationPlatform,
    MessageType,
    ReplyTone,
)
from reply_assistant.models.settings import AppSettings, Theme
from reply_assistant.models.student import Student, Reminder, SavedReply
from reply_assistant.services import registry
from reply_assistant.services.storage import StorageService
from reply_assistant.utils.constants import random_tip
from reply_assistant.logger import get_logger

logger = get_logger(__name__)


class View(str, Enum):
    MAIN = "main"
    HISTORY = "history"
    STUDENTS = "students"
    REMINDERS = "reminders"


class AppState(BaseModel):
    view: View = View.MAIN
    settings: AppSettings = Field(default_factory=AppSettings)
    students: List[Student] = Field(default_factory=list)
    saved_replies: List[SavedReply] = Field(default_factory=list)
    reminders: List[Reminder] = Field(default_factory=list)

    student_message: str = ""
    selected_student_id: Optional[str] = None
    message_type: MessageType = MessageType.NEW_STUDENT
    reply_tone: ReplyTone = ReplyTone.FRIENDLY

    detected_context: Optional[AnalyzedContext] = None
    progress: GenerationProgress = Field(default_factory=GenerationProgress)
    error: Optional[str] = None
    reply: Optional[GeneratedReply] = None
    # Inputs that produced ``reply``
    replied_message: str = ""
    replied_tone: Optional[ReplyTone] = None
    replied_student_id: Optional[str] = None
    current_tip: str = ""

    @property
    def selected_student(self) -> Optional[Student]:
        return registry.find_student(self.students, self.selected_student_id)

    @property
    def is_loading(self) -> bool:
        return self.progress.is_loading


class ActionType(str, Enum):
    SET_VIEW = "set_view"
    SET_MESSAGE = "set_message"
    SELECT_STUDENT = "select_student"
    SET_MESSAGE_TYPE = "set_message_type"
    SET_TONE = "set_tone"
    SET_PLATFORM = "set_platform"
    UPDATE_SETTINGS = "update_settings"
    TOGGLE_THEME = "toggle_theme"
    GENERATION_STARTED = "generation_started"
    PROGRESS_ADVANCED = "progress_advanced"
    GENERATION_SUCCEEDED = "generation_succeeded"
    GENERATION_FAILED = "generation_failed"
    ADD_STUDENT = "add_student"
    UPDATE_STUDENT = "update_student"
    DELETE_STUDENT = "delete_student"
    ADD_REMINDER = "add_reminder"
    TOGGLE_REMINDER = "toggle_reminder"
    DELETE_REMINDER = "delete_reminder"
    SAVE_REPLY = "save_reply"
    DELETE_SAVED_REPLY = "delete_saved_reply"


class Action(NamedTuple):
    type: ActionType
    payload: Any = None


# Actions whose effect is never written to storage
TRANSIENT_ACTIONS = frozenset({ActionType.PROGRESS_ADVANCED})


def persists(action_type: ActionType) -> bool:
    return ActionType(action_type) not in TRANSIENT_ACTIONS


# Lifecycle
def init_state(storage: StorageService) -> AppState:
    return AppState(
        settings=storage.load_settings(),
        students=storage.load_students(),
        saved_replies=storage.load_saved_replies(),
        reminders=storage.load_reminders(),
        current_tip=random_tip(),
    )


def teardown_state(state: AppState, storage: StorageService) -> None:
    """Write the persisted slices of the state back to storage"""
    storage.save_settings(state.settings)
    storage.save_students(state.students)
    storage.save_saved_replies(state.saved_replies)
    storage.save_reminders(state.reminders)


# Handlers
def _update(state: AppState, **changes) -> AppState:
    return state.model_copy(update=changes)


def _coerce(enum_cls, value, what: str):
    try:
        return enum_cls(value)
    except ValueError:
        logger.warning("Ignoring unrecognized %s: %r", what, value)
        return None


def _set_view(state, payload):
    view = _coerce(View, payload, "view")
    return _update(state, view=view) if view else state


def _set_message(state, payload):
    return _update(state, student_message=payload or "")


def _select_student(state, payload):
    if payload and not registry.find_student(state.students, payload):
        logger.warning("Ignoring unknown student id: %r", payload)
        return state
    return _update(state, selected_student_id=payload or None)


def _set_message_type(state, payload):
    message_type = _coerce(MessageType, payload, "message type")
    return _update(state, message_type=message_type) if message_type else state


def _set_tone(state, payload):
    tone = _coerce(ReplyTone, payload, "tone")
    return _update(state, reply_tone=tone) if tone else state


def _set_platform(state, payload):
    platform = _coerce(IntegrationPlatform, payload, "platform")
    if not platform:
        return state
    return _update(state, settings=state.settings.model_copy(update={"platform": platform}))


def _update_settings(state, payload):
    try:
        settings = AppSettings.model_validate({**state.settings.model_dump(), **(payload or {})})
    except ValidationError as e:
        logger.warning("Ignoring invalid settings update: %s", e)
        return state
    return _update(state, settings=settings)


def _toggle_theme(state, payload):
    theme = Theme.LIGHT if state.settings.theme == Theme.DARK else Theme.DARK
    return _update(state, settings=state.settings.model_copy(update={"theme": theme}))


def _generation_started(state, payload):
    return _update(
        state,
        error=None,
        reply=None,
        replied_message="",
        replied_tone=None,
        replied_student_id=None,
        progress=GenerationProgress(stage=GenerationStage.READING),
    )


def _progress_advanced(state, payload):
    return _update(state, progress=GenerationProgress(stage=GenerationStage(payload)))


def _generation_succeeded(state, payload):
    students = state.students
    if state.selected_student_id:
        students = registry.record_contact(students, state.selected_student_id)
    return _update(
        state,
        detected_context=payload.context,
        message_type=payload.context.message_type,
        reply=payload.reply,
        replied_message=payload.student_message,
        replied_tone=payload.tone,
        replied_student_id=state.selected_student_id,
        error=None,
        progress=GenerationProgress(stage=GenerationStage.DONE),
        students=students,
        current_tip=random_tip(),
    )


def _generation_failed(state, payload):
    message = payload or "An unexpected error occurred."
    return _update(
        state,
        error=message,
        progress=GenerationProgress(stage=GenerationStage.ERROR, error=message),
    )


def _add_student(state, payload):
    return _update(state, students=state.students + [payload])


def _update_student(state, payload):
    return _update(state, students=[payload if s.id == payload.id else s for s in state.students])


def _delete_student(state, payload):
    selected = None if state.selected_student_id == payload else state.selected_student_id
    return _update(
        state,
        students=[s for s in state.students if s.id != payload],
        selected_student_id=selected,
    )


def _add_reminder(state, payload):
    return _update(state, reminders=state.reminders + [payload])


def _toggle_reminder(state, payload):
    return _update(state, reminders=[
        r.model_copy(update={"done": not r.done}) if r.id == payload else r
        for r in state.reminders
    ])


def _delete_reminder(state, payload):
    return _update(state, reminders=[r for r in state.reminders if r.id != payload])


def _save_reply(state, payload):
    if not state.reply or not state.reply.sentences:
        logger.warning("No reply to save")
        return state
    message_type = state.detected_context.message_type if state.detected_context else state.message_type
    saved = registry.build_saved_reply(
        state.replied_message,
        state.reply,
        message_type,
        state.replied_tone or state.reply_tone,
        state.replied_student_id,
    )
    return _update(state, saved_replies=[saved] + state.saved_replies)


def _delete_saved_reply(state, payload):
    return _update(state, saved_replies=[r for r in state.saved_replies if r.id != payload])


_HANDLERS: Dict[ActionType, Callable[[AppState, Any], AppState]] = {
    ActionType.SET_VIEW: _set_view,
    ActionType.SET_MESSAGE: _set_message,
    ActionType.SELECT_STUDENT: _select_student,
    ActionType.SET_MESSAGE_TYPE: _set_message_type,
    ActionType.SET_TONE: _set_tone,
    ActionType.SET_PLATFORM: _set_platform,
    ActionType.UPDATE_SETTINGS: _update_settings,
    ActionType.TOGGLE_THEME: _toggle_theme,
    ActionType.GENERATION_STARTED: _generation_started,
    ActionType.PROGRESS_ADVANCED: _progress_advanced,
    ActionType.GENERATION_SUCCEEDED: _generation_succeeded,
    ActionType.GENERATION_FAILED: _generation_failed,
    ActionType.ADD_STUDENT: _add_student,
    ActionType.UPDATE_STUDENT: _update_student,
    ActionType.DELETE_STUDENT: _delete_student,
    ActionType.ADD_REMINDER: _add_reminder,
    ActionType.TOGGLE_REMINDER: _toggle_reminder,
    ActionType.DELETE_REMINDER: _delete_reminder,
    ActionType.SAVE_REPLY: _save_reply,
    ActionType.DELETE_SAVED_REPLY: _delete_saved_reply,
}


def reduce(state: AppState, action: Action) -> AppState:
    try:
        handler = _HANDLERS[ActionType(action.type)]
    except (KeyError, ValueError):
        raise ValueError(f"Unknown action: {action.type!r}")
    return handler(state, action.payload)
