# frontend/app.py
import streamlit as st

# Page configuration MUST be the first Streamlit command
st.set_page_config(
    page_title="AI Reply Assistant",
    page_icon="✨",
    layout="wide"
)

import asyncio
import sys
import os
from datetime import datetime, time as dt_time

# Add the project root to the path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from reply_assistant.models.conversation import GenerationStage, IntegrationPlatform, MessageType, ReplyTone
from reply_assistant.models.settings import Theme
from reply_assistant.services import registry
from reply_assistant.services.intelligence import ReplyGenerationError
from reply_assistant.services.pipeline import EmptyMessageError, ReplyPipeline, clean_message
from reply_assistant.services.storage import StorageService
from reply_assistant.state import Action, ActionType, View, init_state, persists, reduce, teardown_state
from reply_assistant.utils.clipboard import copy_to_clipboard
from reply_assistant.utils.markup import rtl_paragraph
from reply_assistant.utils.constants import MESSAGE_TYPE_LABELS, PLATFORM_LABELS, QUICK_REPLY_TEMPLATES, TONE_LABELS
from reply_assistant.logger import get_logger

logger = get_logger("frontend")

STAGE_LABELS = {
    GenerationStage.READING: "📖 Reading message...",
    GenerationStage.DETECTING: "🔍 Detecting context...",
    GenerationStage.DRAFTING: "✍️ Drafting bilingual reply...",
    GenerationStage.DONE: "✅ Done",
}

DARK_CSS = """
<style>
  .stApp { background-color: #0f1c2e; color: #e5e7eb; }
</style>
"""

# Initialize services - ONLY ONCE at the module level
@st.cache_resource
def get_services():
    return {
        "storage": StorageService(),
        "pipeline": ReplyPipeline()
    }

services = get_services()
storage = services["storage"]
pipeline = services["pipeline"]

if "app_state" not in st.session_state:
    st.session_state.app_state = init_state(storage)


def state():
    return st.session_state.app_state


def dispatch(action_type, payload=None):
    st.session_state.app_state = reduce(state(), Action(action_type, payload))
    if not persists(action_type):
        return
    try:
        teardown_state(st.session_state.app_state, storage)
    except Exception as e:
        logger.exception("Could not persist state")
        st.toast(f"Could not save changes: {e}")


def handle_generate_reply(message=None):
    current = state()
    if message:
        dispatch(ActionType.SET_MESSAGE, message)
    try:
        final_message = clean_message(message or current.student_message)
    except EmptyMessageError as e:
        dispatch(ActionType.GENERATION_FAILED, str(e))
        return

    status = st.status(STAGE_LABELS[GenerationStage.READING], expanded=False)

    def on_progress(stage, error=None):
        if stage == GenerationStage.ERROR:
            return
        dispatch(ActionType.PROGRESS_ADVANCED, stage)
        status.update(label=STAGE_LABELS[stage], state="complete" if stage == GenerationStage.DONE else "running")

    dispatch(ActionType.GENERATION_STARTED)
    try:
        result = asyncio.run(pipeline.run(
            final_message,
            current.reply_tone,
            current.settings.platform,
            current.settings.teacher_name,
            current.selected_student,
            on_progress=on_progress,
        ))
    except ReplyGenerationError as e:
        dispatch(ActionType.GENERATION_FAILED, str(e))
        status.update(label="Something went wrong", state="error")
        return
    dispatch(ActionType.GENERATION_SUCCEEDED, result)


def render_header():
    st.title("Al Israa Academy")
    st.caption("AI Reply Assistant v3.0")
    labels = {
        View.MAIN: "✨ Reply",
        View.HISTORY: "🕘 History",
        View.STUDENTS: "👥 My Students",
        View.REMINDERS: "🔔 Reminders",
    }
    cols = st.columns(len(labels) + 1)
    for col, (view, label) in zip(cols, labels.items()):
        if col.button(label, use_container_width=True, type="primary" if state().view == view else "secondary"):
            dispatch(ActionType.SET_VIEW, view)
            st.rerun()
    theme_label = "☀️ Light" if state().settings.theme == Theme.DARK else "🌙 Dark"
    if cols[-1].button(theme_label, use_container_width=True):
        dispatch(ActionType.TOGGLE_THEME)
        st.rerun()


def render_settings():
    with st.sidebar:
        st.header("⚙️ Settings")
        settings = state().settings
        with st.form("settings_form"):
            teacher_name = st.text_input("Teacher name", value=settings.teacher_name)
            signature = st.text_input("Signature", value=settings.signature)
            platforms = list(IntegrationPlatform)
            platform = st.selectbox(
                "Platform",
                platforms,
                index=platforms.index(settings.platform),
                format_func=lambda p: PLATFORM_LABELS[p],
            )
            if st.form_submit_button("Save settings"):
                dispatch(ActionType.UPDATE_SETTINGS, {
                    "teacher_name": teacher_name.strip() or "Teacher",
                    "signature": signature,
                    "platform": platform,
                })
                st.success("Settings saved")

        due = registry.due_reminders(state().reminders)
        if due:
            st.subheader(f"🔔 {len(due)} reminder(s) due")
            for r in due:
                st.write(f"**{r.student_name}**: {r.message}")


def render_main_view():
    current = state()
    left, right = st.columns(2)

    with left:
        students = current.students
        options = [None] + [s.id for s in students]
        names = {s.id: s.name for s in students}
        selected = st.selectbox(
            "Student",
            options,
            index=options.index(current.selected_student_id) if current.selected_student_id in options else 0,
            format_func=lambda sid: names.get(sid, "Select a student (optional)"),
        )
        if selected != current.selected_student_id:
            dispatch(ActionType.SELECT_STUDENT, selected)

        message = st.text_area(
            "Student's Message",
            value=current.student_message,
            height=150,
            placeholder="Paste student's message here...",
        )
        if message != current.student_message:
            dispatch(ActionType.SET_MESSAGE, message)

        st.caption("Quick templates")
        template_cols = st.columns(len(QUICK_REPLY_TEMPLATES))
        for i, (col, template) in enumerate(zip(template_cols, QUICK_REPLY_TEMPLATES)):
            if col.button(template["label"], key=f"template_{i}", disabled=current.is_loading):
                handle_generate_reply(template["message"])
                st.rerun()

        type_col, tone_col = st.columns(2)
        message_types = list(MessageType)
        message_type = type_col.selectbox(
            "Message Type",
            message_types,
            index=message_types.index(current.message_type),
            format_func=lambda m: MESSAGE_TYPE_LABELS[m],
        )
        if message_type != current.message_type:
            dispatch(ActionType.SET_MESSAGE_TYPE, message_type)

        tones = list(TONE_LABELS)
        tone = tone_col.selectbox(
            "Reply Tone",
            tones,
            index=tones.index(current.reply_tone),
            format_func=lambda t: TONE_LABELS[t],
        )
        if tone != current.reply_tone:
            dispatch(ActionType.SET_TONE, tone)

        context = state().detected_context
        if context:
            st.info(f"🔍 Detected: {context.message_type.value} | Sentiment: {context.sentiment.value}")

        if st.button("✨ Generate Bilingual Reply", type="primary", use_container_width=True,
                     disabled=current.is_loading):
            handle_generate_reply()
            st.rerun()

        if state().error:
            st.error(state().error)

    with right:
        reply = state().reply
        if not reply or not reply.sentences:
            st.info("Your generated reply will appear here.")
            return

        head_col, tone_col = st.columns([3, 2])
        head_col.subheader("AI Generated Reply")
        tone_col.success(reply.tone_description)

        en_col, ar_col = st.columns(2)
        with en_col:
            st.markdown("#### English 🇬🇧")
            for s in reply.sentences:
                st.write(s.english_sentence)
            copy_to_clipboard(reply.english_text, "Copy English")
        with ar_col:
            st.markdown("#### Arabic 🇸🇦")
            for s in reply.sentences:
                st.markdown(rtl_paragraph(s.arabic_sentence), unsafe_allow_html=True)
            copy_to_clipboard(reply.arabic_text, "Copy Arabic")

        if st.button("💾 Save to history"):
            dispatch(ActionType.SAVE_REPLY)
            st.toast("Reply saved")


def render_history_view():
    st.subheader("🕘 Reply History")
    query = st.text_input("Search", placeholder="Search messages and replies...")
    replies = registry.search_saved_replies(state().saved_replies, query)
    if state().saved_replies:
        st.download_button(
            "Export",
            registry.export_saved_replies(replies),
            file_name=f"replies_{datetime.now():%Y%m%d}.txt",
        )
    if not replies:
        st.info("No saved replies yet.")
        return
    for r in replies:
        with st.expander(f"{r.date:%Y-%m-%d %H:%M} | {r.message_type.value} | {r.tone.value}"):
            st.write(f"**Student:** {r.student_message}")
            st.write(r.english_reply)
            st.markdown(rtl_paragraph(r.arabic_reply), unsafe_allow_html=True)
            if st.button("Delete", key=f"delete_reply_{r.id}"):
                dispatch(ActionType.DELETE_SAVED_REPLY, r.id)
                st.rerun()


def render_students_view():
    st.subheader("👥 My Students")
    with st.form("add_student_form", clear_on_submit=True):
        name = st.text_input("Name")
        tone = st.selectbox("Preferred tone", list(TONE_LABELS), format_func=lambda t: TONE_LABELS[t])
        if st.form_submit_button("Add student"):
            try:
                dispatch(ActionType.ADD_STUDENT, registry.create_student(name, tone))
            except ValueError as e:
                st.error(str(e))

    for s in state().students:
        cols = st.columns([3, 2, 2, 1])
        cols[0].write(f"**{s.name}**")
        cols[1].write(f"{s.total_messages} message(s)")
        cols[2].write(f"Last contact: {s.last_contacted_at:%Y-%m-%d}")
        if cols[3].button("🗑️", key=f"delete_student_{s.id}"):
            dispatch(ActionType.DELETE_STUDENT, s.id)
            st.rerun()


def render_reminders_view():
    st.subheader("🔔 Reminders")
    students = state().students
    if not students:
        st.info("Add a student first to create reminders.")
    else:
        with st.form("add_reminder_form", clear_on_submit=True):
            student_id = st.selectbox(
                "Student",
                [s.id for s in students],
                format_func=lambda sid: registry.find_student(students, sid).name,
            )
            day = st.date_input("Date")
            at = st.time_input("Time", value=dt_time(9, 0))
            message = st.text_input("Message")
            if st.form_submit_button("Add reminder"):
                student = registry.find_student(students, student_id)
                try:
                    reminder = registry.create_reminder(student, datetime.combine(day, at), message)
                    dispatch(ActionType.ADD_REMINDER, reminder)
                except ValueError as e:
                    st.error(str(e))

    for r in sorted(state().reminders, key=lambda r: r.remind_at):
        cols = st.columns([1, 5, 1])
        done = cols[0].checkbox("Done", value=r.done, key=f"done_{r.id}", label_visibility="collapsed")
        if done != r.done:
            dispatch(ActionType.TOGGLE_REMINDER, r.id)
        cols[1].write(f"**{r.student_name}** · {r.remind_at:%Y-%m-%d %H:%M} · {r.message}")
        if cols[2].button("🗑️", key=f"delete_reminder_{r.id}"):
            dispatch(ActionType.DELETE_REMINDER, r.id)
            st.rerun()


if state().settings.theme == Theme.DARK:
    st.markdown(DARK_CSS, unsafe_allow_html=True)

render_header()
render_settings()

views = {
    View.MAIN: render_main_view,
    View.HISTORY: render_history_view,
    View.STUDENTS: render_students_view,
    View.REMINDERS: render_reminders_view,
}
views.get(state().view, render_main_view)()

st.divider()
st.caption(f"💡 **Smart Tip:** {state().current_tip}")
