# reply_assistant/services/registry.py
"""Helpers over the student, reminder and saved-reply lists.

All functions are pure: they take lists and return new ones, leaving
persistence to StorageService.
"""
from datetime import datetime
from typing import Iterable, List, Optional

from reply_assistant.models.conversation import GeneratedReply, MessageType, ReplyTone
from reply_assistant.models.student import Student, Reminder, SavedReply


# Students
def create_student(name: str, preferred_tone: ReplyTone = ReplyTone.FRIENDLY) -> Student:
    name = name.strip()
    if not name:
        raise ValueError("Student name is required.")
    return Student(name=name, preferred_tone=preferred_tone)


def find_student(students: Iterable[Student], student_id: Optional[str]) -> Optional[Student]:
    if not student_id:
        return None
    return next((s for s in students if s.id == student_id), None)


def record_contact(students: List[Student], student_id: str, when: Optional[datetime] = None) -> List[Student]:
    """Bump a student's message count and last contact time"""
    when = when or datetime.now()
    return [
        s.model_copy(update={"total_messages": s.total_messages + 1, "last_contacted_at": when})
        if s.id == student_id else s
        for s in students
    ]


# Reminders
def create_reminder(student: Student, remind_at: datetime, message: str) -> Reminder:
    if not message.strip():
        raise ValueError("Reminder message is required.")
    return Reminder(
        student_id=student.id,
        student_name=student.name,
        remind_at=remind_at,
        message=message.strip(),
    )


def due_reminders(reminders: Iterable[Reminder], now: Optional[datetime] = None) -> List[Reminder]:
    now = now or datetime.now()
    due = [r for r in reminders if not r.done and r.remind_at <= now]
    return sorted(due, key=lambda r: r.remind_at)


# Saved replies
def build_saved_reply(student_message: str,
                      reply: GeneratedReply,
                      message_type: MessageType,
                      tone: ReplyTone,
                      student_id: Optional[str] = None) -> SavedReply:
    return SavedReply(
        student_id=student_id,
        arabic_reply=reply.arabic_text,
        english_reply=reply.english_text,
        message_type=message_type,
        tone=tone,
        student_message=student_message,
    )


def search_saved_replies(replies: Iterable[SavedReply], query: str) -> List[SavedReply]:
    """Case-insensitive match over the student message and both replies, newest first"""
    query = query.strip().lower()
    matches = [
        r for r in replies
        if not query
        or query in r.student_message.lower()
        or query in r.english_reply.lower()
        or query in r.arabic_reply
    ]
    return sorted(matches, key=lambda r: r.date, reverse=True)


def export_saved_replies(replies: Iterable[SavedReply]) -> str:
    blocks = []
    for r in replies:
        blocks.append("\n".join([
            f"Date: {r.date:%Y-%m-%d %H:%M}",
            f"Type: {r.message_type.value} | Tone: {r.tone.value}",
            f"Student: {r.student_message}",
            f"English: {r.english_reply}",
            f"Arabic: {r.arabic_reply}",
        ]))
    return "\n\n---\n\n".join(blocks)
