import json
from datetime import datetime

from reply_assistant.config import SETTINGS_KEY, STUDENTS_KEY, REMINDERS_KEY
from reply_assistant.models.conversation import IntegrationPlatform, ReplyTone
from reply_assistant.models.settings import AppSettings, Theme
from reply_assistant.models.student import Student, Reminder
from reply_assistant.services.storage import StorageService


def test_defaults_when_storage_is_empty(storage):
    assert storage.load_settings() == AppSettings()
    assert storage.load_settings().theme == Theme.DARK
    assert storage.load_students() == []
    assert storage.load_saved_replies() == []
    assert storage.load_reminders() == []


def test_theme_survives_reload(collection):
    StorageService(collection=collection).save_settings(AppSettings(theme=Theme.LIGHT, teacher_name="Amina"))

    reloaded = StorageService(collection=collection).load_settings()

    assert reloaded.theme == Theme.LIGHT
    assert reloaded.teacher_name == "Amina"


def test_values_are_stored_as_json_strings(storage, collection):
    storage.save_settings(AppSettings(platform=IntegrationPlatform.EMAIL))

    raw = collection.documents[SETTINGS_KEY]["value"]
    assert isinstance(raw, str)
    assert json.loads(raw)["platform"] == "Email"


def test_students_and_reminders_round_trip(storage):
    student = Student(name="Yusuf", preferred_tone=ReplyTone.FOR_KIDS, total_messages=3)
    reminder = Reminder(
        student_id=student.id,
        student_name=student.name,
        remind_at=datetime(2026, 1, 5, 9, 30),
        message="Ask about homework",
    )
    storage.save_students([student])
    storage.save_reminders([reminder])

    assert storage.load_students() == [student]
    assert storage.load_reminders() == [reminder]


def test_last_write_wins(storage, collection):
    storage.save_students([Student(name="A")])
    storage.save_students([Student(name="B")])

    assert [s.name for s in storage.load_students()] == ["B"]
    assert len(collection.documents) == 1


def test_corrupt_value_falls_back_to_initial(collection, caplog):
    collection.documents[SETTINGS_KEY] = {"_id": SETTINGS_KEY, "value": "{not json"}
    collection.documents[STUDENTS_KEY] = {"_id": STUDENTS_KEY, "value": json.dumps([{"nope": 1}])}
    collection.documents[REMINDERS_KEY] = {"_id": REMINDERS_KEY, "value": None}
    storage = StorageService(collection=collection)

    assert storage.load_settings() == AppSettings()
    assert storage.load_students() == []
    assert storage.load_reminders() == []
    assert "Could not read appSettings_v3" in caplog.text
