# reply_assistant/services/storage.py
import json
from typing import Any, Callable, List, Optional, Type, TypeVar

from pydantic import BaseModel, TypeAdapter
from pymongo import MongoClient
from pymongo.collection import Collection

from reply_assistant.config import (
    MONGODB_URI,
    MONGODB_DB,
    STORAGE_COLLECTION,
    SETTINGS_KEY,
    STUDENTS_KEY,
    SAVED_REPLIES_KEY,
    REMINDERS_KEY,
)
from reply_assistant.models.settings import AppSettings
from reply_assistant.models.student import Student, Reminder, SavedReply
from reply_assistant.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


class StorageService:
    """Key/value mirror of the application state.

    Each key is one document, ``{"_id": key, "value": "<json>"}``. Reads never
    raise: a missing, unreadable or invalid value yields the initial value.
    Writes are last-write-wins.
    """

    def __init__(self, collection: Optional[Collection] = None):
        if collection is None:
            self.client = MongoClient(MONGODB_URI)
            collection = self.client[MONGODB_DB][STORAGE_COLLECTION]
        self.collection = collection

    # Raw key/value access
    def get_item(self, key: str, initial: T, decode: Callable[[Any], T]) -> T:
        try:
            document = self.collection.find_one({"_id": key})
            if not document or document.get("value") is None:
                return initial
            return decode(json.loads(document["value"]))
        except Exception:
            logger.exception("Could not read %s from storage", key)
            return initial

    def set_item(self, key: str, value: Any) -> None:
        self.collection.update_one(
            {"_id": key},
            {"$set": {"value": json.dumps(value, ensure_ascii=False)}},
            upsert=True
        )

    def _get_list(self, key: str, model: Type[M]) -> List[M]:
        adapter = TypeAdapter(List[model])
        return self.get_item(key, [], adapter.validate_python)

    def _set_list(self, key: str, items: List[BaseModel]) -> None:
        self.set_item(key, [item.model_dump(mode="json") for item in items])

    # Settings
    def load_settings(self) -> AppSettings:
        return self.get_item(SETTINGS_KEY, AppSettings(), AppSettings.model_validate)

    def save_settings(self, settings: AppSettings) -> None:
        self.set_item(SETTINGS_KEY, settings.model_dump(mode="json"))

    # Students
    def load_students(self) -> List[Student]:
        return self._get_list(STUDENTS_KEY, Student)

    def save_students(self, students: List[Student]) -> None:
        self._set_list(STUDENTS_KEY, students)

    # Saved replies
    def load_saved_replies(self) -> List[SavedReply]:
        return self._get_list(SAVED_REPLIES_KEY, SavedReply)

    def save_saved_replies(self, replies: List[SavedReply]) -> None:
        self._set_list(SAVED_REPLIES_KEY, replies)

    # Reminders
    def load_reminders(self) -> List[Reminder]:
        return self._get_list(REMINDERS_KEY, Reminder)

    def save_reminders(self, reminders: List[Reminder]) -> None:
        self._set_list(REMINDERS_KEY, reminders)
