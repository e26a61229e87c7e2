# reply_assistant/models/settings.py
from pydantic import BaseModel
from enum import Enum

from reply_assistant.models.conversation import IntegrationPlatform

class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"

class AppSettings(BaseModel):
    teacher_name: str = "Teacher"
    signature: str = ""
    platform: IntegrationPlatform = IntegrationPlatform.WHATSAPP
    theme: Theme = Theme.DARK
