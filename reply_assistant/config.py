# reply_assistant/config.py
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# MongoDB Configuration
MONGODB_URI = os.getenv("MONGODB_URI", "mongodb://localhost:27017/")
MONGODB_DB = os.getenv("MONGODB_DB", "reply_assistant")
STORAGE_COLLECTION = os.getenv("STORAGE_COLLECTION", "app_storage")

# Storage keys, one document per key
SETTINGS_KEY = "appSettings_v3"
STUDENTS_KEY = "students_v3"
SAVED_REPLIES_KEY = "savedReplies_v3"
REMINDERS_KEY = "reminders_v3"

# Ollama Configuration
OLLAMA_BASE_URL = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")
OLLAMA_MODEL = os.getenv("OLLAMA_MODEL", "llama3")
ANALYSIS_TEMPERATURE = float(os.getenv("ANALYSIS_TEMPERATURE", "0.2"))
REPLY_TEMPERATURE = float(os.getenv("REPLY_TEMPERATURE", "0.7"))

# System Configuration
DEBUG = os.getenv("DEBUG", "False").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG" if DEBUG else "INFO").upper()
