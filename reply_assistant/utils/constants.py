# reply_assistant/utils/constants.py
import random

from reply_assistant.models.conversation import MessageType, ReplyTone, IntegrationPlatform

MESSAGE_TYPE_LABELS = {
    MessageType.NEW_STUDENT: "🟢 New student inquiry",
    MessageType.CURRENT_STUDENT: "🟠 Current student message",
    MessageType.ABSENT_STUDENT: "🔵 Absent student notification",
    MessageType.RESCHEDULE: "🟣 Reschedule request",
    MessageType.PAYMENT: "💰 Payment inquiry",
    MessageType.GENERAL: "❓ General question",
}

# Display order matters for the tone picker
TONE_LABELS = {
    ReplyTone.FRIENDLY: "😊 Friendly",
    ReplyTone.WARM_MOTIVATIONAL: "☀️ Warm & Motivational",
    ReplyTone.FORMAL: "👔 Professional",
    ReplyTone.BRIEF_DIRECT: "⚡ Brief & Direct",
    ReplyTone.ISLAMIC: "🕌 Islamic (Spiritual)",
    ReplyTone.FOR_KIDS: "🧸 For Kids",
}

PLATFORM_LABELS = {
    IntegrationPlatform.WHATSAPP: "WhatsApp",
    IntegrationPlatform.EMAIL: "Email",
    IntegrationPlatform.GENERIC: "Generic Chat",
}

QUICK_REPLY_TEMPLATES = [
    {"label": "Glad you're enjoying the lessons!", "message": "My student said they are enjoying the lessons, what is a good reply?"},
    {"label": "We can reschedule.", "message": "My student can't make it to class and wants to reschedule."},
    {"label": "Thanks for reaching out!", "message": "Thank you for reaching out!"},
    {"label": "Confirm next lesson?", "message": "Please ask my student to confirm their next lesson time."},
    {"label": "Payment received.", "message": "My student sent a message about their payment."},
]

SMART_TIPS = [
    "Keep replies short and kind, students appreciate simplicity.",
    "Use the student's name when possible for a personal touch.",
    "Encourage consistency instead of perfection.",
    "A positive emoji can make your message feel more welcoming. 😊",
    "Always double-check the time zone when scheduling with international students.",
    "For apologetic students, a warm and reassuring tone works best.",
    "Remember to follow up a few days after a rescheduled class to check in.",
]


def random_tip(rng=random) -> str:
    return rng.choice(SMART_TIPS)
